"""
SEO Analyzer Data Models

Defines the types shared by the extractors, category analyzers, keyword
analyzer, orchestrator and URL validator:
- Request side: ContentType, SEOMetadata, SEOAnalyzeRequest
- Extracted facts: ExtractedLink, ExtractedHeading, ExtractedImage, AnalyzerContext
- Report side: CheckResult, SEOIssue, CategoryResult, KeywordResult,
  KeywordAnalysis, URLValidationResult, SEOAnalysisResult

All report objects are frozen and serialize to the camelCase JSON contract
through to_dict(). Unset optional fields are omitted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


# =============================================================================
# ENUMS
# =============================================================================


class ContentType(str, Enum):
    """Declared format of the content under analysis."""
    HTML = "html"
    MARKDOWN = "markdown"


class Severity(str, Enum):
    """Severity of a check or issue."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class IssueCategory(str, Enum):
    """Report category an issue belongs to."""
    URLS = "urls"
    CONTENT = "content"
    TECHNICAL = "technical"
    DEFANG = "defang"


class KeywordStatus(str, Enum):
    """Density classification of a keyword."""
    GOOD = "good"
    LOW = "low"
    HIGH = "high"


class URLStatus(str, Enum):
    """Outcome of a URL reachability check."""
    VALID = "valid"
    INVALID = "invalid"
    REDIRECT = "redirect"
    CHECKING = "checking"
    SKIPPED = "skipped"


def _compact(data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys whose value is None."""
    return {k: v for k, v in data.items() if v is not None}


# =============================================================================
# REQUEST
# =============================================================================


@dataclass(frozen=True)
class SEOMetadata:
    """Caller-supplied page metadata. Never inferred by the engine."""
    title: Optional[str] = None
    description: Optional[str] = None
    keywords: Tuple[str, ...] = ()
    og_title: Optional[str] = None
    og_description: Optional[str] = None
    canonical_slug: Optional[str] = None
    category: Optional[str] = None
    estimated_read_time: Optional[str] = None
    target_audience: Optional[str] = None

    # JSON key -> attribute name
    _FIELDS = {
        "title": "title",
        "description": "description",
        "keywords": "keywords",
        "ogTitle": "og_title",
        "ogDescription": "og_description",
        "canonicalSlug": "canonical_slug",
        "category": "category",
        "estimatedReadTime": "estimated_read_time",
        "targetAudience": "target_audience",
    }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SEOMetadata":
        """Build metadata from a camelCase (or snake_case) mapping."""
        values: Dict[str, Any] = {}
        for json_key, attr in cls._FIELDS.items():
            value = data.get(json_key, data.get(attr))
            if value is None:
                continue
            if attr == "keywords":
                if isinstance(value, str):
                    value = [k.strip() for k in value.split(",") if k.strip()]
                value = tuple(str(k) for k in value)
            else:
                value = str(value)
            values[attr] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        data = {json_key: getattr(self, attr) for json_key, attr in self._FIELDS.items()}
        data["keywords"] = list(self.keywords) if self.keywords else None
        return _compact(data)


@dataclass(frozen=True)
class SEOAnalyzeRequest:
    """Input to analyze_seo()."""
    content: str
    content_type: ContentType
    seo_metadata: Optional[SEOMetadata] = None
    validate_urls: bool = False


# =============================================================================
# EXTRACTED FACTS
# =============================================================================


@dataclass(frozen=True)
class ExtractedLink:
    """An absolute http(s) hyperlink found in the content."""
    url: str
    text: str
    is_external: bool
    has_noopener: bool = False
    line: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "url": self.url,
            "text": self.text,
            "line": self.line,
            "isExternal": self.is_external,
            "hasNoopener": self.has_noopener,
        })


@dataclass(frozen=True)
class ExtractedHeading:
    """A heading in document order. Markdown headings carry a line number."""
    level: int
    text: str
    id: Optional[str] = None
    line: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "level": self.level,
            "text": self.text,
            "id": self.id,
            "line": self.line,
        })


@dataclass(frozen=True)
class ExtractedImage:
    """An image reference; markup is the exact source text it came from."""
    src: str
    alt: Optional[str] = None
    line: Optional[int] = None
    markup: Optional[str] = None

    @property
    def has_alt(self) -> bool:
        return bool(self.alt and self.alt.strip())

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "src": self.src,
            "alt": self.alt,
            "line": self.line,
        })


@dataclass(frozen=True)
class AnalyzerContext:
    """Facts extracted once per analysis and shared read-only by every analyzer."""
    content: str
    content_type: ContentType
    text_content: str
    word_count: int
    links: Tuple[ExtractedLink, ...] = ()
    headings: Tuple[ExtractedHeading, ...] = ()
    images: Tuple[ExtractedImage, ...] = ()
    seo_metadata: Optional[SEOMetadata] = None

    @property
    def is_html(self) -> bool:
        return self.content_type == ContentType.HTML

    @property
    def is_markdown(self) -> bool:
        return self.content_type == ContentType.MARKDOWN


# =============================================================================
# REPORT
# =============================================================================


@dataclass(frozen=True)
class Location:
    """1-based line / 0-based column position in the content."""
    line: int
    column: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "column": self.column}


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one rule in one analyzer run."""
    id: str
    name: str
    passed: bool
    severity: Severity
    message: str
    details: Optional[str] = None
    suggestion: Optional[str] = None
    auto_fixable: Optional[bool] = None
    location: Optional[Location] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "id": self.id,
            "name": self.name,
            "passed": self.passed,
            "severity": self.severity.value,
            "message": self.message,
            "details": self.details,
            "suggestion": self.suggestion,
            "autoFixable": self.auto_fixable,
            "location": self.location.to_dict() if self.location else None,
        })


@dataclass(frozen=True)
class SEOIssue:
    """Caller-facing finding derived from a failed or noteworthy check."""
    id: str
    severity: Severity
    category: IssueCategory
    title: str
    description: str
    auto_fixable: bool = False
    location: Optional[Location] = None
    current_value: Optional[str] = None
    suggested_value: Optional[str] = None
    fix_action: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "id": self.id,
            "severity": self.severity.value,
            "category": self.category.value,
            "title": self.title,
            "description": self.description,
            "location": self.location.to_dict() if self.location else None,
            "currentValue": self.current_value,
            "suggestedValue": self.suggested_value,
            "autoFixable": self.auto_fixable,
            "fixAction": self.fix_action,
        })


@dataclass(frozen=True)
class CategoryResult:
    """Weighted score of one rule group."""
    name: str
    score: int
    max_score: int
    passed: int
    total: int
    checks: Tuple[CheckResult, ...] = ()

    @property
    def percentage(self) -> float:
        return (self.score / self.max_score * 100) if self.max_score else 0.0

    def get_check(self, check_id: str) -> Optional[CheckResult]:
        return next((c for c in self.checks if c.id == check_id), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "score": self.score,
            "maxScore": self.max_score,
            "passed": self.passed,
            "total": self.total,
            "checks": [c.to_dict() for c in self.checks],
        }


@dataclass(frozen=True)
class KeywordResult:
    keyword: str
    count: int
    density: float
    status: KeywordStatus

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "count": self.count,
            "density": self.density,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class KeywordAnalysis:
    primary: Tuple[KeywordResult, ...] = ()
    secondary: Tuple[KeywordResult, ...] = ()
    suggestions: Tuple[str, ...] = ()
    overall_density: float = 0.0

    def get_primary(self, keyword: str) -> Optional[KeywordResult]:
        return next((k for k in self.primary if k.keyword == keyword), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "primary": [k.to_dict() for k in self.primary],
            "secondary": [k.to_dict() for k in self.secondary],
            "suggestions": list(self.suggestions),
            "overallDensity": self.overall_density,
        }


@dataclass(frozen=True)
class URLValidationResult:
    """Reachability and registry classification of one URL."""
    url: str
    status: URLStatus
    is_approved_defang_url: bool
    is_external: bool
    status_code: Optional[int] = None
    redirect_to: Optional[str] = None
    response_time: Optional[int] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "url": self.url,
            "status": self.status.value,
            "statusCode": self.status_code,
            "redirectTo": self.redirect_to,
            "responseTime": self.response_time,
            "error": self.error,
            "isApprovedDefangUrl": self.is_approved_defang_url,
            "isExternal": self.is_external,
        })


@dataclass(frozen=True)
class SEOAnalysisResult:
    """Complete report returned by analyze_seo()."""
    overall_score: int
    score_label: str
    timestamp: str
    categories: Dict[str, CategoryResult]
    issues: Tuple[SEOIssue, ...] = ()
    url_validation: Tuple[URLValidationResult, ...] = ()
    keywords: KeywordAnalysis = field(default_factory=KeywordAnalysis)

    def issues_by_category(self, category: IssueCategory) -> List[SEOIssue]:
        return [i for i in self.issues if i.category == category]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overallScore": self.overall_score,
            "scoreLabel": self.score_label,
            "timestamp": self.timestamp,
            "categories": {name: cat.to_dict() for name, cat in self.categories.items()},
            "issues": [i.to_dict() for i in self.issues],
            "urlValidation": [u.to_dict() for u in self.url_validation],
            "keywords": self.keywords.to_dict(),
        }
