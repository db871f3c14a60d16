"""
SEO Analysis Engine - Orchestrates the scoring pipeline.

This engine:
1. Validates the request
2. Builds the shared AnalyzerContext (one extraction pass)
3. Runs the four category analyzers and the keyword analyzer
4. Merges issues (urls, content, technical, defang)
5. Computes the weighted overall score and label

The pipeline is synchronous and side-effect free. Live URL validation is
a separate step (see url_validator).
"""

import logging
import math
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from .base import AnalyzerOutput
from .brand_analyzer import BrandAnalyzer
from .content_analyzer import ContentAnalyzer
from .exceptions import AnalysisFailedError, InvalidRequestError
from .extractors import build_context
from .keywords import analyze_keywords
from .models import (
    AnalyzerContext,
    ContentType,
    SEOAnalysisResult,
    SEOAnalyzeRequest,
    SEOMetadata,
    URLValidationResult,
)
from .technical_analyzer import TechnicalAnalyzer
from .url_analyzer import URLAnalyzer

logger = logging.getLogger(__name__)


# Share of the overall score per category (sums to 1.0)
CATEGORY_WEIGHTS: Dict[str, float] = {
    "urls": 0.25,
    "content": 0.35,
    "technical": 0.20,
    "defang": 0.20,
}

# Minimum score -> label, highest first
SCORE_LABELS = (
    (90, "Excellent"),
    (80, "Good"),
    (70, "Fair"),
    (60, "Needs Work"),
)
LOWEST_LABEL = "Poor"


def get_score_label(score: int) -> str:
    """Map an overall score to its label."""
    for threshold, label in SCORE_LABELS:
        if score >= threshold:
            return label
    return LOWEST_LABEL


def calculate_overall_score(outputs: Mapping[str, AnalyzerOutput]) -> int:
    """
    Weighted average of category percentages, rounded half up.

    Args:
        outputs: Analyzer output per category key (urls, content, technical, defang)

    Returns:
        Integer score from 0-100
    """
    total = 0.0
    for key, weight in CATEGORY_WEIGHTS.items():
        category = outputs[key].category
        if category.max_score > 0:
            total += category.score / category.max_score * 100 * weight
    return max(0, min(100, math.floor(total + 0.5)))


def parse_request(
    content: Any,
    content_type: Any,
    seo_metadata: Optional[Union[SEOMetadata, Mapping[str, Any]]] = None,
    validate_urls: bool = False,
) -> SEOAnalyzeRequest:
    """
    Validate raw request fields and build an SEOAnalyzeRequest.

    Raises:
        InvalidRequestError: content is empty or content_type is not html/markdown
    """
    if not isinstance(content, str) or not content.strip():
        raise InvalidRequestError("Content is required", field="content")

    if isinstance(content_type, ContentType):
        ctype = content_type
    else:
        try:
            ctype = ContentType(str(content_type).lower()) if content_type else None
        except ValueError:
            ctype = None
    if ctype is None:
        raise InvalidRequestError("contentType must be 'html' or 'markdown'", field="contentType")

    metadata: Optional[SEOMetadata]
    if seo_metadata is None or isinstance(seo_metadata, SEOMetadata):
        metadata = seo_metadata
    elif isinstance(seo_metadata, Mapping):
        try:
            metadata = SEOMetadata.from_dict(seo_metadata)
        except (TypeError, ValueError) as e:
            raise InvalidRequestError(f"Invalid seoMetadata: {e}", field="seoMetadata") from e
    else:
        raise InvalidRequestError("seoMetadata must be an object", field="seoMetadata")

    return SEOAnalyzeRequest(
        content=content,
        content_type=ctype,
        seo_metadata=metadata,
        validate_urls=bool(validate_urls),
    )


class SEOAnalyzer:
    """
    Runs every analyzer over one shared context.

    Usage:
        analyzer = SEOAnalyzer()
        result = analyzer.analyze(SEOAnalyzeRequest(content, ContentType.MARKDOWN))
        print(result.overall_score, result.score_label)
    """

    def __init__(self):
        self.analyzers = {
            "urls": URLAnalyzer(),
            "content": ContentAnalyzer(),
            "technical": TechnicalAnalyzer(),
            "defang": BrandAnalyzer(),
        }

    def analyze(self, request: SEOAnalyzeRequest) -> SEOAnalysisResult:
        """
        Analyze content and produce the full report.

        Raises:
            InvalidRequestError: request fails validation
            AnalysisFailedError: an extractor or analyzer failed unexpectedly
        """
        request = parse_request(
            request.content,
            request.content_type,
            request.seo_metadata,
            request.validate_urls,
        )

        try:
            ctx = build_context(request.content, request.content_type, request.seo_metadata)
            return self._run(ctx)
        except Exception as e:
            logger.exception(f"SEO analysis failed: {e}")
            raise AnalysisFailedError("Failed to analyze content") from e

    def _run(self, ctx: AnalyzerContext) -> SEOAnalysisResult:
        outputs = {key: analyzer.analyze(ctx) for key, analyzer in self.analyzers.items()}
        keywords = analyze_keywords(ctx)

        # Fixed issue order: urls, content, technical, defang
        issues = []
        for key in ("urls", "content", "technical", "defang"):
            issues.extend(outputs[key].issues)

        overall = calculate_overall_score(outputs)
        label = get_score_label(overall)
        logger.info(
            f"SEO analysis complete: {overall}/100 ({label}), "
            f"{len(issues)} issues, {ctx.word_count} words"
        )

        return SEOAnalysisResult(
            overall_score=overall,
            score_label=label,
            timestamp=datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            categories={key: out.category for key, out in outputs.items()},
            issues=tuple(issues),
            url_validation=outputs["urls"].url_results,
            keywords=keywords,
        )


def analyze_seo(
    request: Union[SEOAnalyzeRequest, Mapping[str, Any]],
) -> SEOAnalysisResult:
    """
    Analyze HTML or Markdown content.

    Args:
        request: SEOAnalyzeRequest, or a mapping with content, contentType
            and optional seoMetadata (the JSON request body shape)

    Returns:
        SEOAnalysisResult
    """
    if isinstance(request, Mapping):
        request = parse_request(
            request.get("content"),
            request.get("contentType", request.get("content_type")),
            request.get("seoMetadata", request.get("seo_metadata")),
            request.get("validateUrls", request.get("validate_urls", False)),
        )
    return SEOAnalyzer().analyze(request)


def with_url_validation(
    result: SEOAnalysisResult,
    validated: Sequence[URLValidationResult],
) -> SEOAnalysisResult:
    """Copy of a result whose urlValidation entries carry live outcomes."""
    by_url = {v.url: v for v in validated}
    merged = tuple(by_url.get(entry.url, entry) for entry in result.url_validation)
    return replace(result, url_validation=merged)
