"""
Defang Blog SEO Analyzer

Scores HTML or Markdown blog content across four categories:
- urls: HTTPS, rel=noopener, internal links, approved Defang URLs
- content: metadata length, structure, word count, images, readability
- technical: structured data, Open Graph, semantic markup, disallowed tags
- defang: provider mentions, dashes, call-to-action, CLI commands

Plus keyword density and optional live URL validation.

Usage:
    from src.seo_analyzer import analyze_seo, SEOAnalyzeRequest, ContentType

    result = analyze_seo(SEOAnalyzeRequest(content=md, content_type=ContentType.MARKDOWN))
    print(result.overall_score, result.score_label)
"""

from .approved_urls import (
    APPROVED_DEFANG_URLS,
    DEFANG_DOMAINS,
    is_approved_url,
    is_brand_domain,
    is_valid_url,
    normalize_url,
    suggest_replacement,
)
from .article_html import ArticleValidation, validate_article_html
from .engine import (
    CATEGORY_WEIGHTS,
    SEOAnalyzer,
    analyze_seo,
    calculate_overall_score,
    get_score_label,
    parse_request,
    with_url_validation,
)
from .exceptions import AnalysisFailedError, InvalidRequestError, SEOAnalyzerError
from .extractors import (
    build_context,
    count_words,
    extract_headings,
    extract_images,
    extract_links,
    extract_text,
)
from .fixes import apply_fix, apply_fixes, apply_metadata_fix
from .keywords import analyze_keywords
from .models import (
    AnalyzerContext,
    CategoryResult,
    CheckResult,
    ContentType,
    ExtractedHeading,
    ExtractedImage,
    ExtractedLink,
    IssueCategory,
    KeywordAnalysis,
    KeywordResult,
    KeywordStatus,
    Location,
    SEOAnalysisResult,
    SEOAnalyzeRequest,
    SEOIssue,
    SEOMetadata,
    Severity,
    URLStatus,
    URLValidationResult,
)
from .url_validator import URLValidator, require_valid_url, validate_url, validate_urls

__all__ = [
    # Orchestrator
    "analyze_seo",
    "SEOAnalyzer",
    "parse_request",
    "calculate_overall_score",
    "get_score_label",
    "with_url_validation",
    "CATEGORY_WEIGHTS",
    # URL validation
    "URLValidator",
    "validate_url",
    "validate_urls",
    "require_valid_url",
    # Registry
    "APPROVED_DEFANG_URLS",
    "DEFANG_DOMAINS",
    "is_approved_url",
    "is_brand_domain",
    "is_valid_url",
    "normalize_url",
    "suggest_replacement",
    # Extractors
    "build_context",
    "extract_text",
    "extract_links",
    "extract_headings",
    "extract_images",
    "count_words",
    "analyze_keywords",
    # Fixes and output validation
    "apply_fix",
    "apply_fixes",
    "apply_metadata_fix",
    "validate_article_html",
    "ArticleValidation",
    # Models
    "AnalyzerContext",
    "CategoryResult",
    "CheckResult",
    "ContentType",
    "ExtractedHeading",
    "ExtractedImage",
    "ExtractedLink",
    "IssueCategory",
    "KeywordAnalysis",
    "KeywordResult",
    "KeywordStatus",
    "Location",
    "SEOAnalysisResult",
    "SEOAnalyzeRequest",
    "SEOIssue",
    "SEOMetadata",
    "Severity",
    "URLStatus",
    "URLValidationResult",
    # Errors
    "SEOAnalyzerError",
    "InvalidRequestError",
    "AnalysisFailedError",
]
