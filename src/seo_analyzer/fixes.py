"""
Auto-fix application.

Applies the suggested value of auto-fixable issues back onto content or
metadata. Fixes are plain first-occurrence replacements; anything that
cannot be applied leaves the input unchanged.
"""

import logging
from dataclasses import replace
from typing import Iterable

from .models import SEOIssue, SEOMetadata

logger = logging.getLogger(__name__)


# Issue id -> metadata attribute the fix targets
METADATA_FIXES = {
    "title-length": "title",
    "description-length": "description",
}


def is_applicable(issue: SEOIssue) -> bool:
    """True when the issue carries an automatic fix."""
    return bool(
        issue.auto_fixable
        and issue.current_value
        and issue.suggested_value is not None
    )


def apply_fix(content: str, issue: SEOIssue) -> str:
    """Replace the first occurrence of the issue's current value."""
    if not is_applicable(issue) or issue.current_value not in content:
        return content
    logger.debug(f"Applying fix {issue.id}")
    return content.replace(issue.current_value, issue.suggested_value, 1)


def apply_fixes(content: str, issues: Iterable[SEOIssue]) -> str:
    """Apply every applicable fix in issue order."""
    for issue in issues:
        content = apply_fix(content, issue)
    return content


def apply_metadata_fix(metadata: SEOMetadata, issue: SEOIssue) -> SEOMetadata:
    """Apply a title/description length fix to metadata."""
    attr = METADATA_FIXES.get(issue.id)
    if attr is None or not is_applicable(issue):
        return metadata
    if getattr(metadata, attr) != issue.current_value:
        return metadata
    return replace(metadata, **{attr: issue.suggested_value})
