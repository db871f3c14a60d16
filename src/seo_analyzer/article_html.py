"""
Generated Article HTML Validation

Checks the styled HTML produced when a Markdown draft is converted for
publishing. The output must be a single <article class="defang-blog">
element with no executable or head-level tags.
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple


ARTICLE_OPEN = re.compile(
    r"""^\s*<article\b[^>]*class=["'][^"']*\bdefang-blog\b[^"']*["'][^>]*>""",
    re.IGNORECASE,
)
ARTICLE_CLOSE = re.compile(r"</article>\s*$", re.IGNORECASE)

DISALLOWED_TAGS = ("script", "style", "iframe", "object", "embed", "link", "meta")
DISALLOWED_PATTERN = re.compile(
    r"<\s*(?:" + "|".join(DISALLOWED_TAGS) + r")\b",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ArticleValidation:
    """Outcome of checking generated article HTML."""
    valid: bool
    errors: Tuple[str, ...] = ()
    html: Optional[str] = None

    @classmethod
    def accepted(cls, html: str) -> "ArticleValidation":
        return cls(valid=True, html=html)

    @classmethod
    def rejected(cls, *errors: str) -> "ArticleValidation":
        return cls(valid=False, errors=errors)


def validate_article_html(html: Optional[str]) -> ArticleValidation:
    """
    Validate generated article HTML.

    Returns:
        ArticleValidation; when valid, html holds the trimmed markup
    """
    trimmed = (html or "").strip()
    if not trimmed:
        return ArticleValidation.rejected("Model returned empty HTML")

    errors = []
    if not ARTICLE_OPEN.search(trimmed):
        errors.append('Output must start with <article class="defang-blog">')
    if not ARTICLE_CLOSE.search(trimmed):
        errors.append("Output must end with </article>")
    if DISALLOWED_PATTERN.search(trimmed):
        errors.append("Output contains disallowed tags")

    if errors:
        return ArticleValidation.rejected(*errors)

    return ArticleValidation.accepted(trimmed)
