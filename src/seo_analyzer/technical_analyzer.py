"""
Technical SEO Analyzer

Structured data, social metadata, semantic markup and disallowed tags.
Markdown drafts auto-pass the markup checks: structure is added when the
draft is converted to styled HTML.

Max score: 18
"""

import re
from typing import List

from .base import AnalyzerOutput, CategoryAnalyzer, Rule, RuleOutcome
from .models import AnalyzerContext, CheckResult, IssueCategory, Severity


BLOGPOSTING_PATTERNS = (
    re.compile(r"""itemtype=["'][^"']*BlogPosting"""),
    re.compile(r'"@type"\s*:\s*"BlogPosting"'),
)
SEMANTIC_PATTERN = re.compile(r"<(?:article|section|header|nav|aside)\b", re.IGNORECASE)
DISALLOWED_TAGS = ("script", "iframe", "object", "embed")
_DISALLOWED_PATTERNS = {
    tag: re.compile(rf"<{tag}[\s>]", re.IGNORECASE) for tag in DISALLOWED_TAGS
}


class TechnicalAnalyzer(CategoryAnalyzer):
    """Scores markup-level SEO concerns."""

    NAME = "Technical SEO"
    CATEGORY = IssueCategory.TECHNICAL
    WEIGHTS = {
        "schema-blogposting": 4,
        "og-title": 3,
        "og-description": 3,
        "semantic-html": 3,
        "no-disallowed-tags": 5,
    }

    def rules(self) -> List[Rule]:
        return [
            self._check_schema,
            self._check_og_title,
            self._check_og_description,
            self._check_semantic_html,
            self._check_disallowed_tags,
        ]

    def _check_schema(self, ctx: AnalyzerContext) -> RuleOutcome:
        has_schema = ctx.is_html and any(p.search(ctx.content) for p in BLOGPOSTING_PATTERNS)

        if ctx.is_markdown:
            message = "Schema.org markup will be added when converting to HTML"
        elif has_schema:
            message = "Has Schema.org BlogPosting markup"
        else:
            message = "Missing Schema.org BlogPosting markup"

        check = CheckResult(
            id="schema-blogposting",
            name="Schema.org Markup",
            passed=has_schema or ctx.is_markdown,
            severity=Severity.WARNING,
            message=message,
        )
        return check, []

    def _check_og_title(self, ctx: AnalyzerContext) -> RuleOutcome:
        has_og_title = bool(ctx.seo_metadata and ctx.seo_metadata.og_title)
        check = CheckResult(
            id="og-title",
            name="Open Graph Title",
            passed=has_og_title,
            severity=Severity.WARNING,
            message="Has Open Graph title" if has_og_title else "Missing Open Graph title",
        )
        issues = [] if has_og_title else [self.issue(
            "og-title",
            Severity.WARNING,
            "Missing Open Graph Title",
            "Add an ogTitle for better social sharing",
        )]
        return check, issues

    def _check_og_description(self, ctx: AnalyzerContext) -> RuleOutcome:
        # Informational only: no issue even when missing
        has_og_desc = bool(ctx.seo_metadata and ctx.seo_metadata.og_description)
        check = CheckResult(
            id="og-description",
            name="Open Graph Description",
            passed=has_og_desc,
            severity=Severity.WARNING,
            message="Has Open Graph description" if has_og_desc else "Missing Open Graph description",
        )
        return check, []

    def _check_semantic_html(self, ctx: AnalyzerContext) -> RuleOutcome:
        semantic = ctx.is_markdown or bool(SEMANTIC_PATTERN.search(ctx.content))

        if ctx.is_markdown:
            message = "Semantic HTML will be added when converting to HTML"
        elif semantic:
            message = "Uses semantic HTML elements"
        else:
            message = "Consider using semantic HTML (article, section, etc.)"

        check = CheckResult(
            id="semantic-html",
            name="Semantic HTML",
            passed=semantic,
            severity=Severity.INFO,
            message=message,
        )
        return check, []

    def _check_disallowed_tags(self, ctx: AnalyzerContext) -> RuleOutcome:
        found = [tag for tag, pattern in _DISALLOWED_PATTERNS.items() if pattern.search(ctx.content)]
        passed = not found
        check = CheckResult(
            id="no-disallowed-tags",
            name="No Disallowed Tags",
            passed=passed,
            severity=Severity.ERROR,
            message="No disallowed tags found" if passed else f"Found disallowed tags: {', '.join(found)}",
        )
        issues = [] if passed else [self.issue(
            "disallowed-tags",
            Severity.ERROR,
            "Disallowed Tags Found",
            f"Remove these tags: {', '.join(found)}",
        )]
        return check, issues


def analyze_technical(ctx: AnalyzerContext) -> AnalyzerOutput:
    """Run the technical SEO checks."""
    return TechnicalAnalyzer().analyze(ctx)
