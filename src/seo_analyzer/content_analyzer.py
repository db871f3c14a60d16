"""
Content Quality Analyzer

Nine checks on the article itself and its metadata:
- Title and meta description length
- TL;DR / summary presence
- Word count
- Heading hierarchy and duplicate headings
- Image alt text
- Code examples
- Readability (average sentence length)

Max score: 33
"""

import re
from typing import List, Optional

from .base import AnalyzerOutput, CategoryAnalyzer, Rule, RuleOutcome
from .models import (
    AnalyzerContext,
    CheckResult,
    ExtractedImage,
    IssueCategory,
    Location,
    SEOIssue,
    Severity,
)


TITLE_RANGE = (50, 60)
DESCRIPTION_RANGE = (150, 160)
MIN_WORDS = 500
SEVERE_MIN_WORDS = 300
MAX_AVG_SENTENCE_WORDS = 20

ALT_PLACEHOLDER = "Image description"

TLDR_PATTERN = re.compile(r"tl;?dr|summary|key takeaway", re.IGNORECASE)
CODE_PATTERN = re.compile(r"<pre|<code|```")
SENTENCE_SPLIT = re.compile(r"[.!?]+")
HTML_ALT_ATTR = re.compile(r"""(?<![\w-])alt\s*=\s*(?:"[^"]*"|'[^']*'|[^\s>]+)""", re.IGNORECASE)


def _round(value: float) -> int:
    return int(value + 0.5)


def _truncate(value: str, max_length: int) -> str:
    """Cut to max_length - 3 characters and append an ellipsis."""
    return value[:max_length - 3] + "..."


def _with_alt(image: ExtractedImage) -> Optional[str]:
    """Image markup with placeholder alt text filled in."""
    markup = image.markup
    if not markup:
        return None
    if markup.startswith("!["):
        return f"![{ALT_PLACEHOLDER}]" + markup[markup.index("]") + 1:]
    if HTML_ALT_ATTR.search(markup):
        return HTML_ALT_ATTR.sub(f'alt="{ALT_PLACEHOLDER}"', markup, count=1)
    return re.sub(r"^<img\b", f'<img alt="{ALT_PLACEHOLDER}"', markup, count=1, flags=re.IGNORECASE)


class ContentAnalyzer(CategoryAnalyzer):
    """Scores the article text, outline and metadata."""

    NAME = "Content Quality"
    CATEGORY = IssueCategory.CONTENT
    WEIGHTS = {
        "title-length": 5,
        "description-length": 5,
        "has-tldr": 3,
        "word-count": 3,
        "heading-hierarchy": 5,
        "duplicate-headings": 2,
        "image-alt": 4,
        "has-code": 3,
        "readability": 3,
    }

    def rules(self) -> List[Rule]:
        return [
            self._check_title_length,
            self._check_description_length,
            self._check_tldr,
            self._check_word_count,
            self._check_heading_hierarchy,
            self._check_duplicate_headings,
            self._check_image_alt,
            self._check_code_examples,
            self._check_readability,
        ]

    # =========================================================================
    # METADATA
    # =========================================================================

    def _length_rule(
        self,
        check_id: str,
        name: str,
        label: str,
        issue_title: str,
        value: str,
        bounds: tuple,
    ) -> RuleOutcome:
        low, high = bounds
        length = len(value)
        passed = low <= length <= high

        if length == 0:
            message = f"Missing meta {label}"
        elif length < low:
            message = f"{label.capitalize()} too short ({length} chars, recommended: {low}-{high})"
        elif length > high:
            message = f"{label.capitalize()} too long ({length} chars, recommended: {low}-{high})"
        else:
            message = f"{label.capitalize()} length is optimal ({length} chars)"

        severity = Severity.ERROR if length == 0 else Severity.WARNING
        too_long = length > high
        check = CheckResult(
            id=check_id,
            name=name,
            passed=passed,
            severity=severity,
            message=message,
            details=value or None,
            suggestion=_truncate(value, high) if too_long else None,
            auto_fixable=too_long,
        )

        issues: List[SEOIssue] = []
        if not passed:
            issues.append(self.issue(
                check_id,
                severity,
                issue_title,
                message,
                current_value=value,
                suggested_value=_truncate(value, high) if too_long else None,
                auto_fixable=too_long,
                fix_action="truncate" if too_long else None,
            ))
        return check, issues

    def _check_title_length(self, ctx: AnalyzerContext) -> RuleOutcome:
        title = (ctx.seo_metadata.title if ctx.seo_metadata else None) or ""
        return self._length_rule(
            "title-length", "Title Length", "title", "Title Length Issue", title, TITLE_RANGE,
        )

    def _check_description_length(self, ctx: AnalyzerContext) -> RuleOutcome:
        description = (ctx.seo_metadata.description if ctx.seo_metadata else None) or ""
        return self._length_rule(
            "description-length", "Meta Description Length", "description",
            "Meta Description Issue", description, DESCRIPTION_RANGE,
        )

    # =========================================================================
    # STRUCTURE
    # =========================================================================

    def _check_tldr(self, ctx: AnalyzerContext) -> RuleOutcome:
        has_tldr = bool(TLDR_PATTERN.search(ctx.content))
        check = CheckResult(
            id="has-tldr",
            name="Has TL;DR/Summary",
            passed=has_tldr,
            severity=Severity.INFO,
            message=(
                "Content includes a TL;DR or summary section"
                if has_tldr else "Consider adding a TL;DR for quick scanning"
            ),
        )
        issues = [] if has_tldr else [self.issue(
            "has-tldr",
            Severity.INFO,
            "Missing TL;DR",
            "Adding a TL;DR helps readers quickly understand the main points",
        )]
        return check, issues

    def _check_word_count(self, ctx: AnalyzerContext) -> RuleOutcome:
        words = ctx.word_count
        passed = words >= MIN_WORDS
        severity = Severity.ERROR if words < SEVERE_MIN_WORDS else Severity.WARNING
        check = CheckResult(
            id="word-count",
            name="Word Count",
            passed=passed,
            severity=severity,
            message=(
                f"Good content length ({words} words)"
                if passed else f"Content is thin ({words} words, recommended: {MIN_WORDS}+)"
            ),
        )
        issues = [] if passed else [self.issue(
            "word-count",
            severity,
            "Content Too Short",
            f"Only {words} words. Consider adding more detail for better SEO.",
        )]
        return check, issues

    def _check_heading_hierarchy(self, ctx: AnalyzerContext) -> RuleOutcome:
        levels = [h.level for h in ctx.headings]
        valid = True
        message = "Heading hierarchy is valid"

        for prev, cur in zip(levels, levels[1:]):
            if cur > prev + 1:
                valid = False
                message = f"Heading level skipped: H{prev} to H{cur}"
                break

        # Multiple H1s take precedence in the message
        h1_count = levels.count(1)
        if h1_count > 1:
            valid = False
            message = f"Multiple H1 tags found ({h1_count}). Use only one H1 per page."

        check = CheckResult(
            id="heading-hierarchy",
            name="Heading Hierarchy",
            passed=valid,
            severity=Severity.ERROR,
            message=message,
        )
        issues = [] if valid else [self.issue(
            "heading-hierarchy", Severity.ERROR, "Invalid Heading Hierarchy", message,
        )]
        return check, issues

    def _check_duplicate_headings(self, ctx: AnalyzerContext) -> RuleOutcome:
        seen = set()
        duplicates: List[str] = []
        for heading in ctx.headings:
            key = heading.text.lower().strip()
            if key in seen:
                duplicates.append(key)
            seen.add(key)

        passed = not duplicates
        check = CheckResult(
            id="duplicate-headings",
            name="Unique Headings",
            passed=passed,
            severity=Severity.WARNING,
            message="All headings are unique" if passed else f'Duplicate headings found: "{duplicates[0]}"',
        )
        issues = [] if passed else [self.issue(
            "duplicate-headings",
            Severity.WARNING,
            "Duplicate Headings",
            f'Found duplicate heading: "{duplicates[0]}"',
        )]
        return check, issues

    def _check_image_alt(self, ctx: AnalyzerContext) -> RuleOutcome:
        missing = [img for img in ctx.images if not img.has_alt]
        total = len(ctx.images)

        if total == 0:
            message = "No images found (consider adding visuals)"
        elif not missing:
            message = f"All {total} images have alt text"
        else:
            message = f"{len(missing)} image(s) missing alt text"

        passed = not missing
        check = CheckResult(
            id="image-alt",
            name="Image Alt Text",
            passed=passed,
            severity=Severity.WARNING,
            message=message,
        )

        issues: List[SEOIssue] = []
        for idx, img in enumerate(missing):
            suggested = _with_alt(img)
            issues.append(self.issue(
                f"image-alt-{idx}",
                Severity.WARNING,
                "Missing Image Alt Text",
                f"Image missing alt text: {img.src}",
                current_value=img.markup or f'<img src="{img.src}" />',
                suggested_value=suggested or f'<img src="{img.src}" alt="{ALT_PLACEHOLDER}" />',
                auto_fixable=True,
                fix_action="add-alt",
                location=Location(line=img.line) if img.line else None,
            ))
        return check, issues

    # =========================================================================
    # PROSE
    # =========================================================================

    def _check_code_examples(self, ctx: AnalyzerContext) -> RuleOutcome:
        has_code = bool(CODE_PATTERN.search(ctx.content))
        check = CheckResult(
            id="has-code",
            name="Code Examples",
            passed=has_code,
            severity=Severity.INFO,
            message=(
                "Content includes code examples"
                if has_code else "Consider adding code examples for technical topics"
            ),
        )
        return check, []

    def _check_readability(self, ctx: AnalyzerContext) -> RuleOutcome:
        sentences = [s for s in SENTENCE_SPLIT.split(ctx.text_content) if s.strip()]
        avg = (
            sum(len(s.split()) for s in sentences) / len(sentences)
            if sentences else 0.0
        )
        passed = avg <= MAX_AVG_SENTENCE_WORDS

        check = CheckResult(
            id="readability",
            name="Readability",
            passed=passed,
            severity=Severity.WARNING,
            message=(
                f"Good readability (avg {_round(avg)} words/sentence)"
                if passed else
                f"Sentences may be too long (avg {_round(avg)} words, aim for <{MAX_AVG_SENTENCE_WORDS})"
            ),
        )
        issues = [] if passed else [self.issue(
            "readability",
            Severity.WARNING,
            "Readability Could Be Improved",
            f"Average sentence length is {_round(avg)} words. Consider breaking up long sentences.",
        )]
        return check, issues


def analyze_content(ctx: AnalyzerContext) -> AnalyzerOutput:
    """Run the content quality checks."""
    return ContentAnalyzer().analyze(ctx)
