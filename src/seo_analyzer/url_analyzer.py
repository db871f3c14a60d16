"""
URL Analyzer

Checks the links found in the content:
- HTTPS everywhere
- rel="noopener" on external links
- Enough internal (Defang) links
- Defang links restricted to the approved list

Also emits one "skipped" URLValidationResult per link so callers can run
live validation later, and one advisory issue per unapproved Defang URL.

Max score: 13
"""

from typing import List

from .approved_urls import is_approved_url, is_brand_domain, suggest_replacement
from .base import AnalyzerOutput, CategoryAnalyzer, Rule, RuleOutcome
from .models import (
    AnalyzerContext,
    CheckResult,
    IssueCategory,
    Location,
    SEOIssue,
    Severity,
    URLStatus,
    URLValidationResult,
)


MIN_INTERNAL_LINKS = 3


class URLAnalyzer(CategoryAnalyzer):
    """Scores link hygiene and Defang URL usage."""

    NAME = "URL Validation"
    CATEGORY = IssueCategory.URLS
    WEIGHTS = {
        "uses-https": 3,
        "external-noopener": 2,
        "internal-links": 3,
        "approved-defang-urls": 5,
    }

    def rules(self) -> List[Rule]:
        return [
            self._check_https,
            self._check_noopener,
            self._check_internal_links,
            self._check_approved_urls,
        ]

    def analyze(self, ctx: AnalyzerContext) -> AnalyzerOutput:
        url_results, advisory = self._classify_links(ctx)
        output = super().analyze(ctx)
        return AnalyzerOutput(
            category=output.category,
            issues=tuple(advisory) + output.issues,
            url_results=tuple(url_results),
        )

    def _classify_links(self, ctx: AnalyzerContext):
        """Pending validation entries plus one issue per unapproved Defang URL."""
        url_results: List[URLValidationResult] = []
        issues: List[SEOIssue] = []

        for link in ctx.links:
            approved = is_approved_url(link.url)
            url_results.append(URLValidationResult(
                url=link.url,
                status=URLStatus.SKIPPED,
                is_approved_defang_url=approved,
                is_external=link.is_external,
            ))

            if is_brand_domain(link.url) and not approved:
                issues.append(self.issue(
                    f"unapproved-url-{len(url_results)}",
                    Severity.ERROR,
                    "Unapproved Defang URL",
                    f'URL "{link.url}" is not in the approved list',
                    current_value=link.url,
                    suggested_value=suggest_replacement(link.url),
                    location=Location(line=link.line) if link.line else None,
                ))

        return url_results, issues

    def _check_https(self, ctx: AnalyzerContext) -> RuleOutcome:
        insecure = [l for l in ctx.links if l.url.startswith("http://")]
        passed = not insecure
        check = CheckResult(
            id="uses-https",
            name="Uses HTTPS",
            passed=passed,
            severity=Severity.ERROR,
            message="All URLs use HTTPS" if passed else f"{len(insecure)} URL(s) use insecure HTTP",
            auto_fixable=not passed,
        )
        issues = [
            self.issue(
                f"http-url-{idx}",
                Severity.ERROR,
                "Insecure HTTP URL",
                f"URL uses HTTP instead of HTTPS: {link.url}",
                current_value=link.url,
                suggested_value=link.url.replace("http://", "https://", 1),
                auto_fixable=True,
                fix_action="replace",
                location=Location(line=link.line) if link.line else None,
            )
            for idx, link in enumerate(insecure)
        ]
        return check, issues

    def _check_noopener(self, ctx: AnalyzerContext) -> RuleOutcome:
        missing = [l for l in ctx.links if l.is_external and not l.has_noopener]
        passed = not missing
        check = CheckResult(
            id="external-noopener",
            name="External Links Security",
            passed=passed,
            severity=Severity.WARNING,
            message=(
                "All external links have rel='noopener'"
                if passed else f"{len(missing)} external link(s) missing rel='noopener'"
            ),
        )
        return check, []

    def _check_internal_links(self, ctx: AnalyzerContext) -> RuleOutcome:
        internal = [l for l in ctx.links if not l.is_external]
        passed = len(internal) >= MIN_INTERNAL_LINKS
        check = CheckResult(
            id="internal-links",
            name="Internal Links",
            passed=passed,
            severity=Severity.INFO,
            message=(
                f"Good internal linking ({len(internal)} links)"
                if passed else f"Consider adding more internal links (currently: {len(internal)})"
            ),
        )
        issues = [] if passed else [self.issue(
            "low-internal-links",
            Severity.INFO,
            "Low Internal Links",
            "Consider adding more links to other Defang documentation pages",
        )]
        return check, issues

    def _check_approved_urls(self, ctx: AnalyzerContext) -> RuleOutcome:
        unapproved = [
            l for l in ctx.links
            if is_brand_domain(l.url) and not is_approved_url(l.url)
        ]
        passed = not unapproved
        check = CheckResult(
            id="approved-defang-urls",
            name="Approved Defang URLs",
            passed=passed,
            severity=Severity.ERROR,
            message=(
                "All Defang URLs are from the approved list"
                if passed else f"{len(unapproved)} unapproved Defang URL(s) found"
            ),
        )
        return check, []


def analyze_urls(ctx: AnalyzerContext) -> AnalyzerOutput:
    """Run the URL checks."""
    return URLAnalyzer().analyze(ctx)
