"""
Category Analyzer Framework

Every category (content, urls, technical, defang) is a CategoryAnalyzer
subclass that registers its rules in order. Each rule returns one
CheckResult plus zero or more SEOIssues. The category score is the sum of
the fixed weights of passed checks; the max score is the sum of all weights.

Usage:
    analyzer = ContentAnalyzer()
    output = analyzer.analyze(ctx)
    output.category.score, output.category.max_score
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .models import (
    AnalyzerContext,
    CategoryResult,
    CheckResult,
    IssueCategory,
    Location,
    SEOIssue,
    Severity,
    URLValidationResult,
)

logger = logging.getLogger(__name__)


RuleOutcome = Tuple[CheckResult, List[SEOIssue]]
Rule = Callable[[AnalyzerContext], RuleOutcome]


@dataclass(frozen=True)
class AnalyzerOutput:
    """What a category analyzer hands back to the orchestrator."""
    category: CategoryResult
    issues: Tuple[SEOIssue, ...] = ()
    url_results: Tuple[URLValidationResult, ...] = ()


def score_checks(checks: Sequence[CheckResult], weights: Dict[str, int]) -> int:
    """Sum the weights of passed checks. Unknown check ids weigh nothing."""
    return sum(weights.get(check.id, 0) for check in checks if check.passed)


class CategoryAnalyzer:
    """
    Base class for the four rule groups.

    Subclasses set NAME, CATEGORY and WEIGHTS and list their rule methods in
    rules(). Rules are pure functions of the context.
    """

    NAME: str = ""
    CATEGORY: IssueCategory = IssueCategory.CONTENT
    WEIGHTS: Dict[str, int] = {}

    @classmethod
    def max_score(cls) -> int:
        """Fixed at design time; independent of the content."""
        return sum(cls.WEIGHTS.values())

    def rules(self) -> List[Rule]:
        raise NotImplementedError

    def analyze(self, ctx: AnalyzerContext) -> AnalyzerOutput:
        checks: List[CheckResult] = []
        issues: List[SEOIssue] = []

        for rule in self.rules():
            check, rule_issues = rule(ctx)
            checks.append(check)
            issues.extend(rule_issues)

        category = self.build_category(checks)
        logger.debug(
            f"{self.NAME}: {category.score}/{category.max_score} "
            f"({category.passed}/{category.total} checks passed, {len(issues)} issues)"
        )
        return AnalyzerOutput(category=category, issues=tuple(issues))

    def build_category(self, checks: Sequence[CheckResult]) -> CategoryResult:
        return CategoryResult(
            name=self.NAME,
            score=score_checks(checks, self.WEIGHTS),
            max_score=self.max_score(),
            passed=sum(1 for c in checks if c.passed),
            total=len(checks),
            checks=tuple(checks),
        )

    def issue(
        self,
        issue_id: str,
        severity: Severity,
        title: str,
        description: str,
        *,
        current_value: Optional[str] = None,
        suggested_value: Optional[str] = None,
        auto_fixable: bool = False,
        fix_action: Optional[str] = None,
        location: Optional[Location] = None,
    ) -> SEOIssue:
        """Create an issue in this analyzer's category."""
        return SEOIssue(
            id=issue_id,
            severity=severity,
            category=self.CATEGORY,
            title=title,
            description=description,
            current_value=current_value,
            suggested_value=suggested_value,
            auto_fixable=auto_fixable,
            fix_action=fix_action,
            location=location,
        )
