"""
Defang Brand Guidelines Analyzer

Editorial rules specific to Defang blog content:
- Only AWS and GCP may be named as providers
- No dashes used as punctuation in prose
- A call-to-action pointing at a Defang property
- `defang <command>` references must use real CLI commands

Max score: 15
"""

import re
from typing import List, Tuple

from .base import AnalyzerOutput, CategoryAnalyzer, Rule, RuleOutcome
from .models import AnalyzerContext, CheckResult, IssueCategory, Severity


# Provider / platform name -> pattern matched against the plain text
FORBIDDEN_PROVIDERS: Tuple[Tuple[str, re.Pattern], ...] = (
    ("DigitalOcean", re.compile(r"digitalocean", re.IGNORECASE)),
    ("Azure", re.compile(r"\bazure\b", re.IGNORECASE)),
    ("Playground", re.compile(r"\bplayground\b", re.IGNORECASE)),
    ("Heroku", re.compile(r"\bheroku\b", re.IGNORECASE)),
)

# Hyphen, en dash or em dash standing alone between words or at a line edge
DASH_IN_PROSE = re.compile(
    r"\s[-–—]\s|^[-–—]\s|\s[-–—]$", re.MULTILINE
)

DEFANG_LINK = re.compile(r"defang\.io|portal\.defang|docs\.defang", re.IGNORECASE)
CTA_PHRASES = re.compile(r"get started|try|deploy|sign up|learn more", re.IGNORECASE)

CLI_COMMAND = re.compile(r"defang\s+\w+")
VALID_CLI_COMMANDS = frozenset({
    "compose",
    "config",
    "generate",
    "login",
    "logout",
    "logs",
    "debug",
    "whoami",
    "upgrade",
})


class BrandAnalyzer(CategoryAnalyzer):
    """Scores compliance with the Defang editorial guidelines."""

    NAME = "Defang Guidelines"
    CATEGORY = IssueCategory.DEFANG
    WEIGHTS = {
        "only-aws-gcp": 5,
        "no-dashes": 3,
        "has-cta": 3,
        "valid-cli": 4,
    }

    def rules(self) -> List[Rule]:
        return [
            self._check_providers,
            self._check_dashes,
            self._check_cta,
            self._check_cli_commands,
        ]

    def _check_providers(self, ctx: AnalyzerContext) -> RuleOutcome:
        found = [name for name, pattern in FORBIDDEN_PROVIDERS if pattern.search(ctx.text_content)]
        passed = not found
        check = CheckResult(
            id="only-aws-gcp",
            name="Only AWS/GCP Providers",
            passed=passed,
            severity=Severity.ERROR,
            message="Only mentions AWS and GCP" if passed else f"Found forbidden providers: {', '.join(found)}",
        )
        issues = [
            self.issue(
                f"forbidden-provider-{name}",
                Severity.ERROR,
                f"Forbidden Provider: {name}",
                f"Remove mentions of {name}. Only AWS and GCP should be mentioned.",
            )
            for name in found
        ]
        return check, issues

    def _check_dashes(self, ctx: AnalyzerContext) -> RuleOutcome:
        has_dashes = bool(DASH_IN_PROSE.search(ctx.text_content))
        check = CheckResult(
            id="no-dashes",
            name="No Dashes in Prose",
            passed=not has_dashes,
            severity=Severity.WARNING,
            message=(
                "Found dashes used as punctuation. Use colons, commas, or periods instead."
                if has_dashes else "No dashes used as punctuation"
            ),
        )
        issues = [self.issue(
            "dashes-in-prose",
            Severity.WARNING,
            "Dashes in Prose",
            "Replace em-dashes and en-dashes with colons, commas, or separate sentences",
        )] if has_dashes else []
        return check, issues

    def _check_cta(self, ctx: AnalyzerContext) -> RuleOutcome:
        has_cta = bool(DEFANG_LINK.search(ctx.content)) and bool(CTA_PHRASES.search(ctx.text_content))
        check = CheckResult(
            id="has-cta",
            name="Has Defang CTA",
            passed=has_cta,
            severity=Severity.INFO,
            message="Content includes a call-to-action" if has_cta else "Consider adding a call-to-action to Defang",
        )
        issues = [] if has_cta else [self.issue(
            "missing-cta",
            Severity.INFO,
            "Missing Call-to-Action",
            "Add a CTA linking to Defang portal, docs, or Discord",
        )]
        return check, issues

    def _check_cli_commands(self, ctx: AnalyzerContext) -> RuleOutcome:
        invalid: List[str] = []
        for match in CLI_COMMAND.finditer(ctx.content):
            command = " ".join(match.group(0).split())
            if command.split()[1] not in VALID_CLI_COMMANDS and command not in invalid:
                invalid.append(command)

        passed = not invalid
        check = CheckResult(
            id="valid-cli",
            name="Valid CLI Commands",
            passed=passed,
            severity=Severity.ERROR,
            message=(
                "All CLI commands appear valid"
                if passed else f"Potentially invalid CLI commands: {', '.join(invalid)}"
            ),
        )
        issues = [] if passed else [self.issue(
            "invalid-cli",
            Severity.ERROR,
            "Invalid CLI Commands",
            f"Check these commands: {', '.join(invalid)}",
        )]
        return check, issues


def analyze_brand(ctx: AnalyzerContext) -> AnalyzerOutput:
    """Run the Defang guideline checks."""
    return BrandAnalyzer().analyze(ctx)
