"""
Keyword Analyzer

Frequency and density of the Defang primary keywords, discovery of
frequent secondary terms, and a short list of suggested keywords.
Density is expressed as a percentage of qualifying tokens (longer than
three characters).
"""

import re
from collections import Counter
from typing import Dict, List

from .models import AnalyzerContext, KeywordAnalysis, KeywordResult, KeywordStatus


PRIMARY_KEYWORDS = ("defang", "deploy", "aws", "gcp", "docker", "compose")
ALWAYS_SHOWN = PRIMARY_KEYWORDS[:3]

MIN_TOKEN_LENGTH = 4          # tokens counted toward totalWords
MIN_SECONDARY_LENGTH = 5      # cleaned tokens eligible as secondary keywords
MIN_SECONDARY_COUNT = 3
MAX_SECONDARY = 5
HIGH_COUNT = 10

NON_LETTERS = re.compile(r"[^a-z]")

_PRIMARY_PATTERNS: Dict[str, re.Pattern] = {
    kw: re.compile(rf"\b{re.escape(kw)}\b", re.IGNORECASE) for kw in PRIMARY_KEYWORDS
}


def _density(count: int, total: int) -> float:
    return count * 100 / total if total > 0 else 0.0


def _status(count: int) -> KeywordStatus:
    if count == 0:
        return KeywordStatus.LOW
    if count > HIGH_COUNT:
        return KeywordStatus.HIGH
    return KeywordStatus.GOOD


def analyze_keywords(ctx: AnalyzerContext) -> KeywordAnalysis:
    """Compute keyword usage for the extracted text."""
    text = ctx.text_content.lower()
    tokens = [w for w in text.split() if len(w) >= MIN_TOKEN_LENGTH]
    total = len(tokens)

    primary: List[KeywordResult] = []
    for keyword in PRIMARY_KEYWORDS:
        count = len(_PRIMARY_PATTERNS[keyword].findall(ctx.text_content))
        if count == 0 and keyword not in ALWAYS_SHOWN:
            continue
        primary.append(KeywordResult(
            keyword=keyword,
            count=count,
            density=_density(count, total),
            status=_status(count),
        ))

    freq: Counter = Counter()
    for token in tokens:
        clean = NON_LETTERS.sub("", token)
        if len(clean) >= MIN_SECONDARY_LENGTH and clean not in PRIMARY_KEYWORDS:
            freq[clean] += 1

    # Counter.most_common keeps first-seen order for ties
    secondary = [
        KeywordResult(
            keyword=word,
            count=count,
            density=_density(count, total),
            status=KeywordStatus.GOOD,
        )
        for word, count in freq.most_common()
        if count >= MIN_SECONDARY_COUNT
    ][:MAX_SECONDARY]

    suggestions: List[str] = []
    deploy = next((k for k in primary if k.keyword == "deploy"), None)
    if deploy is None or deploy.count == 0:
        suggestions.append("deployment")
    if "cloud" not in text:
        suggestions.append("cloud")
    if "container" not in text:
        suggestions.append("container")

    return KeywordAnalysis(
        primary=tuple(primary),
        secondary=tuple(secondary),
        suggestions=tuple(suggestions),
        overall_density=sum(k.density for k in primary),
    )
