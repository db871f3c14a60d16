"""
Tests for the SEO analysis orchestrator.
"""

import re
from unittest.mock import patch

import pytest

from src.seo_analyzer import (
    AnalysisFailedError,
    CategoryResult,
    ContentType,
    InvalidRequestError,
    IssueCategory,
    SEOAnalyzeRequest,
    URLStatus,
    URLValidationResult,
    analyze_seo,
    calculate_overall_score,
    get_score_label,
    with_url_validation,
)
from src.seo_analyzer.base import AnalyzerOutput
from src.seo_analyzer.engine import CATEGORY_WEIGHTS


def _output(score: int, max_score: int) -> AnalyzerOutput:
    return AnalyzerOutput(category=CategoryResult(
        name="test", score=score, max_score=max_score, passed=0, total=0,
    ))


class TestScoreLabel:
    """Tests for score label thresholds."""

    @pytest.mark.parametrize("score,label", [
        (100, "Excellent"),
        (90, "Excellent"),
        (89, "Good"),
        (80, "Good"),
        (79, "Fair"),
        (70, "Fair"),
        (69, "Needs Work"),
        (60, "Needs Work"),
        (59, "Poor"),
        (0, "Poor"),
    ])
    def test_thresholds(self, score, label):
        assert get_score_label(score) == label


class TestOverallScore:
    """Tests for the weighted overall score."""

    def test_weights_sum_to_one(self):
        assert sum(CATEGORY_WEIGHTS.values()) == pytest.approx(1.0)

    def test_all_full(self):
        outputs = {
            "urls": _output(13, 13),
            "content": _output(33, 33),
            "technical": _output(18, 18),
            "defang": _output(15, 15),
        }
        assert calculate_overall_score(outputs) == 100

    def test_all_zero(self):
        outputs = {key: _output(0, 10) for key in CATEGORY_WEIGHTS}
        assert calculate_overall_score(outputs) == 0

    def test_weighted_mix(self):
        outputs = {
            "urls": _output(13, 13),
            "content": _output(0, 33),
            "technical": _output(18, 18),
            "defang": _output(15, 15),
        }
        assert calculate_overall_score(outputs) == 65


class TestAnalyzeSeo:
    """End-to-end analysis tests."""

    def test_strong_html_article(self, sample_html, seo_metadata):
        result = analyze_seo(SEOAnalyzeRequest(
            content=sample_html,
            content_type=ContentType.HTML,
            seo_metadata=seo_metadata,
        ))

        assert result.categories["urls"].score == 13
        assert result.categories["technical"].score == 18
        assert result.categories["defang"].score == 15
        assert result.overall_score >= 90
        assert result.score_label == "Excellent"

    def test_result_invariants(self, sample_markdown):
        result = analyze_seo({"content": sample_markdown, "contentType": "markdown"})

        assert isinstance(result.overall_score, int)
        assert 0 <= result.overall_score <= 100
        assert list(result.categories) == ["urls", "content", "technical", "defang"]
        for category in result.categories.values():
            assert 0 <= category.score <= category.max_score
            assert category.total == len(category.checks)
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", result.timestamp)

    def test_max_scores(self, sample_markdown):
        result = analyze_seo({"content": sample_markdown, "contentType": "markdown"})
        max_scores = {k: c.max_score for k, c in result.categories.items()}

        assert max_scores == {"urls": 13, "content": 33, "technical": 18, "defang": 15}

    def test_idempotent(self, sample_markdown, seo_metadata):
        request = SEOAnalyzeRequest(sample_markdown, ContentType.MARKDOWN, seo_metadata)
        first = analyze_seo(request).to_dict()
        second = analyze_seo(request).to_dict()

        first.pop("timestamp")
        second.pop("timestamp")
        assert first == second

    def test_issue_order_by_category(self):
        content = (
            "# Title\n#### Jump\n\n"
            "Deploy to DigitalOcean - today. [Insecure](http://example.com)"
        )
        result = analyze_seo({"content": content, "contentType": "markdown"})
        order = ["urls", "content", "technical", "defang"]
        positions = [order.index(i.category.value) for i in result.issues]

        assert positions == sorted(positions)
        assert {IssueCategory.URLS, IssueCategory.CONTENT, IssueCategory.DEFANG} <= {
            i.category for i in result.issues
        }

    def test_url_validation_entries_are_skipped(self, sample_markdown):
        result = analyze_seo({"content": sample_markdown, "contentType": "markdown"})

        assert len(result.url_validation) == 4
        assert all(r.status == URLStatus.SKIPPED for r in result.url_validation)

    def test_metadata_mapping_is_accepted(self, sample_markdown):
        result = analyze_seo({
            "content": sample_markdown,
            "contentType": "markdown",
            "seoMetadata": {"title": "t" * 55, "ogTitle": "Hello", "keywords": "defang, aws"},
        })

        assert result.categories["content"].get_check("title-length").passed
        assert result.categories["technical"].get_check("og-title").passed

    def test_serializes_to_camel_case(self, sample_markdown):
        data = analyze_seo({"content": sample_markdown, "contentType": "markdown"}).to_dict()

        assert set(data) == {
            "overallScore", "scoreLabel", "timestamp", "categories",
            "issues", "urlValidation", "keywords",
        }
        assert "maxScore" in data["categories"]["content"]
        assert "isApprovedDefangUrl" in data["urlValidation"][0]
        assert "overallDensity" in data["keywords"]


class TestRequestValidation:
    """Tests for rejected requests."""

    @pytest.mark.parametrize("content", [None, "", "   "])
    def test_content_required(self, content):
        with pytest.raises(InvalidRequestError) as exc:
            analyze_seo({"content": content, "contentType": "html"})

        assert exc.value.message == "Content is required"
        assert exc.value.field == "content"

    @pytest.mark.parametrize("content_type", [None, "", "pdf"])
    def test_content_type_required(self, content_type):
        with pytest.raises(InvalidRequestError) as exc:
            analyze_seo({"content": "hello", "contentType": content_type})

        assert exc.value.message == "contentType must be 'html' or 'markdown'"
        assert exc.value.field == "contentType"

    def test_content_type_is_case_insensitive(self):
        result = analyze_seo({"content": "hello", "contentType": "HTML"})
        assert 0 <= result.overall_score <= 100

    def test_bad_metadata(self):
        with pytest.raises(InvalidRequestError) as exc:
            analyze_seo({"content": "hello", "contentType": "html", "seoMetadata": ["nope"]})
        assert exc.value.field == "seoMetadata"


class TestInternalFailure:

    def test_analyzer_fault_becomes_analysis_failed(self, sample_markdown):
        with patch("src.seo_analyzer.engine.analyze_keywords", side_effect=RuntimeError("boom")):
            with pytest.raises(AnalysisFailedError):
                analyze_seo({"content": sample_markdown, "contentType": "markdown"})


class TestWithUrlValidation:

    def test_replaces_matching_entries(self, sample_markdown):
        result = analyze_seo({"content": sample_markdown, "contentType": "markdown"})
        first = result.url_validation[0]
        live = URLValidationResult(
            url=first.url,
            status=URLStatus.VALID,
            is_approved_defang_url=True,
            is_external=False,
            status_code=200,
            response_time=12,
        )

        updated = with_url_validation(result, [live])

        assert updated.url_validation[0] == live
        assert updated.url_validation[1:] == result.url_validation[1:]
        assert updated.overall_score == result.overall_score
        assert updated.issues == result.issues
