"""
Tests for the content quality analyzer.
"""

import pytest

from src.seo_analyzer import SEOMetadata, Severity
from src.seo_analyzer.content_analyzer import ContentAnalyzer, analyze_content


def _check(output, check_id):
    check = output.category.get_check(check_id)
    assert check is not None, f"missing check {check_id}"
    return check


def _issue(output, issue_id):
    return next((i for i in output.issues if i.id == issue_id), None)


class TestCategoryShape:

    def test_max_score_and_checks(self, md_context):
        output = analyze_content(md_context("hello"))

        assert ContentAnalyzer.max_score() == 33
        assert output.category.max_score == 33
        assert output.category.total == 9
        assert len(output.category.checks) == 9
        assert 0 <= output.category.score <= 33
        assert output.category.name == "Content Quality"


class TestMetadataLength:
    """Tests for title and description length checks."""

    def test_optimal_title(self, md_context):
        output = analyze_content(md_context("x", SEOMetadata(title="t" * 55)))
        check = _check(output, "title-length")

        assert check.passed
        assert _issue(output, "title-length") is None

    def test_missing_title_is_error(self, md_context):
        output = analyze_content(md_context("x"))
        check = _check(output, "title-length")

        assert not check.passed
        assert check.severity == Severity.ERROR
        assert check.message == "Missing meta title"

    def test_long_title_is_truncatable(self, md_context):
        title = "t" * 70
        output = analyze_content(md_context("x", SEOMetadata(title=title)))
        issue = _issue(output, "title-length")

        assert issue.severity == Severity.WARNING
        assert issue.auto_fixable
        assert issue.fix_action == "truncate"
        assert issue.current_value == title
        assert issue.suggested_value == "t" * 57 + "..."
        assert len(issue.suggested_value) == 60

    def test_short_description_not_fixable(self, md_context):
        output = analyze_content(md_context("x", SEOMetadata(description="too short")))
        issue = _issue(output, "description-length")

        assert issue.severity == Severity.WARNING
        assert not issue.auto_fixable
        assert issue.suggested_value is None
        assert "too short" in issue.description.lower()

    def test_description_bounds_inclusive(self, md_context):
        for length in (150, 160):
            output = analyze_content(md_context("x", SEOMetadata(description="d" * length)))
            assert _check(output, "description-length").passed


class TestWordCount:
    """Tests for the word-count check."""

    def test_severely_thin_content_is_error(self, md_context):
        output = analyze_content(md_context("word " * 120))
        check = _check(output, "word-count")

        assert not check.passed
        assert check.severity == Severity.ERROR
        assert _issue(output, "word-count").severity == Severity.ERROR

    def test_thin_content_is_warning(self, md_context):
        check = _check(analyze_content(md_context("word " * 350)), "word-count")

        assert not check.passed
        assert check.severity == Severity.WARNING

    def test_enough_words(self, md_context):
        check = _check(analyze_content(md_context("word " * 500)), "word-count")
        assert check.passed


class TestHeadings:
    """Tests for heading hierarchy and uniqueness."""

    def test_level_jump_fails(self, md_context):
        output = analyze_content(md_context("# Title\n#### Subheading"))
        check = _check(output, "heading-hierarchy")

        assert not check.passed
        assert check.severity == Severity.ERROR
        assert check.message == "Heading level skipped: H1 to H4"

    def test_multiple_h1(self, html_context):
        output = analyze_content(html_context("<h1>One</h1><p>text</p><h1>Two</h1>"))
        check = _check(output, "heading-hierarchy")

        assert not check.passed
        assert "Multiple H1 tags found (2)" in check.message

    def test_going_back_up_is_fine(self, md_context):
        output = analyze_content(md_context("# A\n## B\n### C\n## D\n### E"))
        assert _check(output, "heading-hierarchy").passed

    def test_no_headings_is_valid(self, md_context):
        assert _check(analyze_content(md_context("plain")), "heading-hierarchy").passed

    def test_duplicate_headings_case_insensitive(self, md_context):
        output = analyze_content(md_context("# Guide\n## Setup\n## setup"))
        check = _check(output, "duplicate-headings")

        assert not check.passed
        assert 'Duplicate headings found: "setup"' == check.message


class TestImageAlt:
    """Tests for the image alt text check."""

    def test_no_images_passes(self, md_context):
        check = _check(analyze_content(md_context("no pictures")), "image-alt")

        assert check.passed
        assert "No images found" in check.message

    def test_markdown_missing_alt(self, md_context):
        content = "Intro\n\n![](https://x.com/a.png)\n![ok](https://x.com/b.png)"
        output = analyze_content(md_context(content))
        issue = _issue(output, "image-alt-0")

        assert not _check(output, "image-alt").passed
        assert issue.auto_fixable
        assert issue.current_value == "![](https://x.com/a.png)"
        assert issue.suggested_value == "![Image description](https://x.com/a.png)"
        assert issue.location.line == 3
        assert _issue(output, "image-alt-1") is None

    def test_html_empty_alt(self, html_context):
        output = analyze_content(html_context('<img src="a.png" alt="">'))
        issue = _issue(output, "image-alt-0")

        assert issue.current_value == '<img src="a.png" alt="">'
        assert issue.suggested_value == '<img src="a.png" alt="Image description">'

    def test_html_no_alt_attribute(self, html_context):
        output = analyze_content(html_context('<img src="a.png" data-alt="x">'))
        issue = _issue(output, "image-alt-0")

        assert issue.suggested_value == '<img alt="Image description" src="a.png" data-alt="x">'


class TestProse:
    """Tests for TL;DR, code examples and readability."""

    @pytest.mark.parametrize("marker", ["TL;DR", "tldr", "Summary", "Key takeaways"])
    def test_tldr_markers(self, md_context, marker):
        assert _check(analyze_content(md_context(f"{marker}: it works")), "has-tldr").passed

    def test_missing_tldr_issue(self, md_context):
        output = analyze_content(md_context("Nothing to see"))
        assert _issue(output, "has-tldr").severity == Severity.INFO

    def test_code_examples(self, md_context, html_context):
        assert _check(analyze_content(md_context("```\nls\n```")), "has-code").passed
        assert _check(analyze_content(html_context("<pre>ls</pre>")), "has-code").passed
        assert not _check(analyze_content(md_context("no code")), "has-code").passed

    def test_short_sentences_readable(self, md_context):
        output = analyze_content(md_context("Short one. Another short one! Is this short?"))
        check = _check(output, "readability")

        assert check.passed
        assert "avg 3 words/sentence" in check.message

    def test_long_sentences_flagged(self, md_context):
        output = analyze_content(md_context(" ".join(["word"] * 30) + "."))
        check = _check(output, "readability")

        assert not check.passed
        assert _issue(output, "readability").description.startswith("Average sentence length is 30 words")

    def test_empty_text_is_readable(self, md_context):
        assert _check(analyze_content(md_context("```\ncode only\n```")), "readability").passed


class TestScore:

    def test_score_is_sum_of_passed_weights(self, md_context):
        output = analyze_content(md_context("x"))
        expected = sum(ContentAnalyzer.WEIGHTS[c.id] for c in output.category.checks if c.passed)

        assert output.category.score == expected
        assert output.category.passed == sum(1 for c in output.category.checks if c.passed)
