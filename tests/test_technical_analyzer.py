"""
Tests for the technical SEO analyzer.
"""

from src.seo_analyzer import SEOMetadata, Severity
from src.seo_analyzer.technical_analyzer import TechnicalAnalyzer, analyze_technical


def _check(output, check_id):
    return output.category.get_check(check_id)


class TestMarkdown:
    """Markdown drafts get markup checks for free."""

    def test_markup_checks_auto_pass(self, md_context):
        output = analyze_technical(md_context("# Title\n\nBody"))

        assert _check(output, "schema-blogposting").passed
        assert _check(output, "semantic-html").passed
        assert _check(output, "no-disallowed-tags").passed
        assert "when converting to HTML" in _check(output, "schema-blogposting").message

    def test_missing_og_title_issue(self, md_context):
        output = analyze_technical(md_context("Body"))

        assert not _check(output, "og-title").passed
        assert not _check(output, "og-description").passed
        assert [i.id for i in output.issues] == ["og-title"]
        assert output.issues[0].severity == Severity.WARNING

    def test_og_metadata_present(self, md_context, seo_metadata):
        output = analyze_technical(md_context("Body", seo_metadata))

        assert _check(output, "og-title").passed
        assert _check(output, "og-description").passed
        assert output.issues == ()
        assert output.category.score == TechnicalAnalyzer.max_score() == 18


class TestHtml:
    """Markup checks on HTML content."""

    def test_plain_html_misses_schema_and_semantics(self, html_context):
        output = analyze_technical(html_context("<div><p>Body</p></div>"))

        assert not _check(output, "schema-blogposting").passed
        assert not _check(output, "semantic-html").passed

    def test_microdata_schema(self, html_context):
        output = analyze_technical(html_context(
            '<article itemscope itemtype="https://schema.org/BlogPosting"><p>x</p></article>'
        ))

        assert _check(output, "schema-blogposting").passed
        assert _check(output, "semantic-html").passed

    def test_json_ld_schema(self, html_context):
        output = analyze_technical(html_context(
            '<script type="application/ld+json">{"@type": "BlogPosting"}</script><section>x</section>'
        ))

        assert _check(output, "schema-blogposting").passed

    def test_disallowed_tags(self, html_context):
        output = analyze_technical(html_context(
            '<p>x</p><script>alert(1)</script><iframe src="https://x.com"></iframe>'
        ))
        check = _check(output, "no-disallowed-tags")
        issue = next(i for i in output.issues if i.id == "disallowed-tags")

        assert not check.passed
        assert check.message == "Found disallowed tags: script, iframe"
        assert issue.severity == Severity.ERROR
        assert issue.description == "Remove these tags: script, iframe"

    def test_disallowed_tags_in_markdown(self, md_context):
        output = analyze_technical(md_context("Text\n\n<embed src=\"x.swf\">"))
        assert not _check(output, "no-disallowed-tags").passed

    def test_similar_tag_names_not_confused(self, html_context):
        output = analyze_technical(html_context("<p>x</p><objective>y</objective>"))
        assert _check(output, "no-disallowed-tags").passed


class TestScore:

    def test_og_only_metadata(self, html_context):
        output = analyze_technical(html_context(
            "<article>x</article>", SEOMetadata(og_title="Hello")
        ))

        # og-title 3 + semantic 3 + no-disallowed 5
        assert output.category.score == 11
        assert output.category.total == 5
