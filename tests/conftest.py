"""
Pytest Configuration and Shared Fixtures

Provides sample blog content, metadata and context builders for all test modules.
"""

import pytest

from src.seo_analyzer import ContentType, SEOMetadata, build_context


# ============================================================================
# Sample Content
# ============================================================================

SAMPLE_MARKDOWN = """# Deploying a Compose App with Defang

TL;DR: one command ships your stack to AWS.

## Setup

Install the CLI and run `defang login` first.

```bash
# this is a shell comment, not a heading
defang compose up
```

![Architecture](https://defang.io/img/arch.png)

See the [AWS provider docs](https://docs.defang.io/docs/providers/aws) and the
[getting started guide](https://docs.defang.io/docs/intro/getting-started).
Questions? Join us on [Discord](https://s.defang.io/discord).
Get started at [the portal](https://portal.defang.io).
"""

SAMPLE_HTML = """<article class="defang-blog" itemscope itemtype="https://schema.org/BlogPosting">
  <header><h1 id="title">Deploy Compose Apps with Defang</h1></header>
  <section>
    <h2>TL;DR</h2>
    <p>Run one command to ship your stack to AWS or GCP</p>
    <pre><code>defang compose up</code></pre>
    <img src="https://defang.io/img/arch.png" alt="Architecture diagram">
    <p>Read the <a href="https://docs.defang.io/docs/intro/getting-started">getting started guide</a>,
    the <a href="https://docs.defang.io/docs/providers/aws">AWS provider docs</a> and
    the <a href="https://docs.defang.io/docs/providers/gcp">GCP provider docs</a>.</p>
    <p>Compose reference: <a href="https://compose-spec.io" rel="noopener" target="_blank">Compose spec</a>.</p>
    <p>Get started today at <a href="https://portal.defang.io">the Defang portal</a>.</p>
  </section>
</article>
"""

# 53 characters
GOOD_TITLE = "Deploy Docker Compose Apps to AWS and GCP with Defang"

# 155 characters
GOOD_DESCRIPTION = (
    "Learn how to deploy a Docker Compose app to AWS or GCP with one Defang command, "
    "including managed databases, config secrets, and custom domain setup steps."
)


@pytest.fixture
def sample_markdown() -> str:
    return SAMPLE_MARKDOWN


@pytest.fixture
def sample_html() -> str:
    return SAMPLE_HTML


@pytest.fixture
def seo_metadata() -> SEOMetadata:
    """Metadata that passes every metadata check."""
    return SEOMetadata(
        title=GOOD_TITLE,
        description=GOOD_DESCRIPTION,
        keywords=("defang", "docker compose", "aws"),
        og_title="Deploy Compose Apps with Defang",
        og_description="Ship a Compose stack to AWS or GCP with one command.",
        canonical_slug="deploy-compose-apps-with-defang",
    )


# ============================================================================
# Context Builders
# ============================================================================

@pytest.fixture
def md_context():
    """Factory for Markdown analyzer contexts."""
    def _build(content: str, metadata: SEOMetadata = None):
        return build_context(content, ContentType.MARKDOWN, metadata)
    return _build


@pytest.fixture
def html_context():
    """Factory for HTML analyzer contexts."""
    def _build(content: str, metadata: SEOMetadata = None):
        return build_context(content, ContentType.HTML, metadata)
    return _build
