"""
Approved Defang URL Registry

Static allow-list of Defang URLs that blog content may link to, plus the
domain list that identifies Defang's own web properties. Used by:
- Link extraction (internal vs external classification)
- URL analyzer (unapproved Defang URL checks)
- URL validator (result classification)

The registry is built once at import time and never mutated.
"""

from typing import Optional, Tuple
from urllib.parse import urlparse


# =============================================================================
# APPROVED URLS
# =============================================================================

APPROVED_DEFANG_URLS: Tuple[str, ...] = (
    # General
    "https://portal.defang.io",
    "https://docs.defang.io",
    "https://defang.io/samples",
    "https://s.defang.io/discord",
    "https://github.com/DefangLabs",
    "https://defang.io/pricing",
    "https://defang.io",

    # Getting started
    "https://docs.defang.io/docs/intro/getting-started",
    "https://docs.defang.io/docs/concepts/authentication",

    # Concepts
    "https://docs.defang.io/docs/concepts/compose",
    "https://docs.defang.io/docs/concepts/services",
    "https://docs.defang.io/docs/concepts/deployments",
    "https://docs.defang.io/docs/concepts/configuration",
    "https://docs.defang.io/docs/concepts/domains",
    "https://docs.defang.io/docs/concepts/networking",
    "https://docs.defang.io/docs/concepts/ai-tracing/overview",
    "https://docs.defang.io/docs/concepts/security",
    "https://docs.defang.io/docs/concepts/debug",
    "https://docs.defang.io/docs/concepts/defang-byoc",
    "https://docs.defang.io/docs/concepts/pulumi",
    "https://docs.defang.io/docs/concepts/generate",
    "https://docs.defang.io/docs/concepts/scaling",
    "https://docs.defang.io/docs/concepts/local-development",

    # Providers
    "https://docs.defang.io/docs/providers/aws",
    "https://docs.defang.io/docs/providers/gcp",

    # Managed storage
    "https://docs.defang.io/docs/concepts/managed-storage/managed-postgres",
    "https://docs.defang.io/docs/concepts/managed-storage/managed-redis",
    "https://docs.defang.io/docs/concepts/managed-storage/managed-mongodb",
    "https://docs.defang.io/docs/concepts/managed-storage/managed-object-storage",

    # Managed LLMs
    "https://docs.defang.io/docs/concepts/managed-llms/managed-language-models",

    # Tutorials
    "https://docs.defang.io/docs/tutorials/deploy-to-aws",
    "https://docs.defang.io/docs/tutorials/deploy-to-gcp",
    "https://docs.defang.io/docs/tutorials/use-your-own-domain-name",
    "https://docs.defang.io/docs/tutorials/deploying-from-github-actions",
    "https://docs.defang.io/docs/tutorials/deploy-using-pulumi",
    "https://docs.defang.io/docs/tutorials/generate-new-code-using-ai",
    "https://docs.defang.io/docs/tutorials/configure-environment-variables",
    "https://docs.defang.io/docs/tutorials/deploy-container-using-the-cli",
    "https://docs.defang.io/docs/tutorials/monitoring-your-services",
    "https://docs.defang.io/docs/tutorials/scaling-your-services",
    "https://docs.defang.io/docs/tutorials/migrating-from-heroku",
    "https://docs.defang.io/docs/tutorials/deploy-openai-apps",
    "https://docs.defang.io/docs/tutorials/deploy-with-gpu",
    "https://docs.defang.io/docs/tutorials/deploying-with-the-defang-mcp-server",

    # CLI reference
    "https://docs.defang.io/docs/cli",
    "https://docs.defang.io/docs/cli/defang_compose_up",
    "https://docs.defang.io/docs/cli/defang_compose_down",
    "https://docs.defang.io/docs/cli/defang_config",
    "https://docs.defang.io/docs/cli/defang_generate",
    "https://docs.defang.io/docs/cli/defang_login",
    "https://docs.defang.io/docs/cli/defang_logs",
)

_APPROVED_SET = frozenset(APPROVED_DEFANG_URLS)

# Entries with a path also approve everything below them; bare origins only
# approve themselves.
_APPROVED_PREFIXES: Tuple[str, ...] = tuple(
    url + "/" for url in APPROVED_DEFANG_URLS if urlparse(url).path not in ("", "/")
)

# Hosts that belong to Defang, matched on host only. GitHub org links are
# on the approved list but count as external.
DEFANG_DOMAINS: Tuple[str, ...] = (
    "defang.io",
    "docs.defang.io",
    "portal.defang.io",
    "s.defang.io",
)

DOCS_ROOT = "https://docs.defang.io"

# Keyword found in a URL -> replacement. First match wins.
SUGGESTED_REPLACEMENTS: Tuple[Tuple[str, str], ...] = (
    ("playground", "https://docs.defang.io/docs/providers/aws"),
    ("digitalocean", "https://docs.defang.io/docs/providers/gcp"),
    ("azure", "https://docs.defang.io/docs/providers/aws"),
    ("postgres", "https://docs.defang.io/docs/concepts/managed-storage/managed-postgres"),
    ("redis", "https://docs.defang.io/docs/concepts/managed-storage/managed-redis"),
    ("mongodb", "https://docs.defang.io/docs/concepts/managed-storage/managed-mongodb"),
)

_DEFAULT_PORTS = {"http": 80, "https": 443}


# =============================================================================
# HELPERS
# =============================================================================


def normalize_url(url: str) -> Optional[str]:
    """
    Normalize a URL to scheme://host[:port]/path.

    Drops query, fragment, credentials, default ports and one trailing slash.
    Returns None when the URL cannot be parsed or has no host.
    """
    try:
        parsed = urlparse(url.strip())
        host = parsed.hostname
        port = parsed.port
    except (ValueError, AttributeError):
        return None

    if not parsed.scheme or not host:
        return None

    scheme = parsed.scheme.lower()
    if port and port != _DEFAULT_PORTS.get(scheme):
        host = f"{host}:{port}"

    normalized = f"{scheme}://{host}{parsed.path}"
    if normalized.endswith("/"):
        normalized = normalized[:-1]
    return normalized


def is_valid_url(url: str) -> bool:
    """Check that a string is an absolute URL with a scheme and a host."""
    if not isinstance(url, str) or not url.strip():
        return False
    return normalize_url(url) is not None


def is_approved_url(url: str) -> bool:
    """
    Check if a URL is on the approved Defang list.

    Matches exactly, or as a sub-path of an approved entry that itself has
    a path (so /docs/providers/aws/extra passes but bare docs.defang.io
    does not approve every docs page).
    """
    normalized = normalize_url(url)
    if normalized is None:
        return False

    if normalized in _APPROVED_SET:
        return True

    return any(normalized.startswith(prefix) for prefix in _APPROVED_PREFIXES)


def is_brand_domain(url: str) -> bool:
    """Check if a URL's host is a Defang domain or one of its subdomains."""
    try:
        host = (urlparse(url.strip()).hostname or "").lower()
    except (ValueError, AttributeError):
        return False

    if not host:
        return False

    return any(host == domain or host.endswith(f".{domain}") for domain in DEFANG_DOMAINS)


def suggest_replacement(url: str) -> Optional[str]:
    """
    Suggest an approved URL to use instead of the given one.

    Returns None for non-Defang URLs that match no known pattern.
    """
    lower_url = url.lower()

    for pattern, suggestion in SUGGESTED_REPLACEMENTS:
        if pattern in lower_url:
            return suggestion

    if is_brand_domain(url):
        return DOCS_ROOT

    return None

