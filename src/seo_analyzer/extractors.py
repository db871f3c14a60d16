"""
Content Extractors

Pulls structured facts out of raw HTML or Markdown blog content:
- extract_text: plain-text projection (markup and code removed)
- extract_links: absolute http(s) hyperlinks
- extract_headings: heading outline
- extract_images: image references

Extraction is regex-based and total: malformed markup yields partial or
empty results, never an exception.
"""

import logging
import re
from bisect import bisect_left
from typing import Dict, List, Optional, Union

from .approved_urls import is_brand_domain
from .models import (
    AnalyzerContext,
    ContentType,
    ExtractedHeading,
    ExtractedImage,
    ExtractedLink,
    SEOMetadata,
)

logger = logging.getLogger(__name__)


# =============================================================================
# PATTERNS
# =============================================================================

# Markdown
MD_FENCED_CODE = re.compile(r"```[\s\S]*?```")
MD_INLINE_CODE = re.compile(r"`[^`]+`")
# Bracket and paren classes exclude their own openers so an unclosed
# "[" or "(" fails at the next one instead of scanning to the end.
MD_IMAGE = re.compile(r"!\[([^\[\]]*)\]\(([^()]+)\)")
MD_LINK = re.compile(r"(?<!!)\[([^\[\]]+)\]\(([^()]+)\)")
MD_HEADING_MARKER = re.compile(r"^#+\s*", re.MULTILINE)
MD_HEADING_LINE = re.compile(r"^(#{1,6})\s+(.+)$")
MD_FENCE_LINE = re.compile(r"^\s*```")
MD_EMPHASIS = (
    re.compile(r"\*\*([^*]+)\*\*"),
    re.compile(r"\*([^*]+)\*"),
    re.compile(r"__([^_]+)__"),
    re.compile(r"_([^_]+)_"),
)

# HTML
# Element bodies stop at the next opener of the same element, so unclosed
# tags cost one bounded scan each.
HTML_NON_PROSE = tuple(
    re.compile(rf"<{tag}\b(?:(?!<{tag}\b)[\s\S])*?</{tag}\s*>", re.IGNORECASE)
    for tag in ("script", "style", "pre", "code")
)
HTML_TAG = re.compile(r"<[^<>]+>")
HTML_ANCHOR = re.compile(
    r"<a\b([^<>]*)>((?:(?!<a\b|</a\s*>)[\s\S])*)</a\s*>",
    re.IGNORECASE,
)
HTML_HEADING = re.compile(
    r"<h([1-6])\b([^<>]*)>((?:(?!<h[1-6]\b|</h[1-6]\s*>)[\s\S])*)</h\1\s*>",
    re.IGNORECASE,
)
HTML_IMG = re.compile(r"<img\b([^<>]*)>", re.IGNORECASE)
HTML_ATTR = re.compile(
    r"""([^\s"'<>/=]+)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+))"""
)

HTML_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
)

WHITESPACE = re.compile(r"\s+")
NEWLINE = re.compile(r"\n")


# =============================================================================
# HELPERS
# =============================================================================


def _coerce_type(content_type: Union[ContentType, str]) -> ContentType:
    if isinstance(content_type, ContentType):
        return content_type
    try:
        return ContentType(str(content_type).lower())
    except ValueError:
        logger.debug(f"Unknown content type {content_type!r}, treating as markdown")
        return ContentType.MARKDOWN


def _newline_offsets(content: str) -> List[int]:
    return [m.start() for m in NEWLINE.finditer(content)]


def _line_of(newlines: List[int], offset: int) -> int:
    """1-based line number of a character offset."""
    return bisect_left(newlines, offset) + 1


def _unescape(text: str) -> str:
    for entity, char in HTML_ENTITIES:
        text = text.replace(entity, char)
    return text


def _inner_text(fragment: str) -> str:
    """Visible text of an inline HTML fragment, whitespace collapsed."""
    text = HTML_TAG.sub(" ", fragment)
    return WHITESPACE.sub(" ", _unescape(text)).strip()


def parse_attributes(attrs: str) -> Dict[str, str]:
    """Parse an HTML attribute string into a lowercase-keyed dict."""
    parsed: Dict[str, str] = {}
    for match in HTML_ATTR.finditer(attrs or ""):
        name = match.group(1).lower()
        value = next((g for g in match.group(2, 3, 4) if g is not None), "")
        parsed.setdefault(name, value)
    return parsed


def _md_target(raw: str) -> str:
    """URL part of a Markdown link target, dropping any quoted title."""
    target = raw.strip()
    if target.startswith("<") and ">" in target:
        return target[1:target.index(">")]
    return target.split()[0] if target else ""


def _mask_fenced_code(content: str) -> str:
    """Blank out fenced code lines so headings inside code are ignored."""
    lines = content.split("\n")
    in_fence = False
    for i, line in enumerate(lines):
        if MD_FENCE_LINE.match(line):
            in_fence = not in_fence
            lines[i] = ""
        elif in_fence:
            lines[i] = ""
    return "\n".join(lines)


# =============================================================================
# EXTRACTORS
# =============================================================================


def extract_text(content: str, content_type: Union[ContentType, str]) -> str:
    """Plain-text projection of the content. Code never counts as prose."""
    text = content or ""

    if _coerce_type(content_type) == ContentType.MARKDOWN:
        text = MD_FENCED_CODE.sub("", text)
        text = MD_INLINE_CODE.sub("", text)
        text = MD_IMAGE.sub(r"\1", text)
        text = MD_LINK.sub(r"\1", text)
        text = MD_HEADING_MARKER.sub("", text)
        for pattern in MD_EMPHASIS:
            text = pattern.sub(r"\1", text)
        return text

    for pattern in HTML_NON_PROSE:
        text = pattern.sub("", text)
    text = HTML_TAG.sub(" ", text)
    return _unescape(text)


def extract_links(content: str, content_type: Union[ContentType, str]) -> List[ExtractedLink]:
    """Absolute http(s) links in document order."""
    content = content or ""
    links: List[ExtractedLink] = []
    newlines = _newline_offsets(content)

    if _coerce_type(content_type) == ContentType.MARKDOWN:
        for match in MD_LINK.finditer(content):
            url = _md_target(match.group(2))
            if not url.startswith("http"):
                continue
            links.append(ExtractedLink(
                url=url,
                text=match.group(1).strip(),
                is_external=not is_brand_domain(url),
                has_noopener=False,
                line=_line_of(newlines, match.start()),
            ))
        return links

    for match in HTML_ANCHOR.finditer(content):
        attrs = parse_attributes(match.group(1))
        url = attrs.get("href", "").strip()
        if not url.startswith("http"):
            continue
        rel_tokens = attrs.get("rel", "").lower().split()
        links.append(ExtractedLink(
            url=url,
            text=_inner_text(match.group(2)),
            is_external=not is_brand_domain(url),
            has_noopener="noopener" in rel_tokens,
            line=_line_of(newlines, match.start()),
        ))
    return links


def extract_headings(content: str, content_type: Union[ContentType, str]) -> List[ExtractedHeading]:
    """Heading outline in document order."""
    content = content or ""
    headings: List[ExtractedHeading] = []

    if _coerce_type(content_type) == ContentType.MARKDOWN:
        for idx, line in enumerate(_mask_fenced_code(content).split("\n")):
            match = MD_HEADING_LINE.match(line.rstrip("\r"))
            if match:
                headings.append(ExtractedHeading(
                    level=len(match.group(1)),
                    text=match.group(2).strip(),
                    line=idx + 1,
                ))
        return headings

    for match in HTML_HEADING.finditer(content):
        text = _inner_text(match.group(3))
        if not text:
            continue
        attrs = parse_attributes(match.group(2))
        headings.append(ExtractedHeading(
            level=int(match.group(1)),
            text=text,
            id=attrs.get("id") or None,
        ))
    return headings


def extract_images(content: str, content_type: Union[ContentType, str]) -> List[ExtractedImage]:
    """Image references in document order."""
    content = content or ""
    images: List[ExtractedImage] = []
    newlines = _newline_offsets(content)

    if _coerce_type(content_type) == ContentType.MARKDOWN:
        for match in MD_IMAGE.finditer(content):
            images.append(ExtractedImage(
                src=_md_target(match.group(2)),
                alt=match.group(1) or None,
                line=_line_of(newlines, match.start()),
                markup=match.group(0),
            ))
        return images

    for match in HTML_IMG.finditer(content):
        attrs = parse_attributes(match.group(1))
        src = attrs.get("src")
        if not src:
            continue
        images.append(ExtractedImage(
            src=src,
            alt=attrs.get("alt"),
            line=_line_of(newlines, match.start()),
            markup=match.group(0),
        ))
    return images


def count_words(text: str) -> int:
    """Number of whitespace-delimited tokens."""
    return len(text.split())


def build_context(
    content: str,
    content_type: Union[ContentType, str],
    seo_metadata: Optional[SEOMetadata] = None,
) -> AnalyzerContext:
    """Run every extractor once and bundle the results for the analyzers."""
    ctype = _coerce_type(content_type)
    text_content = extract_text(content, ctype)

    ctx = AnalyzerContext(
        content=content,
        content_type=ctype,
        seo_metadata=seo_metadata,
        text_content=text_content,
        word_count=count_words(text_content),
        links=tuple(extract_links(content, ctype)),
        headings=tuple(extract_headings(content, ctype)),
        images=tuple(extract_images(content, ctype)),
    )

    logger.debug(
        f"Context built: {ctx.word_count} words, {len(ctx.links)} links, "
        f"{len(ctx.headings)} headings, {len(ctx.images)} images"
    )
    return ctx
