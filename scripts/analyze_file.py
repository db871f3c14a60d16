#!/usr/bin/env python3
"""
Analyze a Blog Draft

Run the SEO analysis on a local HTML or Markdown file.

Usage:
    python scripts/analyze_file.py post.md
    python scripts/analyze_file.py post.html --metadata seo.json --validate-urls -o report.json
"""

import asyncio
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from src.seo_analyzer import (
    ContentType,
    SEOAnalysisResult,
    SEOAnalyzeRequest,
    SEOAnalyzerError,
    SEOMetadata,
    analyze_seo,
    validate_urls,
    with_url_validation,
)

EXTENSION_TYPES = {
    ".md": ContentType.MARKDOWN,
    ".markdown": ContentType.MARKDOWN,
    ".mdx": ContentType.MARKDOWN,
    ".html": ContentType.HTML,
    ".htm": ContentType.HTML,
}


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(),
        ]
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def infer_content_type(path: Path, explicit: Optional[str] = None) -> ContentType:
    """Content type from --type, else from the file extension (default markdown)."""
    if explicit:
        return ContentType(explicit)
    return EXTENSION_TYPES.get(path.suffix.lower(), ContentType.MARKDOWN)


def load_metadata(path: Optional[str]) -> Optional[SEOMetadata]:
    """Read SEO metadata from a JSON file."""
    if not path:
        return None
    with open(path, encoding="utf-8") as f:
        return SEOMetadata.from_dict(json.load(f))


async def run_analysis(
    path: Path,
    content_type: ContentType,
    metadata: Optional[SEOMetadata],
    live_urls: bool,
) -> SEOAnalysisResult:
    """Analyze the file and optionally validate its links."""
    content = path.read_text(encoding="utf-8")
    result = analyze_seo(SEOAnalyzeRequest(
        content=content,
        content_type=content_type,
        seo_metadata=metadata,
        validate_urls=live_urls,
    ))

    if live_urls and result.url_validation:
        validated = await validate_urls([u.url for u in result.url_validation])
        result = with_url_validation(result, validated)

    return result


def print_summary(result: SEOAnalysisResult):
    """One-line score summary followed by per-category scores."""
    print(f"\nSEO score: {result.overall_score}/100 ({result.score_label}), {len(result.issues)} issues")
    for key, category in result.categories.items():
        print(f"  {key:10s} {category.score:3d}/{category.max_score:<3d} {category.name}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Run the Defang blog SEO analysis on a file"
    )
    parser.add_argument(
        "path",
        help="HTML or Markdown file to analyze"
    )
    parser.add_argument(
        "--type",
        choices=[t.value for t in ContentType],
        help="Content type (default: inferred from extension)"
    )
    parser.add_argument(
        "--metadata",
        help="JSON file with SEO metadata (title, description, ogTitle, ...)"
    )
    parser.add_argument(
        "--validate-urls",
        action="store_true",
        help="Check every link with a live HEAD request"
    )
    parser.add_argument(
        "--output", "-o",
        help="Save the JSON report to a file"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging"
    )

    args = parser.parse_args()

    load_dotenv()
    setup_logging(args.verbose)

    path = Path(args.path)
    if not path.is_file():
        print(f"ERROR: File not found: {path}")
        sys.exit(1)

    try:
        result = asyncio.run(run_analysis(
            path=path,
            content_type=infer_content_type(path, args.type),
            metadata=load_metadata(args.metadata),
            live_urls=args.validate_urls,
        ))
    except SEOAnalyzerError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    report = json.dumps(result.to_dict(), indent=2)
    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(report, encoding="utf-8")
        print(f"Report saved to: {output_path}")
    else:
        print(report)

    print_summary(result)


if __name__ == "__main__":
    main()
