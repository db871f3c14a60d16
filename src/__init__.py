"""
Defang Blog SEO Analyzer

An SEO analysis engine for Defang blog drafts that:
1. Extracts links, headings, images and text from HTML or Markdown
2. Scores content, URLs, technical SEO and Defang guidelines
3. Reports keyword density and actionable issues
4. Validates links live with HEAD requests
"""

__version__ = "0.1.0"
