"""
SEO Analyzer Exceptions

Two failure kinds cross the engine boundary:
- InvalidRequestError: the caller sent something the engine cannot analyze
- AnalysisFailedError: a defect inside an extractor or analyzer

Failed checks are never exceptions; they are part of the report.
"""

from typing import Optional


class SEOAnalyzerError(Exception):
    """Base exception for the SEO analyzer."""


class InvalidRequestError(SEOAnalyzerError):
    """Raised when an analysis or validation request is malformed."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class AnalysisFailedError(SEOAnalyzerError):
    """Raised when the scoring pipeline hits an unexpected internal fault."""
