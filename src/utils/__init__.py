"""Utility modules for the Defang SEO Analyzer."""

from .config import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
