"""Extraction sub-package: strategy cascade, sanitising, URL rewriting, formatting."""

from .formatter import format_error_fragment, format_fragment, format_no_content_fragment
from .sanitize import sanitize
from .strategies import extract_best
from .urlnorm import absolutize

__all__ = [
    "absolutize",
    "extract_best",
    "format_error_fragment",
    "format_fragment",
    "format_no_content_fragment",
    "sanitize",
]
