"""Validate, sanitize, decorate, and format HTML output."""

from .assets import AssetCache
from .formatter import HtmlFormatter
from .generator import HtmlGenerator
from .metadata import MetadataInjector, build_meta_tags
from .sanitizer import sanitize_html
from .validator import StructuralValidator, ValidationResult

__all__ = [
    "AssetCache",
    "HtmlFormatter",
    "HtmlGenerator",
    "MetadataInjector",
    "StructuralValidator",
    "ValidationResult",
    "build_meta_tags",
    "sanitize_html",
]
