"""Parse Markdown documents into metadata, heading events, and body HTML."""

from .frontmatter import extract_metadata, split_frontmatter
from .models import (
    ContentMetadata,
    HeadingEnd,
    HeadingEvent,
    HeadingStart,
    HeadingText,
    ProcessedDocument,
    TocEntry,
)
from .processor import MarkdownProcessor, validate_content
from .renderer import HeadingEventExtension, MarkdownRenderer
from .toc import TocBuilder, slugify

__all__ = [
    "ContentMetadata",
    "HeadingEnd",
    "HeadingEvent",
    "HeadingEventExtension",
    "HeadingStart",
    "HeadingText",
    "MarkdownProcessor",
    "MarkdownRenderer",
    "ProcessedDocument",
    "TocBuilder",
    "TocEntry",
    "extract_metadata",
    "slugify",
    "split_frontmatter",
    "validate_content",
]
