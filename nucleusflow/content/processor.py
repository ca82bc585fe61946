"""Turn Markdown documents into body HTML plus metadata.

:class:`MarkdownProcessor` guards against empty, oversized, or suspicious
input, extracts frontmatter metadata, converts the remaining Markdown,
optionally prepends a table of contents, sanitizes the HTML, and appends the
custom frontmatter keys as a JSON-LD block.
"""

from __future__ import annotations

import json
import logging
import re

from nucleusflow._constants import MAX_CONTENT_SIZE
from nucleusflow.config import ProcessorConfig
from nucleusflow.errors import ContentValidationError
from nucleusflow.html.sanitizer import sanitize_html

from .frontmatter import extract_metadata, split_frontmatter
from .models import ContentMetadata, ProcessedDocument
from .renderer import MarkdownRenderer
from .toc import TocBuilder

LOGGER = logging.getLogger(__name__)

SUSPICIOUS_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("javascript:", re.compile(r"\bjavascript\s*:", re.IGNORECASE)),
    ("vbscript:", re.compile(r"\bvbscript\s*:", re.IGNORECASE)),
    ("data:", re.compile(r"(?<![\w-])data:", re.IGNORECASE)),
    ("onclick", re.compile(r"\bonclick\s*=", re.IGNORECASE)),
    ("onerror", re.compile(r"\bonerror\s*=", re.IGNORECASE)),
    ("onload", re.compile(r"\bonload\s*=", re.IGNORECASE)),
    ("eval(", re.compile(r"\beval\(", re.IGNORECASE)),
)


def validate_content(content: str) -> None:
    """Reject empty, oversized, or suspicious Markdown.

    Raises
    ------
    ContentValidationError
        If ``content`` is blank, larger than the size limit once encoded as
        UTF-8, or contains a script URI scheme, inline event handler, or
        ``eval(`` call.
    """
    if len(content.encode("utf-8")) > MAX_CONTENT_SIZE:
        msg = f"Content exceeds maximum size of {MAX_CONTENT_SIZE} bytes"
        raise ContentValidationError(msg)
    if not content.strip():
        msg = "Content cannot be empty"
        raise ContentValidationError(msg)
    for label, pattern in SUSPICIOUS_PATTERNS:
        if pattern.search(content):
            msg = f"Suspicious content pattern detected: {label}"
            raise ContentValidationError(msg)


def json_ld_block(custom: dict[str, object]) -> str:
    """Return a JSON-LD ``<script>`` element for ``custom`` metadata."""
    payload = json.dumps(custom, sort_keys=True, default=str).replace("<", "\\u003c")
    return f'<script type="application/ld+json">{payload}</script>'


class MarkdownProcessor:
    """Convert Markdown into sanitized body HTML."""

    def __init__(self, config: ProcessorConfig | None = None) -> None:
        self.config = config or ProcessorConfig()

    def _renderer(self, config: ProcessorConfig) -> MarkdownRenderer:
        return MarkdownRenderer(
            config.option("pygments_style", "monokai"),
            tables=bool(config.option("tables", True)),
            footnotes=bool(config.option("footnotes", False)),
            anchors=config.toc,
        )

    def stylesheet(self, config: ProcessorConfig | None = None) -> str:
        """Return the Pygments CSS matching the configured style."""
        return self._renderer(config or self.config).stylesheet

    def extract_metadata(self, content: str) -> ContentMetadata:
        """Return the metadata of ``content`` without converting it."""
        return extract_metadata(content)

    def process(
        self, content: str, config: ProcessorConfig | None = None
    ) -> ProcessedDocument:
        """Validate and convert one Markdown document.

        Parameters
        ----------
        content : str
            Full Markdown source, frontmatter included.
        config : ProcessorConfig, optional
            Per-call settings; defaults to the processor's own config.

        Returns
        -------
        ProcessedDocument
            Body HTML, extracted metadata, and the table of contents when
            enabled.

        Raises
        ------
        ContentValidationError
            If the content fails :func:`validate_content`.
        """
        config = config or self.config
        validate_content(content)
        metadata = extract_metadata(content)
        _block, body = split_frontmatter(content)

        rendered = self._renderer(config).render(body)
        html = rendered.html
        toc_html = None
        if config.toc:
            toc_html = TocBuilder(config.toc_max_level).build(rendered.events)
            html = f"{toc_html}\n{html}"
        if config.sanitize:
            html = sanitize_html(html)
        if metadata.custom:
            html = f"{html}\n{json_ld_block(dict(metadata.custom))}"
        LOGGER.debug(
            "processed markdown: %d heading event(s), %d bytes of html",
            len(rendered.events),
            len(html),
        )
        return ProcessedDocument(html=html, metadata=metadata, toc_html=toc_html)


__all__ = ["MarkdownProcessor", "SUSPICIOUS_PATTERNS", "json_ld_block", "validate_content"]
