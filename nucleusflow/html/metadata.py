"""Insert ``<meta>`` tags into the head of an HTML document.

:class:`MetadataInjector` first makes sure the document has a doctype and a
``<head>`` section (synthesizing ``<html>`` too when it is missing), then
writes one ``<meta name=... content=...>`` element per string-valued
metadata key just before ``</head>``.

Example
-------
>>> from nucleusflow.html.metadata import MetadataInjector
>>> MetadataInjector().inject("<body>Hi</body>", {"description": "Demo"})
'<!DOCTYPE html><html><head><meta name="description" content="Demo"></head><body>Hi</body></html>'
"""

from __future__ import annotations

import logging
import re
import typing as typ
from html import escape

from nucleusflow.errors import MetadataInjectionError

LOGGER = logging.getLogger(__name__)

DOCTYPE = "<!DOCTYPE html>"
DOCTYPE_PATTERN = re.compile(r"<!doctype\b[^>]*>", re.IGNORECASE)
HTML_OPEN_PATTERN = re.compile(r"<html(?:\s[^>]*)?>", re.IGNORECASE)
HEAD_OPEN_PATTERN = re.compile(r"<head(?:\s[^>]*)?>", re.IGNORECASE)
HEAD_CLOSE_PATTERN = re.compile(r"</head\s*>", re.IGNORECASE)


def build_meta_tags(metadata: typ.Mapping[str, typ.Any] | None) -> str:
    """Return ``<meta>`` elements for the string values in ``metadata``."""
    if not metadata:
        return ""
    tags: list[str] = []
    for key, value in metadata.items():
        if not isinstance(value, str):
            LOGGER.debug("skipping non-string metadata value for %r", key)
            continue
        name = escape(str(key), quote=True)
        content = escape(value, quote=True)
        tags.append(f'<meta name="{name}" content="{content}">')
    return "".join(tags)


class MetadataInjector:
    """Ensure document structure and insert metadata into ``<head>``."""

    @staticmethod
    def ensure_document_structure(html: str) -> str:
        """Return ``html`` with a doctype and an opening ``<head>`` tag."""
        if DOCTYPE_PATTERN.search(html) is None:
            html = DOCTYPE + html
        if HEAD_OPEN_PATTERN.search(html) is not None:
            return html
        html_open = HTML_OPEN_PATTERN.search(html)
        if html_open is not None:
            pos = html_open.end()
            return f"{html[:pos]}<head>{html[pos:]}"
        doctype = DOCTYPE_PATTERN.search(html)
        pos = doctype.end() if doctype is not None else 0
        return f"{html[:pos]}<html><head>{html[pos:]}</html>"

    @staticmethod
    def insert_meta_tags(html: str, meta_tags: str) -> str:
        """Insert ``meta_tags`` before ``</head>`` or close an open head.

        Raises
        ------
        MetadataInjectionError
            If the document has neither a closing nor an opening head tag.
        """
        head_close = HEAD_CLOSE_PATTERN.search(html)
        if head_close is not None:
            pos = head_close.start()
            return f"{html[:pos]}{meta_tags}{html[pos:]}"
        head_open = HEAD_OPEN_PATTERN.search(html)
        if head_open is None:
            msg = "Failed to locate or create head section"
            raise MetadataInjectionError(msg)
        pos = head_open.end()
        return f"{html[:pos]}{meta_tags}</head>{html[pos:]}"

    def inject(self, html: str, metadata: typ.Mapping[str, typ.Any] | None) -> str:
        """Return ``html`` with document structure ensured and metadata inserted."""
        structured = self.ensure_document_structure(html)
        return self.insert_meta_tags(structured, build_meta_tags(metadata))

    def update(self, html: str, metadata: typ.Mapping[str, typ.Any] | None) -> str:
        """Replace existing ``<meta>`` lines in the head, then inject ``metadata``.

        The removal is line oriented: every line inside the head block whose
        stripped text starts with ``<meta`` is dropped.
        """
        head_open = HEAD_OPEN_PATTERN.search(html)
        head_close = HEAD_CLOSE_PATTERN.search(html)
        if head_open is not None and head_close is not None:
            start, end = head_open.end(), head_close.start()
            if start <= end:
                kept = [
                    line
                    for line in html[start:end].split("\n")
                    if not line.strip().startswith("<meta")
                ]
                html = html[:start] + "\n".join(kept) + html[end:]
        return self.inject(html, metadata)


__all__ = ["DOCTYPE", "MetadataInjector", "build_meta_tags"]
