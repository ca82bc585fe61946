"""Build a nested table-of-contents navigation block from heading events."""

from __future__ import annotations

import typing as typ
from html import escape

from nucleusflow._constants import DEFAULT_TOC_MAX_LEVEL

from .models import HeadingEnd, HeadingStart, HeadingText, TocEntry

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import HeadingEvent

TOC_OPEN = '<nav class="toc" aria-label="Table of Contents">\n<ul>\n'
TOC_CLOSE = "</ul>\n</nav>"


def slugify(text: str) -> str:
    """Return the anchor id for a heading.

    Letters are lower-cased, whitespace, hyphens and underscores become
    ``-``, and every other character outside ``[a-z0-9]`` is dropped.
    Identical headings produce identical slugs.
    """
    chars: list[str] = []
    for char in text.lower():
        if ("a" <= char <= "z") or ("0" <= char <= "9"):
            chars.append(char)
        elif char.isspace() or char in "-_":
            chars.append("-")
    return "".join(chars)


class TocBuilder:
    """Turn heading start/text/end events into a ``<nav>`` list tree."""

    def __init__(self, max_level: int = DEFAULT_TOC_MAX_LEVEL) -> None:
        self.max_level = max_level

    def collect(self, events: cabc.Iterable[HeadingEvent]) -> list[TocEntry]:
        """Return entries for every heading at or above ``max_level``."""
        entries: list[TocEntry] = []
        level: int | None = None
        text: list[str] = []
        for event in events:
            match event:
                case HeadingStart(level=start_level):
                    level = start_level
                    text.clear()
                case HeadingText(text=chunk) if level is not None:
                    text.append(chunk)
                case HeadingEnd() if level is not None:
                    if level <= self.max_level:
                        label = "".join(text).strip()
                        entries.append(TocEntry(label, level, slugify(label)))
                    level = None
        return entries

    def build(self, events: cabc.Iterable[HeadingEvent]) -> str:
        """Render the navigation block for ``events``."""
        return self.render(self.collect(events))

    @staticmethod
    def render(entries: cabc.Sequence[TocEntry]) -> str:
        """Render ``entries`` as nested lists, opening one list per level step."""
        parts = [TOC_OPEN]
        depth = 1
        for entry in entries:
            while entry.level > depth:
                parts.append("<ul>\n")
                depth += 1
            while entry.level < depth:
                parts.append("</ul>\n")
                depth -= 1
            label = escape(entry.text, quote=True)
            parts.append(
                f'<li><a href="#{entry.id}" aria-label="{label}">{label}</a></li>\n'
            )
        while depth > 1:
            parts.append("</ul>\n")
            depth -= 1
        parts.append(TOC_CLOSE)
        return "".join(parts)


__all__ = ["TocBuilder", "slugify"]
