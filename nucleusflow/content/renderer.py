"""Render Markdown with Python-Markdown and collect heading events.

:class:`MarkdownRenderer` converts Markdown into HTML with fenced code
(highlighted by Pygments via ``codehilite``), tables, and optional footnotes.
While converting, :class:`HeadingEventExtension` walks the element tree and
records a start/text/end event triple for every ``<h1>``-``<h6>`` element so
the table of contents can be built without parsing the HTML again.
"""

from __future__ import annotations

import dataclasses as dc
import html as html_lib
import re
import typing as typ
from html import escape

from markdown import Markdown
from markdown import util as md_util
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor
from pygments.formatters.html import HtmlFormatter

from .models import HeadingEnd, HeadingStart, HeadingText
from .toc import slugify

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from .models import HeadingEvent

CODE_BLOCK_PATTERN = re.compile(r"```([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)```", re.DOTALL)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
HEADING_TAGS = {f"h{level}": level for level in range(1, 7)}
_ESCAPED_CHAR = re.compile(f"{md_util.STX}([0-9]+){md_util.ETX}")
_PLACEHOLDER = re.compile(f"{md_util.STX}[^{md_util.ETX}]*{md_util.ETX}")


def _plain_heading_text(element: Element) -> str:
    """Return the visible text of a heading, resolving Markdown placeholders."""
    text = "".join(element.itertext())
    text = text.replace(md_util.AMP_SUBSTITUTE, "&")
    text = _ESCAPED_CHAR.sub(lambda match: chr(int(match.group(1))), text)
    text = _PLACEHOLDER.sub("", text)
    return html_lib.unescape(text).strip()


class HeadingEventTreeprocessor(Treeprocessor):
    """Record heading events in document order and anchor each heading."""

    def __init__(self, md: Markdown, events: list[HeadingEvent], *, anchors: bool):
        super().__init__(md)
        self.events = events
        self.anchors = anchors

    def run(self, root: Element) -> Element:
        """Emit events for each heading found in ``root``."""
        for element in root.iter():
            level = HEADING_TAGS.get(element.tag)
            if level is None:
                continue
            text = _plain_heading_text(element)
            self.events.append(HeadingStart(level))
            if text:
                self.events.append(HeadingText(text))
            self.events.append(HeadingEnd())
            if self.anchors and not element.get("id"):
                slug = slugify(text)
                if slug:
                    element.set("id", slug)
        return root


class HeadingEventExtension(Extension):
    """Collect heading start/text/end events during Markdown conversion.

    A fresh extension should be used for every conversion; ``events`` holds
    the stream for the most recent document.
    """

    def __init__(self, *, anchors: bool = True) -> None:
        super().__init__()
        self.anchors = anchors
        self.events: list[HeadingEvent] = []

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the heading treeprocessor on the Markdown instance."""
        self.events.clear()
        processor = HeadingEventTreeprocessor(md, self.events, anchors=self.anchors)
        md.treeprocessors.register(processor, "nucleusflow_heading_events", 5)


@dc.dataclass(slots=True)
class RenderedMarkdown:
    """HTML produced from Markdown plus the heading events seen on the way."""

    html: str
    events: list[HeadingEvent]


class MarkdownRenderer:
    """Render Markdown into HTML using the configured extensions."""

    def __init__(
        self,
        pygments_style: str = "monokai",
        *,
        tables: bool = True,
        footnotes: bool = False,
        anchors: bool = True,
    ) -> None:
        """Initialize a renderer.

        Parameters
        ----------
        pygments_style : str, optional
            Pygments style used by ``codehilite``. Defaults to ``"monokai"``.
        tables : bool, optional
            Enable pipe tables. Defaults to ``True``.
        footnotes : bool, optional
            Enable ``[^label]`` footnotes. Defaults to ``False``.
        anchors : bool, optional
            Add slug ``id`` attributes to headings that lack one.
        """
        self.pygments_style = pygments_style
        self.tables = tables
        self.footnotes = footnotes
        self.anchors = anchors
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def render(self, text: str) -> RenderedMarkdown:
        """Convert ``text`` and return the HTML with its heading events."""
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return RenderedMarkdown(html="", events=[])
        headings = HeadingEventExtension(anchors=self.anchors)
        extensions: list[Extension | str] = ["fenced_code", "codehilite", "sane_lists"]
        if self.tables:
            extensions.append("tables")
        if self.footnotes:
            extensions.append("footnotes")
        extensions.append(headings)
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
            output_format="html",
        )
        html = md.convert(normalized)
        return RenderedMarkdown(
            html=self._annotate_codehilite(html, normalized),
            events=list(headings.events),
        )

    def markdown(self, text: str) -> str:
        """Render ``text`` into HTML, discarding the heading events."""
        return self.render(text).html

    @staticmethod
    def _annotate_codehilite(html: str, source_markdown: str) -> str:
        """Attach language metadata to each highlighted block."""
        languages = [
            match.group(1) or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return (
                f'<div class="codehilite" data-language="{escape(lang, quote=True)}">'
            )

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            return f"{fence}{language or ''}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


__all__ = [
    "CODE_BLOCK_PATTERN",
    "HeadingEventExtension",
    "HeadingEventTreeprocessor",
    "MarkdownRenderer",
    "RenderedMarkdown",
]
