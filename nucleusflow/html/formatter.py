"""Minify or pretty-print HTML documents.

:class:`HtmlFormatter` dispatches between ``minify-html`` and a small
indenting formatter. The pretty-printer puts each tag on its own line,
indents children one unit deeper than their parent, keeps text inline after
the preceding tag, and copies ``<pre>`` blocks verbatim. Running it on its
own output returns the same text.
"""

from __future__ import annotations

import enum
import re
import typing as typ

import minify_html

from nucleusflow._constants import DEFAULT_INDENT_SIZE, VOID_ELEMENTS

from .sanitizer import tag_name

if typ.TYPE_CHECKING:
    import collections.abc as cabc

PRE_CLOSE_PATTERN = re.compile(r"</pre\s*>", re.IGNORECASE)


class TokenKind(enum.Enum):
    """Lexical classes recognised by the pretty-printer."""

    TEXT = enum.auto()
    OPEN = enum.auto()
    CLOSE = enum.auto()
    COMMENT = enum.auto()
    DECLARATION = enum.auto()
    PRE = enum.auto()


def tokenize(content: str) -> cabc.Iterator[tuple[TokenKind, str]]:
    """Yield ``(kind, text)`` tokens covering ``content`` without gaps."""
    idx = 0
    length = len(content)
    while idx < length:
        start = content.find("<", idx)
        if start == -1:
            yield TokenKind.TEXT, content[idx:]
            return
        if start > idx:
            yield TokenKind.TEXT, content[idx:start]
        if content.startswith("<!--", start):
            end = content.find("-->", start + 2)
            stop = length if end == -1 else end + 3
            yield TokenKind.COMMENT, content[start:stop]
            idx = stop
            continue
        end = content.find(">", start + 1)
        if end == -1:
            yield TokenKind.TEXT, content[start:]
            return
        stop = end + 1
        tag = content[start:stop]
        if tag.startswith(("<!", "<?")):
            yield TokenKind.DECLARATION, tag
        elif tag.startswith("</"):
            yield TokenKind.CLOSE, tag
        elif tag_name(tag[1:-1]) == "pre" and not tag.endswith("/>"):
            match = PRE_CLOSE_PATTERN.search(content, stop)
            stop = match.end() if match else length
            yield TokenKind.PRE, content[start:stop]
        else:
            yield TokenKind.OPEN, tag
        idx = stop


def _clean_lines(text: str) -> str:
    """Right-strip each line of ``text`` and drop the blank ones."""
    return "\n".join(line.rstrip() for line in text.splitlines() if line.strip())


class HtmlFormatter:
    """Apply the output formatting selected by the generator configuration."""

    def __init__(self, indent_size: int = DEFAULT_INDENT_SIZE) -> None:
        self.indent_size = indent_size

    def format(self, content: str, *, minify: bool, pretty_print: bool) -> str:
        """Minify when requested, else pretty-print when requested, else pass through."""
        if minify:
            return self.minify(content)
        if pretty_print:
            return self.pretty_print(content)
        return content

    @staticmethod
    def minify(content: str) -> str:
        """Minify ``content`` with CSS and JS minification enabled.

        Closing tags and the ``<html>``/``<head>`` opening tags are kept so
        the result passes the structural validator again.
        """
        return minify_html.minify(
            content,
            minify_css=True,
            minify_js=True,
            keep_closing_tags=True,
            keep_html_and_head_opening_tags=True,
        )

    def pretty_print(self, content: str) -> str:
        """Return ``content`` re-indented one tag per line."""
        unit = " " * self.indent_size
        lines: list[str] = []
        depth = 0
        for kind, text in tokenize(content):
            match kind:
                case TokenKind.TEXT:
                    stripped = _clean_lines(text.strip())
                    if not stripped:
                        continue
                    if lines:
                        lines[-1] += stripped
                    else:
                        lines.append(stripped)
                case TokenKind.CLOSE:
                    depth = max(depth - 1, 0)
                    lines.append(unit * depth + _clean_lines(text))
                case TokenKind.OPEN:
                    lines.append(unit * depth + _clean_lines(text))
                    name = tag_name(text[1:-1])
                    if not text.endswith("/>") and name not in VOID_ELEMENTS:
                        depth += 1
                case TokenKind.PRE:
                    lines.append(unit * depth + text)
                case _:
                    lines.append(unit * depth + _clean_lines(text))
        return "\n".join(line.rstrip() for line in lines if line.strip())


__all__ = ["HtmlFormatter", "TokenKind", "tokenize"]
