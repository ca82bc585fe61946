"""Single-pass tag-balance checker for HTML5 documents.

:class:`StructuralValidator` scans the text once, character by character,
switching between text, tag and comment modes while maintaining a stack of
open element names. It knows just enough HTML5 to avoid false alarms:

* void elements (``<br>``, ``<img>``, ...) and self-closing tags never touch
  the stack;
* elements whose closing tag is optional (``<li>``, ``<tr>``, ``<td>``, ...)
  may be closed implicitly, either by a closing tag further out or by the end
  of the document;
* comments, doctypes and processing instructions are skipped;
* stray closing tags on an empty stack are ignored.

A closing tag that meets a non-optional element with a different name is a
hard failure, as is ending the document inside a tag or comment or with a
non-optional element still open.

Example
-------
>>> from nucleusflow.html.validator import StructuralValidator
>>> validator = StructuralValidator()
>>> validator.is_valid("<table><tr><td>a<tr><td>b</table>")
True
>>> validator.is_valid("<div>Test</p>")
False
"""

from __future__ import annotations

import dataclasses as dc
import enum
import logging

from nucleusflow._constants import OPTIONAL_TAGS, VOID_ELEMENTS
from nucleusflow.errors import StructuralValidationError

LOGGER = logging.getLogger(__name__)

COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"


class _Mode(enum.Enum):
    TEXT = enum.auto()
    TAG = enum.auto()
    COMMENT = enum.auto()


@dc.dataclass(slots=True, frozen=True)
class ValidationResult:
    """Outcome of a structural scan.

    Attributes
    ----------
    valid : bool
        ``True`` when the document is balanced.
    reason : str | None
        Description of the first problem found, ``None`` for valid input.
    offset : int | None
        Character offset of the problem, when it can be pinned to one.
    open_elements : tuple[str, ...]
        Element names still open when the scan stopped, outermost first.
    """

    valid: bool
    reason: str | None = None
    offset: int | None = None
    open_elements: tuple[str, ...] = ()

    def __bool__(self) -> bool:
        """Return whether the scanned document is balanced."""
        return self.valid


def _element_name(tag: str, *, closing: bool) -> str:
    """Return the lower-cased element name of a complete ``<...>`` tag."""
    inner = tag[2:] if closing else tag[1:]
    parts = inner.split(maxsplit=1)
    if not parts:
        return ""
    name = parts[0].rstrip(">")
    if not closing:
        name = name.rstrip("/")
    return name.lower()


class StructuralValidator:
    """Check that HTML tags are balanced, honouring HTML5 omission rules."""

    def __init__(
        self,
        void_elements: frozenset[str] = VOID_ELEMENTS,
        optional_tags: frozenset[str] = OPTIONAL_TAGS,
    ) -> None:
        self.void_elements = void_elements
        self.optional_tags = optional_tags

    def scan(self, content: str) -> ValidationResult:
        """Scan ``content`` and report whether its tag structure is balanced.

        Parameters
        ----------
        content : str
            HTML text to check.

        Returns
        -------
        ValidationResult
            The verdict, with the reason and offset of the first failure.
        """
        stack: list[str] = []
        mode = _Mode.TEXT
        tag_start = 0
        idx = 0
        length = len(content)
        while idx < length:
            char = content[idx]
            if char == "<" and mode is _Mode.TEXT:
                if content.startswith(COMMENT_OPEN, idx):
                    mode = _Mode.COMMENT
                    idx += len(COMMENT_OPEN)
                    continue
                mode = _Mode.TAG
                tag_start = idx
            elif char == ">" and mode is _Mode.COMMENT:
                if idx >= 2 and content[idx - 2 : idx + 1] == COMMENT_CLOSE:
                    mode = _Mode.TEXT
            elif char == ">" and mode is _Mode.TAG:
                mode = _Mode.TEXT
                failure = self._apply_tag(stack, content[tag_start : idx + 1])
                if failure is not None:
                    return ValidationResult(
                        False, failure, tag_start, tuple(stack)
                    )
            idx += 1

        if mode is _Mode.TAG:
            return ValidationResult(
                False, "document ends inside a tag", tag_start, tuple(stack)
            )
        if mode is _Mode.COMMENT:
            return ValidationResult(
                False, "document ends inside a comment", None, tuple(stack)
            )
        unclosed = [name for name in stack if name not in self.optional_tags]
        if unclosed:
            return ValidationResult(
                False,
                f"unclosed element(s): {', '.join(unclosed)}",
                None,
                tuple(stack),
            )
        return ValidationResult(True, open_elements=tuple(stack))

    def _apply_tag(self, stack: list[str], tag: str) -> str | None:
        """Update ``stack`` for one complete tag; return a failure reason."""
        if tag.startswith(("<!", "<?")):
            return None
        closing = tag.startswith("</")
        name = _element_name(tag, closing=closing)
        if not name:
            return None
        if not closing:
            if not tag.endswith("/>") and name not in self.void_elements:
                stack.append(name)
            return None
        if name in self.void_elements or not stack:
            return None
        if stack[-1] == name:
            stack.pop()
            return None
        if stack[-1] not in self.optional_tags:
            return f"</{name}> does not close <{stack[-1]}>"
        while stack:
            top = stack[-1]
            if top == name:
                stack.pop()
                return None
            if top not in self.optional_tags:
                return f"</{name}> does not close <{top}>"
            stack.pop()
        return None

    def is_valid(self, content: str) -> bool:
        """Return ``True`` when ``content`` is structurally balanced."""
        return self.scan(content).valid

    def validate(self, content: str, *, stage: str = "input") -> None:
        """Raise :class:`StructuralValidationError` when ``content`` is unbalanced."""
        result = self.scan(content)
        if not result.valid:
            LOGGER.debug("structural check failed (%s): %s", stage, result.reason)
            raise StructuralValidationError(
                stage, result.reason or "unbalanced tags", result.offset
            )


__all__ = ["StructuralValidator", "ValidationResult"]
