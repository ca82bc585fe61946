"""Shared dataclasses used by the Markdown processing pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from types import MappingProxyType


@dc.dataclass(slots=True, frozen=True)
class ContentMetadata:
    """Document metadata gathered from frontmatter and the first heading.

    Attributes
    ----------
    title : str | None
        Frontmatter ``title`` or, failing that, the first ``# `` heading.
    description : str | None
        Frontmatter ``description``.
    date : str | None
        Frontmatter ``date`` rendered as text.
    tags : tuple[str, ...]
        Frontmatter ``tags`` in source order.
    custom : Mapping[str, Any]
        Every other frontmatter key, exposed read-only.
    """

    title: str | None = None
    description: str | None = None
    date: str | None = None
    tags: tuple[str, ...] = ()
    custom: typ.Mapping[str, typ.Any] = dc.field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        """Freeze ``tags`` and ``custom`` so callers cannot mutate them."""
        object.__setattr__(self, "tags", tuple(self.tags))
        if not isinstance(self.custom, MappingProxyType):
            object.__setattr__(self, "custom", MappingProxyType(dict(self.custom)))


@dc.dataclass(slots=True, frozen=True)
class TocEntry:
    """Single heading destined for the table of contents."""

    text: str
    level: int
    id: str


@dc.dataclass(slots=True, frozen=True)
class HeadingStart:
    """Opening of a heading element at ``level`` (1-6)."""

    level: int


@dc.dataclass(slots=True, frozen=True)
class HeadingText:
    """Text content belonging to the heading currently open."""

    text: str


@dc.dataclass(slots=True, frozen=True)
class HeadingEnd:
    """Closing of the heading currently open."""


HeadingEvent = HeadingStart | HeadingText | HeadingEnd


@dc.dataclass(slots=True)
class ProcessedDocument:
    """Output of :class:`~nucleusflow.content.MarkdownProcessor`.

    Attributes
    ----------
    html : str
        Body HTML, with the table of contents prepended when requested.
    metadata : ContentMetadata
        Metadata extracted from the source document.
    toc_html : str | None
        The table of contents on its own, or ``None`` when disabled.
    """

    html: str
    metadata: ContentMetadata
    toc_html: str | None = None


__all__ = [
    "ContentMetadata",
    "HeadingEnd",
    "HeadingEvent",
    "HeadingStart",
    "HeadingText",
    "ProcessedDocument",
    "TocEntry",
]
