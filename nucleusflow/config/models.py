"""Typed dataclasses describing processor, output, and site configuration."""

from __future__ import annotations

import copy
import dataclasses as dc
import typing as typ
from pathlib import Path

from nucleusflow._constants import DEFAULT_TEMPLATE, DEFAULT_TOC_MAX_LEVEL


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


def _require_bool(value: object, field: str) -> bool:
    """Return ``value`` if it is a boolean, raising otherwise."""
    if not isinstance(value, bool):
        msg = f"'{field}' must be true or false, got {value!r}."
        raise SiteConfigError(msg)
    return value


@dc.dataclass(slots=True, frozen=True)
class ProcessorConfig:
    """Per-call Markdown processing switches.

    Attributes
    ----------
    sanitize : bool
        Strip denylisted tag delimiters from the converted HTML.
    toc : bool
        Prepend a table of contents built from the document headings.
    toc_max_level : int
        Deepest heading level (1-6) included in the table of contents.
    options : dict[str, Any]
        Extra renderer options (``tables``, ``footnotes``, ``pygments_style``).
    """

    sanitize: bool = True
    toc: bool = False
    toc_max_level: int = DEFAULT_TOC_MAX_LEVEL
    options: dict[str, typ.Any] = dc.field(default_factory=dict)

    def __post_init__(self) -> None:
        """Reject heading levels outside the HTML range."""
        if isinstance(self.toc_max_level, bool) or not isinstance(
            self.toc_max_level, int
        ):
            msg = f"toc_max_level must be an integer, got {self.toc_max_level!r}."
            raise SiteConfigError(msg)
        if not 1 <= self.toc_max_level <= 6:
            msg = f"toc_max_level must be between 1 and 6, got {self.toc_max_level}."
            raise SiteConfigError(msg)

    @classmethod
    def from_mapping(
        cls, payload: typ.Mapping[str, typ.Any] | None
    ) -> ProcessorConfig:
        """Build a config from a loosely typed mapping, applying defaults."""
        if not payload:
            return cls()
        options = payload.get("options") or {}
        if not isinstance(options, dict):
            msg = "processor.options must be a mapping."
            raise SiteConfigError(msg)
        return cls(
            sanitize=_require_bool(
                payload.get("sanitize", True), "processor.sanitize"
            ),
            toc=_require_bool(payload.get("toc", False), "processor.toc"),
            toc_max_level=payload.get("toc_max_level", DEFAULT_TOC_MAX_LEVEL),
            options=dict(options),
        )

    def option(self, key: str, default: typ.Any = None) -> typ.Any:  # noqa: ANN401
        """Return a renderer option, or ``default`` when unset."""
        return self.options.get(key, default)


@dc.dataclass(slots=True)
class OutputConfig:
    """HTML output settings owned by :class:`~nucleusflow.html.HtmlGenerator`."""

    minify: bool = False
    pretty_print: bool = False
    metadata: dict[str, typ.Any] | None = None
    asset_dir: Path | None = None
    options: dict[str, typ.Any] = dc.field(default_factory=dict)

    def snapshot(self) -> OutputConfig:
        """Return a deep copy that later mutations cannot reach."""
        return OutputConfig(
            minify=self.minify,
            pretty_print=self.pretty_print,
            metadata=copy.deepcopy(self.metadata),
            asset_dir=self.asset_dir,
            options=copy.deepcopy(self.options),
        )


@dc.dataclass(slots=True)
class SiteConfig:
    """Directories, template choice, and pipeline settings for a site build."""

    content_dir: Path
    output_dir: Path
    template_dir: Path | None = None
    template: str = DEFAULT_TEMPLATE
    processor: ProcessorConfig = dc.field(default_factory=ProcessorConfig)
    output: OutputConfig = dc.field(default_factory=OutputConfig)
    workers: int = 1
    fail_fast: bool = False


__all__ = ["OutputConfig", "ProcessorConfig", "SiteConfig", "SiteConfigError"]
