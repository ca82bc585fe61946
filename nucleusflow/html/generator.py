"""Validate, decorate, format, and write HTML documents.

:class:`HtmlGenerator` owns an :class:`~nucleusflow.config.OutputConfig` and an
:class:`AssetCache`, each behind its own reader/writer lock, so one instance
can serve many worker threads. Every :meth:`HtmlGenerator.generate` call works
from a snapshot of the configuration taken when it starts:

1. the incoming HTML must pass the structural validator;
2. configured metadata is injected into ``<head>``;
3. the document is minified, pretty-printed, or left alone;
4. the result is validated again before it is written;
5. static assets are copied next to the written file.

Example
-------
>>> from pathlib import Path
>>> from nucleusflow.html import HtmlGenerator
>>> generator = HtmlGenerator().with_pretty_print(True)
>>> generator.generate("<h1>Hi</h1>", Path("public/index.html"))  # doctest: +SKIP
PosixPath('public/index.html')
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ
from pathlib import Path

from nucleusflow._constants import DEFAULT_INDENT_SIZE
from nucleusflow._locking import ReadWriteLock
from nucleusflow.config import OutputConfig
from nucleusflow.errors import AssetIOError, OutputConfigError, OutputIOError

from .assets import AssetCache
from .formatter import HtmlFormatter
from .metadata import MetadataInjector
from .validator import StructuralValidator

LOGGER = logging.getLogger(__name__)


def _check_options(options: object, path: Path | None = None) -> dict[str, typ.Any]:
    """Return per-call options as a dict, rejecting badly typed values."""
    if options is None:
        return {}
    if not isinstance(options, cabc.Mapping):
        target = f" for '{path}'" if path is not None else ""
        msg = f"Invalid options format{target} - expected a mapping"
        raise OutputConfigError(msg)
    checked = dict(options)
    for key, value in checked.items():
        match key:
            case "minify" | "pretty_print" if not isinstance(value, bool):
                msg = f"{key} option must be a boolean"
                raise OutputConfigError(msg)
            case "indent_size" if (
                isinstance(value, bool) or not isinstance(value, int) or value < 0
            ):
                msg = "indent_size option must be a non-negative integer"
                raise OutputConfigError(msg)
            case "metadata" if not isinstance(value, cabc.Mapping):
                msg = "metadata option must be a mapping"
                raise OutputConfigError(msg)
            case "minify" | "pretty_print" | "indent_size" | "metadata":
                pass
            case _:
                LOGGER.warning("Unknown option key: %s", key)
    return checked


class HtmlGenerator:
    """Thread-safe HTML output generator with metadata and asset handling."""

    def __init__(
        self,
        config: OutputConfig | None = None,
        *,
        asset_cache: AssetCache | None = None,
        validator: StructuralValidator | None = None,
        injector: MetadataInjector | None = None,
    ) -> None:
        self._config = config.snapshot() if config is not None else OutputConfig()
        self._config_lock = ReadWriteLock()
        self.asset_cache = asset_cache if asset_cache is not None else AssetCache()
        self.validator = validator or StructuralValidator()
        self.injector = injector or MetadataInjector()

    @property
    def config(self) -> OutputConfig:
        """Return a snapshot of the current output configuration."""
        with self._config_lock.read():
            return self._config.snapshot()

    def with_minification(self, enable: bool) -> HtmlGenerator:  # noqa: FBT001
        """Enable or disable minification and return ``self``."""
        with self._config_lock.write():
            self._config.minify = enable
        return self

    def with_pretty_print(self, enable: bool) -> HtmlGenerator:  # noqa: FBT001
        """Enable or disable pretty-printing and return ``self``."""
        with self._config_lock.write():
            self._config.pretty_print = enable
        return self

    def with_metadata(self, metadata: typ.Mapping[str, typ.Any]) -> HtmlGenerator:
        """Set the metadata injected into every document and return ``self``."""
        with self._config_lock.write():
            self._config.metadata = dict(metadata)
        return self

    def with_asset_dir(self, path: Path) -> HtmlGenerator:
        """Use ``path`` as the static asset directory and return ``self``.

        Raises
        ------
        AssetIOError
            If ``path`` is not an existing, readable directory.
        """
        path = Path(path)
        if not path.is_dir():
            msg = "Invalid or non-existent asset directory"
            raise AssetIOError(msg, path)
        try:
            next(path.iterdir(), None)
        except OSError as exc:
            msg = "Cannot read asset directory"
            raise AssetIOError(msg, path) from exc
        with self._config_lock.write():
            self._config.asset_dir = path
        return self

    def with_option(self, key: str, value: typ.Any) -> HtmlGenerator:  # noqa: ANN401
        """Store a custom configuration option and return ``self``."""
        with self._config_lock.write():
            self._config.options[key] = value
        return self

    def validate_target(self, path: Path, options: object = None) -> dict[str, typ.Any]:
        """Check the output path and per-call options before generating.

        Returns
        -------
        dict[str, Any]
            The per-call options as a plain dict.

        Raises
        ------
        OutputConfigError
            If ``path`` lacks an ``.html`` extension or an option is invalid.
        """
        if Path(path).suffix != ".html":
            msg = f"Invalid file extension - expected .html: {path}"
            raise OutputConfigError(msg)
        return _check_options(options, Path(path))

    def validate_content(self, content: str) -> None:
        """Raise :class:`StructuralValidationError` if ``content`` is unbalanced."""
        self.validator.validate(content, stage="input")

    def process_html(
        self, content: str, options: typ.Mapping[str, typ.Any] | None = None
    ) -> str:
        """Run the validate, inject, format, re-validate sequence on ``content``.

        Parameters
        ----------
        content : str
            HTML document or fragment.
        options : Mapping[str, Any], optional
            Per-call overrides: ``minify``, ``pretty_print``, ``indent_size``
            and ``metadata`` (merged over the configured metadata).

        Returns
        -------
        str
            The transformed document.

        Raises
        ------
        OutputConfigError
            If an override has the wrong type.
        StructuralValidationError
            If the input or the transformed output is unbalanced.
        MetadataInjectionError
            If metadata is configured but no head section can be produced.
        """
        return self._transform(content, _check_options(options))

    def _transform(self, content: str, overrides: dict[str, typ.Any]) -> str:
        config = self.config
        self.validator.validate(content, stage="input")

        metadata = dict(config.metadata or {})
        metadata.update(overrides.get("metadata") or {})
        processed = content
        if config.metadata is not None or metadata:
            processed = self.injector.inject(processed, metadata)

        indent_size = overrides.get(
            "indent_size", config.options.get("indent_size", DEFAULT_INDENT_SIZE)
        )
        formatter = HtmlFormatter(indent_size=indent_size)
        processed = formatter.format(
            processed,
            minify=overrides.get("minify", config.minify),
            pretty_print=overrides.get("pretty_print", config.pretty_print),
        )

        self.validator.validate(processed, stage="output")
        return processed

    def generate(
        self, content: str, path: Path, options: typ.Mapping[str, typ.Any] | None = None
    ) -> Path:
        """Process ``content`` and write it to ``path`` as UTF-8.

        Static assets from the configured asset directory are copied into the
        directory that receives ``path``.

        Returns
        -------
        Path
            The written file.

        Raises
        ------
        OutputIOError
            If the file or its parent directory cannot be written.
        """
        path = Path(path)
        checked = self.validate_target(path, options)
        processed = self._transform(content, checked)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(processed, encoding="utf-8")
        except OSError as exc:
            msg = "Cannot write output"
            raise OutputIOError(msg, path) from exc
        LOGGER.debug("wrote %s (%d bytes)", path, len(processed))
        asset_dir = self.config.asset_dir
        if asset_dir is not None:
            self.asset_cache.copy_assets(asset_dir, path.parent)
        return path

    def update_metadata(self, path: Path, metadata: typ.Mapping[str, typ.Any]) -> None:
        """Rewrite the ``<meta>`` tags of an existing file in place.

        Raises
        ------
        OutputIOError
            If the file cannot be read as UTF-8 or written back.
        """
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = "Cannot read page"
            raise OutputIOError(msg, path) from exc
        updated = self.injector.update(content, metadata)
        try:
            path.write_text(updated, encoding="utf-8")
        except OSError as exc:
            msg = "Cannot write page"
            raise OutputIOError(msg, path) from exc

    @staticmethod
    def stats(content: str) -> dict[str, int]:
        """Return tag count, UTF-8 size, and line count for ``content``."""
        tag_count = 0
        inside_tag = False
        for char in content:
            if char == "<" and not inside_tag:
                inside_tag = True
                tag_count += 1
            elif char == ">" and inside_tag:
                inside_tag = False
        return {
            "tag_count": tag_count,
            "size_bytes": len(content.encode("utf-8")),
            "line_count": len(content.splitlines()),
        }

    def clear_cache(self) -> None:
        """Empty the asset cache."""
        self.asset_cache.clear()

    def cached_assets(self) -> list[Path]:
        """Return the source paths held in the asset cache."""
        return self.asset_cache.cached_paths()

    def is_asset_cached(self, path: Path) -> bool:
        """Return ``True`` when ``path`` is in the asset cache."""
        return self.asset_cache.is_cached(path)

    def __repr__(self) -> str:
        return (
            f"HtmlGenerator(config={self.config!r}, "
            f"asset_cache_size={len(self.asset_cache)})"
        )


__all__ = ["HtmlGenerator"]
