"""Utility helpers shared by the nucleusflow configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import OutputConfig, SiteConfigError, _require_bool


def _resolve_path(value: object | None, base_dir: Path) -> Path | None:
    """Return ``value`` as a path anchored at ``base_dir`` when relative."""
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    path = Path(text).expanduser()
    if path.is_absolute():
        return path
    return base_dir / path


def _require_mapping(value: object, field: str) -> dict[str, typ.Any]:
    """Return ``value`` as a dict, treating ``None`` as empty."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"'{field}' must be a mapping."
        raise SiteConfigError(msg)
    return dict(value)


def _positive_int(value: object, field: str) -> int:
    """Return ``value`` if it is an integer of at least one."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        msg = f"'{field}' must be a positive integer, got {value!r}."
        raise SiteConfigError(msg)
    return value


def _build_output_config(
    payload: typ.Mapping[str, typ.Any], base_dir: Path
) -> OutputConfig:
    """Build an OutputConfig from the ``output`` mapping."""
    metadata = payload.get("metadata")
    if metadata is not None and not isinstance(metadata, dict):
        msg = "'output.metadata' must be a mapping."
        raise SiteConfigError(msg)
    return OutputConfig(
        minify=_require_bool(payload.get("minify", False), "output.minify"),
        pretty_print=_require_bool(
            payload.get("pretty_print", False), "output.pretty_print"
        ),
        metadata=dict(metadata) if metadata is not None else None,
        asset_dir=_resolve_path(payload.get("asset_dir"), base_dir),
        options=_require_mapping(payload.get("options"), "output.options"),
    )


__all__ = [
    "_build_output_config",
    "_positive_int",
    "_require_bool",
    "_require_mapping",
    "_resolve_path",
]
