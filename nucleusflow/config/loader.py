"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from nucleusflow._constants import DEFAULT_TEMPLATE

from .helpers import (
    _build_output_config,
    _positive_int,
    _require_bool,
    _require_mapping,
    _resolve_path,
)
from .models import ProcessorConfig, SiteConfig, SiteConfigError


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing a site build.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``nucleusflow.yaml``). Relative directories inside the file are
        resolved against the file's parent directory.

    Returns
    -------
    SiteConfig
        Parsed configuration with processor and output settings applied over
        their defaults.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If a field has the wrong type or an out-of-range value.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from nucleusflow.config import load_site_config
    >>> config = load_site_config(Path("nucleusflow.yaml"))  # doctest: +SKIP
    >>> config.output.pretty_print  # doctest: +SKIP
    True
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base_dir = path.resolve().parent

    content_dir = _resolve_path(raw.get("content_dir", "content"), base_dir)
    output_dir = _resolve_path(raw.get("output_dir", "public"), base_dir)
    if content_dir is None or output_dir is None:
        msg = "'content_dir' and 'output_dir' must not be empty."
        raise SiteConfigError(msg)

    template = str(raw.get("template") or DEFAULT_TEMPLATE)
    processor = ProcessorConfig.from_mapping(
        _require_mapping(raw.get("processor"), "processor")
    )
    output = _build_output_config(
        _require_mapping(raw.get("output"), "output"), base_dir
    )

    return SiteConfig(
        content_dir=content_dir,
        output_dir=output_dir,
        template_dir=_resolve_path(raw.get("template_dir"), base_dir),
        template=template,
        processor=processor,
        output=output,
        workers=_positive_int(raw.get("workers", 1), "workers"),
        fail_fast=_require_bool(raw.get("fail_fast", False), "fail_fast"),
    )


__all__ = ["load_site_config"]
