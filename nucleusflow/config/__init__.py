"""Load and validate site configuration YAML for nucleusflow builds.

This subpackage parses the project's ``nucleusflow.yaml`` file, applies
defaults to the processor and output sections, resolves directories relative
to the configuration file, and produces typed dataclasses
(:class:`SiteConfig`, :class:`ProcessorConfig`, :class:`OutputConfig`) that
the site builder and HTML generator consume.

Examples
--------
>>> from pathlib import Path
>>> from nucleusflow.config import load_site_config
>>> site = load_site_config(Path("nucleusflow.yaml"))  # doctest: +SKIP
>>> site.processor.toc_max_level  # doctest: +SKIP
3
"""

from .loader import load_site_config
from .models import OutputConfig, ProcessorConfig, SiteConfig, SiteConfigError

__all__ = [
    "OutputConfig",
    "ProcessorConfig",
    "SiteConfig",
    "SiteConfigError",
    "load_site_config",
]
