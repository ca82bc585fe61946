"""Cyclopts CLI entrypoint for building and checking nucleusflow sites.

The ``nucleusflow`` console script defined here renders a content directory
of Markdown into validated HTML, checks existing HTML files with the
structural validator, and rewrites the ``<meta>`` tags of generated pages.
Every parameter can also be supplied through a ``NUCLEUSFLOW_*`` environment
variable, which keeps CI invocations short.

Examples
--------
Build the site described by ``nucleusflow.yaml``:

>>> from nucleusflow.cli import main
>>> main()  # doctest: +SKIP

Build into a custom directory with minification:

>>> from nucleusflow.cli import app
>>> app(["build", "--output-dir", "dist", "--minify"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import SiteConfig, SiteConfigError, load_site_config
from .errors import ProcessingError
from .html import HtmlGenerator, StructuralValidator
from .site import SiteBuilder

DEFAULT_CONFIG = Path("nucleusflow.yaml")

app = App(
    name="nucleusflow",
    help="Turn Markdown into validated, formatted HTML.",
    config=cyclopts.config.Env("NUCLEUSFLOW_", command=False),  # type: ignore[unknown-argument]
)


def _configure_logging(*, verbose: bool, debug: bool) -> None:
    """Route log records to stderr at the requested verbosity."""
    level = logging.WARNING
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:
            return str(path)
    return str(path)


def _resolve_site_config(
    config: Path, content_dir: Path | None, output_dir: Path | None
) -> SiteConfig:
    """Load ``config`` when present, falling back to directory arguments."""
    if config.exists():
        site_config = load_site_config(config)
    else:
        site_config = SiteConfig(
            content_dir=content_dir or Path("content"),
            output_dir=output_dir or Path("public"),
        )
    if content_dir is not None:
        site_config.content_dir = content_dir
    if output_dir is not None:
        site_config.output_dir = output_dir
    return site_config


@app.command(help="Build HTML pages from the Markdown content directory.")
def build(
    *,
    config: typ.Annotated[Path, Parameter(help="Path to site config")] = DEFAULT_CONFIG,
    content_dir: typ.Annotated[
        Path | None, Parameter(help="Override the content directory")
    ] = None,
    output_dir: typ.Annotated[
        Path | None, Parameter(help="Override the output directory")
    ] = None,
    template_dir: typ.Annotated[
        Path | None, Parameter(help="Override the template directory")
    ] = None,
    minify: typ.Annotated[bool | None, Parameter(help="Minify output")] = None,
    pretty_print: typ.Annotated[
        bool | None, Parameter(help="Pretty-print output")
    ] = None,
    workers: typ.Annotated[
        int | None, Parameter(help="Documents processed in parallel")
    ] = None,
    fail_fast: typ.Annotated[
        bool | None, Parameter(help="Stop at the first failing document")
    ] = None,
    verbose: bool = False,
    debug: bool = False,
) -> int:
    """Build every page of the site.

    Parameters
    ----------
    config : Path, optional
        Path to the ``nucleusflow.yaml`` configuration file. When the file
        does not exist, defaults apply (``content`` into ``public``).
    content_dir, output_dir, template_dir : Path or None, optional
        Directory overrides applied on top of the configuration file.
    minify, pretty_print : bool or None, optional
        Output formatting overrides.
    workers : int or None, optional
        Thread pool size; ``1`` builds sequentially.
    fail_fast : bool or None, optional
        Abort on the first document error instead of collecting failures.
    verbose, debug : bool, optional
        Log at INFO or DEBUG level.

    Returns
    -------
    int
        ``0`` when every page was written, ``1`` otherwise.
    """
    _configure_logging(verbose=verbose, debug=debug)
    try:
        site_config = _resolve_site_config(config, content_dir, output_dir)
    except (SiteConfigError, TypeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    if template_dir is not None:
        site_config.template_dir = template_dir
    if minify is not None:
        site_config.output.minify = minify
    if pretty_print is not None:
        site_config.output.pretty_print = pretty_print
    if workers is not None:
        site_config.workers = max(workers, 1)
    if fail_fast is not None:
        site_config.fail_fast = fail_fast

    try:
        report = SiteBuilder(site_config).build()
    except (OSError, ProcessingError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    for path in report.written:
        print(f"wrote {_format_path(path)}")
    for source, error in report.failures.items():
        print(f"failed {_format_path(source)}: {error}", file=sys.stderr)
    return 0 if report.ok else 1


@app.command(help="Check HTML files for balanced tag structure.")
def validate(*paths: Path) -> int:
    """Validate each HTML file and report the first problem found in each.

    Returns
    -------
    int
        ``0`` when every file is balanced, ``1`` otherwise, including when a
        file cannot be read.
    """
    validator = StructuralValidator()
    status = 0
    for path in paths:
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            status = 1
            print(f"error: cannot read {_format_path(path)}: {exc}", file=sys.stderr)
            continue
        result = validator.scan(content)
        if result.valid:
            print(f"ok {_format_path(path)}")
        else:
            status = 1
            location = f" (offset {result.offset})" if result.offset is not None else ""
            print(f"invalid {_format_path(path)}{location}: {result.reason}")
    return status


@app.command(name="update-meta", help="Replace the meta tags of a generated page.")
def update_meta(path: Path, *pairs: str) -> int:
    """Rewrite the ``<meta>`` tags of ``path`` from ``NAME=VALUE`` pairs.

    Returns
    -------
    int
        ``0`` on success, ``1`` when the page cannot be read or written,
        ``2`` when a pair is malformed.
    """
    metadata: dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            print(f"error: expected NAME=VALUE, got {pair!r}", file=sys.stderr)
            return 2
        metadata[name] = value
    try:
        HtmlGenerator().update_metadata(path, metadata)
    except ProcessingError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(f"updated {_format_path(path)}")
    return 0


def main() -> None:
    """Invoke the Cyclopts application that powers the ``nucleusflow`` command."""
    sys.exit(app())


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
