"""Markdown to validated, sanitized, formatted HTML.

This package turns a directory of Markdown documents into HTML pages. Each
document passes through frontmatter extraction, rendering, optional table of
contents generation, sanitization, template rendering, structural validation,
formatting, and ``<meta>`` tag injection before being written to disk.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from nucleusflow import main
>>> main()  # doctest: +SKIP
>>> from nucleusflow import app
>>> callable(app)
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
