"""Render page templates with Jinja2."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    TemplateError,
    select_autoescape,
)

from .errors import TemplateRenderError

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


class TemplateRenderer:
    """Render named templates from a directory, falling back to the bundled ones."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        """Initialize the Jinja environment.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory searched before the package templates. When ``None``,
            only the bundled templates are available.
        """
        search_path = [str(DEFAULT_TEMPLATES_DIR)]
        if templates_dir is not None:
            search_path.insert(0, str(templates_dir))
        self.templates_dir = templates_dir
        self.env = Environment(
            loader=ChoiceLoader([FileSystemLoader(path) for path in search_path]),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    @staticmethod
    def template_name(name: str) -> str:
        """Return ``name`` with an ``.html`` suffix when it has none."""
        return name if Path(name).suffix else f"{name}.html"

    def render(self, name: str, context: typ.Mapping[str, typ.Any]) -> str:
        """Render template ``name`` with ``context``.

        Raises
        ------
        TemplateRenderError
            If the template is missing or fails while rendering.
        """
        template_name = self.template_name(name)
        try:
            template = self.env.get_template(template_name)
            return template.render(**context)
        except TemplateError as exc:
            msg = f"Template error in '{template_name}': {exc}"
            raise TemplateRenderError(msg) from exc


__all__ = ["DEFAULT_TEMPLATES_DIR", "TemplateRenderer"]
