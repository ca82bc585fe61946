"""Tests for Jinja2 page template rendering."""

from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from nucleusflow.content import ContentMetadata
from nucleusflow.errors import TemplateRenderError
from nucleusflow.template import TemplateRenderer


def test_bundled_page_template_renders() -> None:
    html = TemplateRenderer().render(
        "page",
        {
            "title": "A & B",
            "content": "<p>Body</p>",
            "metadata": ContentMetadata(date="2024-01-01", tags=("x", "y")),
            "pygments_css": ".codehilite {}",
        },
    )
    soup = BeautifulSoup(html, "html.parser")
    assert soup.title is not None
    assert soup.title.string == "A & B"
    assert "A &amp; B" in html
    assert soup.select_one("article p").get_text() == "2024-01-01"
    assert [li.get_text() for li in soup.select("ul.tags li")] == ["x", "y"]
    assert soup.select_one("article > p:nth-of-type(2)").get_text() == "Body"


def test_custom_directory_takes_precedence(tmp_path: Path) -> None:
    (tmp_path / "page.html").write_text("<main>{{ content | safe }}</main>", "utf-8")
    html = TemplateRenderer(tmp_path).render("page", {"content": "<p>x</p>"})
    assert html == "<main><p>x</p></main>"


def test_template_name_keeps_explicit_suffix() -> None:
    assert TemplateRenderer.template_name("page") == "page.html"
    assert TemplateRenderer.template_name("feed.xml") == "feed.xml"


def test_missing_template_raises() -> None:
    with pytest.raises(TemplateRenderError, match="missing.html"):
        TemplateRenderer().render("missing", {})
