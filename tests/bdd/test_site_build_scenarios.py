"""Behaviour tests for building a site from Markdown.

The scenarios in ``site_build.feature`` drive :class:`nucleusflow.site.SiteBuilder`
over a temporary content directory and inspect the written HTML with
BeautifulSoup, covering metadata injection, table-of-contents generation, and
sanitization of raw HTML embedded in Markdown.

Usage
-----
Run ``pytest tests/bdd/test_site_build_scenarios.py -v`` after installing the test
extra (``pip install -e .[test]``). No network access is needed.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, scenarios, then, when

from nucleusflow.config import load_site_config
from nucleusflow.site import SiteBuilder

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "site_build.feature"
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("a site config with the table of contents enabled")
def given_config(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    """Write a config file pointing at a fresh content directory."""
    content_dir = tmp_path / "content"
    content_dir.mkdir()
    config_path = tmp_path / "nucleusflow.yaml"
    config_path.write_text(
        """
content_dir: content
output_dir: public
processor:
  toc: true
output:
  pretty_print: true
        """.strip()
        + "\n",
        encoding="utf-8",
    )
    scenario_state["config_path"] = config_path
    scenario_state["content_dir"] = content_dir


@given("a markdown document with frontmatter and two sections")
def given_sections_document(scenario_state: dict[str, object]) -> None:
    """Add a document with a description and two second-level headings."""
    content_dir = typ.cast("Path", scenario_state["content_dir"])
    (content_dir / "intro.md").write_text(
        "---\n"
        "title: Introduction\n"
        "description: Start here\n"
        "---\n"
        "## First steps\n\nRead this.\n\n"
        "## Next steps\n\nThen this.\n",
        encoding="utf-8",
    )


@given("a markdown document containing an inline script tag")
def given_script_document(scenario_state: dict[str, object]) -> None:
    """Add a document embedding a raw script element."""
    content_dir = typ.cast("Path", scenario_state["content_dir"])
    (content_dir / "intro.md").write_text(
        "# Intro\n\nSafe text.\n\n<script>alert(1)</script>\n",
        encoding="utf-8",
    )


@when("I build the site")
def when_build(scenario_state: dict[str, object]) -> None:
    """Build every page and keep the parsed output of ``intro.html``."""
    config = load_site_config(typ.cast("Path", scenario_state["config_path"]))
    report = SiteBuilder(config).build()
    assert report.ok, report.failures
    html = (config.output_dir / "intro.html").read_text(encoding="utf-8")
    scenario_state["soup"] = BeautifulSoup(html, "html.parser")


@then("the page lists both sections in its table of contents")
def then_toc_lists_sections(scenario_state: dict[str, object]) -> None:
    """Verify the nav links target the heading anchors."""
    soup = typ.cast("BeautifulSoup", scenario_state["soup"])
    links = soup.select("nav.toc a")
    assert [link["href"] for link in links] == ["#first-steps", "#next-steps"]
    assert soup.find("h2", id="first-steps") is not None


@then("the page head carries the frontmatter description")
def then_head_has_description(scenario_state: dict[str, object]) -> None:
    """Verify the description meta tag sits inside ``<head>``."""
    soup = typ.cast("BeautifulSoup", scenario_state["soup"])
    head = soup.find("head")
    assert head is not None
    meta = head.find("meta", attrs={"name": "description"})
    assert meta is not None
    assert meta["content"] == "Start here"


@then("the page has no script element in its body")
def then_no_script(scenario_state: dict[str, object]) -> None:
    """Verify the script tags were stripped while the text survived."""
    soup = typ.cast("BeautifulSoup", scenario_state["soup"])
    body = soup.find("body")
    assert body is not None
    assert body.find("script") is None
    assert "Safe text." in body.get_text()
