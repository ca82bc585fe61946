"""Behaviour tests for idempotent pretty-printing through the generator."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, scenarios, then, when

from nucleusflow.html import HtmlGenerator

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "pretty_print.feature"
)
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("a nested HTML fragment")
def given_fragment(scenario_state: dict[str, object]) -> None:
    scenario_state["fragment"] = (
        "<section><ul><li><a href='#a'>A</a></li><li>B</li></ul>"
        "<pre>  raw\n text</pre></section>"
    )


@when("I generate it with pretty-printing enabled")
def when_generate(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    generator = HtmlGenerator().with_pretty_print(True)
    first = generator.generate(
        typ.cast("str", scenario_state["fragment"]), tmp_path / "first.html"
    )
    scenario_state["generator"] = generator
    scenario_state["first"] = first.read_text(encoding="utf-8")


@when("I generate the written file again")
def when_generate_again(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    generator = typ.cast("HtmlGenerator", scenario_state["generator"])
    second = generator.generate(
        typ.cast("str", scenario_state["first"]), tmp_path / "second.html"
    )
    scenario_state["second"] = second.read_text(encoding="utf-8")


@then("both outputs are identical")
def then_identical(scenario_state: dict[str, object]) -> None:
    assert scenario_state["first"] == scenario_state["second"]


@then("every nested tag is indented deeper than its parent")
def then_indented(scenario_state: dict[str, object]) -> None:
    lines = typ.cast("str", scenario_state["first"]).splitlines()
    assert lines[0] == "<section>"
    assert lines[1] == "    <ul>"
    assert lines[2] == "        <li>"
    assert lines[3] == "            <a href='#a'>A"
    assert "    <pre>  raw" in lines
