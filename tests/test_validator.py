"""Unit tests for the single-pass structural validator."""

from __future__ import annotations

import pytest

from nucleusflow.errors import StructuralValidationError
from nucleusflow.html import StructuralValidator


@pytest.fixture
def validator() -> StructuralValidator:
    return StructuralValidator()


@pytest.mark.parametrize(
    "html",
    [
        "<div><p>Hello</p></div>",
        "<p>Line<br>break<img src='a.png'></p>",
        "<div><span/></div>",
        "<ul><li>one<li>two</ul>",
        "<table><tr><td>a<tr><td>b</table>",
        "<!DOCTYPE html><html><head></head><body></body></html>",
        "<div><!-- <p> not a tag --></div>",
        "<?xml version='1.0'?><p>x</p>",
        "</p><div>stray close ignored</div>",
        "<html><body><p>optional html and body left open</p>",
        "",
        "plain text",
    ],
)
def test_balanced_documents_pass(validator: StructuralValidator, html: str) -> None:
    assert validator.is_valid(html)


@pytest.mark.parametrize(
    "html",
    [
        "<div>Test</p>",
        "<div><span>open</div>",
        "<div>never closed",
        "<p>ends inside <a href='x'",
        "<div><!-- unterminated comment</div>",
    ],
)
def test_unbalanced_documents_fail(validator: StructuralValidator, html: str) -> None:
    assert not validator.is_valid(html)


def test_mismatch_reports_offset_and_stack(validator: StructuralValidator) -> None:
    result = validator.scan("<div><span>x</div>")
    assert not result
    assert result.offset == len("<div><span>x")
    assert result.open_elements == ("div", "span")
    assert "</div>" in (result.reason or "")


def test_unclosed_elements_are_named(validator: StructuralValidator) -> None:
    result = validator.scan("<section><li>item")
    assert not result.valid
    assert result.reason == "unclosed element(s): section"


def test_tag_names_are_case_insensitive(validator: StructuralValidator) -> None:
    assert validator.is_valid("<DIV><P>x</p></Div>")


def test_validate_raises_with_stage(validator: StructuralValidator) -> None:
    with pytest.raises(StructuralValidationError) as excinfo:
        validator.validate("<div>Test</p>", stage="output")
    assert excinfo.value.stage == "output"
    assert excinfo.value.offset == len("<div>Test")
    assert str(excinfo.value).startswith("HTML structure invalid (output)")


def test_custom_element_sets(validator: StructuralValidator) -> None:
    strict = StructuralValidator(optional_tags=frozenset())
    assert validator.is_valid("<ul><li>a</ul>")
    assert not strict.is_valid("<ul><li>a</ul>")
