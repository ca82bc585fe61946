"""Tests for the tag denylist sanitizer."""

from __future__ import annotations

import pytest

from nucleusflow.html import sanitize_html
from nucleusflow.html.sanitizer import tag_name


@pytest.mark.parametrize(
    ("html", "expected"),
    [
        ("<p>ok</p><script>alert(1)</script>", "<p>ok</p>alert(1)"),
        ('<iframe src="x"></iframe>after', "after"),
        ("<OBJECT data='x'>fallback</OBJECT>", "fallback"),
        ('<embed src="x"/>', ""),
        ("<script\n type='text/javascript'>x</script >", "x"),
    ],
)
def test_denied_tags_are_removed(html: str, expected: str) -> None:
    assert sanitize_html(html) == expected


def test_other_tags_and_attributes_are_untouched() -> None:
    html = '<a href="/x" onclick="go()">link</a><img src="a.png">'
    assert sanitize_html(html) == html


def test_text_outside_tags_is_preserved() -> None:
    assert sanitize_html("a > b and c") == "a > b and c"


def test_interrupted_tag_is_flushed_verbatim() -> None:
    assert sanitize_html("1 < 2 <b>bold</b>") == "1 < 2 <b>bold</b>"


def test_unterminated_trailing_tag_is_kept() -> None:
    assert sanitize_html("<p>text</p><span") == "<p>text</p><span"


def test_custom_denylist() -> None:
    assert sanitize_html("<b>x</b><i>y</i>", frozenset({"b"})) == "x<i>y</i>"


@pytest.mark.parametrize(
    ("body", "expected"),
    [("/script", "script"), ("br/", "br"), ("IMG src=x", "img"), ("", "")],
)
def test_tag_name(body: str, expected: str) -> None:
    assert tag_name(body) == expected
