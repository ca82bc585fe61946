"""Tests for head synthesis and meta tag injection."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from nucleusflow.errors import MetadataInjectionError
from nucleusflow.html import MetadataInjector, StructuralValidator, build_meta_tags


@pytest.fixture
def injector() -> MetadataInjector:
    return MetadataInjector()


def test_build_meta_tags_escapes_and_skips_non_strings() -> None:
    tags = build_meta_tags({"description": 'Say "hi" & <bye>', "count": 3})
    assert tags == (
        '<meta name="description" content="Say &quot;hi&quot; &amp; &lt;bye&gt;">'
    )


def test_build_meta_tags_handles_empty_input() -> None:
    assert build_meta_tags(None) == ""
    assert build_meta_tags({}) == ""


def test_fragment_gets_full_document_structure(injector: MetadataInjector) -> None:
    html = injector.inject("<p>Hi</p>", {"author": "Sam"})
    assert html == (
        '<!DOCTYPE html><html><head><meta name="author" content="Sam">'
        "</head><p>Hi</p></html>"
    )
    assert StructuralValidator().is_valid(html)


def test_existing_html_element_receives_head(injector: MetadataInjector) -> None:
    html = injector.inject('<html lang="en"><body>x</body></html>', {"a": "b"})
    assert html == (
        '<!DOCTYPE html><html lang="en"><head><meta name="a" content="b">'
        "</head><body>x</body></html>"
    )


def test_tags_go_before_closing_head(injector: MetadataInjector) -> None:
    source = "<!DOCTYPE html><html><head><title>T</title></head><body></body></html>"
    html = injector.inject(source, {"description": "D"})
    soup = BeautifulSoup(html, "html.parser")
    head = soup.find("head")
    assert head is not None
    assert head.find("meta", attrs={"name": "description"})["content"] == "D"
    assert html.count("<!DOCTYPE html>") == 1


def test_header_element_is_not_mistaken_for_head(injector: MetadataInjector) -> None:
    html = injector.inject("<header>Top</header>", {"k": "v"})
    assert html.startswith('<!DOCTYPE html><html><head><meta name="k" content="v">')
    assert html.endswith("<header>Top</header></html>")


def test_open_head_without_close_is_closed(injector: MetadataInjector) -> None:
    html = injector.insert_meta_tags("<head><title>T</title><body></body>", "<meta>")
    assert html == "<head><meta></head><title>T</title><body></body>"


def test_missing_head_raises() -> None:
    with pytest.raises(MetadataInjectionError):
        MetadataInjector.insert_meta_tags("<body></body>", "<meta>")


def test_update_replaces_existing_meta_lines(injector: MetadataInjector) -> None:
    source = (
        "<!DOCTYPE html>\n<html>\n<head>\n"
        '<meta name="description" content="old">\n'
        "<title>T</title>\n</head>\n<body></body>\n</html>"
    )
    html = injector.update(source, {"description": "new"})
    assert 'content="old"' not in html
    assert '<meta name="description" content="new"></head>' in html
    assert "<title>T</title>" in html


def test_headless_body_gets_single_structure(injector: MetadataInjector) -> None:
    metadata = {"description": "D", "author": "A", "keywords": "k"}
    html = injector.inject("<body><p>x</p></body>", metadata)
    assert html.count("<!DOCTYPE html>") == 1
    assert html.count("<head>") == html.count("</head>") == 1
    assert html.count("<meta ") == len(metadata)
