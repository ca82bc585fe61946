"""End-to-end tests for building a site from a content directory."""

from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from nucleusflow.config import OutputConfig, ProcessorConfig, SiteConfig
from nucleusflow.content import ContentMetadata
from nucleusflow.errors import ContentValidationError, OutputIOError
from nucleusflow.html import StructuralValidator
from nucleusflow.site import SiteBuilder, document_metadata

GUIDE = """---
title: User Guide
description: How to use the tool
date: 2024-05-01
tags: [docs, guide]
---
# User Guide

Intro paragraph.

## Install

```python
print("hello")
```

## Usage

Run it.
"""


@pytest.fixture
def site(tmp_path: Path) -> SiteConfig:
    content = tmp_path / "content"
    content.mkdir()
    (content / "guide.md").write_text(GUIDE, encoding="utf-8")
    (content / "release-notes.md").write_text("Nothing yet.\n", encoding="utf-8")
    (content / "notes.txt").write_text("not markdown", encoding="utf-8")
    return SiteConfig(
        content_dir=content,
        output_dir=tmp_path / "public",
        processor=ProcessorConfig(toc=True),
        output=OutputConfig(pretty_print=True),
    )


def _soup(path: Path) -> BeautifulSoup:
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")


def test_document_metadata() -> None:
    meta = ContentMetadata(description="D", tags=("a", "b"), date="2024-01-01")
    assert document_metadata(meta) == {
        "description": "D",
        "keywords": "a, b",
        "date": "2024-01-01",
    }
    assert document_metadata(ContentMetadata()) == {}


def test_build_writes_one_page_per_markdown_file(site: SiteConfig) -> None:
    report = SiteBuilder(site).build()
    assert report.ok
    assert report.written == [
        site.output_dir / "guide.html",
        site.output_dir / "release-notes.html",
    ]


def test_built_page_contents(site: SiteConfig) -> None:
    SiteBuilder(site).build()
    page = site.output_dir / "guide.html"
    soup = _soup(page)
    assert soup.title is not None
    assert soup.title.get_text(strip=True) == "User Guide"
    metas = {
        meta["name"]: meta["content"] for meta in soup.find_all("meta", attrs={"name": True})
    }
    assert metas["description"] == "How to use the tool"
    assert metas["keywords"] == "docs, guide"
    assert [a["href"] for a in soup.select("nav.toc a")] == [
        "#user-guide",
        "#install",
        "#usage",
    ]
    block = soup.select_one("div.codehilite")
    assert block is not None
    assert block.get("data-language") == "python"
    assert soup.find("style") is not None
    assert StructuralValidator().is_valid(page.read_text(encoding="utf-8"))


def test_title_falls_back_to_file_name(site: SiteConfig) -> None:
    SiteBuilder(site).build()
    soup = _soup(site.output_dir / "release-notes.html")
    assert soup.title is not None
    assert soup.title.get_text(strip=True) == "Release Notes"


def test_failures_are_collected(site: SiteConfig) -> None:
    (site.content_dir / "bad.md").write_text("[x](javascript:boom)\n", encoding="utf-8")
    report = SiteBuilder(site).build()
    assert not report.ok
    assert list(report.failures) == [site.content_dir / "bad.md"]
    assert isinstance(report.failures[site.content_dir / "bad.md"], ContentValidationError)
    assert len(report.written) == 2


def test_fail_fast_raises(site: SiteConfig) -> None:
    (site.content_dir / "bad.md").write_text("", encoding="utf-8")
    site.fail_fast = True
    with pytest.raises(ContentValidationError):
        SiteBuilder(site).build()


def test_parallel_build_matches_sequential(site: SiteConfig, tmp_path: Path) -> None:
    SiteBuilder(site).build()
    sequential = (site.output_dir / "guide.html").read_text(encoding="utf-8")
    site.workers = 4
    site.output_dir = tmp_path / "parallel"
    report = SiteBuilder(site).build()
    assert report.written == [
        site.output_dir / "guide.html",
        site.output_dir / "release-notes.html",
    ]
    assert (site.output_dir / "guide.html").read_text(encoding="utf-8") == sequential


def test_minified_build(site: SiteConfig) -> None:
    site.output = OutputConfig(minify=True)
    SiteBuilder(site).build()
    text = (site.output_dir / "guide.html").read_text(encoding="utf-8")
    assert text.count("\n") < GUIDE.count("\n")
    assert StructuralValidator().is_valid(text)


def test_missing_content_dir(tmp_path: Path) -> None:
    config = SiteConfig(content_dir=tmp_path / "none", output_dir=tmp_path / "out")
    with pytest.raises(FileNotFoundError):
        SiteBuilder(config).build()


def test_undecodable_source_is_recorded(site: SiteConfig) -> None:
    bad = site.content_dir / "broken.md"
    bad.write_bytes(b"# Bad \xff\xfe\n")
    report = SiteBuilder(site).build()
    assert isinstance(report.failures[bad], ContentValidationError)
    assert "UTF-8" in str(report.failures[bad])
    assert site.output_dir / "guide.html" in report.written


def test_undecodable_source_is_recorded_in_parallel(site: SiteConfig) -> None:
    bad = site.content_dir / "broken.md"
    bad.write_bytes(b"# Bad \xff\xfe\n")
    site.workers = 3
    report = SiteBuilder(site).build()
    assert list(report.failures) == [bad]
    assert len(report.written) == 2


def test_unwritable_output_is_recorded(site: SiteConfig) -> None:
    site.output_dir.mkdir(parents=True)
    (site.output_dir / "guide.html").mkdir()
    report = SiteBuilder(site).build()
    error = report.failures[site.content_dir / "guide.md"]
    assert isinstance(error, OutputIOError)
    assert error.path == site.output_dir / "guide.html"
    assert report.written == [site.output_dir / "release-notes.html"]
