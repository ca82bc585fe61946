"""High-level orchestration for building a site from a content directory.

:class:`SiteBuilder` consumes a :class:`~nucleusflow.config.SiteConfig`, runs
every Markdown file directly under the content directory through
:class:`~nucleusflow.content.MarkdownProcessor`, renders the page template,
and hands the result to a shared :class:`~nucleusflow.html.HtmlGenerator`.
Documents can be processed on a thread pool; failures are collected per
document so one broken file does not stop the rest of the batch unless
``fail_fast`` is set.

Example
-------
>>> from pathlib import Path
>>> from nucleusflow.config import load_site_config
>>> from nucleusflow.site import SiteBuilder
>>> config = load_site_config(Path("nucleusflow.yaml"))  # doctest: +SKIP
>>> report = SiteBuilder(config).build()  # doctest: +SKIP
>>> report.written  # doctest: +SKIP
[PosixPath('public/index.html'), ...]
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from .content import MarkdownProcessor
from .errors import ContentValidationError, ProcessingError
from .html import HtmlGenerator
from .template import TemplateRenderer

if typ.TYPE_CHECKING:
    from .config import SiteConfig
    from .content import ContentMetadata

LOGGER = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"


@dc.dataclass(slots=True)
class BuildReport:
    """Outcome of a site build.

    Attributes
    ----------
    written : list[Path]
        HTML files written, in source order.
    failures : dict[Path, ProcessingError]
        Source files that failed, mapped to the error they raised.
    """

    written: list[Path] = dc.field(default_factory=list)
    failures: dict[Path, ProcessingError] = dc.field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Return ``True`` when every document was written."""
        return not self.failures


def document_metadata(metadata: ContentMetadata) -> dict[str, str]:
    """Return the ``<meta>`` name/content pairs derived from a document."""
    tags: dict[str, str] = {}
    if metadata.description:
        tags["description"] = metadata.description
    if metadata.tags:
        tags["keywords"] = ", ".join(metadata.tags)
    if metadata.date:
        tags["date"] = metadata.date
    return tags


def read_source(source: Path) -> str:
    """Return the UTF-8 text of a Markdown source file.

    Raises
    ------
    ContentValidationError
        If the file cannot be read or is not valid UTF-8.
    """
    try:
        return source.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        msg = f"Source is not valid UTF-8 (byte offset {exc.start}): {source}"
        raise ContentValidationError(msg) from exc
    except OSError as exc:
        msg = f"Cannot read source: {source}"
        raise ContentValidationError(msg) from exc


class SiteBuilder:
    """Render every Markdown document of a site into HTML files."""

    def __init__(
        self,
        config: SiteConfig,
        *,
        processor: MarkdownProcessor | None = None,
        renderer: TemplateRenderer | None = None,
        generator: HtmlGenerator | None = None,
    ) -> None:
        self.config = config
        self.processor = processor or MarkdownProcessor(config.processor)
        self.renderer = renderer or TemplateRenderer(config.template_dir)
        self.generator = generator or HtmlGenerator(config.output)
        self._stylesheet = self.processor.stylesheet(config.processor)

    def sources(self) -> list[Path]:
        """Return the Markdown files directly under the content directory."""
        content_dir = self.config.content_dir
        if not content_dir.is_dir():
            msg = f"Content directory '{content_dir}' not found."
            raise FileNotFoundError(msg)
        return sorted(
            path
            for path in content_dir.iterdir()
            if path.is_file() and path.suffix == MARKDOWN_SUFFIX
        )

    def output_path(self, source: Path) -> Path:
        """Return the HTML path written for ``source``."""
        return self.config.output_dir / f"{source.stem}.html"

    def build_document(self, source: Path) -> Path:
        """Process, render, and write one Markdown file.

        Raises
        ------
        ProcessingError
            If any pipeline stage rejects the document.
        """
        document = self.processor.process(read_source(source), self.config.processor)
        title = document.metadata.title or source.stem.replace("-", " ").title()
        page = self.renderer.render(
            self.config.template,
            {
                "content": document.html,
                "toc": document.toc_html,
                "metadata": document.metadata,
                "title": title,
                "pygments_css": self._stylesheet,
            },
        )
        options = {"metadata": document_metadata(document.metadata)}
        return self.generator.generate(page, self.output_path(source), options)

    def build(self) -> BuildReport:
        """Build every document and return the collected results.

        Raises
        ------
        FileNotFoundError
            If the content directory does not exist.
        ProcessingError
            The first document failure, when ``fail_fast`` is enabled.
        """
        sources = self.sources()
        self.config.output_dir.mkdir(parents=True, exist_ok=True)
        report = BuildReport()
        if self.config.workers > 1:
            with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
                futures = [
                    (source, pool.submit(self.build_document, source))
                    for source in sources
                ]
                for source, future in futures:
                    try:
                        report.written.append(future.result())
                    except ProcessingError as exc:
                        self._record_failure(report, source, exc)
        else:
            for source in sources:
                try:
                    report.written.append(self.build_document(source))
                except ProcessingError as exc:
                    self._record_failure(report, source, exc)
        LOGGER.info(
            "built %d page(s), %d failure(s)", len(report.written), len(report.failures)
        )
        return report

    def _record_failure(
        self, report: BuildReport, source: Path, exc: ProcessingError
    ) -> None:
        LOGGER.error("failed to build %s: %s", source, exc)
        if self.config.fail_fast:
            raise exc
        report.failures[source] = exc


__all__ = ["BuildReport", "SiteBuilder", "document_metadata", "read_source"]
