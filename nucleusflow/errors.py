"""Exception hierarchy raised by the document transformation pipeline.

Every stage reports failures through a subclass of :class:`ProcessingError`
so callers processing many documents can catch a single type, record the
failure, and decide whether to skip the document or abort the batch.
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


class ProcessingError(RuntimeError):
    """Base class for recoverable per-document pipeline failures."""


class StructuralValidationError(ProcessingError):
    """Raised when HTML fails the tag-balance check.

    Attributes
    ----------
    stage : str
        ``"input"`` when the check ran before transformation, ``"output"``
        when it ran on the transformed document.
    reason : str
        Human-readable description of the first imbalance found.
    offset : int | None
        Character offset where the scanner detected the problem, if known.
    """

    def __init__(self, stage: str, reason: str, offset: int | None = None) -> None:
        self.stage = stage
        self.reason = reason
        self.offset = offset
        location = f" at offset {offset}" if offset is not None else ""
        super().__init__(f"HTML structure invalid ({stage}){location}: {reason}")


class ContentValidationError(ProcessingError):
    """Raised when source content is empty, oversized, or suspicious."""


class MetadataInjectionError(ProcessingError):
    """Raised when no ``<head>`` section can be located or synthesized."""


class PipelineIOError(ProcessingError):
    """Base class for file system failures tied to a single path."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"{message}: {path}"
        super().__init__(message)


class AssetIOError(PipelineIOError):
    """Raised when the asset directory cannot be listed, read, or copied."""


class OutputIOError(PipelineIOError):
    """Raised when a generated page cannot be read back or written."""


class OutputConfigError(ProcessingError):
    """Raised when an output path or per-call generator option is invalid."""


class TemplateRenderError(ProcessingError):
    """Raised when a page template cannot be loaded or rendered."""


__all__ = [
    "AssetIOError",
    "ContentValidationError",
    "MetadataInjectionError",
    "OutputConfigError",
    "OutputIOError",
    "PipelineIOError",
    "ProcessingError",
    "StructuralValidationError",
    "TemplateRenderError",
]
