r"""Extract document metadata from a leading YAML frontmatter block.

The block opens with a ``---`` line and closes at the next line that is
exactly ``---``. Blocks that fail to parse are tolerated: the metadata simply
stays empty. When no ``title`` is supplied, the first ``# `` heading wins.

Example
-------
>>> from nucleusflow.content.frontmatter import extract_metadata
>>> meta = extract_metadata("---\ntitle: Hello\ntags: [a, b]\n---\nBody")
>>> meta.title, meta.tags
('Hello', ('a', 'b'))
"""

from __future__ import annotations

import datetime as dt
import logging
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .models import ContentMetadata

LOGGER = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = "---"
TITLE_PREFIX = "# "


def split_frontmatter(text: str) -> tuple[str | None, str]:
    """Return the raw frontmatter block (or ``None``) and the remaining body."""
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\r\n") != FRONTMATTER_DELIMITER:
        return None, text
    block: list[str] = []
    for idx, line in enumerate(lines[1:], start=1):
        if line.rstrip("\r\n") == FRONTMATTER_DELIMITER:
            return "".join(block), "".join(lines[idx + 1 :])
        block.append(line)
    return "".join(block), ""


def _load_block(block: str) -> dict[str, typ.Any] | None:
    """Parse a frontmatter block, returning ``None`` when it is unusable."""
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load(block)
    except YAMLError as exc:
        LOGGER.debug("ignoring unparseable frontmatter: %s", exc)
        return None
    if not isinstance(loaded, dict):
        LOGGER.debug("ignoring frontmatter that is not a mapping")
        return None
    return {str(key): value for key, value in loaded.items()}


def _scalar_text(value: object) -> str | None:
    """Return trimmed text for string or date scalars, ``None`` otherwise."""
    if isinstance(value, dt.date):
        return value.isoformat()
    if isinstance(value, str):
        return value.strip() or None
    return None


def _tag_list(value: object) -> tuple[str, ...]:
    """Return the string entries of a YAML sequence, dropping the rest."""
    if not isinstance(value, list):
        return ()
    tags: list[str] = []
    for item in value:
        if isinstance(item, str) and item.strip():
            tags.append(item.strip())
    return tuple(tags)


def _jsonable(value: object) -> object:
    """Convert YAML dates nested in ``value`` into ISO strings."""
    match value:
        case dt.date():
            return value.isoformat()
        case dict():
            return {str(key): _jsonable(item) for key, item in value.items()}
        case list():
            return [_jsonable(item) for item in value]
        case _:
            return value


def _first_heading(text: str) -> str | None:
    """Return the text of the first line starting with ``# ``."""
    for line in text.splitlines():
        if line.startswith(TITLE_PREFIX):
            return line[len(TITLE_PREFIX) :].strip()
    return None


def extract_metadata(text: str) -> ContentMetadata:
    """Build :class:`ContentMetadata` from a Markdown document.

    Parameters
    ----------
    text : str
        Full document text, including any frontmatter block.

    Returns
    -------
    ContentMetadata
        Metadata with ``title``, ``description``, ``date`` and ``tags``
        populated from the recognised keys and every other key collected in
        ``custom``.
    """
    fields: dict[str, typ.Any] = {}
    custom: dict[str, typ.Any] = {}
    block, body = split_frontmatter(text)
    payload = _load_block(block) if block is not None else None
    for key, value in (payload or {}).items():
        match key:
            case "title" | "description" | "date":
                fields[key] = _scalar_text(value)
            case "tags":
                fields["tags"] = _tag_list(value)
            case _:
                custom[key] = _jsonable(value)

    if fields.get("title") is None:
        fields["title"] = _first_heading(body)
    return ContentMetadata(custom=custom, **fields)


__all__ = ["extract_metadata", "split_frontmatter"]
