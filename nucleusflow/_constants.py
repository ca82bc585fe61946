"""Common literal values used across nucleusflow.

These constants keep the HTML element sets and content limits centralized so
the validator, formatter, sanitizer, and tests import the same values without
drifting. Intended for internal use within the nucleusflow package.

Examples
--------
>>> from nucleusflow import _constants
>>> "br" in _constants.VOID_ELEMENTS
True
>>> "li" in _constants.OPTIONAL_TAGS
True
"""

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

OPTIONAL_TAGS = frozenset(
    {
        "html",
        "head",
        "body",
        "tbody",
        "thead",
        "tfoot",
        "tr",
        "th",
        "td",
        "li",
        "dt",
        "dd",
    }
)

DENIED_TAGS = frozenset({"script", "iframe", "object", "embed"})

MAX_CONTENT_SIZE = 10 * 1024 * 1024

DEFAULT_INDENT_SIZE = 4
DEFAULT_TOC_MAX_LEVEL = 3
DEFAULT_TEMPLATE = "page"
