"""Strip denylisted tag delimiters from HTML text.

The policy is intentionally narrow: only the ``<...>`` and ``</...>`` tokens
of ``script``, ``iframe``, ``object`` and ``embed`` are removed. Text between
a denied opening and closing tag stays in the output as plain text, and
attributes of every other tag are copied untouched.

Example
-------
>>> from nucleusflow.html.sanitizer import sanitize_html
>>> sanitize_html("<p>ok</p><script>alert(1)</script>")
'<p>ok</p>alert(1)'
"""

from __future__ import annotations

from nucleusflow._constants import DENIED_TAGS


def tag_name(tag_body: str) -> str:
    """Return the lower-cased element name of a tag body (text inside ``<>``)."""
    parts = tag_body.lstrip("/").split(maxsplit=1)
    if not parts:
        return ""
    return parts[0].rstrip("/").lower()


def sanitize_html(html: str, denied: frozenset[str] = DENIED_TAGS) -> str:
    """Return ``html`` with the delimiters of ``denied`` tags removed."""
    output: list[str] = []
    current: list[str] = []
    in_tag = False
    for char in html:
        if char == "<":
            if in_tag:
                output.append("<")
                output.extend(current)
            in_tag = True
            current.clear()
        elif char == ">" and in_tag:
            in_tag = False
            body = "".join(current)
            if tag_name(body) not in denied:
                output.append(f"<{body}>")
        elif in_tag:
            current.append(char)
        else:
            output.append(char)
    if in_tag:
        output.append("<")
        output.extend(current)
    return "".join(output)


__all__ = ["sanitize_html", "tag_name"]
