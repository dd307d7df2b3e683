"""Doc comment text extraction matching Go's ``CommentGroup.Text``."""

from __future__ import annotations

import re
from typing import Iterable, List

__all__ = ["comment_text", "is_directive"]

_DIRECTIVE_PREFIXES = ("line ", "extern ", "export ")
_DIRECTIVE_CHARS = re.compile(r"^[a-z0-9]+$")
_TRAILING_WS = " \t\n\r"


def is_directive(body: str) -> bool:
    """Return ``True`` for ``//go:generate`` style tool directives.

    ``body`` is the comment text after the leading ``//``.
    """

    if body.startswith(_DIRECTIVE_PREFIXES):
        return True
    colon = body.find(":")
    if colon <= 0 or colon + 1 >= len(body):
        return False
    return bool(_DIRECTIVE_CHARS.match(body[:colon] + body[colon + 1]))


def comment_text(raw_comments: Iterable[str]) -> str:
    """Return the text of a comment group without comment markers.

    Leading and trailing blank lines are dropped and interior runs of blank
    lines collapse to one. A non-empty result always ends with a newline.
    """

    lines: List[str] = []
    for raw in raw_comments:
        if raw.startswith("//"):
            body = raw[2:]
            if body.startswith(" "):
                body = body[1:]
            elif body and is_directive(body):
                continue
        elif raw.startswith("/*"):
            body = raw[2:-2]
        else:
            body = raw
        lines.extend(line.rstrip(_TRAILING_WS) for line in body.split("\n"))

    kept: List[str] = []
    for line in lines:
        if line or (kept and kept[-1]):
            kept.append(line)
    while kept and not kept[-1]:
        kept.pop()
    if not kept:
        return ""
    return "\n".join(kept) + "\n"
