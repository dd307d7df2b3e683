"""Derive human-readable labels from constant doc comments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from .extractor import CandidateConstant

__all__ = ["DerivedEntry", "derive_entries", "derive_label", "flatten_lines"]

# Unicode White_Space, as matched by Go's unicode.IsSpace. Unlike str.isspace
# it excludes the U+001C..U+001F separators.
_SPACE = (
    "\t\n\v\f\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


@dataclass(frozen=True)
class DerivedEntry:
    name: str
    message: str


def flatten_lines(text: str) -> str:
    """Replace every ``\\r\\n``, ``\\r`` and ``\\n`` with a single space."""

    return text.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")


def derive_label(name: str, doc: Optional[str]) -> str:
    """Return the label for ``name`` following the ``Name description`` form.

    Doc text that does not open with ``name`` as a whole word yields ``""``.
    """

    if doc is None:
        return ""
    flat = flatten_lines(doc)
    if not _starts_with_token(flat, name):
        return ""
    return flat[len(name):].strip(_SPACE)


def derive_entries(
    candidates: Iterable[CandidateConstant],
) -> List[DerivedEntry]:
    return [
        DerivedEntry(
            name=candidate.name,
            message=derive_label(candidate.name, candidate.doc),
        )
        for candidate in candidates
    ]


def _starts_with_token(text: str, name: str) -> bool:
    if not name or not text.startswith(name):
        return False
    if len(text) == len(name):
        return True
    following = text[len(name)]
    return not (following.isalnum() or following == "_")
