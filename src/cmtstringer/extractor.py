"""Collect the constants of a target type from a parsed package.

Go lets a const spec omit both type and value, in which case it repeats the
previous spec of the same group. Parsers do not expose the repeated type, so
``iter_effective_types`` tracks it explicitly:

- a spec with a value but no type is untyped and clears the remembered type;
- a spec whose type is a bare identifier remembers that identifier;
- a spec whose type is anything else (``pkg.T``, ``*T``) is skipped and leaves
  the remembered type untouched;
- a spec with neither inherits the remembered type.

The remembered type never leaks from one declaration group into the next.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from .model import Package, ValueSpec

__all__ = [
    "BLANK_IDENTIFIER",
    "CandidateConstant",
    "extract_candidates",
    "is_exported",
    "iter_effective_types",
]

BLANK_IDENTIFIER = "_"


@dataclass(frozen=True)
class CandidateConstant:
    """An exported constant whose effective type is the target type."""

    name: str
    type_name: str
    doc: Optional[str] = None
    path: Optional[Path] = None
    line: int = 0


def is_exported(name: str) -> bool:
    return bool(name) and name[0].isupper()


def iter_effective_types(
    specs: Iterable[ValueSpec],
) -> Iterator[Tuple[ValueSpec, Optional[str]]]:
    """Yield each spec of one group with its effective type.

    ``None`` marks specs that can never be candidates: untyped specs with a
    value and specs whose type is not a bare identifier.
    """

    remembered = ""
    for spec in specs:
        if not spec.has_type and spec.has_value:
            remembered = ""
            yield spec, None
            continue
        if spec.has_type:
            if not spec.type_is_identifier:
                yield spec, None
                continue
            remembered = spec.type_name or ""
        yield spec, remembered or None


def extract_candidates(
    package: Package, type_name: str
) -> List[CandidateConstant]:
    """Return the candidates for ``type_name`` in declaration order."""

    candidates: List[CandidateConstant] = []
    for source, decl in package.iter_const_decls():
        for spec, effective in iter_effective_types(decl.specs):
            if effective != type_name:
                continue
            for name in spec.names:
                if name == BLANK_IDENTIFIER or not is_exported(name):
                    continue
                candidates.append(
                    CandidateConstant(
                        name=name,
                        type_name=effective,
                        doc=spec.doc,
                        path=source.path,
                        line=spec.line,
                    )
                )
    return candidates
