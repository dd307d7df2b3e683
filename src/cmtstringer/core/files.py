"""File discovery helpers for Go package directories."""

from __future__ import annotations

from pathlib import Path
from typing import List

from cmtstringer.errors import InputNotFoundError

__all__ = [
    "GO_SUFFIX",
    "ensure_directory",
    "iter_go_files",
    "read_source_bytes",
]

GO_SUFFIX = ".go"


def ensure_directory(path: Path) -> Path:
    """Return ``path`` expanded, raising when it is not an existing directory."""

    candidate = Path(path).expanduser()
    if not candidate.exists():
        raise InputNotFoundError(f"Input directory not found: {candidate}")
    if not candidate.is_dir():
        raise InputNotFoundError(f"Input path is not a directory: {candidate}")
    return candidate


def iter_go_files(directory: Path) -> List[Path]:
    """Return the ``.go`` files directly inside ``directory`` sorted by name.

    Subdirectories are separate packages in Go and are not descended into.
    """

    return sorted(
        (
            child
            for child in Path(directory).iterdir()
            if child.is_file() and child.suffix == GO_SUFFIX
        ),
        key=lambda p: p.name,
    )


def read_source_bytes(path: Path) -> bytes:
    with Path(path).open("rb") as fh:
        return fh.read()
