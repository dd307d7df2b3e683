"""Filesystem helpers for writing throwaway Go packages."""

from __future__ import annotations

import textwrap
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Union

TreeValue = Union[str, "Tree", None]
Tree = Mapping[str, TreeValue]


def build_tree(base: Path, tree: Tree) -> None:
    """Create files/directories under ``base`` from a nested mapping.

    String values are dedented and written as file content, ``None`` creates
    an empty directory and mappings recurse.
    """

    for name, value in tree.items():
        path = base / name
        if isinstance(value, str):
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(
                textwrap.dedent(value).lstrip("\n"), encoding="utf-8"
            )
        elif isinstance(value, Mapping):
            path.mkdir(parents=True, exist_ok=True)
            build_tree(path, value)
        elif value is None:
            path.mkdir(parents=True, exist_ok=True)
        else:
            raise TypeError(f"Unsupported tree value for {path}: {value!r}")


@dataclass
class GoPackageBuilder:
    """Helper bound to a tmp directory for writing Go sources."""

    root: Path

    def create(self, tree: Tree) -> Path:
        build_tree(self.root, tree)
        return self.root

    def write(self, relative: Union[str, Path], source: str) -> Path:
        path = self.root / Path(relative)
        build_tree(path.parent, {path.name: source})
        return path
