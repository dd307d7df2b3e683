"""Parser-independent view of a Go package's top-level declarations."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

__all__ = [
    "ValueSpec",
    "ConstDecl",
    "Declaration",
    "SourceFile",
    "Package",
]


@dataclass(frozen=True)
class ValueSpec:
    """One ``name [Type] [= value]`` line of a const declaration."""

    names: tuple[str, ...]
    type_name: Optional[str] = None
    type_is_identifier: bool = False
    values: tuple[str, ...] = ()
    doc: Optional[str] = None
    line: int = 0

    @property
    def has_type(self) -> bool:
        return self.type_name is not None

    @property
    def has_value(self) -> bool:
        return bool(self.values)


@dataclass(frozen=True)
class ConstDecl:
    """A ``const`` declaration, either a single spec or a ``( ... )`` group."""

    specs: tuple[ValueSpec, ...]
    grouped: bool = False
    doc: Optional[str] = None
    line: int = 0


@dataclass(frozen=True)
class Declaration:
    """A package-level name introduced by a const/var/type/func declaration."""

    name: str
    kind: str
    line: int = 0


@dataclass(frozen=True)
class SourceFile:
    path: Path
    package_name: str
    consts: tuple[ConstDecl, ...] = ()
    declarations: tuple[Declaration, ...] = ()


@dataclass(frozen=True)
class Package:
    """All files in one directory that share a package clause."""

    name: str
    directory: Path
    files: tuple[SourceFile, ...] = ()

    def iter_const_decls(self) -> Iterator[tuple[SourceFile, ConstDecl]]:
        for source in self.files:
            for decl in source.consts:
                yield source, decl
