"""Tree-sitter backed parser producing :mod:`cmtstringer.model` objects.

Only the shape needed by the generator is extracted: the package clause,
top-level declared names and, for every ``const`` declaration, each spec's
names, type, initializers and attached doc comment.

Doc comments are attached the way the Go parser does it. Comments that start
on the same line as the preceding token are trailing comments. The remaining
comments are split into groups at blank lines, and the last group is the doc
only if it ends on the line right above the declaration.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence

import tree_sitter
import tree_sitter_go

from .comments import comment_text
from .core.files import iter_go_files, read_source_bytes
from .errors import ParseError
from .model import ConstDecl, Declaration, Package, SourceFile, ValueSpec

__all__ = ["GoSourceParser"]

_TERMINATORS = frozenset({"\n", ";", "\0"})
_SPEC_TYPES = {
    "const_declaration": ("const_spec",),
    "var_declaration": ("var_spec",),
    "type_declaration": ("type_spec", "type_alias"),
}
_DECLARATION_KINDS = {
    "const_declaration": "const",
    "var_declaration": "var",
    "type_declaration": "type",
}


@dataclass(frozen=True)
class _Comment:
    text: str
    start_row: int
    end_row: int


class GoSourceParser:
    """Parse Go files and directories with the tree-sitter Go grammar."""

    def __init__(self) -> None:
        self._language = tree_sitter.Language(tree_sitter_go.language())
        self._parser = tree_sitter.Parser(self._language)

    def parse_directory(self, directory: Path) -> Dict[str, Package]:
        """Parse every ``.go`` file in ``directory`` grouped by package name.

        Packages keep the order in which their first file was seen. Syntax
        errors from all files are reported together.
        """

        directory = Path(directory)
        grouped: Dict[str, List[SourceFile]] = {}
        diagnostics: List[str] = []
        for path in iter_go_files(directory):
            try:
                parsed = self.parse_source(_read(path), path)
            except ParseError as exc:
                diagnostics.extend(exc.diagnostics or (str(exc),))
                continue
            grouped.setdefault(parsed.package_name, []).append(parsed)

        if diagnostics:
            raise ParseError(
                f"Failed to parse Go sources in {directory}", diagnostics
            )

        return {
            name: Package(name=name, directory=directory, files=tuple(files))
            for name, files in grouped.items()
        }

    def parse_source(self, source: bytes, path: Path) -> SourceFile:
        try:
            source.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(
                f"Failed to parse {path}",
                [f"{path}: invalid UTF-8 encoding ({exc.reason})"],
            ) from exc

        tree = self._parser.parse(source)
        errors = _syntax_errors(tree.root_node, str(path))
        if errors:
            raise ParseError(f"Failed to parse {path}", errors)

        return _FileBuilder(source, Path(path)).build(tree.root_node)

    def syntax_errors(self, text: str, label: str = "<generated>") -> List[str]:
        """Return ``file:line:col`` diagnostics for ``text`` (empty if valid)."""

        tree = self._parser.parse(text.encode("utf-8"))
        return _syntax_errors(tree.root_node, label)


class _FileBuilder:
    def __init__(self, source: bytes, path: Path) -> None:
        self._source = source
        self._path = path

    def build(self, root: Any) -> SourceFile:
        package_name: Optional[str] = None
        consts: List[ConstDecl] = []
        declarations: List[Declaration] = []

        pending: List[_Comment] = []
        prev_end_row = -1
        for child in root.children:
            if child.type == "comment":
                pending.append(self._comment(child))
                continue
            if child.type in _TERMINATORS:
                continue

            if child.type == "package_clause":
                package_name = self._package_name(child)
            elif child.type == "const_declaration":
                doc = _lead_doc(pending, prev_end_row, _row(child))
                decl = self._const_decl(child, doc)
                consts.append(decl)
                declarations.extend(
                    Declaration(name=name, kind="const", line=spec.line)
                    for spec in decl.specs
                    for name in spec.names
                )
            elif child.type in _DECLARATION_KINDS:
                declarations.extend(self._named_specs(child))
            elif child.type == "function_declaration":
                name_node = child.child_by_field_name("name")
                if name_node is not None:
                    declarations.append(
                        Declaration(
                            name=self._text(name_node),
                            kind="func",
                            line=_row(child) + 1,
                        )
                    )

            pending = []
            prev_end_row = child.end_point[0]

        if package_name is None:
            raise ParseError(
                f"Failed to parse {self._path}",
                [f"{self._path}:1:1: expected 'package' clause"],
            )

        return SourceFile(
            path=self._path,
            package_name=package_name,
            consts=tuple(consts),
            declarations=tuple(declarations),
        )

    def _const_decl(self, node: Any, decl_doc: Optional[str]) -> ConstDecl:
        grouped = False
        specs: List[ValueSpec] = []
        pending: List[_Comment] = []
        prev_end_row = _row(node)
        for child in _group_children(node):
            if child.type == "comment":
                pending.append(self._comment(child))
                continue
            if child.type in _TERMINATORS:
                continue
            if child.type == "(":
                grouped = True
            elif child.type == "const_spec":
                # Without parentheses the comment above belongs to the
                # declaration only; the spec itself has no doc.
                doc = None
                if grouped:
                    doc = _lead_doc(pending, prev_end_row, _row(child))
                specs.append(self._value_spec(child, doc))
            pending = []
            prev_end_row = child.end_point[0]

        return ConstDecl(
            specs=tuple(specs),
            grouped=grouped,
            doc=decl_doc,
            line=_row(node) + 1,
        )

    def _value_spec(self, node: Any, doc: Optional[str]) -> ValueSpec:
        names = tuple(
            self._text(name)
            for name in node.children_by_field_name("name")
            if name.type != ","
        )
        type_node = node.child_by_field_name("type")
        value_node = node.child_by_field_name("value")
        values: tuple[str, ...] = ()
        if value_node is not None:
            values = tuple(
                self._text(expr)
                for expr in value_node.named_children
                if expr.type != "comment"
            )
        return ValueSpec(
            names=names,
            type_name=self._text(type_node) if type_node is not None else None,
            type_is_identifier=(
                type_node is not None and type_node.type == "type_identifier"
            ),
            values=values,
            doc=doc,
            line=_row(node) + 1,
        )

    def _named_specs(self, node: Any) -> Iterator[Declaration]:
        kind = _DECLARATION_KINDS[node.type]
        spec_types = _SPEC_TYPES[node.type]
        for child in _group_children(node):
            if child.type not in spec_types:
                continue
            for name in child.children_by_field_name("name"):
                if name.type != ",":
                    yield Declaration(
                        name=self._text(name), kind=kind, line=_row(child) + 1
                    )

    def _package_name(self, node: Any) -> str:
        for child in node.named_children:
            if child.type == "package_identifier":
                return self._text(child)
        raise ParseError(
            f"Failed to parse {self._path}",
            [f"{self._path}:{_row(node) + 1}:1: malformed package clause"],
        )

    def _comment(self, node: Any) -> _Comment:
        return _Comment(
            text=self._text(node),
            start_row=node.start_point[0],
            end_row=node.end_point[0],
        )

    def _text(self, node: Any) -> str:
        return self._source[node.start_byte:node.end_byte].decode("utf-8")


def _read(path: Path) -> bytes:
    try:
        return read_source_bytes(path)
    except OSError as exc:
        raise ParseError(
            f"Failed to read {path}", [f"{path}: {exc.strerror or exc}"]
        ) from exc


def _row(node: Any) -> int:
    return node.start_point[0]


def _group_children(node: Any) -> Iterator[Any]:
    # Some grammar versions wrap parenthesised specs in a ``*_spec_list`` node.
    for child in node.children:
        if child.type.endswith("_spec_list"):
            yield from _group_children(child)
        else:
            yield child


def _lead_doc(
    comments: Sequence[_Comment], prev_end_row: int, next_row: int
) -> Optional[str]:
    index = 0
    line = prev_end_row
    while index < len(comments) and comments[index].start_row <= line:
        line = comments[index].end_row
        index += 1

    group: List[_Comment] = []
    for comment in comments[index:]:
        if group and comment.start_row > group[-1].end_row + 1:
            group = []
        group.append(comment)

    if not group or group[-1].end_row + 1 != next_row:
        return None
    return comment_text(comment.text for comment in group)


def _syntax_errors(root: Any, label: str) -> List[str]:
    diagnostics: List[str] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            row, column = node.start_point[0], node.start_point[1]
            if node.is_missing:
                detail = f"missing {node.type!r}"
            else:
                detail = "unexpected input"
            diagnostics.append(
                f"{label}:{row + 1}:{column + 1}: syntax error: {detail}"
            )
            continue
        if node.has_error:
            stack.extend(reversed(node.children))
    return diagnostics
