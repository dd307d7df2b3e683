"""Compiles-cleanly gate run once per package before extraction."""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol

from .errors import ConfigurationError
from .model import Package

__all__ = [
    "CHECKER_CHOICES",
    "PREDECLARED_TYPES",
    "CheckResult",
    "DeclarationChecker",
    "GoVetChecker",
    "NullChecker",
    "PackageChecker",
    "build_checker",
]

CHECKER_CHOICES = ("auto", "builtin", "go", "none")

PREDECLARED_TYPES = frozenset(
    {
        "any",
        "bool",
        "byte",
        "comparable",
        "complex64",
        "complex128",
        "error",
        "float32",
        "float64",
        "int",
        "int8",
        "int16",
        "int32",
        "int64",
        "rune",
        "string",
        "uint",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
        "uintptr",
    }
)


@dataclass(frozen=True)
class CheckResult:
    package: str
    ok: bool
    diagnostics: tuple[str, ...] = ()


class PackageChecker(Protocol):
    def check(self, package: Package) -> CheckResult:
        ...


class NullChecker:
    def check(self, package: Package) -> CheckResult:
        return CheckResult(package=package.name, ok=True)


class DeclarationChecker:
    """Static checks over the parsed declarations of one package.

    Reports only redeclared package-level names, a const group whose first
    spec has no value, and bare const type names that are neither declared
    in the package nor predeclared. Initializer expressions are not type
    checked; use :class:`GoVetChecker` for that.
    """

    def check(self, package: Package) -> CheckResult:
        diagnostics: List[str] = []
        diagnostics.extend(self._redeclarations(package))
        diagnostics.extend(self._const_specs(package))
        return CheckResult(
            package=package.name,
            ok=not diagnostics,
            diagnostics=tuple(diagnostics),
        )

    def _redeclarations(self, package: Package) -> List[str]:
        seen: Dict[str, str] = {}
        problems: List[str] = []
        for source in package.files:
            for decl in source.declarations:
                if decl.name == "_":
                    continue
                if decl.kind == "func" and decl.name == "init":
                    continue
                location = f"{source.path}:{decl.line}"
                previous = seen.get(decl.name)
                if previous is not None:
                    problems.append(
                        f"{location}: {decl.name} redeclared in this block "
                        f"(other declaration at {previous})"
                    )
                    continue
                seen[decl.name] = location
        return problems

    def _const_specs(self, package: Package) -> List[str]:
        declared_types = {
            decl.name
            for source in package.files
            for decl in source.declarations
            if decl.kind == "type"
        }
        problems: List[str] = []
        for source, decl in package.iter_const_decls():
            for index, spec in enumerate(decl.specs):
                location = f"{source.path}:{spec.line}"
                if index == 0 and not spec.has_value:
                    problems.append(
                        f"{location}: missing init expr for const declaration"
                    )
                if (
                    spec.type_is_identifier
                    and spec.type_name not in declared_types
                    and spec.type_name not in PREDECLARED_TYPES
                ):
                    problems.append(f"{location}: undefined: {spec.type_name}")
        return problems


class GoVetChecker:
    """Run ``go vet`` over the package files."""

    def __init__(
        self,
        command: str = "go",
        *,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ) -> None:
        self.command = command
        self._runner = runner

    def check(self, package: Package) -> CheckResult:
        names = [source.path.name for source in package.files]
        try:
            completed = self._runner(
                [self.command, "vet", *names],
                cwd=str(package.directory),
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ConfigurationError(
                f"Go toolchain executable not found: {self.command}"
            ) from exc
        diagnostics = tuple(
            line for line in completed.stderr.splitlines() if line.strip()
        )
        return CheckResult(
            package=package.name,
            ok=completed.returncode == 0,
            diagnostics=diagnostics,
        )


def build_checker(
    name: str,
    *,
    go_command: str = "go",
    which: Callable[[str], Optional[str]] = shutil.which,
) -> PackageChecker:
    choice = name.strip().lower()
    if choice == "auto":
        choice = "go" if which(go_command) else "builtin"
    if choice == "go":
        return GoVetChecker(go_command)
    if choice == "builtin":
        return DeclarationChecker()
    if choice == "none":
        return NullChecker()
    expected = ", ".join(CHECKER_CHOICES)
    raise ConfigurationError(
        f"Unknown checker '{name}'. Expected one of: {expected}."
    )
