"""Formatting/validation seam for generated Go source."""

from __future__ import annotations

import shutil
import subprocess
from typing import Callable, Optional, Protocol

from .errors import ConfigurationError, FormatError
from .parser import GoSourceParser

__all__ = [
    "FORMATTER_CHOICES",
    "BuiltinFormatter",
    "GofmtFormatter",
    "SourceFormatter",
    "build_formatter",
]

FORMATTER_CHOICES = ("auto", "gofmt", "builtin")


class SourceFormatter(Protocol):
    def format(self, source: str) -> str:
        ...


class GofmtFormatter:
    """Pipe generated text through ``gofmt``."""

    def __init__(
        self,
        command: str = "gofmt",
        *,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ) -> None:
        self.command = command
        self._runner = runner

    def format(self, source: str) -> str:
        try:
            completed = self._runner(
                [self.command],
                input=source,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ConfigurationError(
                f"Formatter executable not found: {self.command}"
            ) from exc
        if completed.returncode != 0:
            raise FormatError(
                "Generated source is not valid Go",
                _diagnostic_lines(completed.stderr),
            )
        return completed.stdout


class BuiltinFormatter:
    """Normalise whitespace and reject text tree-sitter cannot parse."""

    def __init__(self, parser: GoSourceParser) -> None:
        self._parser = parser

    def format(self, source: str) -> str:
        lines = [line.rstrip() for line in source.splitlines()]
        while lines and not lines[-1]:
            lines.pop()
        normalized = "\n".join(lines) + "\n"
        errors = self._parser.syntax_errors(normalized)
        if errors:
            raise FormatError("Generated source is not valid Go", errors)
        return normalized


def build_formatter(
    name: str,
    *,
    parser: GoSourceParser,
    gofmt_command: str = "gofmt",
    which: Callable[[str], Optional[str]] = shutil.which,
) -> SourceFormatter:
    """Return the formatter selected by ``name``.

    ``auto`` uses gofmt when the executable is on ``PATH``.
    """

    choice = name.strip().lower()
    if choice == "auto":
        choice = "gofmt" if which(gofmt_command) else "builtin"
    if choice == "gofmt":
        return GofmtFormatter(gofmt_command)
    if choice == "builtin":
        return BuiltinFormatter(parser)
    expected = ", ".join(FORMATTER_CHOICES)
    raise ConfigurationError(
        f"Unknown formatter '{name}'. Expected one of: {expected}."
    )


def _diagnostic_lines(output: str) -> list[str]:
    return [line for line in output.splitlines() if line.strip()]
