"""Error taxonomy shared by the cmtstringer pipeline."""

from __future__ import annotations

from typing import Sequence

__all__ = [
    "CmtStringerError",
    "ConfigurationError",
    "InputNotFoundError",
    "ParseError",
    "SemanticValidationError",
    "RenderError",
    "FormatError",
    "WriteError",
]


class CmtStringerError(RuntimeError):
    """Base class for every fatal generation failure."""


class ConfigurationError(CmtStringerError):
    """Raised when required options are missing or invalid."""


class InputNotFoundError(CmtStringerError):
    """Raised when the source directory is missing or not a directory."""


class _DiagnosticError(CmtStringerError):
    def __init__(self, message: str, diagnostics: Sequence[str] = ()) -> None:
        self.diagnostics = tuple(diagnostics)
        if self.diagnostics:
            message = "{0}\n{1}".format(
                message, "\n".join(f"  {line}" for line in self.diagnostics)
            )
        super().__init__(message)


class ParseError(_DiagnosticError):
    """Raised when the package sources cannot be parsed."""


class SemanticValidationError(_DiagnosticError):
    """Raised when a package fails the compiles-cleanly gate."""


class RenderError(CmtStringerError):
    """Raised when the method template cannot be rendered."""


class FormatError(_DiagnosticError):
    """Raised when generated text is not valid Go source."""


class WriteError(CmtStringerError):
    """Raised when the generated file cannot be written."""
