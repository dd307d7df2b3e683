"""Generate Go ``String()`` methods from constant doc comments."""

from __future__ import annotations

from .checker import CheckResult, DeclarationChecker, build_checker
from .config import ConfigOverrides, GeneratorConfig, LoadResult, load_config
from .errors import (
    CmtStringerError,
    ConfigurationError,
    FormatError,
    InputNotFoundError,
    ParseError,
    RenderError,
    SemanticValidationError,
    WriteError,
)
from .executor import (
    GenerationSummary,
    GeneratorDependencies,
    PackageOutcome,
    PackageStatus,
    output_path_for,
    run_generation,
)
from .extractor import CandidateConstant, extract_candidates
from .formatter import BuiltinFormatter, GofmtFormatter, build_formatter
from .labels import DerivedEntry, derive_entries, derive_label
from .model import ConstDecl, Declaration, Package, SourceFile, ValueSpec
from .parser import GoSourceParser
from .renderer import go_quote, render_source

__all__ = [
    "CheckResult",
    "DeclarationChecker",
    "build_checker",
    "ConfigOverrides",
    "GeneratorConfig",
    "LoadResult",
    "load_config",
    "CmtStringerError",
    "ConfigurationError",
    "FormatError",
    "InputNotFoundError",
    "ParseError",
    "RenderError",
    "SemanticValidationError",
    "WriteError",
    "GenerationSummary",
    "GeneratorDependencies",
    "PackageOutcome",
    "PackageStatus",
    "output_path_for",
    "run_generation",
    "CandidateConstant",
    "extract_candidates",
    "BuiltinFormatter",
    "GofmtFormatter",
    "build_formatter",
    "DerivedEntry",
    "derive_entries",
    "derive_label",
    "ConstDecl",
    "Declaration",
    "Package",
    "SourceFile",
    "ValueSpec",
    "GoSourceParser",
    "go_quote",
    "render_source",
]
