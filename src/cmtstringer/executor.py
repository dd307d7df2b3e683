"""Sequential generation pipeline over one source directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional

from .checker import PackageChecker
from .config import GeneratorConfig
from .core.files import ensure_directory
from .errors import SemanticValidationError, WriteError
from .extractor import extract_candidates
from .formatter import SourceFormatter
from .labels import derive_entries
from .model import Package
from .renderer import render_source

OUTPUT_SUFFIX = "_string_gen.go"
OUTPUT_MODE = 0o664


class PackageStatus(Enum):
    GENERATED = "generated"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class PackageOutcome:
    """Result of processing one package."""

    package: str
    status: PackageStatus
    output_path: Optional[Path] = None
    entry_count: int = 0
    source: Optional[str] = None


@dataclass(frozen=True)
class GeneratorDependencies:
    """Collaborators used by :func:`run_generation`."""

    parse_directory: Callable[[Path], Dict[str, Package]]
    checker: PackageChecker
    formatter: SourceFormatter


@dataclass(frozen=True)
class GenerationSummary:
    directory: Path
    outcomes: tuple[PackageOutcome, ...]

    @property
    def generated_count(self) -> int:
        return sum(
            1
            for outcome in self.outcomes
            if outcome.status is PackageStatus.GENERATED
        )

    @property
    def skipped_count(self) -> int:
        return sum(
            1
            for outcome in self.outcomes
            if outcome.status is PackageStatus.SKIPPED
        )

    @property
    def exit_code(self) -> int:
        # Fatal conditions raise; reaching a summary means success.
        return 0


def run_generation(
    directory: Path,
    *,
    config: GeneratorConfig,
    dependencies: GeneratorDependencies,
    logger: logging.Logger,
    dry_run: bool = False,
) -> GenerationSummary:
    """Generate one ``String()`` file per package found in ``directory``.

    Packages without a matching constant are skipped. Any error aborts the
    whole run; files already written for earlier packages are left in place.
    """

    source_dir = ensure_directory(directory)
    logger.info(
        "Starting cmtstringer run",
        extra={
            "directory": str(source_dir),
            "type_name": config.type_name,
            "dry_run": dry_run,
        },
    )

    packages = dependencies.parse_directory(source_dir)
    multiple = len(packages) > 1
    logger.info(
        "Parsed package sources",
        extra={"packages": list(packages)},
    )

    outcomes: list[PackageOutcome] = []
    for package_name, package in packages.items():
        outcome = _process_package(
            package,
            config=config,
            dependencies=dependencies,
            logger=logger,
            output=output_path_for(
                source_dir,
                config.type_name,
                package_name,
                output=config.output,
                multiple=multiple,
            ),
            dry_run=dry_run,
        )
        outcomes.append(outcome)

    summary = GenerationSummary(directory=source_dir, outcomes=tuple(outcomes))
    logger.info(
        "Completed cmtstringer run",
        extra={
            "generated_count": summary.generated_count,
            "skipped_count": summary.skipped_count,
        },
    )
    return summary


def _process_package(
    package: Package,
    *,
    config: GeneratorConfig,
    dependencies: GeneratorDependencies,
    logger: logging.Logger,
    output: Path,
    dry_run: bool,
) -> PackageOutcome:
    result = dependencies.checker.check(package)
    if not result.ok:
        raise SemanticValidationError(
            f"checking package {package.name}", result.diagnostics
        )

    candidates = extract_candidates(package, config.type_name)
    if not candidates:
        logger.info(
            "No constants of the target type; skipping package",
            extra={"package": package.name, "type_name": config.type_name},
        )
        return PackageOutcome(package=package.name, status=PackageStatus.SKIPPED)

    entries = derive_entries(candidates)
    unlabeled = [entry.name for entry in entries if not entry.message]
    if unlabeled:
        logger.debug(
            "Constants without a matching doc comment",
            extra={"package": package.name, "constants": unlabeled},
        )

    text = render_source(package.name, config.type_name, entries)
    formatted = dependencies.formatter.format(text)

    if dry_run:
        logger.info(
            "Rendered package (dry run)",
            extra={"package": package.name, "entry_count": len(entries)},
        )
    else:
        write_output(output, formatted)
        logger.info(
            "Wrote generated file",
            extra={
                "package": package.name,
                "output_path": str(output),
                "entry_count": len(entries),
            },
        )

    return PackageOutcome(
        package=package.name,
        status=PackageStatus.GENERATED,
        output_path=output,
        entry_count=len(entries),
        source=formatted,
    )


def output_path_for(
    directory: Path,
    type_name: str,
    package_name: str,
    *,
    output: Optional[Path] = None,
    multiple: bool = False,
) -> Path:
    """Return the destination for ``package_name``'s generated file.

    The default is ``<directory>/<type>_string_gen.go`` with the type name
    lower-cased. With several packages in one directory the file name gets a
    ``<package>_`` prefix.
    """

    if output is not None:
        target = Path(output)
    else:
        target = Path(directory) / f"{type_name.lower()}{OUTPUT_SUFFIX}"
    if multiple:
        target = target.with_name(f"{package_name}_{target.name}")
    return target


def write_output(path: Path, text: str) -> Path:
    try:
        path.write_text(text, encoding="utf-8")
        path.chmod(OUTPUT_MODE)
    except OSError as exc:
        raise WriteError(f"Failed to write {path}: {exc}") from exc
    return path


__all__ = [
    "GenerationSummary",
    "GeneratorDependencies",
    "OUTPUT_SUFFIX",
    "PackageOutcome",
    "PackageStatus",
    "output_path_for",
    "run_generation",
    "write_output",
]
