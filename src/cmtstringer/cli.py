"""Command line entry point: ``cmtstringer [options] -type T [directory]``."""

from __future__ import annotations

import argparse
import sys
from importlib import metadata
from pathlib import Path
from typing import Sequence

from cmtstringer.core import config_templates
from cmtstringer.core import workspace as workspace_mod
from cmtstringer.core.config_templates import ConfigTemplateError
from cmtstringer.core.logging import configure_logger
from cmtstringer.core.workspace import WorkspaceError

from .checker import CHECKER_CHOICES, build_checker
from .config import CONFIG_FILENAME, ConfigOverrides, load_config
from .errors import CmtStringerError, ConfigurationError, InputNotFoundError
from .executor import GenerationSummary, GeneratorDependencies, run_generation
from .formatter import FORMATTER_CHOICES, build_formatter
from .parser import GoSourceParser

PROG = "cmtstringer"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        usage="%(prog)s [options] -type T [directory]",
        description=(
            "Generate a String() method for a Go constant type, returning "
            "the doc comment text of each constant."
        ),
        epilog=(
            "Run `cmtstringer config init` to scaffold the default "
            f"{CONFIG_FILENAME} template."
        ),
    )
    parser.add_argument(
        "directory",
        nargs="?",
        type=Path,
        default=Path("."),
        help="Package directory to process (defaults to the current one).",
    )
    parser.add_argument(
        "-type",
        "--type",
        dest="type_name",
        help="Type name of const; must be set.",
    )
    parser.add_argument(
        "-output",
        "--output",
        type=Path,
        help="Output file name; default srcdir/<type>_string_gen.go.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a TOML config file (defaults to the workspace config).",
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        help="Override the workspace root holding config and logs.",
    )
    parser.add_argument(
        "--checker",
        choices=CHECKER_CHOICES,
        help="Package validation gate to run before extraction.",
    )
    parser.add_argument(
        "--formatter",
        choices=FORMATTER_CHOICES,
        help="Formatter used to validate the generated source.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print generated source to stdout instead of writing files.",
    )
    parser.add_argument(
        "--log-level",
        help="Set the logging level for the run (defaults to INFO).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Echo log records to stderr.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {_version()}",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args_list = list(argv) if argv is not None else list(sys.argv[1:])

    if args_list[:1] == ["config"]:
        return _handle_config(args_list[1:])

    parser = _build_parser()
    args = parser.parse_args(args_list)

    overrides = ConfigOverrides(
        type_name=args.type_name,
        output=args.output,
        checker=args.checker,
        formatter=args.formatter,
        log_level=args.log_level,
    )
    try:
        load_result = load_config(
            config_path=args.config,
            overrides=overrides,
            workspace_path=args.workspace,
        )
    except ConfigurationError as exc:
        parser.error(str(exc))

    config = load_result.config
    logger, log_path = configure_logger(
        "cmtstringer",
        log_dir=load_result.layout.path_for("logs"),
        level=config.log_level,
        verbose=args.verbose,
    )
    logger.debug("cmtstringer CLI invoked", extra={"argv": args_list})

    try:
        dependencies = _build_dependencies(config)
        summary = run_generation(
            args.directory,
            config=config,
            dependencies=dependencies,
            logger=logger,
            dry_run=args.dry_run,
        )
    except InputNotFoundError as exc:
        parser.error(str(exc))
    except CmtStringerError as exc:
        logger.error("Generation failed", extra={"error": str(exc)})
        sys.stderr.write(f"{PROG}: {exc}\n")
        return 1

    if args.dry_run:
        _print_sources(summary)
    else:
        _print_summary(summary, log_path)
    return summary.exit_code


def _build_dependencies(config) -> GeneratorDependencies:
    source_parser = GoSourceParser()
    return GeneratorDependencies(
        parse_directory=source_parser.parse_directory,
        checker=build_checker(config.checker, go_command=config.go_command),
        formatter=build_formatter(
            config.formatter,
            parser=source_parser,
            gofmt_command=config.gofmt_command,
        ),
    )


def _print_summary(summary: GenerationSummary, log_path: Path) -> None:
    lines = [f"{PROG} summary:"]
    for outcome in summary.outcomes:
        if outcome.output_path is not None:
            lines.append(
                "  {0}: {1} constants -> {2}".format(
                    outcome.package, outcome.entry_count, outcome.output_path
                )
            )
        else:
            lines.append(
                "  {0}: {1}".format(outcome.package, outcome.status.value)
            )
    lines.append("  generated: {0}".format(summary.generated_count))
    lines.append("  skipped:   {0}".format(summary.skipped_count))
    lines.append("  log file:  {0}".format(log_path))
    sys.stdout.write("\n".join(lines) + "\n")


def _print_sources(summary: GenerationSummary) -> None:
    for outcome in summary.outcomes:
        if outcome.source is None:
            continue
        sys.stdout.write(f"// {outcome.output_path}\n{outcome.source}")


def _version() -> str:
    try:
        return metadata.version(PROG)
    except metadata.PackageNotFoundError:
        return "unknown"


def _handle_config(argv: Sequence[str]) -> int:
    parser = argparse.ArgumentParser(
        prog=f"{PROG} config",
        description="Manage the cmtstringer configuration file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    init_parser = subparsers.add_parser(
        "init", help=f"Write the default {CONFIG_FILENAME} template."
    )
    init_parser.add_argument(
        "--path",
        type=Path,
        help="Destination for the config TOML (defaults to the workspace).",
    )
    init_parser.add_argument(
        "--workspace",
        type=Path,
        help="Workspace root used when resolving the default config path.",
    )
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite the destination if a config already exists.",
    )
    args = parser.parse_args(argv)

    try:
        target = _resolve_config_target(args)
    except WorkspaceError as exc:
        sys.stderr.write(str(exc) + "\n")
        return 1

    try:
        written = config_templates.get_template().write(
            target, overwrite=args.force
        )
    except ConfigTemplateError as exc:
        sys.stderr.write(str(exc) + "\n")
        return 1

    sys.stdout.write(f"Wrote {PROG} config to {written}\n")
    return 0


def _resolve_config_target(args: argparse.Namespace) -> Path:
    if args.path is not None:
        candidate = args.path.expanduser()
        if not candidate.is_absolute():
            candidate = (Path.cwd() / candidate).resolve()
        return candidate

    layout = workspace_mod.ensure_workspace(path=args.workspace)
    return layout.path_for("config") / CONFIG_FILENAME


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
