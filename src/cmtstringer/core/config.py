"""TOML configuration helpers shared by cmtstringer commands."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Mapping, MutableMapping

__all__ = [
    "TomlConfigError",
    "load_toml",
    "merge_defaults",
    "write_toml_template",
]


class TomlConfigError(RuntimeError):
    """Raised when TOML config IO or validation fails."""


def load_toml(path: Path) -> Mapping[str, Any]:
    """Load a TOML document from ``path``.

    Errors surface as :class:`TomlConfigError` so callers can translate them
    into their own configuration errors.
    """

    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except FileNotFoundError as exc:
        raise TomlConfigError(f"Config file not found: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise TomlConfigError(f"Failed to parse config TOML: {exc}") from exc


def merge_defaults(
    base: MutableMapping[str, Any],
    override: Mapping[str, Any],
    *,
    path: str = "",
) -> None:
    """Recursively merge ``override`` into ``base``, rejecting unknown keys."""

    for key, value in override.items():
        dotted = f"{path}{key}"
        if key not in base:
            raise TomlConfigError(f"Unknown configuration key '{dotted}'.")
        current = base[key]
        if isinstance(current, MutableMapping):
            if not isinstance(value, Mapping):
                raise TomlConfigError(
                    "Expected table for '{0}', found {1}.".format(
                        dotted, type(value).__name__
                    )
                )
            merge_defaults(current, value, path=f"{dotted}.")
            continue
        base[key] = value


def write_toml_template(
    path: Path,
    *,
    template: str,
    overwrite: bool = False,
    mode: int = 0o644,
) -> Path:
    """Write ``template`` to ``path`` unless it exists and ``overwrite`` is off."""

    path.parent.mkdir(parents=True, exist_ok=True)
    if path.exists() and not overwrite:
        raise TomlConfigError(f"Config already exists: {path}")
    path.write_text(template, encoding="utf-8")
    try:
        path.chmod(mode)
    except PermissionError:  # pragma: no cover - depends on filesystem
        pass
    return path
