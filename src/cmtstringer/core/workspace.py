"""Per-user workspace holding the default config file and run logs."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, MutableMapping


WORKSPACE_ENV = "CMTSTRINGER_HOME"
DEFAULT_WORKSPACE = Path.home() / ".cmtstringer"

_SUBDIRS = {
    "config": "config",
    "logs": "logs",
}


class WorkspaceError(RuntimeError):
    """Raised when the workspace layout cannot be prepared."""


@dataclass(frozen=True)
class WorkspaceLayout:
    home: Path
    directories: Mapping[str, Path]

    def path_for(self, key: str) -> Path:
        try:
            return self.directories[key]
        except KeyError as exc:
            raise KeyError(f"Unknown workspace directory '{key}'.") from exc


def ensure_workspace(
    *,
    env: Mapping[str, str] | None = None,
    path: Path | None = None,
) -> WorkspaceLayout:
    """Create the workspace directories and return their layout.

    Without an explicit ``path`` or ``CMTSTRINGER_HOME`` a permission error on
    the default location falls back to a directory under the system temp dir.
    """

    env_map = os.environ if env is None else env
    base, has_override = _resolve_base(env_map, override=path)

    candidates = [base]
    if not has_override:
        fallback = _fallback_base()
        if fallback != base:
            candidates.append(fallback)

    last_error: Exception | None = None
    for candidate in candidates:
        try:
            return _materialize_layout(candidate)
        except PermissionError as exc:
            last_error = exc
    raise WorkspaceError(
        "Unable to prepare workspace at {0}".format(base)
    ) from last_error


def _resolve_base(
    env: Mapping[str, str], *, override: Path | None
) -> tuple[Path, bool]:
    if override is not None:
        target, provided = override, True
    else:
        custom = (env.get(WORKSPACE_ENV) or "").strip()
        if custom:
            target, provided = Path(custom), True
        else:
            target, provided = DEFAULT_WORKSPACE, False
    try:
        return target.expanduser().resolve(), provided
    except FileNotFoundError:
        return target.expanduser().absolute(), provided


def _fallback_base() -> Path:
    return Path(tempfile.gettempdir()) / "cmtstringer"


def _materialize_layout(base: Path) -> WorkspaceLayout:
    if base.exists() and not base.is_dir():
        raise WorkspaceError(
            "Configured workspace exists and is not a directory: {0}".format(
                base
            )
        )
    base.mkdir(parents=True, exist_ok=True)

    directories: MutableMapping[str, Path] = {}
    for key, relative in _SUBDIRS.items():
        candidate = base / relative
        if candidate.exists() and not candidate.is_dir():
            raise WorkspaceError(
                "Expected workspace directory for '{0}' but found a file: "
                "{1}".format(key, candidate)
            )
        candidate.mkdir(parents=True, exist_ok=True)
        directories[key] = candidate

    return WorkspaceLayout(
        home=base, directories=MappingProxyType(dict(directories))
    )
