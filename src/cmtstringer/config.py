"""Configuration loader for generation runs."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, MutableMapping, Optional

from .checker import CHECKER_CHOICES
from .core import config as core_config
from .core import workspace as workspace_mod
from .errors import ConfigurationError
from .formatter import FORMATTER_CHOICES

CONFIG_FILENAME = "cmtstringer.toml"
CONFIG_ENV = "CMTSTRINGER_CONFIG"
ENV_PREFIX = "CMTSTRINGER_"

_DEFAULT_CHECKER = "auto"
_DEFAULT_FORMATTER = "auto"
_DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class GeneratorConfig:
    """Fully resolved options for one invocation."""

    type_name: str
    output: Optional[Path]
    checker: str
    formatter: str
    go_command: str
    gofmt_command: str
    log_level: str


@dataclass(frozen=True)
class ConfigOverrides:
    """Command line values applied on top of environment and file options."""

    type_name: Optional[str] = None
    output: Optional[Path] = None
    checker: Optional[str] = None
    formatter: Optional[str] = None
    log_level: Optional[str] = None


@dataclass(frozen=True)
class LoadResult:
    config: GeneratorConfig
    layout: workspace_mod.WorkspaceLayout
    config_path: Optional[Path]


def load_config(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[ConfigOverrides] = None,
    env: Optional[Mapping[str, str]] = None,
    workspace_path: Optional[Path] = None,
) -> LoadResult:
    """Resolve options with precedence CLI > environment > TOML > defaults.

    A missing target type is a :class:`ConfigurationError`, as is an
    explicitly requested config file that does not exist.
    """

    overrides = overrides or ConfigOverrides()
    env_map = os.environ if env is None else env

    try:
        layout = workspace_mod.ensure_workspace(
            env=env_map, path=workspace_path
        )
    except workspace_mod.WorkspaceError as exc:
        raise ConfigurationError(str(exc)) from exc

    requested_path = _resolve_config_path(
        config_path=config_path,
        env_map=env_map,
        default_path=layout.path_for("config") / CONFIG_FILENAME,
    )

    table = _default_table()
    loaded_path: Optional[Path] = None
    if requested_path.exists():
        try:
            core_config.merge_defaults(
                table, core_config.load_toml(requested_path)
            )
        except core_config.TomlConfigError as exc:
            raise ConfigurationError(str(exc)) from exc
        loaded_path = requested_path
    elif config_path is not None or _env_string(env_map, "CONFIG"):
        raise ConfigurationError(f"Config file not found: {requested_path}")

    type_name = _pick_string(
        "generate.type",
        overrides.type_name,
        _env_string(env_map, "TYPE"),
        table["generate"]["type"],
    )
    if not type_name:
        raise ConfigurationError("Type name of const must be set (-type).")

    output_value = _pick_string(
        "generate.output",
        overrides.output,
        _env_string(env_map, "OUTPUT"),
        table["generate"]["output"],
    )

    config = GeneratorConfig(
        type_name=type_name,
        output=Path(output_value).expanduser() if output_value else None,
        checker=_choice(
            "tools.checker",
            _pick_string(
                "tools.checker",
                overrides.checker,
                _env_string(env_map, "CHECKER"),
                table["tools"]["checker"],
            ),
            CHECKER_CHOICES,
        ),
        formatter=_choice(
            "tools.formatter",
            _pick_string(
                "tools.formatter",
                overrides.formatter,
                _env_string(env_map, "FORMATTER"),
                table["tools"]["formatter"],
            ),
            FORMATTER_CHOICES,
        ),
        go_command=_pick_string(
            "tools.go", _env_string(env_map, "GO"), table["tools"]["go"]
        ) or "go",
        gofmt_command=_pick_string(
            "tools.gofmt",
            _env_string(env_map, "GOFMT"),
            table["tools"]["gofmt"],
        ) or "gofmt",
        log_level=(
            _pick_string(
                "logging.level",
                overrides.log_level,
                _env_string(env_map, "LOG_LEVEL"),
                table["logging"]["level"],
            )
            or _DEFAULT_LOG_LEVEL
        ).upper(),
    )
    return LoadResult(config=config, layout=layout, config_path=loaded_path)


def _default_table() -> MutableMapping[str, MutableMapping[str, object]]:
    return {
        "generate": {"type": "", "output": ""},
        "tools": {
            "checker": _DEFAULT_CHECKER,
            "formatter": _DEFAULT_FORMATTER,
            "go": "go",
            "gofmt": "gofmt",
        },
        "logging": {"level": _DEFAULT_LOG_LEVEL},
    }


def _resolve_config_path(
    *,
    config_path: Optional[Path],
    env_map: Mapping[str, str],
    default_path: Path,
) -> Path:
    if config_path is not None:
        return config_path.expanduser()
    env_candidate = _env_string(env_map, "CONFIG")
    if env_candidate:
        return Path(env_candidate).expanduser()
    return default_path


def _env_string(env_map: Mapping[str, str], key: str) -> Optional[str]:
    raw = env_map.get(f"{ENV_PREFIX}{key}")
    if raw is None:
        return None
    value = raw.strip()
    return value or None


def _pick_string(key: str, *candidates: object) -> Optional[str]:
    for candidate in candidates:
        if candidate is None:
            continue
        if isinstance(candidate, Path):
            return str(candidate)
        if not isinstance(candidate, str):
            raise ConfigurationError(f"{key} must be a string.")
        value = candidate.strip()
        if value:
            return value
    return None


def _choice(key: str, value: Optional[str], choices: tuple[str, ...]) -> str:
    normalized = (value or "").lower()
    if normalized not in choices:
        expected = ", ".join(choices)
        raise ConfigurationError(
            f"Unknown {key} '{value}'. Expected one of: {expected}."
        )
    return normalized


__all__ = [
    "CONFIG_ENV",
    "CONFIG_FILENAME",
    "ConfigOverrides",
    "GeneratorConfig",
    "LoadResult",
    "load_config",
]
