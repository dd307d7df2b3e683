"""Shared configuration, workspace, file and logging helpers."""

from __future__ import annotations

from .config import (
    TomlConfigError,
    load_toml,
    merge_defaults,
    write_toml_template,
)
from .config_templates import ConfigTemplate, ConfigTemplateError, get_template
from .files import ensure_directory, iter_go_files, read_source_bytes
from .logging import JsonLogFormatter, configure_logger
from .workspace import (
    WORKSPACE_ENV,
    WorkspaceError,
    WorkspaceLayout,
    ensure_workspace,
)

__all__ = [
    "TomlConfigError",
    "load_toml",
    "merge_defaults",
    "write_toml_template",
    "ConfigTemplate",
    "ConfigTemplateError",
    "get_template",
    "ensure_directory",
    "iter_go_files",
    "read_source_bytes",
    "JsonLogFormatter",
    "configure_logger",
    "WORKSPACE_ENV",
    "WorkspaceError",
    "WorkspaceLayout",
    "ensure_workspace",
]
