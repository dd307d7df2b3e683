"""Packaged configuration template for cmtstringer."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from pathlib import Path

from .config import TomlConfigError, write_toml_template

__all__ = [
    "ConfigTemplate",
    "ConfigTemplateError",
    "get_template",
]


class ConfigTemplateError(RuntimeError):
    """Raised when the configuration template cannot be read or written."""


@dataclass(frozen=True)
class ConfigTemplate:
    name: str
    filename: str
    package: str

    def read_text(self) -> str:
        try:
            resource = resources.files(self.package).joinpath(self.filename)
            return resource.read_text(encoding="utf-8")
        except FileNotFoundError as exc:  # pragma: no cover - package state
            raise ConfigTemplateError(
                f"Template '{self.name}' resource not found."
            ) from exc

    def write(self, path: Path, *, overwrite: bool = False) -> Path:
        """Write the template to ``path`` using the TOML helper semantics."""

        try:
            return write_toml_template(
                path, template=self.read_text(), overwrite=overwrite
            )
        except TomlConfigError as exc:
            raise ConfigTemplateError(str(exc)) from exc


_TEMPLATES: dict[str, ConfigTemplate] = {
    "cmtstringer": ConfigTemplate(
        name="cmtstringer",
        filename="template.toml",
        package="cmtstringer",
    ),
}


def get_template(name: str = "cmtstringer") -> ConfigTemplate:
    try:
        return _TEMPLATES[name]
    except KeyError as exc:
        raise ConfigTemplateError(f"Unknown config template '{name}'.") from exc
