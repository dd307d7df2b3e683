from __future__ import annotations

from pathlib import Path

import pytest

from cmtstringer import config as cfg
from cmtstringer.checker import DeclarationChecker, GoVetChecker, build_checker
from cmtstringer.errors import ConfigurationError


def _write_config(path: Path, body: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body.strip() + "\n", encoding="utf-8")
    return path


def test_load_config_defaults_use_workspace(tmp_path):
    workspace_root = tmp_path / "workspace"

    result = cfg.load_config(
        overrides=cfg.ConfigOverrides(type_name="StatusCode"),
        env={},
        workspace_path=workspace_root,
    )

    assert result.layout.home == workspace_root.resolve()
    assert result.config_path is None
    assert result.config.type_name == "StatusCode"
    assert result.config.output is None
    assert result.config.checker == "auto"
    assert result.config.formatter == "auto"
    assert result.config.go_command == "go"
    assert result.config.gofmt_command == "gofmt"
    assert result.config.log_level == "INFO"


def test_load_config_requires_type(tmp_path):
    with pytest.raises(ConfigurationError) as excinfo:
        cfg.load_config(env={}, workspace_path=tmp_path / "ws")

    assert "-type" in str(excinfo.value)


def test_load_config_reads_workspace_file(tmp_path):
    workspace_root = tmp_path / "ws"
    config_file = _write_config(
        workspace_root / "config" / cfg.CONFIG_FILENAME,
        """
        [generate]
        type = "Color"
        output = "colors.go"

        [tools]
        checker = "none"
        formatter = "BUILTIN"
        gofmt = "/opt/go/bin/gofmt"

        [logging]
        level = "warning"
        """,
    )

    result = cfg.load_config(env={}, workspace_path=workspace_root)

    assert result.config_path == config_file
    assert result.config.type_name == "Color"
    assert result.config.output == Path("colors.go")
    assert result.config.checker == "none"
    assert result.config.formatter == "builtin"
    assert result.config.gofmt_command == "/opt/go/bin/gofmt"
    assert result.config.log_level == "WARNING"


def test_load_config_env_overrides_file(tmp_path):
    config_file = _write_config(
        tmp_path / "elsewhere.toml",
        """
        [generate]
        type = "Color"

        [tools]
        checker = "builtin"
        """,
    )
    env_map = {
        cfg.CONFIG_ENV: str(config_file),
        f"{cfg.ENV_PREFIX}TYPE": "Shade",
        f"{cfg.ENV_PREFIX}CHECKER": "go",
        f"{cfg.ENV_PREFIX}GO": "/usr/local/go/bin/go",
        f"{cfg.ENV_PREFIX}LOG_LEVEL": "debug",
    }

    result = cfg.load_config(env=env_map, workspace_path=tmp_path / "ws")

    assert result.config_path == config_file
    assert result.config.type_name == "Shade"
    assert result.config.checker == "go"
    assert result.config.go_command == "/usr/local/go/bin/go"
    assert result.config.log_level == "DEBUG"


def test_load_config_cli_overrides_env(tmp_path):
    env_map = {
        f"{cfg.ENV_PREFIX}TYPE": "Shade",
        f"{cfg.ENV_PREFIX}OUTPUT": "env.go",
        f"{cfg.ENV_PREFIX}FORMATTER": "gofmt",
    }
    overrides = cfg.ConfigOverrides(
        type_name="Color",
        output=Path("cli.go"),
        formatter="builtin",
        log_level="error",
    )

    result = cfg.load_config(
        env=env_map,
        overrides=overrides,
        workspace_path=tmp_path / "ws",
    )

    assert result.config.type_name == "Color"
    assert result.config.output == Path("cli.go")
    assert result.config.formatter == "builtin"
    assert result.config.log_level == "ERROR"


def test_blank_env_values_are_ignored(tmp_path):
    env_map = {
        f"{cfg.ENV_PREFIX}TYPE": "   ",
        f"{cfg.ENV_PREFIX}CHECKER": "",
    }

    result = cfg.load_config(
        overrides=cfg.ConfigOverrides(type_name="Color"),
        env=env_map,
        workspace_path=tmp_path / "ws",
    )

    assert result.config.type_name == "Color"
    assert result.config.checker == "auto"


def test_explicit_missing_config_errors(tmp_path):
    with pytest.raises(ConfigurationError):
        cfg.load_config(
            config_path=tmp_path / "absent.toml",
            overrides=cfg.ConfigOverrides(type_name="Color"),
            env={},
            workspace_path=tmp_path / "ws",
        )


def test_env_missing_config_errors(tmp_path):
    env_map = {cfg.CONFIG_ENV: str(tmp_path / "absent.toml")}

    with pytest.raises(ConfigurationError):
        cfg.load_config(
            overrides=cfg.ConfigOverrides(type_name="Color"),
            env=env_map,
            workspace_path=tmp_path / "ws",
        )


@pytest.mark.parametrize(
    "body",
    [
        '[generate]\ntype = "Color"\nunknown = 1\n',
        '[extras]\nvalue = "x"\n',
        'generate = "Color"\n',
        "[generate\n",
        "[generate]\ntype = 3\n",
    ],
)
def test_invalid_config_file_errors(tmp_path, body):
    config_file = tmp_path / "bad.toml"
    config_file.write_text(body, encoding="utf-8")

    with pytest.raises(ConfigurationError):
        cfg.load_config(
            config_path=config_file,
            env={},
            workspace_path=tmp_path / "ws",
        )


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        (cfg.ConfigOverrides(type_name="Color", checker="lint"), "checker"),
        (
            cfg.ConfigOverrides(type_name="Color", formatter="black"),
            "formatter",
        ),
    ],
)
def test_unknown_tool_choice_errors(tmp_path, overrides, message):
    with pytest.raises(ConfigurationError) as excinfo:
        cfg.load_config(
            overrides=overrides, env={}, workspace_path=tmp_path / "ws"
        )

    assert message in str(excinfo.value)


def test_workspace_error_becomes_configuration_error(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        cfg.load_config(
            overrides=cfg.ConfigOverrides(type_name="Color"),
            env={},
            workspace_path=blocker,
        )


def test_default_checker_uses_go_vet_when_installed(tmp_path):
    result = cfg.load_config(
        overrides=cfg.ConfigOverrides(type_name="Color"),
        env={},
        workspace_path=tmp_path / "ws",
    )

    checker = build_checker(
        result.config.checker,
        go_command=result.config.go_command,
        which=lambda name: f"/usr/local/go/bin/{name}",
    )
    fallback = build_checker(
        result.config.checker,
        go_command=result.config.go_command,
        which=lambda name: None,
    )

    assert result.config.checker == "auto"
    assert isinstance(checker, GoVetChecker)
    assert checker.command == "go"
    assert isinstance(fallback, DeclarationChecker)
