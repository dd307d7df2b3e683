"""Logger setup: JSON-lines run log plus an optional stderr console."""

from __future__ import annotations

import json
import logging
import sys
import tempfile
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

__all__ = [
    "JsonLogFormatter",
    "configure_logger",
]

_FILE_MARKER = "_cmtstringer_file"
_CONSOLE_MARKER = "_cmtstringer_console"


class JsonLogFormatter(logging.Formatter):
    """Emit log records as one JSON object per line."""

    _RESERVED = frozenset(
        logging.LogRecord(
            "", logging.INFO, "", 0, "", None, None
        ).__dict__.keys()
    ) | {"message", "asctime", "taskName"}

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        extras = {
            key: _coerce_value(value)
            for key, value in record.__dict__.items()
            if key not in self._RESERVED
        }
        if extras:
            payload["extra"] = extras
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logger(
    name: str,
    *,
    log_dir: Path,
    level: str = "INFO",
    verbose: bool = False,
    max_bytes: int = 1024 * 1024,
    backup_count: int = 3,
    filename: str | None = None,
) -> tuple[logging.Logger, Path]:
    """Configure ``name`` with a rotating JSON file handler.

    Repeated calls reuse the existing handlers. ``verbose`` adds a plain text
    console handler on stderr and lowers the file level to DEBUG.
    """

    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(logging.DEBUG)

    file_level = logging.DEBUG if verbose else _coerce_level(level)
    log_name = filename or f"{name.rsplit('.', 1)[-1]}.log"

    handler, path = _ensure_file_handler(
        logger,
        path=_prepare_log_dir(log_dir) / log_name,
        filename=log_name,
        max_bytes=max_bytes,
        backup_count=backup_count,
    )
    handler.setLevel(file_level)

    if verbose:
        _enable_console_handler(logger)
    else:
        _disable_console_handler(logger)

    return logger, path


def _coerce_level(level: str) -> int:
    numeric = logging.getLevelName(level.upper())
    if isinstance(numeric, int):
        return numeric
    return logging.INFO


def _ensure_file_handler(
    logger: logging.Logger,
    *,
    path: Path,
    filename: str,
    max_bytes: int,
    backup_count: int,
) -> tuple[logging.Handler, Path]:
    for handler in list(logger.handlers):
        if getattr(handler, _FILE_MARKER, False):
            current = Path(handler.baseFilename)  # type: ignore[attr-defined]
            if current == path.absolute():
                return handler, path
            logger.removeHandler(handler)
            handler.close()

    try:
        managed = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        active = path
    except PermissionError:
        active = _prepare_log_dir(_fallback_log_dir()) / filename
        managed = RotatingFileHandler(
            active,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
    managed.setFormatter(JsonLogFormatter())
    setattr(managed, _FILE_MARKER, True)
    logger.addHandler(managed)
    return managed, active


def _enable_console_handler(logger: logging.Logger) -> None:
    for handler in logger.handlers:
        if getattr(handler, _CONSOLE_MARKER, False):
            return
    console = logging.StreamHandler(stream=sys.stderr)
    console.setLevel(logging.DEBUG)
    console.setFormatter(
        logging.Formatter("cmtstringer: %(levelname)s %(message)s")
    )
    setattr(console, _CONSOLE_MARKER, True)
    logger.addHandler(console)


def _disable_console_handler(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if getattr(handler, _CONSOLE_MARKER, False):
            logger.removeHandler(handler)
            handler.close()


def _coerce_value(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {str(key): _coerce_value(val) for key, val in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_coerce_value(item) for item in value]
    return repr(value)


def _prepare_log_dir(log_dir: Path) -> Path:
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        return log_dir
    except PermissionError:
        fallback = _fallback_log_dir()
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


def _fallback_log_dir() -> Path:
    return Path(tempfile.gettempdir()) / "cmtstringer-logs"
