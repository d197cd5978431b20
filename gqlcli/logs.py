"""Logging setup for the gqlcli logger tree.

Two formats, selected by GQL_LOG_FMT:

- txt:  time=2026-01-02T15:04:05 level=INFO msg="building cli" config=.gql
- json: {"time": "...", "level": "INFO", "msg": "building cli", "config": ".gql"}

Structured fields are passed with ``extra=`` and only the keys in FIELDS are
rendered. Only the ``gqlcli`` logger is configured; the root logger is left
alone.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import IO, Any

from .config import LOG_FORMATS, Settings
from .errors import ConfigError

LOGGER_NAME = "gqlcli"

FIELDS = ("config", "operation", "variable", "value", "url", "error")

_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"


def log_level(name: str) -> int:
    """Map a GQL_LOG_LVL value to a logging level; unknown names mean INFO."""
    return _LEVELS.get(name.lower(), logging.INFO)


def _fields(record: logging.LogRecord) -> dict[str, Any]:
    return {k: getattr(record, k) for k in FIELDS if hasattr(record, k)}


def _quote(value: Any) -> str:
    text = str(value)
    if not text or any(c in text for c in ' ="\n\t'):
        return json.dumps(text)
    return text


class TextFormatter(logging.Formatter):
    """key=value lines."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            f"time={self.formatTime(record, _TIME_FORMAT)}",
            f"level={record.levelname}",
            f"msg={_quote(record.getMessage())}",
        ]
        parts.extend(f"{k}={_quote(v)}" for k, v in _fields(record).items())
        return " ".join(parts)


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "time": self.formatTime(record, _TIME_FORMAT),
            "level": record.levelname,
            "msg": record.getMessage(),
        }
        for k, v in _fields(record).items():
            data[k] = v if isinstance(v, (int, float, bool)) else str(v)
        return json.dumps(data)


def output_handler(output: str) -> logging.Handler:
    """Resolve GQL_LOG_OUT to a handler; anything but stdout/stderr is a file."""
    if output == "stdout":
        return logging.StreamHandler(sys.stdout)
    if output in ("stderr", ""):
        return logging.StreamHandler(sys.stderr)
    try:
        return logging.FileHandler(output, mode="a", encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot open log output {output!r}: {exc}") from exc


def setup_logging(settings: Settings, stream: IO[str] | None = None) -> logging.Logger:
    """Configure and return the ``gqlcli`` logger.

    ``stream`` overrides the GQL_LOG_OUT destination (used by tests).
    """
    if settings.log_format not in LOG_FORMATS:
        raise ConfigError(f"unknown log format: {settings.log_format}")

    formatter: logging.Formatter
    if settings.log_format == "json":
        formatter = JsonFormatter()
    else:
        formatter = TextFormatter()

    if stream is not None:
        handler: logging.Handler = logging.StreamHandler(stream)
    else:
        handler = output_handler(settings.log_output)
    handler.setFormatter(formatter)

    logger = logging.getLogger(LOGGER_NAME)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.addHandler(handler)
    logger.setLevel(log_level(settings.log_level))
    logger.propagate = False
    return logger
