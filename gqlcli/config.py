"""Environment-derived settings.

Read once at startup and passed down explicitly; nothing below the entry
point looks at os.environ.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from .errors import ConfigError
from .naming import command_name

CONFIG_ENV = "GQL_CONF"
URL_ENV = "GQL_URL"
TIMEOUT_ENV = "GQL_TIMEOUT"
LOG_LEVEL_ENV = "GQL_LOG_LVL"
LOG_FORMAT_ENV = "GQL_LOG_FMT"
LOG_OUTPUT_ENV = "GQL_LOG_OUT"

DEFAULT_CONFIG = ".gql"
DEFAULT_URL = "http://_gql._tcp.local/query"

LOG_LEVELS = ("debug", "info", "warn", "error")
LOG_FORMATS = ("txt", "json")


def _get_env(environ: Mapping[str, str], name: str, default: str) -> str:
    """Return an environment value, treating empty strings as unset."""
    value = environ.get(name, "")
    return value or default


def _parse_timeout(raw: str) -> float | None:
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{TIMEOUT_ENV}: not a number: {raw!r}") from exc
    if timeout < 0:
        raise ConfigError(f"{TIMEOUT_ENV}: must not be negative: {raw!r}")
    return timeout


@dataclass(frozen=True)
class Settings:
    config: str = DEFAULT_CONFIG
    url: str = DEFAULT_URL
    timeout: float | None = None
    log_level: str = "info"
    log_format: str = "txt"
    log_output: str = "stderr"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from ``environ`` (``os.environ`` by default)."""
        env = os.environ if environ is None else environ
        return cls(
            config=_get_env(env, CONFIG_ENV, DEFAULT_CONFIG),
            url=_get_env(env, URL_ENV, DEFAULT_URL),
            timeout=_parse_timeout(_get_env(env, TIMEOUT_ENV, "")),
            log_level=_get_env(env, LOG_LEVEL_ENV, "info"),
            log_format=_get_env(env, LOG_FORMAT_ENV, "txt"),
            log_output=_get_env(env, LOG_OUTPUT_ENV, "stderr"),
        )

    @property
    def command_name(self) -> str:
        return command_name(self.config)
