from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_VARIANT",
    "VARIANTS",
    "LOG_LEVELS",
    "ConfigError",
    "Settings",
    "load_settings",
]

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_VARIANT = "books"
VARIANTS = ("books", "hello")
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "TRACE")


class ConfigError(ValueError):
    """Raised when a setting cannot be parsed or is out of range."""


@dataclass(frozen=True)
class Settings:
    """Startup configuration. Fixed for the life of the process."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    variant: str = DEFAULT_VARIANT
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.host:
            raise ConfigError("host must be a non-empty string")
        if not (0 <= self.port <= 65535):
            raise ConfigError(f"port must be in [0,65535], got {self.port}")
        if self.variant not in VARIANTS:
            raise ConfigError(
                f"unknown route variant {self.variant!r}; expected one of {', '.join(VARIANTS)}"
            )
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(
                f"unknown log level {self.log_level!r}; expected one of {', '.join(LOG_LEVELS)}"
            )

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def override(self, **changes: object) -> Settings:
        """Return a copy with the non-None `changes` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _parse_port(raw: str) -> int:
    try:
        return int(raw, 10)
    except ValueError as e:
        raise ConfigError(f"BOOKSERVER_PORT must be an integer, got {raw!r}") from e


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from environment variables.

    Reads BOOKSERVER_HOST, BOOKSERVER_PORT, BOOKSERVER_ROUTES and LOG_LEVEL.
    Unset variables keep their defaults.
    """
    env = os.environ if environ is None else environ
    port_raw = env.get("BOOKSERVER_PORT")
    return Settings(
        host=env.get("BOOKSERVER_HOST", DEFAULT_HOST),
        port=_parse_port(port_raw) if port_raw is not None else DEFAULT_PORT,
        variant=env.get("BOOKSERVER_ROUTES", DEFAULT_VARIANT).lower(),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )
