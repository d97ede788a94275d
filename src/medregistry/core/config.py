from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field


DEFAULT_PORT = 3801

LOG_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def _split_origins(raw: str) -> tuple[str, ...]:
    return tuple(o.strip() for o in raw.split(",") if o.strip())


@dataclass(frozen=True)
class Settings:
    """Process settings, read from MEDREGISTRY_* environment variables.

    CLI flags override these; tests construct `Settings(...)` directly.
    """

    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT
    owner: str | None = None
    log_level: str = "info"
    url: str = ""
    cors_origins: tuple[str, ...] = field(
        default_factory=lambda: ("http://localhost:3801", "http://127.0.0.1:3801")
    )

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        port_raw = os.getenv("MEDREGISTRY_PORT", "").strip()
        try:
            port = int(port_raw) if port_raw else defaults.port
        except ValueError:
            raise ValueError(f"MEDREGISTRY_PORT must be an integer, got {port_raw!r}")
        log_level = os.getenv("MEDREGISTRY_LOG_LEVEL", defaults.log_level).strip().lower()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"MEDREGISTRY_LOG_LEVEL must be one of {sorted(LOG_LEVELS)}, got {log_level!r}")
        origins_raw = os.getenv("MEDREGISTRY_CORS_ORIGINS", "")
        return cls(
            host=os.getenv("MEDREGISTRY_HOST", defaults.host),
            port=port,
            owner=os.getenv("MEDREGISTRY_OWNER") or None,
            log_level=log_level,
            url=os.getenv("MEDREGISTRY_URL", ""),
            cors_origins=_split_origins(origins_raw) if origins_raw else defaults.cors_origins,
        )
