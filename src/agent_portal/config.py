from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, TypeVar

from dotenv import load_dotenv


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class PortalConfig:
    env_name: str
    api_base_url: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 10.0
    retries: int = 2
    retry_backoff_seconds: float = 0.3
    verify_ssl: bool = True
    page_size: int = 10
    cache_ttl_seconds: float | None = None
    export_dir: Path = Path("exports")
    demo_data: bool = False

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()


Number = TypeVar("Number", int, float)

_TRUE_FLAGS = {"1", "true", "yes", "on"}


def _env_text(name: str) -> str:
    return (os.getenv(name) or "").strip()


def _env_flag(name: str, default: bool) -> bool:
    raw = _env_text(name)
    return raw.lower() in _TRUE_FLAGS if raw else default


def _env_number(
    name: str,
    default: Number,
    cast: Callable[[str], Number],
    *,
    minimum: Number,
    strict: bool = False,
) -> Number:
    """Read a numeric setting; ``strict`` excludes ``minimum`` itself."""
    raw = _env_text(name)
    if not raw:
        value = default
    else:
        try:
            value = cast(raw)
        except ValueError as exc:
            kind = "an integer" if cast is int else "a number"
            raise ConfigError(f"Invalid {name}: expected {kind}, got {raw!r}") from exc
    if value < minimum or (strict and value == minimum):
        bound = ">" if strict else ">="
        raise ConfigError(f"Invalid {name}: expected {bound} {minimum}, got {value}")
    return value


def load_config(env_file: str | None = None) -> PortalConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    env_name = _env_text("PORTAL_ENV") or "dev"
    api_base_url = _env_text(f"PORTAL_API_BASE_URL_{env_name.upper()}") or _env_text("PORTAL_API_BASE_URL")
    if not api_base_url:
        raise ConfigError("Missing required config values: PORTAL_API_BASE_URL")

    timeout_seconds = _env_number("PORTAL_TIMEOUT_SECONDS", 10.0, float, minimum=0.0, strict=True)
    connect_timeout_seconds = _env_number(
        "PORTAL_CONNECT_TIMEOUT_SECONDS", min(timeout_seconds, 5.0), float, minimum=0.0, strict=True
    )
    read_timeout_seconds = _env_number(
        "PORTAL_READ_TIMEOUT_SECONDS", max(timeout_seconds, connect_timeout_seconds), float, minimum=0.0, strict=True
    )

    cache_ttl_seconds: float | None = None
    if _env_text("PORTAL_CACHE_TTL_SECONDS"):
        cache_ttl_seconds = _env_number("PORTAL_CACHE_TTL_SECONDS", 0.0, float, minimum=0.0, strict=True)

    return PortalConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        connect_timeout_seconds=connect_timeout_seconds,
        read_timeout_seconds=read_timeout_seconds,
        retries=_env_number("PORTAL_RETRIES", 2, int, minimum=0),
        retry_backoff_seconds=_env_number("PORTAL_RETRY_BACKOFF_SECONDS", 0.3, float, minimum=0.0),
        verify_ssl=_env_flag("PORTAL_VERIFY_SSL", True),
        page_size=_env_number("PORTAL_PAGE_SIZE", 10, int, minimum=1),
        cache_ttl_seconds=cache_ttl_seconds,
        export_dir=Path(_env_text("PORTAL_EXPORT_DIR") or "exports"),
        demo_data=_env_flag("PORTAL_DEMO_DATA", False),
    )
