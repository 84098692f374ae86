from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from dotenv import find_dotenv, load_dotenv

if TYPE_CHECKING:
    from .client import HalClient

ROOT_URL_ENV = "HAL_CLIENT_ROOT_URL"
TIMEOUT_ENV = "HAL_CLIENT_TIMEOUT_SECONDS"
MAX_REDIRECTS_ENV = "HAL_CLIENT_MAX_REDIRECTS"


@dataclass(frozen=True)
class ClientSettings:
    root_url: str
    timeout_seconds: float = 10.0
    max_redirects: int = 5


def _env_number(name: str, cast, default):
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}.") from exc


def load_env_config(*, use_dotenv: bool = True) -> ClientSettings:
    """Read client settings from the environment (optionally from a .env file)."""
    if use_dotenv:
        load_dotenv(find_dotenv(usecwd=True))
    return ClientSettings(
        root_url=os.getenv(ROOT_URL_ENV, "").strip(),
        timeout_seconds=_env_number(TIMEOUT_ENV, float, 10.0),
        max_redirects=_env_number(MAX_REDIRECTS_ENV, int, 5),
    )


def create_client_from_env(
    *, use_dotenv: bool = True, settings: Optional[ClientSettings] = None, **kwargs
) -> "HalClient":
    """Create a HalClient from environment variables."""
    from .client import HalClient

    settings = settings or load_env_config(use_dotenv=use_dotenv)
    if not settings.root_url:
        raise ValueError(f"Missing {ROOT_URL_ENV} in environment.")

    kwargs.setdefault("timeout_seconds", settings.timeout_seconds)
    kwargs.setdefault("max_redirects", settings.max_redirects)
    return HalClient(settings.root_url, **kwargs)


__all__ = [
    "ClientSettings",
    "load_env_config",
    "create_client_from_env",
    "ROOT_URL_ENV",
    "TIMEOUT_ENV",
    "MAX_REDIRECTS_ENV",
]
