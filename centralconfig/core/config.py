"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

_DEFAULT_PROJECT_PATTERNS = ("**/*.csproj", "**/*.fsproj", "**/*.vbproj")
_DEFAULT_NUGET_URL = "https://api.nuget.org/v3-flatcontainer"


@dataclass(frozen=True)
class Settings:
    project_patterns: tuple[str, ...] = _DEFAULT_PROJECT_PATTERNS
    nuget_url: str = _DEFAULT_NUGET_URL
    http_timeout: float = 10.0
    http_concurrency: int = 8


def _env_float(key: str, default: float) -> float:
    return float(os.environ.get(key, default))


def _env_int(key: str, default: int) -> int:
    return int(os.environ.get(key, default))


def load_settings() -> Settings:
    """Build :class:`Settings` from ``CENTRALCONFIG_*`` environment variables.

    ``CENTRALCONFIG_PROJECT_PATTERNS`` is a comma-separated list of globs
    relative to the scanned directory.
    """
    raw_patterns = os.environ.get("CENTRALCONFIG_PROJECT_PATTERNS")
    patterns = _DEFAULT_PROJECT_PATTERNS
    if raw_patterns:
        patterns = tuple(p.strip() for p in raw_patterns.split(",") if p.strip())
    return Settings(
        project_patterns=patterns,
        nuget_url=os.environ.get("CENTRALCONFIG_NUGET_URL", _DEFAULT_NUGET_URL).rstrip("/"),
        http_timeout=_env_float("CENTRALCONFIG_HTTP_TIMEOUT", 10.0),
        http_concurrency=max(1, _env_int("CENTRALCONFIG_HTTP_CONCURRENCY", 8)),
    )
