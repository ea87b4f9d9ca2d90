"""Data models for the registry compatibility check."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class CompatibilityCheckResult:
    """Advisory findings for one resolved package version."""

    package_name: str
    version: str
    is_compatible: bool = True
    issues: list[str] = field(default_factory=list)
    suggested_version: str | None = None
