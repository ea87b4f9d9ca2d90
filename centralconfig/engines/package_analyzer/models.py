"""Data models for the package analyzer engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class WarningLevel(IntEnum):
    INFO = 0
    WARNING = 1
    ERROR = 2


@dataclass
class VersionWarning:
    """Advisory message about one package (or one unreadable project file)."""

    package_name: str
    message: str
    level: WarningLevel


@dataclass
class VersionConflict:
    """One observation of a package whose versions disagree across projects."""

    project_file: str
    version: str
    is_prerelease: bool = False
    is_range: bool = False


@dataclass
class PackageAnalysisResult:
    """Outcome of :func:`analyze_packages`.

    ``resolved_versions`` has one entry per package seen, except packages the
    manual strategy left to a human, which are listed in ``manual_resolutions``
    with every distinct version observed.
    """

    resolved_versions: dict[str, str] = field(default_factory=dict)
    conflicts: dict[str, list[VersionConflict]] = field(default_factory=dict)
    warnings: list[VersionWarning] = field(default_factory=list)
    manual_resolutions: dict[str, list[str]] = field(default_factory=dict)

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    @property
    def requires_manual_resolution(self) -> bool:
        return bool(self.manual_resolutions)
