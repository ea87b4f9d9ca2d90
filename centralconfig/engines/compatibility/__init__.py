"""Compatibility engine: advisory NuGet registry checks for resolved versions."""

from centralconfig.engines.compatibility.checker import (
    PackageNotFoundError,
    VersionCompatibilityChecker,
    check_compatibility,
)
from centralconfig.engines.compatibility.models import CompatibilityCheckResult

__all__ = [
    "CompatibilityCheckResult",
    "PackageNotFoundError",
    "VersionCompatibilityChecker",
    "check_compatibility",
]
