"""Package analyzer engine: version classification, conflict resolution, analysis."""

from centralconfig.engines.package_analyzer.analyzer import analyze_packages
from centralconfig.engines.package_analyzer.models import (
    PackageAnalysisResult,
    VersionConflict,
    VersionWarning,
    WarningLevel,
)
from centralconfig.engines.package_analyzer.resolver import (
    NeedsManualResolution,
    ResolutionFailed,
    ResolutionStrategy,
    Resolved,
    resolve,
)
from centralconfig.engines.package_analyzer.versioning import (
    ParsedVersion,
    SemanticVersion,
    VersionKind,
    compare_versions,
    parse_version,
)

__all__ = [
    "NeedsManualResolution",
    "PackageAnalysisResult",
    "ParsedVersion",
    "ResolutionFailed",
    "ResolutionStrategy",
    "Resolved",
    "SemanticVersion",
    "VersionConflict",
    "VersionKind",
    "VersionWarning",
    "WarningLevel",
    "analyze_packages",
    "compare_versions",
    "parse_version",
    "resolve",
]
