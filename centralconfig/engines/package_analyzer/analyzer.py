"""Package analyzer: collect PackageReference versions and settle conflicts."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from centralconfig.engines.package_analyzer.models import (
    PackageAnalysisResult,
    VersionConflict,
    VersionWarning,
    WarningLevel,
)
from centralconfig.engines.package_analyzer.resolver import (
    NeedsManualResolution,
    Resolved,
    ResolutionStrategy,
    distinct,
    fallback_version,
    resolve,
)
from centralconfig.engines.package_analyzer.versioning import parse_version
from centralconfig.exceptions import ProjectParseError
from centralconfig.models.project import PackageObservation, ProjectDocument
from centralconfig.msbuild import iter_package_observations

_log = structlog.get_logger("centralconfig.engine")


def collect_observations(
    documents: Iterable[ProjectDocument],
    result: PackageAnalysisResult,
    *,
    log=None,
) -> dict[str, list[PackageObservation]]:
    """Group package observations by package id, in first-seen order.

    Package ids are case-insensitive; a group is keyed by the first spelling
    seen.

    Documents that fail to parse add an ERROR warning to *result* and
    contribute nothing.
    """
    log = log or _log
    by_package: dict[str, list[PackageObservation]] = {}
    spelling: dict[str, str] = {}
    for document in documents:
        try:
            observations = list(iter_package_observations(document))
        except ProjectParseError as exc:
            log.warning("package_analyzer.parse_failed", path=document.path, error=exc.reason)
            result.warnings.append(
                VersionWarning(
                    package_name=document.path,
                    message=f"Failed to parse project file: {exc.reason}",
                    level=WarningLevel.ERROR,
                )
            )
            continue
        for obs in observations:
            name = spelling.setdefault(obs.package_name.casefold(), obs.package_name)
            by_package.setdefault(name, []).append(obs)
    return by_package


def _conflict_record(obs: PackageObservation) -> VersionConflict:
    parsed = parse_version(obs.version)
    return VersionConflict(
        project_file=obs.source_path,
        version=obs.version,
        is_prerelease=parsed.is_prerelease,
        is_range=parsed.is_range,
    )


def analyze_packages(
    documents: Iterable[ProjectDocument],
    strategy: ResolutionStrategy = ResolutionStrategy.HIGHEST,
    *,
    log=None,
) -> PackageAnalysisResult:
    """Reduce every observed package version to one winner per package.

    A package seen with a single version string is accepted as-is.  With
    several, every observation is recorded as a conflict and *strategy*
    picks the winner.  A failed resolution falls back to the ordinal-greatest
    string with an ERROR warning; one package failing never stops the others.
    A pre-release winner always adds an INFO warning.
    """
    log = log or _log
    result = PackageAnalysisResult()
    by_package = collect_observations(documents, result, log=log)

    for package_name, observations in by_package.items():
        versions = [obs.version for obs in observations]
        unique = distinct(versions)

        if len(unique) == 1:
            result.resolved_versions[package_name] = unique[0]
        else:
            result.conflicts[package_name] = [_conflict_record(obs) for obs in observations]
            outcome = resolve(package_name, versions, strategy)

            if isinstance(outcome, Resolved):
                result.resolved_versions[package_name] = outcome.version
                result.warnings.append(
                    VersionWarning(
                        package_name=package_name,
                        message=f"Multiple versions found. Resolved to: {outcome.version}",
                        level=WarningLevel.WARNING,
                    )
                )
                log.info(
                    "package_analyzer.conflict_resolved",
                    package=package_name,
                    versions=unique,
                    resolved=outcome.version,
                    strategy=strategy.value,
                )
            elif isinstance(outcome, NeedsManualResolution):
                result.manual_resolutions[package_name] = list(outcome.versions)
                result.warnings.append(
                    VersionWarning(
                        package_name=package_name,
                        message=(
                            "Manual resolution required. Versions found: "
                            + ", ".join(outcome.versions)
                        ),
                        level=WarningLevel.WARNING,
                    )
                )
                log.info("package_analyzer.manual_required", package=package_name, versions=unique)
                continue
            else:
                fallback = fallback_version(unique)
                result.resolved_versions[package_name] = fallback
                result.warnings.append(
                    VersionWarning(
                        package_name=package_name,
                        message=f"Failed to resolve version conflict: {outcome.reason}",
                        level=WarningLevel.ERROR,
                    )
                )
                log.warning(
                    "package_analyzer.resolution_failed",
                    package=package_name,
                    reason=outcome.reason,
                    fallback=fallback,
                )

        winner = result.resolved_versions[package_name]
        if parse_version(winner).is_prerelease:
            result.warnings.append(
                VersionWarning(
                    package_name=package_name,
                    message=f"Using pre-release version: {winner}",
                    level=WarningLevel.INFO,
                )
            )

    log.debug(
        "package_analyzer.done",
        packages=len(result.resolved_versions),
        conflicts=len(result.conflicts),
        warnings=len(result.warnings),
    )
    return result
