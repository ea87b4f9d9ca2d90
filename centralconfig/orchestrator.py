"""Generator orchestrator: scan, analyze, generate, write, update.

Each public method runs one command end to end and records its phases on
a fresh :class:`ProgressTracker`, exposed afterwards as ``self.progress``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from centralconfig.core.config import Settings
from centralconfig.engines.compatibility import CompatibilityCheckResult, check_compatibility
from centralconfig.engines.generators import (
    BUILD_PROPS_FILE,
    PACKAGES_PROPS_FILE,
    build_props_properties,
    generate_build_props,
    generate_packages_props,
)
from centralconfig.engines.package_analyzer import (
    PackageAnalysisResult,
    ResolutionStrategy,
    analyze_packages,
)
from centralconfig.engines.project_scanner import scan
from centralconfig.engines.project_updater import (
    UpdateResult,
    strip_package_versions,
    strip_properties,
    update_documents,
)
from centralconfig.engines.property_analyzer import (
    CommonPropertiesResult,
    extract_common_properties,
)
from centralconfig.exceptions import ManualResolutionRequired, OutputExistsError
from centralconfig.models.project import ProjectDocument
from centralconfig.progress import PhaseProgress, ProgressTracker

log = structlog.get_logger("centralconfig.orchestrator")

CONFIRM_CONFLICTS = "Version conflicts were detected. Continue with the resolved versions?"
CONFIRM_STRIP_VERSIONS = "Remove version attributes from the project files?"


@dataclass
class BuildPropsOutput:
    target: Path
    status: str = "written"  # "written" | "no_projects"
    documents: int = 0
    properties: dict[str, str] = field(default_factory=dict)
    common: CommonPropertiesResult | None = None
    updates: list[UpdateResult] = field(default_factory=list)


@dataclass
class PackagesPropsOutput:
    target: Path
    status: str = "written"  # "written" | "no_projects" | "cancelled"
    documents: int = 0
    analysis: PackageAnalysisResult | None = None
    compatibility: dict[str, CompatibilityCheckResult] = field(default_factory=dict)
    updates: list[UpdateResult] = field(default_factory=list)

    @property
    def versions_stripped(self) -> bool:
        return any(u.changed for u in self.updates)


def _always(_question: str) -> bool:
    return True


class CentralConfigOrchestrator:
    """Run the build-props and packages-props pipelines over one directory.

    *confirm* answers yes/no questions before destructive steps; the default
    answers yes.  *report* receives the package analysis before anything is
    written, *report_compatibility* the registry findings.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        confirm: Callable[[str], bool] = _always,
        report: Callable[[PackageAnalysisResult], None] | None = None,
        report_compatibility: Callable[[Mapping[str, CompatibilityCheckResult]], None]
        | None = None,
        progress_callback: Callable[[PhaseProgress], None] | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.confirm = confirm
        self.report = report
        self.report_compatibility = report_compatibility
        self.progress_callback = progress_callback
        self.progress = ProgressTracker()

    def _new_progress(self) -> ProgressTracker:
        tracker = ProgressTracker()
        if self.progress_callback:
            tracker.callbacks.append(self.progress_callback)
        self.progress = tracker
        return tracker

    def _scan(self, progress: ProgressTracker, directory: Path) -> list[ProjectDocument]:
        with progress.phase("scan") as p:
            documents = scan(directory, self.settings)
            p.detail = f"{len(documents)} project file(s)"
        return documents

    def _apply_updates(
        self,
        progress: ProgressTracker,
        documents: list[ProjectDocument],
        update: Callable[[ProjectDocument], UpdateResult],
    ) -> list[UpdateResult]:
        with progress.phase("update") as p:
            results = update_documents(documents, update)
            for result in results:
                if not result.changed or result.content is None:
                    continue
                try:
                    Path(result.path).write_text(result.content, encoding="utf-8")
                except OSError as exc:
                    log.error("orchestrator.write_failed", path=result.path, error=str(exc))
                    result.error = str(exc)
            changed = sum(1 for r in results if r.changed and r.error is None)
            failed = sum(1 for r in results if r.error is not None)
            p.detail = f"{changed} file(s) updated, {failed} failed"
        return results

    # ── Directory.Build.props ─────────────────────────────────────────────

    def generate_build_props(self, directory: Path, overwrite: bool = False) -> BuildPropsOutput:
        """Hoist common properties into ``Directory.Build.props``.

        Raises :class:`OutputExistsError` when the file exists and
        *overwrite* is false; nothing is scanned in that case.
        """
        progress = self._new_progress()
        target = directory / BUILD_PROPS_FILE
        if target.exists() and not overwrite:
            raise OutputExistsError(str(target))

        output = BuildPropsOutput(target=target)
        documents = self._scan(progress, directory)
        output.documents = len(documents)
        if not documents:
            log.warning("orchestrator.no_projects", directory=str(directory))
            output.status = "no_projects"
            return output

        with progress.phase("analyze") as p:
            output.common = extract_common_properties(documents)
            p.detail = (
                f"{len(output.common.properties)} common propert(ies), "
                f"threshold {output.common.threshold}/{output.common.document_count}"
            )

        with progress.phase("generate") as p:
            output.properties = build_props_properties(output.common.properties)
            content = generate_build_props(output.common.properties)
            p.detail = f"{len(output.properties)} propert(ies)"

        with progress.phase("write") as p:
            target.write_text(content, encoding="utf-8")
            p.detail = str(target)
        log.info("orchestrator.written", path=str(target))

        hoisted = output.properties
        output.updates = self._apply_updates(
            progress, documents, lambda d: strip_properties(d, hoisted)
        )
        return output

    # ── Directory.Packages.props ──────────────────────────────────────────

    def generate_packages_props(
        self,
        directory: Path,
        overwrite: bool = False,
        strategy: ResolutionStrategy = ResolutionStrategy.HIGHEST,
        check_registry: bool = False,
    ) -> PackagesPropsOutput:
        """Centralize package versions into ``Directory.Packages.props``.

        Raises :class:`OutputExistsError` as :meth:`generate_build_props`
        does, and :class:`ManualResolutionRequired` when *strategy* is
        MANUAL and conflicts remain; no file is written in either case.
        """
        progress = self._new_progress()
        target = directory / PACKAGES_PROPS_FILE
        if target.exists() and not overwrite:
            raise OutputExistsError(str(target))

        output = PackagesPropsOutput(target=target)
        documents = self._scan(progress, directory)
        output.documents = len(documents)
        if not documents:
            log.warning("orchestrator.no_projects", directory=str(directory))
            output.status = "no_projects"
            return output

        with progress.phase("analyze") as p:
            analysis = analyze_packages(documents, strategy)
            output.analysis = analysis
            p.detail = (
                f"{len(analysis.resolved_versions)} package(s), "
                f"{len(analysis.conflicts)} conflict(s)"
            )

        if self.report:
            self.report(analysis)

        if analysis.requires_manual_resolution:
            raise ManualResolutionRequired(analysis.manual_resolutions)

        if check_registry:
            with progress.phase("compatibility") as p:
                output.compatibility = asyncio.run(
                    check_compatibility(analysis.resolved_versions, self.settings)
                )
                flagged = sum(1 for r in output.compatibility.values() if r.issues)
                p.detail = f"{flagged} package(s) with issues"
            if self.report_compatibility:
                self.report_compatibility(output.compatibility)

        if analysis.has_conflicts and not self.confirm(CONFIRM_CONFLICTS):
            progress.skip("write", "cancelled by user")
            output.status = "cancelled"
            return output

        with progress.phase("generate") as p:
            content = generate_packages_props(analysis.resolved_versions)
            p.detail = f"{len(analysis.resolved_versions)} package version(s)"

        with progress.phase("write") as p:
            target.write_text(content, encoding="utf-8")
            p.detail = str(target)
        log.info("orchestrator.written", path=str(target))

        if not self.confirm(CONFIRM_STRIP_VERSIONS):
            progress.skip("update", "project files left unchanged")
            return output

        managed = set(analysis.resolved_versions)
        output.updates = self._apply_updates(
            progress, documents, lambda d: strip_package_versions(d, managed)
        )
        return output
