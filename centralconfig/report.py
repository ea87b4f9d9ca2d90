"""Console rendering of analysis results."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

import click

from centralconfig.engines.compatibility.models import CompatibilityCheckResult
from centralconfig.engines.package_analyzer.models import (
    PackageAnalysisResult,
    VersionConflict,
    WarningLevel,
)

_LEVEL_COLORS = {
    WarningLevel.INFO: "blue",
    WarningLevel.WARNING: "yellow",
    WarningLevel.ERROR: "red",
}


def format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> list[str]:
    """Left-aligned plain-text table; an empty row renders as a blank separator."""
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def line(cells: Sequence[str]) -> str:
        return "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(cells)).rstrip()

    lines = [line(headers), line(["-" * w for w in widths])]
    for row in rows:
        lines.append(line(row) if row else "")
    return lines


def version_type(conflict: VersionConflict) -> str:
    if conflict.is_range:
        return "Range"
    if conflict.is_prerelease:
        return "Pre-release"
    return "Release"


def render_analysis(result: PackageAnalysisResult, echo=click.echo) -> None:
    """Print summary, conflicts, warnings and resolved versions."""
    echo(click.style("Package Analysis Summary", bold=True, fg="green"))
    for line in format_table(
        ["Metric", "Value"],
        [
            ["Total Packages", str(len(result.resolved_versions))],
            ["Packages with Conflicts", str(len(result.conflicts))],
            ["Warnings", str(len(result.warnings))],
        ],
    ):
        echo(f"  {line}")
    echo("")

    if result.conflicts:
        echo(click.style("Version Conflicts Detected:", bold=True, fg="red"))
        rows: list[list[str]] = []
        for package_name, details in result.conflicts.items():
            if rows:
                rows.append([])
            for detail in details:
                rows.append(
                    [package_name, Path(detail.project_file).name, detail.version, version_type(detail)]
                )
        for line in format_table(["Package", "Project", "Version", "Type"], rows):
            echo(f"  {line}")
        echo("")

    if result.warnings:
        echo(click.style("Warnings:", bold=True, fg="yellow"))
        for warning in sorted(result.warnings, key=lambda w: w.level):
            label = click.style(warning.level.name.capitalize(), fg=_LEVEL_COLORS[warning.level])
            echo(f"  {label}  {warning.package_name}: {warning.message}")
        echo("")

    if result.manual_resolutions:
        echo(click.style("Packages Requiring Manual Resolution:", bold=True, fg="red"))
        for package_name, versions in result.manual_resolutions.items():
            echo(f"  {package_name}: {', '.join(versions)}")
        echo("")

    echo(click.style("Resolved Package Versions:", bold=True, fg="green"))
    rows = [[name, result.resolved_versions[name]] for name in sorted(result.resolved_versions)]
    for line in format_table(["Package", "Version"], rows):
        echo(f"  {line}")


def render_compatibility(results: Mapping[str, CompatibilityCheckResult], echo=click.echo) -> None:
    """Print registry findings; packages without issues are summarized in one line."""
    flagged = [r for r in results.values() if r.issues]
    echo(click.style("Registry Compatibility Check:", bold=True))
    echo(f"  {len(results) - len(flagged)} of {len(results)} package(s) without issues")
    for check in flagged:
        color = "yellow" if check.is_compatible else "red"
        echo("  " + click.style(f"{check.package_name} {check.version}", fg=color))
        for issue in check.issues:
            echo(f"    - {issue}")
        if check.suggested_version:
            echo(f"    suggested: {check.suggested_version}")
