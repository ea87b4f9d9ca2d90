"""CLI entry point: central-config.

Subcommands:
    central-config build -d ./src             # Directory.Build.props
    central-config packages --strategy lowest # Directory.Packages.props
    central-config all -o -y                  # both, overwriting, no prompts
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from centralconfig.core.logging import setup_logging
from centralconfig.engines.package_analyzer import ResolutionStrategy
from centralconfig.exceptions import ManualResolutionRequired, OutputExistsError
from centralconfig.progress import ProgressTracker

_STRATEGIES = [s.value for s in ResolutionStrategy]

_directory_option = click.option(
    "-d",
    "--directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Root directory to scan for project files",
)
_overwrite_option = click.option(
    "-o", "--overwrite", is_flag=True, help="Replace an existing props file"
)
_yes_option = click.option(
    "-y", "--yes", "assume_yes", is_flag=True, help="Answer yes to every confirmation"
)
_strategy_option = click.option(
    "--strategy",
    type=click.Choice(_STRATEGIES),
    default=ResolutionStrategy.HIGHEST.value,
    show_default=True,
    help="How to settle packages referenced with different versions",
)
_compat_option = click.option(
    "--check-compatibility",
    is_flag=True,
    help="Check resolved versions against the NuGet registry (advisory)",
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """Central configuration generator for .NET solutions."""
    setup_logging(verbose)


def _orchestrator(assume_yes: bool = False):
    from centralconfig.core.config import load_settings
    from centralconfig.orchestrator import CentralConfigOrchestrator
    from centralconfig.report import render_analysis, render_compatibility

    def confirm(question: str) -> bool:
        return assume_yes or click.confirm(question, default=False)

    return CentralConfigOrchestrator(
        load_settings(),
        confirm=confirm,
        report=render_analysis,
        report_compatibility=render_compatibility,
    )


def _print_phases(progress: ProgressTracker) -> None:
    click.echo("\nPhases:")
    for phase in progress.phases:
        click.echo(f"  {phase.describe()}")


def _run_build(directory: Path, overwrite: bool) -> None:
    orchestrator = _orchestrator()
    try:
        output = orchestrator.generate_build_props(directory, overwrite=overwrite)
    except OutputExistsError as e:
        click.echo(click.style(f"Warning: {e}", fg="yellow"))
        return

    if output.status == "no_projects":
        click.echo(click.style(f"No project files found in {directory}", fg="yellow"))
        return

    click.echo(click.style(f"Generated {output.target}", fg="green"))
    for name, value in output.properties.items():
        click.echo(f"  {name} = {value}")
    for skipped in output.common.skipped if output.common else []:
        click.echo(click.style(f"  Skipped {skipped.path}: {skipped.reason}", fg="yellow"))
    _echo_updates(output.updates)
    _print_phases(orchestrator.progress)


def _run_packages(
    directory: Path,
    overwrite: bool,
    assume_yes: bool,
    strategy: str,
    check_compatibility: bool,
) -> None:
    orchestrator = _orchestrator(assume_yes)
    try:
        output = orchestrator.generate_packages_props(
            directory,
            overwrite=overwrite,
            strategy=ResolutionStrategy(strategy),
            check_registry=check_compatibility,
        )
    except OutputExistsError as e:
        click.echo(click.style(f"Warning: {e}", fg="yellow"))
        return
    except ManualResolutionRequired as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        click.echo("Re-run with another --strategy or align the versions by hand.", err=True)
        _print_phases(orchestrator.progress)
        sys.exit(1)

    if output.status == "no_projects":
        click.echo(click.style(f"No project files found in {directory}", fg="yellow"))
        return
    if output.status == "cancelled":
        click.echo("Operation cancelled.")
        _print_phases(orchestrator.progress)
        return

    click.echo(click.style(f"\nGenerated {output.target}", fg="green"))
    _echo_updates(output.updates)
    _print_phases(orchestrator.progress)


def _echo_updates(updates) -> None:
    for update in updates:
        if update.error:
            click.echo(click.style(f"  Failed to update {update.path}: {update.error}", fg="red"))
        elif update.changed:
            click.echo(f"  Updated {update.path} ({len(update.removed)} removed)")


@main.command("build")
@_directory_option
@_overwrite_option
def build(directory: Path, overwrite: bool) -> None:
    """Generate Directory.Build.props from properties shared by most projects."""
    _run_build(directory, overwrite)


@main.command("packages")
@_directory_option
@_overwrite_option
@_yes_option
@_strategy_option
@_compat_option
def packages(
    directory: Path,
    overwrite: bool,
    assume_yes: bool,
    strategy: str,
    check_compatibility: bool,
) -> None:
    """Generate Directory.Packages.props, resolving version conflicts."""
    _run_packages(directory, overwrite, assume_yes, strategy, check_compatibility)


@main.command("all")
@_directory_option
@_overwrite_option
@_yes_option
@_strategy_option
@_compat_option
def all_(
    directory: Path,
    overwrite: bool,
    assume_yes: bool,
    strategy: str,
    check_compatibility: bool,
) -> None:
    """Generate both Directory.Build.props and Directory.Packages.props."""
    _run_build(directory, overwrite)
    click.echo("")
    _run_packages(directory, overwrite, assume_yes, strategy, check_compatibility)


if __name__ == "__main__":
    main()
