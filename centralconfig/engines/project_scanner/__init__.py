"""Project scanner engine: find and read .NET project files."""

from centralconfig.engines.project_scanner.scanner import discover_projects, scan

__all__ = ["discover_projects", "scan"]
