"""Custom exceptions for central-config-generator."""

from __future__ import annotations


class CentralConfigError(Exception):
    """Base exception for all central-config errors."""


class ProjectParseError(CentralConfigError):
    """Raised when a project document's content is not well-formed MSBuild XML."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse project file {path}: {reason}")


class ManualResolutionRequired(CentralConfigError):
    """Raised when the manual strategy left packages without a chosen version."""

    def __init__(self, packages: dict[str, list[str]]):
        self.packages = packages
        details = "; ".join(
            f"{name} ({', '.join(versions)})" for name, versions in packages.items()
        )
        super().__init__(
            f"Manual resolution required for {len(packages)} package(s): {details}"
        )


class OutputExistsError(CentralConfigError):
    """Raised when a target props file exists and overwriting was not requested."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"File {path} already exists. Use --overwrite to replace it.")
