"""Data models for scanned project documents and their observations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProjectDocument:
    """A project file as read from disk (or supplied by a test fixture).

    Never mutated by the analyzers; the updater produces new content instead.
    """

    path: str
    content: str


@dataclass(frozen=True)
class PropertyObservation:
    """A single ``<Name>value</Name>`` entry inside a ``PropertyGroup``."""

    name: str
    value: str
    source_path: str


@dataclass(frozen=True)
class PackageObservation:
    """A ``PackageReference`` with both a package name and a version string."""

    package_name: str
    version: str
    source_path: str
