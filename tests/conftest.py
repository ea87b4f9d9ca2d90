"""Shared pytest fixtures for central-config tests."""

from __future__ import annotations

import pytest

from centralconfig.models.project import ProjectDocument


def csproj(
    properties: dict[str, str] | None = None,
    packages: dict[str, str] | None = None,
) -> str:
    """SDK-style project text with one PropertyGroup and one ItemGroup."""
    lines = ['<Project Sdk="Microsoft.NET.Sdk">']
    if properties:
        lines.append("  <PropertyGroup>")
        for name, value in properties.items():
            lines.append(f"    <{name}>{value}</{name}>")
        lines.append("  </PropertyGroup>")
    if packages:
        lines.append("  <ItemGroup>")
        for name, version in packages.items():
            lines.append(f'    <PackageReference Include="{name}" Version="{version}" />')
        lines.append("  </ItemGroup>")
    lines.append("</Project>")
    return "\n".join(lines) + "\n"


@pytest.fixture
def make_document():
    """Factory: ``make_document("A.csproj", properties=..., packages=...)``."""

    def _make(path: str, properties=None, packages=None, content: str | None = None):
        if content is None:
            content = csproj(properties, packages)
        return ProjectDocument(path=path, content=content)

    return _make


@pytest.fixture
def solution(tmp_path):
    """Factory writing project files under ``tmp_path``; returns the root."""

    def _write(projects: dict[str, str]):
        for rel, content in projects.items():
            target = tmp_path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def project_xml():
    """The :func:`csproj` text builder, for tests writing files to disk."""
    return csproj
