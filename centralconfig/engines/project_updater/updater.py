"""Project updater: strip declarations that moved into the centralized props files.

Only new content is produced here; writing it back is the caller's job.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Callable, Collection, Iterable, Mapping
from dataclasses import dataclass, field

import structlog

from centralconfig.exceptions import ProjectParseError
from centralconfig.models.project import ProjectDocument
from centralconfig.msbuild import (
    element_value,
    is_element,
    iter_named,
    local_name,
    parse_project,
    remove_child,
    to_string,
    xml_declaration,
)

log = structlog.get_logger("centralconfig.engine")


@dataclass
class UpdateResult:
    path: str
    changed: bool = False
    content: str | None = None
    removed: list[str] = field(default_factory=list)
    error: str | None = None


def _finish(document: ProjectDocument, root: ET.Element, removed: list[str]) -> UpdateResult:
    if not removed:
        return UpdateResult(path=document.path)
    return UpdateResult(
        path=document.path,
        changed=True,
        content=to_string(root, xml_declaration(document.content)),
        removed=removed,
    )


def strip_properties(document: ProjectDocument, hoisted: Mapping[str, str]) -> UpdateResult:
    """Remove properties whose name and value both match a hoisted property.

    A project that overrides a hoisted property with its own value keeps it.
    Property groups emptied by the removal are dropped.
    """
    root = parse_project(document)
    parents = {child: parent for parent in root.iter() for child in parent}
    removed: list[str] = []

    for group in list(iter_named(root, "PropertyGroup")):
        before = len(removed)
        for child in list(group):
            if not is_element(child):
                continue
            name = local_name(child.tag)
            if name in hoisted and element_value(child) == hoisted[name]:
                remove_child(group, child)
                removed.append(name)
        if len(removed) > before and len(group) == 0:
            remove_child(parents[group], group)

    return _finish(document, root, removed)


def strip_package_versions(document: ProjectDocument, packages: Collection[str]) -> UpdateResult:
    """Remove the version (attribute or child element) of centrally managed packages.

    Package ids match case-insensitively, as NuGet treats them.
    """
    root = parse_project(document)
    managed = {name.casefold() for name in packages}
    removed: list[str] = []

    for ref in iter_named(root, "PackageReference"):
        name = ref.get("Include")
        if not name or name.casefold() not in managed:
            continue
        if "Version" in ref.attrib:
            del ref.attrib["Version"]
            removed.append(name)
            continue
        for child in list(ref):
            if is_element(child) and local_name(child.tag) == "Version":
                remove_child(ref, child)
                removed.append(name)
                break

    return _finish(document, root, removed)


def update_documents(
    documents: Iterable[ProjectDocument],
    update: Callable[[ProjectDocument], UpdateResult],
) -> list[UpdateResult]:
    """Apply *update* to each document; a malformed one is reported, never fatal."""
    results: list[UpdateResult] = []
    for document in documents:
        try:
            result = update(document)
        except ProjectParseError as exc:
            log.error("updater.parse_failed", path=document.path, error=exc.reason)
            results.append(UpdateResult(path=document.path, error=exc.reason))
            continue
        if result.changed:
            log.debug("updater.changed", path=document.path, removed=result.removed)
        results.append(result)
    return results
