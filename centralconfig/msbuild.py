"""MSBuild project XML helpers shared by the analyzers, generators and updater."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from collections.abc import Iterator

from centralconfig.exceptions import ProjectParseError
from centralconfig.models.project import (
    PackageObservation,
    ProjectDocument,
    PropertyObservation,
)

MSBUILD_NS = "http://schemas.microsoft.com/developer/msbuild/2003"

# Old-style project files declare the MSBuild namespace as default; keep it
# unprefixed when an edited document is written back.
ET.register_namespace("", MSBUILD_NS)

_DECLARATION_RE = re.compile(r"^\s*(<\?xml[^>]*\?>)")


def local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix from an element tag."""
    return tag.rsplit("}", 1)[-1] if "}" in tag else tag


def is_element(node: ET.Element) -> bool:
    """False for comments and processing instructions kept by the parser."""
    return isinstance(node.tag, str)


def parse_project(document: ProjectDocument) -> ET.Element:
    """Parse a project document, keeping comments so edits can round-trip them.

    Raises :class:`ProjectParseError` for empty or malformed content.
    """
    content = document.content.lstrip("\ufeff")
    if not content.strip():
        raise ProjectParseError(document.path, "document is empty")
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    try:
        return ET.fromstring(content, parser=parser)
    except ET.ParseError as exc:
        raise ProjectParseError(document.path, str(exc)) from exc


def xml_declaration(content: str) -> str | None:
    m = _DECLARATION_RE.match(content.lstrip("\ufeff"))
    return m.group(1) if m else None


def iter_named(root: ET.Element, name: str) -> Iterator[ET.Element]:
    """Yield every descendant whose local name is *name*, namespaced or not."""
    for el in root.iter():
        if is_element(el) and local_name(el.tag) == name:
            yield el


def element_value(el: ET.Element) -> str:
    """Concatenated text content of an element, like ``XElement.Value``."""
    return "".join(el.itertext())


def iter_property_observations(document: ProjectDocument) -> Iterator[PropertyObservation]:
    """Yield non-blank property observations for *document*.

    A property declared more than once keeps only its last value, matching
    MSBuild's last-assignment-wins evaluation.  Separate groups repeating
    that final value each yield it again.
    """
    root = parse_project(document)
    groups = [_group_values(group) for group in iter_named(root, "PropertyGroup")]

    final: dict[str, str] = {}
    for values in groups:
        final.update(values)

    for values in groups:
        for name, value in values.items():
            if final[name] == value:
                yield PropertyObservation(name, value, document.path)


def _group_values(group: ET.Element) -> dict[str, str]:
    values: dict[str, str] = {}
    for child in group:
        if not is_element(child):
            continue
        value = element_value(child)
        if not value.strip():
            continue
        name = local_name(child.tag)
        values.pop(name, None)
        values[name] = value
    return values


def package_version(ref: ET.Element) -> str | None:
    """Version of a ``PackageReference``: attribute first, then child element."""
    version = ref.get("Version")
    if version is not None:
        return version
    for child in ref:
        if is_element(child) and local_name(child.tag) == "Version":
            return element_value(child)
    return None


def iter_package_observations(document: ProjectDocument) -> Iterator[PackageObservation]:
    """Yield package observations, skipping entries without a name or version."""
    root = parse_project(document)
    for ref in iter_named(root, "PackageReference"):
        name = ref.get("Include")
        version = package_version(ref)
        if not name or not name.strip() or version is None or not version.strip():
            continue
        yield PackageObservation(name, version, document.path)


def remove_child(parent: ET.Element, child: ET.Element) -> None:
    """Remove *child* and hand its trailing whitespace to the previous node."""
    index = list(parent).index(child)
    if index > 0:
        parent[index - 1].tail = child.tail
    else:
        parent.text = child.tail
    parent.remove(child)


def to_string(root: ET.Element, declaration: str | None = None) -> str:
    """Serialize *root*, prefixing the original XML declaration when given."""
    body = ET.tostring(root, encoding="unicode", short_empty_elements=True)
    if declaration:
        return f"{declaration}\n{body}\n"
    return body + "\n"


def render(root: ET.Element) -> str:
    """Serialize a freshly built document with two-space indentation."""
    ET.indent(root, space="  ")
    return ET.tostring(root, encoding="unicode")
