"""Directory.Build.props generation."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Mapping

from centralconfig.msbuild import render

BUILD_PROPS_FILE = "Directory.Build.props"

# Added when absent from the common properties. TargetFramework is never
# defaulted; it is only written when the projects agree on one.
DEFAULT_PROPERTIES: dict[str, str] = {
    "ImplicitUsings": "enable",
    "Nullable": "enable",
}


def _name_key(name: str) -> tuple[str, str]:
    return (name.casefold(), name)


def build_props_properties(common_properties: Mapping[str, str]) -> dict[str, str]:
    """The name -> value pairs written to Directory.Build.props, in output order."""
    properties = {name: common_properties[name] for name in sorted(common_properties, key=_name_key)}
    for name, value in DEFAULT_PROPERTIES.items():
        properties.setdefault(name, value)
    return properties


def generate_build_props(common_properties: Mapping[str, str]) -> str:
    root = ET.Element("Project")
    group = ET.SubElement(root, "PropertyGroup")
    for name, value in build_props_properties(common_properties).items():
        ET.SubElement(group, name).text = value
    return render(root)
