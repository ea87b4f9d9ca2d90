"""Directory.Packages.props generation (central package management)."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Mapping

from centralconfig.msbuild import render

PACKAGES_PROPS_FILE = "Directory.Packages.props"


def generate_packages_props(package_versions: Mapping[str, str]) -> str:
    """Render one ``PackageVersion`` per package, ordered by package name.

    Version strings are written verbatim, ranges and ``$(Property)``
    placeholders included.
    """
    root = ET.Element("Project")
    group = ET.SubElement(root, "PropertyGroup")
    ET.SubElement(group, "ManagePackageVersionsCentrally").text = "true"
    items = ET.SubElement(root, "ItemGroup")
    for name in sorted(package_versions, key=lambda n: (n.casefold(), n)):
        ET.SubElement(
            items,
            "PackageVersion",
            {"Include": name, "Version": package_versions[name]},
        )
    return render(root)
