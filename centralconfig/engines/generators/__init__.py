"""Generators for the centralized MSBuild props files."""

from centralconfig.engines.generators.build_props import (
    BUILD_PROPS_FILE,
    DEFAULT_PROPERTIES,
    build_props_properties,
    generate_build_props,
)
from centralconfig.engines.generators.packages_props import (
    PACKAGES_PROPS_FILE,
    generate_packages_props,
)

__all__ = [
    "BUILD_PROPS_FILE",
    "DEFAULT_PROPERTIES",
    "PACKAGES_PROPS_FILE",
    "build_props_properties",
    "generate_build_props",
    "generate_packages_props",
]
