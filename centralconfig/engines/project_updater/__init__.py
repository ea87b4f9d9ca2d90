"""Project updater engine: remove centralized declarations from project files."""

from centralconfig.engines.project_updater.updater import (
    UpdateResult,
    strip_package_versions,
    strip_properties,
    update_documents,
)

__all__ = ["UpdateResult", "strip_package_versions", "strip_properties", "update_documents"]
