"""Project scanner: discover MSBuild project files and read them into documents."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog

from centralconfig.core.config import Settings
from centralconfig.models.project import ProjectDocument

log = structlog.get_logger("centralconfig.engine")

# Build output and tooling directories never hold source project files
_SKIP_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".vs",
    ".idea",
    "bin",
    "obj",
    "node_modules",
}


def _is_skipped(path: Path, root: Path) -> bool:
    return any(part in _SKIP_DIRS for part in path.relative_to(root).parts[:-1])


def discover_projects(root: Path, patterns: Iterable[str]) -> list[Path]:
    """Return project files under *root* matching any glob in *patterns*.

    Paths are de-duplicated and sorted so repeated scans feed the analyzers
    in the same order.
    """
    found: set[Path] = set()
    for pattern in patterns:
        for hit in root.glob(pattern):
            if hit.is_file() and not _is_skipped(hit, root):
                found.add(hit)
    return sorted(found)


def scan(root: Path, settings: Settings | None = None) -> list[ProjectDocument]:
    """Read every project file under *root*; unreadable files are logged and skipped."""
    settings = settings or Settings()
    root = root.resolve()
    paths = discover_projects(root, settings.project_patterns)
    log.info("scanner.discovered", root=str(root), count=len(paths))

    documents: list[ProjectDocument] = []
    for path in paths:
        try:
            content = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            log.error("scanner.read_failed", path=str(path), error=str(exc))
            continue
        documents.append(ProjectDocument(path=str(path), content=content))
    return documents
