"""Data models for the property analyzer engine."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SkippedDocument:
    path: str
    reason: str


@dataclass
class CommonPropertiesResult:
    """Properties shared by enough project documents to hoist.

    Every value in ``properties`` was observed at least ``threshold`` times
    across the ``document_count`` input documents.
    """

    properties: dict[str, str] = field(default_factory=dict)
    document_count: int = 0
    threshold: int = 0
    skipped: list[SkippedDocument] = field(default_factory=list)
