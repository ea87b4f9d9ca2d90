"""Common property analyzer: which build properties are shared widely enough to hoist."""

from __future__ import annotations

import math
from collections.abc import Collection

import structlog

from centralconfig.engines.property_analyzer.models import (
    CommonPropertiesResult,
    SkippedDocument,
)
from centralconfig.exceptions import ProjectParseError
from centralconfig.models.project import ProjectDocument
from centralconfig.msbuild import iter_property_observations

_log = structlog.get_logger("centralconfig.engine")


def commonality_threshold(document_count: int) -> int:
    """Minimum number of matching declarations for a property to be common.

    One document (or none) makes all of its properties common, two documents
    must agree, and from three documents on a majority rounded up is enough.
    """
    if document_count <= 1:
        return document_count
    if document_count == 2:
        return 2
    return math.ceil(document_count / 2)


def count_property_values(
    documents: Collection[ProjectDocument],
    *,
    log=None,
) -> tuple[dict[str, dict[str, int]], list[SkippedDocument]]:
    """Build ``{property name: {value: count}}`` over all parseable documents.

    Blank values are never counted.  Insertion order follows first sight, so
    later tie-breaks are deterministic.
    """
    log = log or _log
    counts: dict[str, dict[str, int]] = {}
    skipped: list[SkippedDocument] = []
    for document in documents:
        try:
            observations = list(iter_property_observations(document))
        except ProjectParseError as exc:
            log.warning("property_analyzer.parse_failed", path=document.path, error=exc.reason)
            skipped.append(SkippedDocument(document.path, exc.reason))
            continue
        for obs in observations:
            values = counts.setdefault(obs.name, {})
            values[obs.value] = values.get(obs.value, 0) + 1
    return counts, skipped


def extract_common_properties(
    documents: Collection[ProjectDocument],
    *,
    log=None,
) -> CommonPropertiesResult:
    """Select, per property name, its most frequent value if it meets the threshold."""
    log = log or _log
    counts, skipped = count_property_values(documents, log=log)
    threshold = commonality_threshold(len(documents))

    result = CommonPropertiesResult(
        document_count=len(documents),
        threshold=threshold,
        skipped=skipped,
    )
    for name, values in counts.items():
        # max() keeps the first value seen among equal counts
        value, count = max(values.items(), key=lambda item: item[1])
        if count >= threshold:
            result.properties[name] = value
            log.debug("property_analyzer.common", name=name, value=value, count=count)

    log.info(
        "property_analyzer.done",
        documents=len(documents),
        threshold=threshold,
        common=len(result.properties),
    )
    return result
