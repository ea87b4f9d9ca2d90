"""Property analyzer engine: infer build properties common to most projects."""

from centralconfig.engines.property_analyzer.analyzer import (
    commonality_threshold,
    extract_common_properties,
)
from centralconfig.engines.property_analyzer.models import (
    CommonPropertiesResult,
    SkippedDocument,
)

__all__ = [
    "CommonPropertiesResult",
    "SkippedDocument",
    "commonality_threshold",
    "extract_common_properties",
]
