"""Version conflict resolution strategies.

``resolve()`` never raises for expected outcomes; it returns one of
:class:`Resolved`, :class:`NeedsManualResolution` or :class:`ResolutionFailed`
so callers handle every case explicitly.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key
from typing import Union

from centralconfig.engines.package_analyzer.versioning import (
    ParsedVersion,
    compare_versions,
    parse_version,
)


class ResolutionStrategy(Enum):
    HIGHEST = "highest"
    LOWEST = "lowest"
    MOST_COMMON = "most-common"
    MANUAL = "manual"


@dataclass(frozen=True)
class Resolved:
    version: str


@dataclass(frozen=True)
class NeedsManualResolution:
    package_name: str
    versions: tuple[str, ...]


@dataclass(frozen=True)
class ResolutionFailed:
    package_name: str
    reason: str


ResolutionOutcome = Union[Resolved, NeedsManualResolution, ResolutionFailed]


def distinct(versions: Sequence[str]) -> list[str]:
    """Distinct version strings in first-seen order."""
    return list(dict.fromkeys(versions))


def fallback_version(versions: Sequence[str]) -> str:
    """Ordinal-greatest raw string; used only when a strategy fails."""
    return max(versions)


def _candidates(parsed: list[ParsedVersion]) -> list[ParsedVersion]:
    ranked = [p for p in parsed if p.rank is not None]
    return ranked or parsed


def pick_highest(versions: Sequence[str]) -> str:
    """Highest distinct version.

    Ranked versions win over unranked ones; among equal ranks the earliest
    distinct value is kept (``max`` returns the first maximal element).
    """
    parsed = [parse_version(v) for v in distinct(versions)]
    return max(_candidates(parsed), key=cmp_to_key(compare_versions)).original


def pick_lowest(versions: Sequence[str]) -> str:
    """Lowest distinct version, preferring ranked values like :func:`pick_highest`."""
    parsed = [parse_version(v) for v in distinct(versions)]
    return min(_candidates(parsed), key=cmp_to_key(compare_versions)).original


def pick_most_common(versions: Sequence[str]) -> str:
    """Most frequent value over all observations; ties go to the ordinal-lowest text."""
    counts = Counter(versions)
    return min(counts, key=lambda v: (-counts[v], v))


def resolve(
    package_name: str,
    versions: Sequence[str],
    strategy: ResolutionStrategy = ResolutionStrategy.HIGHEST,
) -> ResolutionOutcome:
    """Pick one version for *package_name* out of every observed version string.

    *versions* holds all observations (duplicates included) in encounter
    order; MOST_COMMON relies on the duplicates, the other strategies only
    look at distinct values.
    """
    unique = distinct(versions)
    if not unique:
        return ResolutionFailed(package_name, "No versions provided for resolution")
    if len(unique) == 1:
        return Resolved(unique[0])

    if strategy is ResolutionStrategy.MANUAL:
        return NeedsManualResolution(package_name, tuple(unique))

    try:
        if strategy is ResolutionStrategy.HIGHEST:
            return Resolved(pick_highest(unique))
        if strategy is ResolutionStrategy.LOWEST:
            return Resolved(pick_lowest(unique))
        if strategy is ResolutionStrategy.MOST_COMMON:
            return Resolved(pick_most_common(versions))
    except Exception as exc:  # noqa: BLE001
        return ResolutionFailed(package_name, f"{type(exc).__name__}: {exc}")
    return ResolutionFailed(package_name, f"Unsupported resolution strategy: {strategy!r}")
