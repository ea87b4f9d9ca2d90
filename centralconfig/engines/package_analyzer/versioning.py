"""Version string classification and ordering.

Every raw version string maps to exactly one :class:`VersionKind`:

    1.2.3, 1.2.3.4+sha.5e1f   -> STABLE
    1.0.0-beta.1              -> PRERELEASE
    [1.0,2.0), 1.0.*          -> RANGE (ranked by its lower bound)
    (,2.0], *                 -> UNBOUNDED_RANGE
    $(MyVersion), latest      -> OPAQUE

Stable and pre-release versions follow semantic-version precedence; build
metadata never affects ordering.  Ranges rank by their lower bound.  Strings
without a rank only compare among themselves, by ordinal text, which gives a
deterministic pick and nothing more.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_SEMVER_RE = re.compile(
    r"^(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:\.(\d+))?"
    r"(?:-([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)

# [a,b] [a,b) (a,b] (a,b) [a] [a,) (,b] (,b)
_INTERVAL_RE = re.compile(r"^([\[(])\s*([^,\[\]()]*?)\s*(,\s*[^,\[\]()]*?)?\s*([\])])$")

_FLOAT_RELEASE_RE = re.compile(r"^(\d+(?:\.\d+){0,2})\.\*$")
_FLOAT_PRERELEASE_RE = re.compile(r"^(\d+(?:\.\d+){0,3})-([0-9A-Za-z.-]*)\*$")


class VersionKind(Enum):
    STABLE = "stable"
    PRERELEASE = "prerelease"
    RANGE = "range"
    UNBOUNDED_RANGE = "unbounded_range"
    OPAQUE = "opaque"


@dataclass(frozen=True)
class SemanticVersion:
    """A parsed ``major.minor.patch[.revision][-prerelease][+metadata]`` version."""

    release: tuple[int, int, int, int]
    prerelease: tuple[str, ...] = ()
    metadata: str | None = None

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    @property
    def precedence(self) -> tuple:
        """Sort key implementing semantic-version precedence.

        A release without pre-release label sorts above every pre-release of
        the same numeric core.  Numeric identifiers sort below alphanumeric
        ones and compare numerically.
        """
        if not self.prerelease:
            return (self.release, (1,))
        labels = tuple(
            (0, int(part), "") if part.isdigit() else (1, 0, part) for part in self.prerelease
        )
        return (self.release, (0, labels))


@dataclass(frozen=True)
class ParsedVersion:
    """Classification of one raw version string."""

    original: str
    kind: VersionKind
    version: SemanticVersion | None = None
    lower_bound: SemanticVersion | None = None

    @property
    def rank(self) -> SemanticVersion | None:
        """The version used for ordering, or None when the string has no rank."""
        return self.version if self.version is not None else self.lower_bound

    @property
    def is_prerelease(self) -> bool:
        return self.kind is VersionKind.PRERELEASE

    @property
    def is_range(self) -> bool:
        return self.kind in (VersionKind.RANGE, VersionKind.UNBOUNDED_RANGE)


def parse_semver(text: str) -> SemanticVersion | None:
    """Parse *text* as a semantic version; None when it is not one."""
    m = _SEMVER_RE.match(text.strip())
    if not m:
        return None
    major, minor, patch, revision, prerelease, metadata = m.groups()
    release = (int(major), int(minor or 0), int(patch or 0), int(revision or 0))
    labels = tuple(prerelease.split(".")) if prerelease else ()
    return SemanticVersion(release=release, prerelease=labels, metadata=metadata)


def _pad_release(prefix: str) -> tuple[int, int, int, int]:
    parts = [int(p) for p in prefix.split(".")]
    parts += [0] * (4 - len(parts))
    return (parts[0], parts[1], parts[2], parts[3])


def _parse_range(text: str) -> ParsedVersion | None:
    if text == "*":
        return ParsedVersion(text, VersionKind.UNBOUNDED_RANGE)

    m = _FLOAT_RELEASE_RE.match(text)
    if m:
        bound = SemanticVersion(release=_pad_release(m.group(1)))
        return ParsedVersion(text, VersionKind.RANGE, lower_bound=bound)

    m = _FLOAT_PRERELEASE_RE.match(text)
    if m:
        label = m.group(2).rstrip(".") or "0"
        bound = SemanticVersion(release=_pad_release(m.group(1)), prerelease=tuple(label.split(".")))
        return ParsedVersion(text, VersionKind.RANGE, lower_bound=bound)

    m = _INTERVAL_RE.match(text)
    if not m:
        return None
    opening, lower, upper, closing = m.groups()
    if upper is None and (opening != "[" or closing != "]" or not lower):
        # "[a]" is the only single-value interval form
        return None
    bound = parse_semver(lower) if lower else None
    if bound is None:
        return ParsedVersion(text, VersionKind.UNBOUNDED_RANGE)
    return ParsedVersion(text, VersionKind.RANGE, lower_bound=bound)


def parse_version(text: str) -> ParsedVersion:
    """Classify *text*: semantic version, then range, then opaque.

    Total: every string yields a :class:`ParsedVersion`.
    """
    stripped = text.strip()
    semver = parse_semver(stripped)
    if semver is not None:
        kind = VersionKind.PRERELEASE if semver.is_prerelease else VersionKind.STABLE
        return ParsedVersion(text, kind, version=semver)

    parsed_range = _parse_range(stripped)
    if parsed_range is not None:
        return ParsedVersion(
            text, parsed_range.kind, lower_bound=parsed_range.lower_bound
        )
    return ParsedVersion(text, VersionKind.OPAQUE)


def _sign(a, b) -> int:
    return (a > b) - (a < b)


def compare_versions(a: ParsedVersion, b: ParsedVersion) -> int:
    """Total order over classified versions: -1, 0 or 1.

    Ranked versus ranked compares by precedence; a ranked value is greater
    than an unranked one; two unranked values fall back to ordinal text.
    """
    rank_a, rank_b = a.rank, b.rank
    if rank_a is not None and rank_b is not None:
        return _sign(rank_a.precedence, rank_b.precedence)
    if rank_a is not None:
        return 1
    if rank_b is not None:
        return -1
    return _sign(a.original, b.original)
