"""Vulnerability advisory records and semantic-version range matching."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from functools import cmp_to_key

SEMVER = "SEMVER"

_NUM = r"(0|[1-9][0-9]*)"
_IDENTS = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"
_SEMVER_RE = re.compile(
    rf"^v{_NUM}(?:\.{_NUM}(?:\.{_NUM}(?:-({_IDENTS}))?(?:\+({_IDENTS}))?)?)?$"
)


@dataclass
class RangeEvent:
    """A point where a version range opens (introduced) or closes (fixed)."""

    introduced: str = ""
    fixed: str = ""


@dataclass
class Range:
    """A list of range events interpreted under a versioning scheme."""

    type: str = SEMVER
    events: list[RangeEvent] = field(default_factory=list)


@dataclass
class EcosystemSpecificImport:
    """A vulnerable package path with optional platform and symbol limits."""

    path: str = ""
    goos: list[str] = field(default_factory=list)
    goarch: list[str] = field(default_factory=list)
    symbols: list[str] = field(default_factory=list)


@dataclass
class Affected:
    """A module affected by an advisory, with its ranges and packages."""

    package: str = ""
    ranges: list[Range] = field(default_factory=list)
    imports: list[EcosystemSpecificImport] = field(default_factory=list)


@dataclass
class Entry:
    """A single vulnerability advisory."""

    id: str = ""
    affected: list[Affected] = field(default_factory=list)
    withdrawn: datetime | None = None
    summary: str = ""
    details: str = ""
    aliases: list[str] = field(default_factory=list)


def _canonical(version: str) -> str:
    stripped = version[1:] if version.startswith("v") else version
    if stripped.startswith("go"):
        stripped = stripped[2:]
    return "v" + stripped


def _parse(version: str):
    match = _SEMVER_RE.match(_canonical(version))
    if match is None:
        return None
    major, minor, patch, pre, _build = match.groups()
    prerelease: tuple[str, ...] = ()
    if pre:
        prerelease = tuple(pre.split("."))
        for ident in prerelease:
            if ident.isdigit() and len(ident) > 1 and ident.startswith("0"):
                return None
    return int(major), int(minor or 0), int(patch or 0), prerelease


def _compare_idents(a: str, b: str) -> int:
    a_num, b_num = a.isdigit(), b.isdigit()
    if a_num and b_num:
        x, y = int(a), int(b)
    elif a_num:
        return -1
    elif b_num:
        return 1
    else:
        x, y = a, b
    return (x > y) - (x < y)


def _compare_prerelease(a: tuple[str, ...], b: tuple[str, ...]) -> int:
    if a == b:
        return 0
    if not a:
        return 1
    if not b:
        return -1
    for x, y in zip(a, b):
        result = _compare_idents(x, y)
        if result:
            return result
    return (len(a) > len(b)) - (len(a) < len(b))


def compare_semver(a: str, b: str) -> int:
    """Compare two versions, returning -1, 0 or 1.

    Bare versions and versions prefixed with "v" or "go" are accepted.
    An invalid version is less than any valid one; invalid versions are equal.
    """
    pa, pb = _parse(a), _parse(b)
    if pa is None or pb is None:
        return (pa is not None) - (pb is not None)
    if pa[:3] != pb[:3]:
        return -1 if pa[:3] < pb[:3] else 1
    return _compare_prerelease(pa[3], pb[3])


def _event_version(event: RangeEvent) -> str:
    return event.fixed or event.introduced


def _compare_events(e1: RangeEvent, e2: RangeEvent) -> int:
    start1, start2 = e1.introduced == "0", e2.introduced == "0"
    if start1 or start2:
        return start2 - start1
    return compare_semver(_event_version(e1), _event_version(e2))


def _contains_semver(rng: Range, version: str) -> bool:
    if not rng.events:
        return True
    affected = False
    for event in sorted(rng.events, key=cmp_to_key(_compare_events)):
        if not affected and event.introduced:
            affected = event.introduced == "0" or compare_semver(version, event.introduced) >= 0
        elif event.fixed:
            affected = compare_semver(version, event.fixed) < 0
    return affected


def affects_semver(ranges: list[Range], version: str) -> bool:
    """Report whether version falls inside any of the semver ranges.

    No ranges, or no ranges of the semver type, means every version is affected.
    """
    semver_ranges = [r for r in ranges if r.type == SEMVER]
    if not semver_ranges:
        return True
    return any(_contains_semver(r, version) for r in semver_ranges)