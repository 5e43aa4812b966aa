"""
Severity scale: the fixed total order used for every status comparison.

UNKNOWN sits after OPERATIONAL, so folding a set of levels never lets a
stray unknown outrank an otherwise healthy result.
"""

from __future__ import annotations

from typing import Iterable

from status_engine.models import SeverityLevel

SEVERITY_ORDER: tuple[SeverityLevel, ...] = (
    SeverityLevel.MAJOR_OUTAGE,
    SeverityLevel.PARTIAL_OUTAGE,
    SeverityLevel.DEGRADED,
    SeverityLevel.MAINTENANCE,
    SeverityLevel.OPERATIONAL,
    SeverityLevel.UNKNOWN,
)

_INDEX: dict[SeverityLevel, int] = {level: i for i, level in enumerate(SEVERITY_ORDER)}

LEVEL_LABELS: dict[SeverityLevel, str] = {
    SeverityLevel.MAJOR_OUTAGE: "Major Outage",
    SeverityLevel.PARTIAL_OUTAGE: "Partial Outage",
    SeverityLevel.DEGRADED: "Degraded",
    SeverityLevel.MAINTENANCE: "Maintenance",
    SeverityLevel.OPERATIONAL: "Operational",
    SeverityLevel.UNKNOWN: "Unknown",
}


def severity_index(level: SeverityLevel) -> int:
    """Position of ``level`` in SEVERITY_ORDER; lower is more severe."""
    return _INDEX[level]


def more_severe(a: SeverityLevel, b: SeverityLevel) -> bool:
    """True when ``a`` is strictly more severe than ``b``."""
    return _INDEX[a] < _INDEX[b]


def more_severe_of(a: SeverityLevel, b: SeverityLevel) -> SeverityLevel:
    """Return the more severe of two levels, ``a`` on a tie."""
    return b if more_severe(b, a) else a


def most_severe(
    levels: Iterable[SeverityLevel],
    start: SeverityLevel = SeverityLevel.OPERATIONAL,
) -> SeverityLevel:
    """Left fold of ``levels`` from ``start``, keeping the worst seen."""
    worst = start
    for level in levels:
        if more_severe(level, worst):
            worst = level
    return worst


def label_for(level: SeverityLevel) -> str:
    return LEVEL_LABELS[level]
