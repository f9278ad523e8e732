"""Merging respondents' availability maps into per-cell statistics.

Everything here is a pure function of the snapshot passed in. Nothing is
cached: grids are small (columns x half-hours of a day) and callers recompute
on every render.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import IntEnum

from meetgrid.engine.grid import to_key

Availability = Mapping[str, bool]
Responses = Mapping[str, Availability | None]


class HeatmapBucket(IntEnum):
    """Visual intensity tier of a cell, ordered from empty to fullest."""

    EMPTY = 0
    SPARSE = 1  # > 0
    LOW = 2  # >= 0.2
    MEDIUM = 3  # >= 0.4
    HIGH = 4  # >= 0.6
    PEAK = 5  # >= 0.8


# (bucket, numerator, denominator), checked top-down: count/total >= num/den
_BUCKET_THRESHOLDS = (
    (HeatmapBucket.PEAK, 4, 5),
    (HeatmapBucket.HIGH, 3, 5),
    (HeatmapBucket.MEDIUM, 2, 5),
    (HeatmapBucket.LOW, 1, 5),
)


@dataclass(frozen=True)
class CellStats:
    count: int = 0
    available_users: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CellSummary:
    column: str
    time: str
    key: str
    count: int
    available_users: list[str]
    bucket: HeatmapBucket


def total_participants(responses: Responses) -> int:
    return len(responses)


def aggregate(responses: Responses, column: str, time_slot: str) -> CellStats:
    """Count and list respondents available at one cell.

    Respondents are visited in the mapping's iteration order. A respondent
    whose map is missing counts as available nowhere.
    """
    key = to_key(column, time_slot)
    users = [name for name, availability in responses.items() if availability and availability.get(key)]
    return CellStats(count=len(users), available_users=users)


def heatmap_bucket(count: int, total: int) -> HeatmapBucket:
    """Classify ``count / total`` into a heatmap tier.

    Lower bounds are inclusive. ``total == 0`` is always the empty bucket.
    """
    if total <= 0 or count <= 0:
        return HeatmapBucket.EMPTY
    for bucket, num, den in _BUCKET_THRESHOLDS:
        if count * den >= total * num:
            return bucket
    return HeatmapBucket.SPARSE


def summarize(
    responses: Responses,
    columns: Sequence[str],
    time_slots: Sequence[str],
) -> list[CellSummary]:
    """Statistics and heatmap bucket for every cell, columns outer, time inner."""
    total = total_participants(responses)
    summary = []
    for column in columns:
        for time_slot in time_slots:
            stats = aggregate(responses, column, time_slot)
            summary.append(
                CellSummary(
                    column=column,
                    time=time_slot,
                    key=to_key(column, time_slot),
                    count=stats.count,
                    available_users=stats.available_users,
                    bucket=heatmap_bucket(stats.count, total),
                )
            )
    return summary
