"""Duration extraction from free-text bid timelines.

Timelines are written by vendors ("2-3 weeks", "about 6 months", "45 days
after permit"). The extractor recognizes the first unit it finds, checking
weeks before months before days, and reads the integer right before it.
Compound durations ("2 months 3 weeks") are not combined.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol

WEEK = "week"
MONTH = "month"
DAY = "day"

UNIT_PRIORITY = (WEEK, MONTH, DAY)

# (upper bound inclusive, score); the last entry of each table catches the rest.
SCORE_TABLES: dict[str, tuple[tuple[float, int], ...]] = {
    WEEK: ((2, 10), (4, 8), (8, 6), (12, 4), (float("inf"), 2)),
    MONTH: ((1, 9), (2, 7), (3, 5), (6, 3), (float("inf"), 1)),
    DAY: ((7, 10), (14, 8), (30, 6), (60, 4), (float("inf"), 2)),
}

MISSING_TIMELINE_SCORE = 0
UNPARSED_TIMELINE_SCORE = 5


@dataclass(frozen=True)
class Duration:
    unit: str
    amount: float


class DurationExtractor(Protocol):
    """Turns timeline text into a Duration, or None when no unit is recognized."""

    def extract(self, text: str) -> Duration | None: ...


class RegexDurationExtractor:
    """Keyword + regex heuristic over natural-language timelines."""

    def __init__(self, units: tuple[str, ...] = UNIT_PRIORITY):
        self.units = units
        self._patterns = {unit: re.compile(rf"(\d+)\s*{unit}") for unit in units}

    def extract(self, text: str) -> Duration | None:
        lowered = text.lower()
        for unit in self.units:
            if unit not in lowered:
                continue
            match = self._patterns[unit].search(lowered)
            # A unit without a leading number ("a few weeks") reads as 0.
            amount = float(match.group(1)) if match else 0.0
            return Duration(unit=unit, amount=amount)
        return None


def score_duration(duration: Duration) -> int:
    table = SCORE_TABLES.get(duration.unit)
    if table is None:
        return UNPARSED_TIMELINE_SCORE
    for upper_bound, score in table:
        if duration.amount <= upper_bound:
            return score
    return table[-1][1]


def score_timeline(
    timeline: str | None, extractor: DurationExtractor | None = None
) -> int:
    if not timeline:
        return MISSING_TIMELINE_SCORE
    duration = (extractor or RegexDurationExtractor()).extract(timeline)
    if duration is None:
        return UNPARSED_TIMELINE_SCORE
    return score_duration(duration)
