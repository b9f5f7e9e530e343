"""Trend series projection for charting - pure functions."""

import math
from dataclasses import dataclass, field

from .entries import Entry

DEFAULT_WINDOW = 30

# Chart label -> entry field key
METRICS: dict[str, str] = {
    "Mood": "mood",
    "Anxiety": "anxiety",
    "Focus": "focus",
    "Energy": "energy",
}


@dataclass
class DataPoint:
    """One chart point: a date label and its metric values."""

    date: str
    metrics: dict[str, float] = field(default_factory=dict)


def to_number(value) -> float:
    """Coerce an answer to a finite number; missing or non-numeric is 0, booleans are 1/0."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number):
        return 0
    return int(number) if number.is_integer() else number


def project(entries: list[Entry], window: int = DEFAULT_WINDOW) -> list[DataPoint]:
    """
    Project newest-first entries into an oldest-first chart series.

    Keeps the last `window` entries in append order. Dates are labels only;
    points are never re-sorted by calendar date.
    """
    if window <= 0:
        return []
    chronological = list(reversed(entries))[-window:]
    return [
        DataPoint(
            date=entry.display_date,
            metrics={name: to_number(entry.get(key)) for name, key in METRICS.items()},
        )
        for entry in chronological
    ]
