"""Historical temperature record and series normalization."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict


class HistoricalRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    annual_mean: float
    five_year_smooth: float


Series = tuple[HistoricalRecord, ...]


def normalize_series(records: Iterable[HistoricalRecord]) -> Series:
    """Return records ascending by year. Duplicate years raise ValueError."""
    ordered = sorted(records, key=lambda r: r.year)
    for prev, cur in zip(ordered, ordered[1:], strict=False):
        if prev.year == cur.year:
            raise ValueError(f"Duplicate year {cur.year} in historical series")
    return tuple(ordered)
