"""Shared series builders for tempsim tests."""

from __future__ import annotations

from collections.abc import Sequence

from tempsim.series.record import HistoricalRecord, Series

REFERENCE_YEAR = 2024


def make_series(
    smooth: Sequence[float],
    *,
    end_year: int = 2022,
    annual: Sequence[float] | None = None,
) -> Series:
    """Build a series ending at `end_year`; annual means default to the smooth values."""
    start = end_year - len(smooth) + 1
    means = annual if annual is not None else smooth
    return tuple(
        HistoricalRecord(year=start + i, annual_mean=means[i], five_year_smooth=smooth[i]) for i in range(len(smooth))
    )


def constant_series(value: float = 26.0, years: int = 30) -> Series:
    return make_series([value] * years)


def trending_series(start: float = 25.0, per_year: float = 0.02, years: int = 50) -> Series:
    return make_series([start + per_year * i for i in range(years)])
