"""Plausibility envelope around the historical annual-mean range."""

from __future__ import annotations

from pydantic import BaseModel

from tempsim.series.record import Series

BASE_MARGIN = 1.5
MAX_MARGIN_INCREASE = 3.0


class Envelope(BaseModel):
    lower: float
    upper: float
    margin: float

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper


def margin_for(years_into_future: int) -> float:
    """Base 1.5°C, widening by 1°C per 20 years ahead up to +3°C."""
    return BASE_MARGIN + min(MAX_MARGIN_INCREASE, years_into_future / 20)


def plausibility_envelope(series: Series, years_into_future: int) -> Envelope:
    means = [r.annual_mean for r in series]
    margin = margin_for(years_into_future)
    return Envelope(lower=min(means) - margin, upper=max(means) + margin, margin=margin)


def is_plausible(prediction: float, series: Series, target_year: int, *, current_year: int) -> bool:
    """True iff the prediction falls inside the widened historical range (inclusive)."""
    return plausibility_envelope(series, target_year - current_year).contains(prediction)
