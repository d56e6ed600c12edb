"""Trend line between the last historical point and the target year."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tempsim.engine.models import ModelKind, predict
from tempsim.series.record import Series

TREND_POINTS = 5


class TrendLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    years: list[str] = Field(default_factory=list)
    temperatures: list[float] = Field(default_factory=list)

    @model_validator(mode="after")
    def _aligned(self) -> TrendLine:
        if len(self.years) != len(self.temperatures):
            raise ValueError(f"years ({len(self.years)}) and temperatures ({len(self.temperatures)}) differ in length")
        return self

    @property
    def points(self) -> list[tuple[str, float]]:
        return list(zip(self.years, self.temperatures, strict=True))


def generate_trend_line(
    final_prediction: float,
    kind: ModelKind,
    series: Series,
    target_year: int,
    *,
    current_year: int,
) -> TrendLine:
    """Interpolate up to five points by re-running the selected model at intermediate years.

    The first point is the last historical smooth value; the last is always
    (target_year, final_prediction).
    """
    if not series:
        return TrendLine()

    last = series[-1]
    years = [str(last.year)]
    temps = [last.five_year_smooth]

    step = math.ceil((target_year - last.year) / TREND_POINTS)
    if step <= 0:
        years.append(str(target_year))
        temps.append(final_prediction)
        return TrendLine(years=years, temperatures=temps)

    for year in range(last.year + step, target_year + 1, step):
        value = predict(kind, series, year, current_year=current_year).predicted_temperature
        years.append(str(year))
        temps.append(value if math.isfinite(value) else final_prediction)

    if years[-1] == str(target_year):
        temps[-1] = final_prediction
    else:
        years.append(str(target_year))
        temps.append(final_prediction)

    return TrendLine(years=years, temperatures=temps)
