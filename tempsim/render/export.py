"""CSV export of the historical series and the latest simulation."""

from __future__ import annotations

from tempsim.engine.models import PredictionOutcome
from tempsim.engine.trendline import TrendLine
from tempsim.series.record import Series

EXPORT_FILENAME = "temperature_simulation_results.csv"


def generate_csv(series: Series, outcome: PredictionOutcome | None, trend_line: TrendLine | None) -> str:
    """Render the export payload.

    The prediction sections are only written when there is an outcome and a
    non-empty trend line.
    """
    lines = ["Year,Annual Mean,5-Year Smooth"]
    lines.extend(f"{r.year},{r.annual_mean},{r.five_year_smooth}" for r in series)

    if outcome is not None and trend_line is not None and trend_line.years:
        lines.extend(["", "Prediction Results", "Year,Predicted Temperature"])
        lines.extend(f"{year},{temp}" for year, temp in trend_line.points)
        lines.extend(["", "Simulation Details"])
        lines.extend(outcome.narrative_details)

    return "\n".join(lines) + "\n"
