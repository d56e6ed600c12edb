"""Chart payloads: category/series data and a layered Vega-Lite spec.

Historical lines are solid; the prediction trend is dashed and starts at the
junction with the last historical value.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from tempsim.engine.models import ModelKind
from tempsim.engine.trendline import TrendLine
from tempsim.render.theme import MODEL_COLORS, PREDICTION_COLOR, apply_theme
from tempsim.series.record import Series

SAMPLE_EVERY = 10
PREDICTION_SERIES = "Prediction Trend"

_HISTORICAL_NAMES = {
    ModelKind.POLYNOMIAL: "Annual Mean Temperature",
    ModelKind.LINEAR: "Historical Data (5-Year Smooth)",
    ModelKind.MOVING_AVERAGE: "5-Year Smooth",
}


class ChartSeries(BaseModel):
    name: str
    points: list[float | None] = Field(default_factory=list)
    dashed: bool = False


class ChartData(BaseModel):
    categories: list[str] = Field(default_factory=list)
    series: list[ChartSeries] = Field(default_factory=list)


def y_axis_range(prediction: float | None) -> tuple[float, float]:
    """Fixed 24-28°C axis, stretched to 29 or 30 for hot predictions."""
    if not prediction:
        return (24.0, 28.0)
    if prediction > 29:
        return (24.0, 30.0)
    if prediction > 28:
        return (24.0, 29.0)
    return (24.0, 28.0)


def build_chart_data(
    series: Series,
    model: ModelKind,
    trend_line: TrendLine | None = None,
    *,
    show_prediction: bool = False,
) -> ChartData:
    """Build the categories/series payload for the selected model's view.

    Polynomial shows raw annual means; the other models show the five-year smooth.
    """
    sampled = [r for i, r in enumerate(series) if i % SAMPLE_EVERY == 0]
    categories = [str(r.year) for r in sampled]

    if model == ModelKind.POLYNOMIAL:
        values: list[float | None] = [r.annual_mean for r in sampled]
    else:
        values = [r.five_year_smooth for r in sampled]
    chart = ChartData(categories=categories, series=[ChartSeries(name=_HISTORICAL_NAMES[model], points=values)])

    if not show_prediction or trend_line is None or not trend_line.years or not series:
        return chart

    chart.categories.extend(trend_line.years[1:])
    padding: list[float | None] = [None] * max(0, len(sampled) - 1)
    chart.series.append(
        ChartSeries(
            name=PREDICTION_SERIES,
            points=[*padding, series[-1].five_year_smooth, *trend_line.temperatures[1:]],
            dashed=True,
        )
    )
    return chart


def build_chart_spec(
    series: Series,
    model: ModelKind,
    trend_line: TrendLine | None = None,
    *,
    prediction: float | None = None,
    show_prediction: bool = False,
) -> dict[str, Any]:
    """Layered Vega-Lite spec over the same data as `build_chart_data`."""
    data = build_chart_data(series, model, trend_line, show_prediction=show_prediction)
    rows = [
        {"year": year, "temperature": value, "series": s.name}
        for s in data.series
        for year, value in zip(data.categories, s.points, strict=False)
        if value is not None
    ]
    y_min, y_max = y_axis_range(prediction)
    x = {"field": "year", "type": "ordinal", "title": "Year", "sort": None}
    y = {
        "field": "temperature",
        "type": "quantitative",
        "title": "Temperature (°C)",
        "scale": {"domain": [y_min, y_max]},
    }

    layers: list[dict[str, Any]] = [
        {
            "transform": [{"filter": f"datum.series !== '{PREDICTION_SERIES}'"}],
            "mark": {"type": "line", "point": True, "interpolate": "monotone"},
            "encoding": {"x": x, "y": y, "color": {"value": MODEL_COLORS[model]}},
        }
    ]
    if any(s.dashed for s in data.series):
        layers.append(
            {
                "transform": [{"filter": f"datum.series === '{PREDICTION_SERIES}'"}],
                "mark": {"type": "line", "point": True, "strokeDash": [5, 5]},
                "encoding": {"x": x, "y": y, "color": {"value": PREDICTION_COLOR}},
            }
        )

    title = "Temperature Trends"
    if series:
        title = f"Philippines Temperature Trends ({series[0].year}-{series[-1].year})"

    return apply_theme(
        {
            "title": title,
            "data": {"values": rows},
            "layer": layers,
            "width": "container",
            "height": 500,
        }
    )
