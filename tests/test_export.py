"""Tests for CSV export."""

from __future__ import annotations

from conftest import make_series

from tempsim.engine.models import PredictionOutcome
from tempsim.engine.trendline import TrendLine
from tempsim.render.export import generate_csv

SERIES = make_series([26.79, 26.74], annual=[26.7, 26.69])


def test_history_only_without_prediction() -> None:
    text = generate_csv(SERIES, None, None)
    assert text == "Year,Annual Mean,5-Year Smooth\n2021,26.7,26.79\n2022,26.69,26.74\n"


def test_full_export_layout() -> None:
    outcome = PredictionOutcome(predicted_temperature=27.1, narrative_details=["Year: 2030", "Model: Linear Regression"])
    trend = TrendLine(years=["2022", "2030"], temperatures=[26.74, 27.1])
    text = generate_csv(SERIES, outcome, trend)
    assert text.splitlines() == [
        "Year,Annual Mean,5-Year Smooth",
        "2021,26.7,26.79",
        "2022,26.69,26.74",
        "",
        "Prediction Results",
        "Year,Predicted Temperature",
        "2022,26.74",
        "2030,27.1",
        "",
        "Simulation Details",
        "Year: 2030",
        "Model: Linear Regression",
    ]


def test_empty_trend_skips_prediction_sections() -> None:
    outcome = PredictionOutcome(error_message="Calculation error occurred")
    text = generate_csv(SERIES, outcome, TrendLine())
    assert "Prediction Results" not in text
    assert "Simulation Details" not in text
