"""The three prediction strategies and their dispatcher.

Each strategy is a pure function `(series, target_year, *, current_year) -> PredictionOutcome`.
Polynomial and Linear temper their confidence with distance-based decay; Moving-Average
reports its local fit quality only.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from tempsim.engine.decay import clamp_unit, dampen, decayed_confidence
from tempsim.engine.regression import fit_linear, fit_polynomial, r_squared
from tempsim.series.record import Series

POLYNOMIAL_WINDOW = 30
POLYNOMIAL_DEGREE = 2
MOVING_AVERAGE_WINDOW = 5


class ModelKind(StrEnum):
    POLYNOMIAL = "polynomial"
    LINEAR = "linear"
    MOVING_AVERAGE = "moving-average"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    ModelKind.POLYNOMIAL: "Polynomial Regression",
    ModelKind.LINEAR: "Linear Regression",
    ModelKind.MOVING_AVERAGE: "5-Year Moving Average",
}


class PredictionOutcome(BaseModel):
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    predicted_temperature: float = 0.0
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    model_equation: str | None = None
    narrative_details: list[str] = Field(default_factory=list)
    error_message: str | None = None


Predictor = Callable[..., PredictionOutcome]


def predict(kind: ModelKind, series: Series, target_year: int, *, current_year: int) -> PredictionOutcome:
    """Dispatch to the strategy selected by `kind`."""
    return _PREDICTORS[kind](series, target_year, current_year=current_year)


def _details(target_year: int, prediction: float, kind: ModelKind, confidence: float, *extra: str) -> list[str]:
    return [
        f"Year: {target_year}",
        f"Predicted Temperature: {prediction:.1f}°C",
        f"Model: {kind.label}",
        *extra,
        f"Model Confidence: {confidence * 100:.0f}%",
    ]


def predict_polynomial(series: Series, target_year: int, *, current_year: int) -> PredictionOutcome:
    """Quadratic fit over the last 30 years, dampened for long horizons."""
    if not series:
        return PredictionOutcome()

    recent = series[-POLYNOMIAL_WINDOW:]
    base_year = recent[0].year
    points = [(float(r.year - base_year), r.five_year_smooth) for r in recent]
    fit = fit_polynomial(points, degree=POLYNOMIAL_DEGREE)

    years_into_future = target_year - current_year
    raw = fit.predict(target_year - base_year)
    prediction = dampen(recent[-1].five_year_smooth, raw, years_into_future)

    n = len(points)
    adjusted_r2 = 1 - ((1 - fit.r2) * (n - 1)) / (n - POLYNOMIAL_DEGREE - 1)
    confidence = decayed_confidence(adjusted_r2, years_into_future)

    a, b, c = fit.coefficients
    equation = f"y = {a:.6e}x² + {b:.6f}x + {c:.4f}"
    return PredictionOutcome(
        predicted_temperature=prediction,
        confidence=confidence,
        model_equation=equation,
        narrative_details=_details(
            target_year, prediction, ModelKind.POLYNOMIAL, confidence, f"Equation: {equation}"
        ),
    )


def predict_linear(series: Series, target_year: int, *, current_year: int) -> PredictionOutcome:
    """Straight-line fit over the whole series; no dampening."""
    if not series:
        return PredictionOutcome()

    base_year = series[0].year
    fit = fit_linear([(float(r.year - base_year), r.five_year_smooth) for r in series])
    prediction = fit.predict(target_year - base_year)
    # Same 15/76-year decay constants as the polynomial model.
    confidence = decayed_confidence(fit.r2, target_year - current_year)

    equation = f"y = {fit.slope:.6f}x + {fit.intercept:.4f}"
    return PredictionOutcome(
        predicted_temperature=prediction,
        confidence=confidence,
        model_equation=equation,
        narrative_details=_details(
            target_year,
            prediction,
            ModelKind.LINEAR,
            confidence,
            f"Base Year: {base_year} (Temperature: {fit.intercept:.2f}°C)",
            f"Technical Equation: {equation}",
        ),
    )


def predict_moving_average(series: Series, target_year: int, *, current_year: int) -> PredictionOutcome:
    """Extrapolate the last five smoothed values at their average yearly change.

    `current_year` is accepted for a uniform signature; this model applies no decay.
    """
    if not series:
        return PredictionOutcome()

    recent = series[-MOVING_AVERAGE_WINDOW:]
    smooth = [r.five_year_smooth for r in recent]
    avg_temp = sum(smooth) / len(smooth)
    yearly_change = (smooth[-1] - smooth[0]) / (MOVING_AVERAGE_WINDOW - 1)
    years_ahead = target_year - series[-1].year
    prediction = avg_temp + yearly_change * years_ahead

    implied = [smooth[0] + yearly_change * i for i in range(len(smooth))]
    confidence = clamp_unit(r_squared(smooth, implied))

    sign = "+" if yearly_change > 0 else ""
    return PredictionOutcome(
        predicted_temperature=prediction,
        confidence=confidence,
        narrative_details=_details(
            target_year,
            prediction,
            ModelKind.MOVING_AVERAGE,
            confidence,
            f"Rate of Change: {sign}{yearly_change:.4f}°C per year",
        ),
    )


_PREDICTORS: dict[ModelKind, Predictor] = {
    ModelKind.POLYNOMIAL: predict_polynomial,
    ModelKind.LINEAR: predict_linear,
    ModelKind.MOVING_AVERAGE: predict_moving_average,
}
