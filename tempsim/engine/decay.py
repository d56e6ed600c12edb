"""Long-horizon heuristics: confidence decay and polynomial dampening.

Both are calibrated to annual temperatures around 24-28°C and a prediction
window that ends in 2100.
"""

from __future__ import annotations

MAX_CONFIDENT_YEARS = 15
MAX_PREDICTION_YEARS = 76
MIN_CONFIDENCE_MULTIPLIER = 0.25

DAMPENING_HORIZON = 50
MIN_DAMPENING = 0.2
MIN_WARMING_ADJUSTMENT = 0.3
MAX_COOLING_ADJUSTMENT = 1.7


def clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, value))


def confidence_multiplier(years_into_future: int) -> float:
    """Multiplier in [0.25, 1] shrinking confidence as the target recedes."""
    if years_into_future <= MAX_CONFIDENT_YEARS:
        return 1.0
    decay = ((years_into_future - MAX_CONFIDENT_YEARS) / (MAX_PREDICTION_YEARS - MAX_CONFIDENT_YEARS)) ** 0.7
    return max(MIN_CONFIDENCE_MULTIPLIER, 1 - decay * 0.75)


def decayed_confidence(raw_r2: float, years_into_future: int) -> float:
    return clamp_unit(raw_r2 * confidence_multiplier(years_into_future))


def dampening_factor(years_into_future: int) -> float:
    """Shrink factor in [0.2, 1] for far-future polynomial extrapolation.

    Targets at or before the current year are not dampened.
    """
    if years_into_future <= 0:
        return 1.0
    return max(MIN_DAMPENING, 1 - (years_into_future / DAMPENING_HORIZON) ** 0.8)


def adjustment_factor(predicted_change: float) -> float:
    """Shrink large warming, amplify cooling up to 1.7x."""
    if predicted_change > 0:
        return max(MIN_WARMING_ADJUSTMENT, 1 - predicted_change / 10)
    return min(MAX_COOLING_ADJUSTMENT, 1 - predicted_change / 10)


def dampen(last_known: float, raw_prediction: float, years_into_future: int) -> float:
    change = raw_prediction - last_known
    return last_known + change * dampening_factor(years_into_future) * adjustment_factor(change)
