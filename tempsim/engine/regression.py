"""Least-squares fit primitives: linear and polynomial regression over (x, y) pairs."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from pydantic import BaseModel

Point = tuple[float, float]


class DegenerateFitError(ValueError):
    """Raised when the points cannot determine the requested fit."""


class LinearFit(BaseModel):
    slope: float
    intercept: float
    r2: float

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept


class PolynomialFit(BaseModel):
    coefficients: list[float]  # highest power first
    r2: float

    @property
    def degree(self) -> int:
        return len(self.coefficients) - 1

    def predict(self, x: float) -> float:
        return float(np.polyval(self.coefficients, x))


def r_squared(actual: Sequence[float], predicted: Sequence[float]) -> float:
    """Coefficient of determination, 1 - SS_res / SS_tot.

    A constant series has no variance to explain; its R² is 0.0 rather than NaN.
    """
    y = np.asarray(actual, dtype=float)
    y_hat = np.asarray(predicted, dtype=float)
    ss_total = float(np.sum((y - y.mean()) ** 2))
    if ss_total == 0:
        return 0.0
    ss_residual = float(np.sum((y - y_hat) ** 2))
    return 1.0 - ss_residual / ss_total


def fit_polynomial(points: Sequence[Point], degree: int = 2) -> PolynomialFit:
    """Fit y = c0·x^d + ... + cd by least squares on the Vandermonde matrix."""
    xs, ys = _split(points, degree)
    design = np.vander(xs, degree + 1)
    coefficients, *_ = np.linalg.lstsq(design, ys, rcond=None)
    fitted = design @ coefficients
    return PolynomialFit(coefficients=[float(c) for c in coefficients], r2=r_squared(ys, fitted))


def fit_linear(points: Sequence[Point]) -> LinearFit:
    """Ordinary least squares line through the points."""
    poly = fit_polynomial(points, degree=1)
    slope, intercept = poly.coefficients
    return LinearFit(slope=slope, intercept=intercept, r2=poly.r2)


def _split(points: Sequence[Point], degree: int) -> tuple[np.ndarray, np.ndarray]:
    if degree < 1:
        raise ValueError(f"degree must be >= 1, got {degree}")
    xs = np.array([p[0] for p in points], dtype=float)
    ys = np.array([p[1] for p in points], dtype=float)
    distinct = len(np.unique(xs))
    if distinct < degree + 1:
        raise DegenerateFitError(
            f"degree {degree} fit needs {degree + 1} distinct x-values, got {distinct}"
        )
    return xs, ys
