"""Tests for confidence decay and dampening heuristics."""

from __future__ import annotations

import pytest

from tempsim.engine.decay import (
    adjustment_factor,
    clamp_unit,
    confidence_multiplier,
    dampen,
    dampening_factor,
    decayed_confidence,
)


@pytest.mark.parametrize("years", [-10, 0, 1, 15])
def test_no_decay_within_fifteen_years(years: int) -> None:
    assert confidence_multiplier(years) == 1.0


def test_decay_floors_at_quarter() -> None:
    assert confidence_multiplier(76) == pytest.approx(0.25)
    assert confidence_multiplier(120) == 0.25


def test_decay_is_monotonic() -> None:
    values = [confidence_multiplier(y) for y in range(15, 77)]
    assert all(a >= b for a, b in zip(values, values[1:], strict=False))
    assert 0.25 < confidence_multiplier(40) < 1.0


def test_decayed_confidence_clamped() -> None:
    assert decayed_confidence(0.8, 10) == pytest.approx(0.8)
    assert decayed_confidence(0.8, 76) == pytest.approx(0.2)
    assert decayed_confidence(-0.3, 5) == 0.0
    assert decayed_confidence(1.4, 5) == 1.0


def test_clamp_unit() -> None:
    assert clamp_unit(-1.0) == 0.0
    assert clamp_unit(0.5) == 0.5
    assert clamp_unit(2.0) == 1.0


def test_dampening_factor() -> None:
    assert dampening_factor(0) == 1.0
    assert dampening_factor(-3) == 1.0
    assert dampening_factor(10) == pytest.approx(1 - 0.2**0.8)
    assert dampening_factor(50) == 0.2
    assert dampening_factor(76) == 0.2


@pytest.mark.parametrize(
    ("change", "expected"),
    [
        (2.0, 0.8),
        (8.0, 0.3),
        (0.0, 1.0),
        (-2.0, 1.2),
        (-10.0, 1.7),
    ],
)
def test_adjustment_factor(change: float, expected: float) -> None:
    assert adjustment_factor(change) == pytest.approx(expected)


def test_dampen_no_change() -> None:
    assert dampen(26.0, 26.0, 40) == 26.0


def test_dampen_shrinks_warming() -> None:
    damped = dampen(26.0, 27.0, 30)
    assert 26.0 < damped < 27.0
    assert damped == pytest.approx(26.0 + 1.0 * dampening_factor(30) * 0.9)
