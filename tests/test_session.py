"""Tests for view-layer session re-runs."""

from __future__ import annotations

import pytest
from conftest import REFERENCE_YEAR

from tempsim.core import ErrorKind
from tempsim.engine.models import ModelKind
from tempsim.series.repository import fallback_series
from tempsim.session import SimulationSession, current_session, get_session, reset_session


def _session() -> SimulationSession:
    return SimulationSession(fallback_series(), target_year=2040, current_year=REFERENCE_YEAR)


def test_model_change_before_any_run_does_nothing() -> None:
    session = _session()
    assert session.select_model(ModelKind.LINEAR) is None
    assert session.model == ModelKind.LINEAR
    assert session.last_run is None
    assert not session.user_initiated


def test_model_change_reruns_after_user_run() -> None:
    session = _session()
    first = session.run()
    assert first.ok
    assert session.user_initiated

    rerun = session.select_model(ModelKind.MOVING_AVERAGE)
    assert rerun is not None
    assert rerun.data is not None
    assert rerun.data.model == ModelKind.MOVING_AVERAGE
    assert rerun.data.target_year == 2040
    assert session.last_run is rerun.data


def test_same_model_does_not_rerun() -> None:
    session = _session()
    session.run()
    assert session.select_model(ModelKind.POLYNOMIAL) is None


def test_run_with_new_year_is_remembered() -> None:
    session = _session()
    session.run(2023)
    assert session.target_year == 2023
    assert session.last_result is not None
    assert session.last_result.error_codes == [ErrorKind.INVALID_YEAR]

    rerun = session.select_model(ModelKind.LINEAR)
    assert rerun is not None
    assert rerun.error_codes == [ErrorKind.INVALID_YEAR]


def test_singleton_lifecycle() -> None:
    reset_session()
    assert current_session() is None
    with pytest.raises(RuntimeError):
        get_session()
    session = get_session(fallback_series(), current_year=REFERENCE_YEAR)
    assert get_session() is session
    assert current_session() is session
    reset_session()
    assert current_session() is None
