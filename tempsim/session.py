"""View-layer simulation state: selected model, target year, last run."""

from __future__ import annotations

import logging

from tempsim.core import Result
from tempsim.engine.models import ModelKind
from tempsim.series.record import Series
from tempsim.simulation import SimulationRun, simulate

logger = logging.getLogger("tempsim.session")


class SimulationSession:
    """Remembers what the user picked and re-runs when the model changes.

    Re-running on a model switch only happens once the user has started a run
    themselves and a result exists.
    """

    def __init__(
        self,
        series: Series,
        *,
        model: ModelKind = ModelKind.POLYNOMIAL,
        target_year: int = 2030,
        current_year: int | None = None,
    ) -> None:
        self.series = series
        self.model = model
        self.target_year = target_year
        self.current_year = current_year
        self.user_initiated = False
        self.last_result: Result[SimulationRun] | None = None

    @property
    def last_run(self) -> SimulationRun | None:
        return self.last_result.data if self.last_result is not None else None

    def run(self, target_year: int | None = None) -> Result[SimulationRun]:
        """User-triggered run, optionally with a new target year."""
        if target_year is not None:
            self.target_year = target_year
        self.user_initiated = True
        return self._run()

    def select_model(self, model: ModelKind) -> Result[SimulationRun] | None:
        """Switch model; returns the re-run result, or None when nothing was re-run."""
        changed = model != self.model
        self.model = model
        if changed and self.user_initiated and self.last_result is not None:
            logger.info("Model changed to %s, re-running for %d", model, self.target_year)
            return self._run()
        return None

    def replace_series(self, series: Series) -> None:
        self.series = series

    def _run(self) -> Result[SimulationRun]:
        self.last_result = simulate(self.series, self.target_year, self.model, current_year=self.current_year)
        return self.last_result


_session: SimulationSession | None = None


def current_session() -> SimulationSession | None:
    return _session


def get_session(series: Series | None = None, **kwargs: object) -> SimulationSession:
    """Get the module-level singleton session, creating it from `series` on first use."""
    global _session  # noqa: PLW0603
    if _session is None:
        if series is None:
            raise RuntimeError("Session not initialised: no series loaded")
        _session = SimulationSession(series, **kwargs)  # type: ignore[arg-type]
    return _session


def reset_session() -> None:
    """Reset the singleton (for testing)."""
    global _session  # noqa: PLW0603
    _session = None
