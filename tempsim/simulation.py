"""Simulation orchestrator: validate → compute → guard → trend line.

`simulate` never raises. Every failure becomes a zero outcome with an error
message plus an ERROR diagnostic keyed by `ErrorKind`.
"""

from __future__ import annotations

import logging
from enum import StrEnum

from pydantic import BaseModel, Field

from tempsim.config import current_year as configured_year
from tempsim.core import ErrorKind, Result
from tempsim.engine.guard import plausibility_envelope
from tempsim.engine.models import ModelKind, PredictionOutcome, predict
from tempsim.engine.regression import DegenerateFitError
from tempsim.engine.trendline import TrendLine, generate_trend_line
from tempsim.series.record import Series
from tempsim.series.repository import fallback_series

logger = logging.getLogger("tempsim.simulation")

MIN_TARGET_YEAR = 2024
MAX_TARGET_YEAR = 2100

CALCULATION_ERROR = "Calculation error occurred"
OUT_OF_RANGE_ERROR = "Prediction falls outside realistic range."
_RETRY_DETAIL = "Something went wrong. Please try again."


class SimulationState(StrEnum):
    IDLE = "idle"
    VALIDATING = "validating"
    COMPUTING = "computing"
    VALIDATED = "validated"
    REJECTED = "rejected"
    DONE = "done"


class SimulationRun(BaseModel):
    model: ModelKind
    target_year: int
    state: SimulationState = SimulationState.IDLE
    outcome: PredictionOutcome = Field(default_factory=PredictionOutcome)
    trend_line: TrendLine = Field(default_factory=TrendLine)

    @property
    def succeeded(self) -> bool:
        return self.state == SimulationState.DONE and self.outcome.error_message is None


def simulate(
    series: Series,
    target_year: int,
    model: ModelKind,
    *,
    current_year: int | None = None,
) -> Result[SimulationRun]:
    """Run one prediction with the selected model and assemble the result."""
    result: Result[SimulationRun] = Result()
    year_now = configured_year() if current_year is None else current_year
    run = SimulationRun(model=model, target_year=target_year)

    _advance(run, SimulationState.VALIDATING)
    if target_year < MIN_TARGET_YEAR or target_year > MAX_TARGET_YEAR:
        message = (
            f"Please select a year from {MIN_TARGET_YEAR} onwards for predictions."
            if target_year < MIN_TARGET_YEAR
            else f"Please select a year no later than {MAX_TARGET_YEAR} for predictions."
        )
        return _reject(result, run, ErrorKind.INVALID_YEAR, message, "Invalid year selected")

    if not series:
        logger.warning("Empty series supplied, substituting bundled sample data")
        result.warning("SAMPLE_DATA", "No historical data supplied. Using sample data instead.")
        series = fallback_series()

    _advance(run, SimulationState.COMPUTING)
    try:
        outcome = predict(model, series, target_year, current_year=year_now)
    except DegenerateFitError as e:
        logger.warning("Degenerate %s fit: %s", model, e)
        return _reject(result, run, ErrorKind.DEGENERATE_FIT, CALCULATION_ERROR, _RETRY_DETAIL, hint=str(e))
    except (ArithmeticError, ValueError) as e:
        logger.exception("Computation fault in %s model", model)
        return _reject(result, run, ErrorKind.COMPUTATION_FAULT, CALCULATION_ERROR, _RETRY_DETAIL, hint=str(e))

    envelope = plausibility_envelope(series, target_year - year_now)
    if not envelope.contains(outcome.predicted_temperature):
        logger.info(
            "Rejected %s prediction %.3f outside [%.3f, %.3f]",
            model,
            outcome.predicted_temperature,
            envelope.lower,
            envelope.upper,
        )
        return _reject(
            result,
            run,
            ErrorKind.OUT_OF_RANGE,
            OUT_OF_RANGE_ERROR,
            "Out of realistic range",
            hint=f"Allowed range is {envelope.lower:.2f}°C to {envelope.upper:.2f}°C",
        )

    _advance(run, SimulationState.VALIDATED)
    run.outcome = outcome
    run.trend_line = generate_trend_line(
        outcome.predicted_temperature, model, series, target_year, current_year=year_now
    )
    _advance(run, SimulationState.DONE)
    result.data = run
    return result


def _advance(run: SimulationRun, state: SimulationState) -> None:
    logger.debug("%s %d: %s -> %s", run.model, run.target_year, run.state, state)
    run.state = state


def _reject(
    result: Result[SimulationRun],
    run: SimulationRun,
    kind: ErrorKind,
    message: str,
    detail: str,
    *,
    hint: str | None = None,
) -> Result[SimulationRun]:
    _advance(run, SimulationState.REJECTED)
    run.outcome = PredictionOutcome(narrative_details=[detail], error_message=message)
    run.trend_line = TrendLine()
    result.error(kind, message, hint=hint)
    result.data = run
    return result
