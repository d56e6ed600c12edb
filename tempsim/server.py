"""FastAPI server for tempsim."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from tempsim.config import current_year, load_config
from tempsim.core import Result
from tempsim.engine.models import ModelKind
from tempsim.render.chart import build_chart_data, build_chart_spec
from tempsim.render.export import EXPORT_FILENAME, generate_csv
from tempsim.series.repository import load_series
from tempsim.session import SimulationSession, current_session, get_session
from tempsim.simulation import SimulationRun

logger = logging.getLogger("tempsim.server")

app = FastAPI(title="tempsim", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Set when the bundled sample replaced the configured source
_sample_notice: str | None = None


async def _get_session() -> SimulationSession:
    global _sample_notice  # noqa: PLW0603
    session = current_session()
    if session is not None:
        return session

    config = load_config()
    loaded = await load_series(config.data)
    assert loaded.data is not None
    if loaded.diagnostics:
        _sample_notice = loaded.diagnostics[0].message
        logger.info("%s", _sample_notice)
    logger.info("Series ready: %d records", len(loaded.data))
    return get_session(
        loaded.data,
        model=config.settings.default_model,
        target_year=config.settings.default_year,
        current_year=current_year(config),
    )


def _run_payload(session: SimulationSession, result: Result[SimulationRun]) -> dict[str, Any]:
    run = result.data
    assert run is not None
    chart = build_chart_data(session.series, run.model, run.trend_line, show_prediction=session.user_initiated)
    return {
        "ok": result.ok,
        "run": run.model_dump(mode="json"),
        "diagnostics": [d.model_dump() for d in result.diagnostics],
        "chart": chart.model_dump(),
    }


@app.get("/api/health")
async def health() -> dict[str, Any]:
    session = await _get_session()
    response: dict[str, Any] = {"ok": True, "records": len(session.series)}
    if _sample_notice:
        response["notice"] = _sample_notice
    return response


@app.get("/api/series")
async def get_series() -> list[dict[str, Any]]:
    session = await _get_session()
    return [r.model_dump() for r in session.series]


class SimulateRequest(BaseModel):
    year: int
    model: ModelKind | None = None


@app.post("/api/simulate")
async def run_simulation(request: SimulateRequest) -> dict[str, Any]:
    logger.info("POST /api/simulate year=%d model=%s", request.year, request.model)
    session = await _get_session()
    if request.model is not None:
        session.model = request.model
    result = session.run(request.year)
    return _run_payload(session, result)


class SelectModelRequest(BaseModel):
    model: ModelKind


@app.put("/api/model")
async def select_model(request: SelectModelRequest) -> dict[str, Any]:
    session = await _get_session()
    result = session.select_model(request.model)
    if result is None:
        return {"ok": True, "rerun": False, "model": session.model}
    return {"rerun": True, "model": session.model, **_run_payload(session, result)}


@app.get("/api/chart")
async def get_chart() -> dict[str, Any]:
    session = await _get_session()
    run = session.last_run
    trend_line = run.trend_line if run is not None else None
    prediction = run.outcome.predicted_temperature if run is not None else None
    return build_chart_spec(
        session.series,
        session.model,
        trend_line,
        prediction=prediction,
        show_prediction=session.user_initiated,
    )


@app.get("/api/export")
async def export_csv() -> Any:
    session = await _get_session()
    run = session.last_run
    if run is None:
        return JSONResponse(status_code=404, content={"error": "No simulation has been run yet."})
    outcome = run.outcome if run.succeeded else None
    return PlainTextResponse(
        generate_csv(session.series, outcome, run.trend_line),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
