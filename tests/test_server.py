"""Tests for the HTTP API."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Generator
from unittest.mock import patch

import pytest
from conftest import REFERENCE_YEAR
from httpx import ASGITransport, AsyncClient

from tempsim.series.repository import fallback_series
from tempsim.server import app
from tempsim.session import SimulationSession


@pytest.fixture
def session() -> Generator[SimulationSession]:
    """Provide a fresh session and patch the server to use it."""
    session = SimulationSession(fallback_series(), current_year=REFERENCE_YEAR)
    with patch("tempsim.server.current_session", return_value=session):
        yield session


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    transport = ASGITransport(app=app)  # type: ignore[arg-type]
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def test_health(client: AsyncClient, session: SimulationSession) -> None:
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["ok"] is True
    assert resp.json()["records"] == 122


async def test_series(client: AsyncClient, session: SimulationSession) -> None:
    resp = await client.get("/api/series")
    body = resp.json()
    assert len(body) == 122
    assert body[0] == {"year": 1901, "annual_mean": 25.56, "five_year_smooth": 25.54}


async def test_simulate(client: AsyncClient, session: SimulationSession) -> None:
    resp = await client.post("/api/simulate", json={"year": 2030, "model": "linear"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["ok"] is True
    run = body["run"]
    assert run["model"] == "linear"
    assert run["state"] == "done"
    assert run["trend_line"]["years"][-1] == "2030"
    assert run["outcome"]["narrative_details"][0] == "Year: 2030"
    assert [s["name"] for s in body["chart"]["series"]] == ["Historical Data (5-Year Smooth)", "Prediction Trend"]


async def test_simulate_invalid_year(client: AsyncClient, session: SimulationSession) -> None:
    resp = await client.post("/api/simulate", json={"year": 2023})
    body = resp.json()
    assert body["ok"] is False
    assert body["diagnostics"][0]["code"] == "INVALID_YEAR"
    assert body["run"]["outcome"]["error_message"] == "Please select a year from 2024 onwards for predictions."
    assert body["run"]["trend_line"]["years"] == []


async def test_simulate_rejects_unknown_model(client: AsyncClient, session: SimulationSession) -> None:
    resp = await client.post("/api/simulate", json={"year": 2030, "model": "spline"})
    assert resp.status_code == 422


async def test_model_switch_reruns_only_after_run(client: AsyncClient, session: SimulationSession) -> None:
    resp = await client.put("/api/model", json={"model": "linear"})
    assert resp.json() == {"ok": True, "rerun": False, "model": "linear"}

    await client.post("/api/simulate", json={"year": 2045})
    resp = await client.put("/api/model", json={"model": "moving-average"})
    body = resp.json()
    assert body["rerun"] is True
    assert body["run"]["model"] == "moving-average"
    assert body["run"]["target_year"] == 2045


async def test_chart_spec(client: AsyncClient, session: SimulationSession) -> None:
    resp = await client.get("/api/chart")
    assert resp.status_code == 200
    assert len(resp.json()["layer"]) == 1

    await client.post("/api/simulate", json={"year": 2060})
    resp = await client.get("/api/chart")
    assert len(resp.json()["layer"]) == 2


async def test_export_requires_run(client: AsyncClient, session: SimulationSession) -> None:
    resp = await client.get("/api/export")
    assert resp.status_code == 404


async def test_export_csv(client: AsyncClient, session: SimulationSession) -> None:
    await client.post("/api/simulate", json={"year": 2035, "model": "polynomial"})
    resp = await client.get("/api/export")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "temperature_simulation_results.csv" in resp.headers["content-disposition"]
    text = resp.text
    assert text.startswith("Year,Annual Mean,5-Year Smooth\n1901,")
    assert "\nPrediction Results\nYear,Predicted Temperature\n2022," in text
    assert "\nSimulation Details\nYear: 2035\n" in text
