"""CLI entry points: `tempsim connect`, `tempsim predict` and `tempsim serve`."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from tempsim.config import DataSourceConfig, current_year, ensure_dirs, load_config, save_config
from tempsim.core import Result, Severity
from tempsim.engine.models import ModelKind
from tempsim.render.export import generate_csv
from tempsim.series.record import Series
from tempsim.series.repository import fetch_series, load_series
from tempsim.simulation import simulate

app = typer.Typer(name="tempsim", help="Annual mean temperature prediction for the Philippines.")
console = Console()


@app.command()
def connect(
    dsn: str = typer.Argument(help="PostgreSQL connection string"),
    table: str = typer.Option("philippines_temperature_trends", "--table", "-t", help="Table holding the series"),
) -> None:
    """Check a PostgreSQL source and save it as the active data source."""
    ensure_dirs()
    console.print("[bold]Connecting to database...[/bold]")
    try:
        series = asyncio.run(fetch_series(dsn, table=table))
    except Exception as e:  # noqa: BLE001
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    config = load_config()
    config.data = DataSourceConfig(dsn=dsn, table=table)
    save_config(config)

    if series:
        console.print(f"[green]Connected.[/green] {len(series)} records, {series[0].year}-{series[-1].year}")
    else:
        console.print(f"[yellow]Connected, but {table} is empty. Predictions will use sample data.[/yellow]")


@app.command()
def predict(
    year: int | None = typer.Option(None, "--year", "-y", help="Year to predict (2024-2100)"),
    model: ModelKind | None = typer.Option(None, "--model", "-m", help="Prediction model"),
    export: Path | None = typer.Option(None, "--export", "-e", help="Write CSV results to this path"),
) -> None:
    """Run one simulation and print the result."""
    config = load_config()
    target_year = year if year is not None else config.settings.default_year
    kind = model if model is not None else config.settings.default_model

    series = _load(config.data)
    result = simulate(series, target_year, kind, current_year=current_year(config))
    run = result.data
    assert run is not None

    if not result.ok:
        for d in result.diagnostics:
            if d.severity == Severity.ERROR:
                console.print(f"[red]Error:[/red] {d.message}")
                if d.hint:
                    console.print(f"  Hint: {d.hint}")

    details = Table(title="Simulation Results", show_header=False)
    details.add_column("Detail")
    for line in run.outcome.narrative_details:
        details.add_row(line)
    console.print(details)

    if run.trend_line.years:
        trend = Table(title="Prediction Trend")
        trend.add_column("Year", style="cyan")
        trend.add_column("Temperature (°C)", justify="right")
        for y, temp in run.trend_line.points:
            trend.add_row(y, f"{temp:.2f}")
        console.print(trend)

    if export is not None:
        outcome = run.outcome if run.succeeded else None
        export.write_text(generate_csv(series, outcome, run.trend_line))
        console.print(f"[dim]Results written to {export}[/dim]")

    if not result.ok:
        raise typer.Exit(1)


def _load(source: DataSourceConfig) -> Series:
    result: Result[Series] = asyncio.run(load_series(source))
    for d in result.diagnostics:
        if d.severity == Severity.WARNING:
            console.print(f"[yellow]{d.message}[/yellow]")
    assert result.data is not None
    return result.data


@app.command()
def serve(
    port: int = typer.Option(8000, "--port", "-p", help="Port to serve on"),
) -> None:
    """Start the tempsim HTTP API."""
    import logging

    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    console.print(f"[bold]Starting tempsim on port {port}...[/bold]")
    uvicorn.run("tempsim.server:app", host="0.0.0.0", port=port, reload=False)


def main() -> None:
    app()
