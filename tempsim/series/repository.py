"""Historical series loading: Postgres via asyncpg, with a bundled sample fallback."""

from __future__ import annotations

import csv
import io
import logging
import re
from pathlib import Path

import asyncpg

from tempsim.config import DataSourceConfig
from tempsim.core import Result
from tempsim.series.record import HistoricalRecord, Series, normalize_series

logger = logging.getLogger("tempsim.series")

_FALLBACK_PATH = Path(__file__).parent / "data" / "fallback_series.csv"
_TABLE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


def fallback_series() -> Series:
    """Return the bundled 1901-2022 sample series."""
    return parse_series_csv(_FALLBACK_PATH.read_text())


def parse_series_csv(text: str) -> Series:
    """Parse `year,annual_mean,five_year_smooth` CSV text into an ordered series."""
    reader = csv.DictReader(io.StringIO(text))
    return normalize_series(
        HistoricalRecord(
            year=int(row["year"]),
            annual_mean=float(row["annual_mean"]),
            five_year_smooth=float(row["five_year_smooth"]),
        )
        for row in reader
    )


async def fetch_series(dsn: str, *, table: str, timeout_seconds: int = 10) -> Series:
    """Read the full series from Postgres, ascending by year.

    Raises on connection or query failure; `load_series` decides what to do about it.
    """
    if not _TABLE_NAME.match(table):
        raise ValueError(f"Invalid table name: {table!r}")

    quoted = ".".join(f'"{part}"' for part in table.split("."))
    conn = await asyncpg.connect(dsn, timeout=timeout_seconds)
    try:
        rows = await conn.fetch(
            f"SELECT year, annual_mean, five_year_smooth FROM {quoted} ORDER BY year ASC",
            timeout=timeout_seconds,
        )
    finally:
        await conn.close()

    return normalize_series(
        HistoricalRecord(
            year=int(r["year"]),
            annual_mean=float(r["annual_mean"]),
            five_year_smooth=float(r["five_year_smooth"]),
        )
        for r in rows
    )


async def load_series(source: DataSourceConfig) -> Result[Series]:
    """Return the database series, or the bundled sample when it is unavailable.

    The result always carries data; a SAMPLE_DATA warning says the fallback was used.
    """
    result: Result[Series] = Result()

    if not source.dsn:
        result.info("SAMPLE_DATA", "No database configured. Using sample data.")
        result.data = fallback_series()
        return result

    try:
        series = await fetch_series(source.dsn, table=source.table, timeout_seconds=source.timeout_seconds)
    except Exception as e:  # noqa: BLE001
        logger.warning("Series fetch failed: %s", e)
        result.warning(
            "SAMPLE_DATA",
            "Connection to database failed. Using sample data instead.",
            hint=str(e),
        )
        result.data = fallback_series()
        return result

    if not series:
        logger.info("Table %s is empty, using sample data", source.table)
        result.warning("SAMPLE_DATA", f"No rows in {source.table}. Using sample data instead.")
        result.data = fallback_series()
        return result

    logger.info("Loaded %d records from %s", len(series), source.table)
    result.data = series
    return result
