"""Configuration management for tempsim."""

import json
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel, Field

from tempsim.engine.models import ModelKind


class DataSourceConfig(BaseModel):
    dsn: str = ""
    table: str = "philippines_temperature_trends"
    timeout_seconds: int = 10


class SimulationSettings(BaseModel):
    default_model: ModelKind = ModelKind.POLYNOMIAL
    default_year: int = Field(default=2030, ge=2024, le=2100)
    # Pins "today" for decay/dampening; None means the current UTC year.
    reference_year: int | None = None


class TempsimConfig(BaseModel):
    data: DataSourceConfig = DataSourceConfig()
    settings: SimulationSettings = SimulationSettings()


def current_year(config: TempsimConfig | None = None) -> int:
    """Return the calendar year the engine measures prediction distance from."""
    if config is not None and config.settings.reference_year is not None:
        return config.settings.reference_year
    return datetime.now(UTC).year


def _config_dir() -> Path:
    return Path.home() / ".tempsim"


def _config_path() -> Path:
    return _config_dir() / "config.json"


def ensure_dirs() -> None:
    """Create required tempsim directories."""
    _config_dir().mkdir(exist_ok=True)


def load_config() -> TempsimConfig:
    """Load config from ~/.tempsim/config.json, returning defaults if missing."""
    path = _config_path()
    if not path.exists():
        return TempsimConfig()
    return TempsimConfig.model_validate_json(path.read_text())


def save_config(config: TempsimConfig) -> None:
    """Save config to ~/.tempsim/config.json."""
    ensure_dirs()
    path = _config_path()
    path.write_text(json.dumps(config.model_dump(mode="json"), indent=2) + "\n")
