"""tempsim Vega-Lite theme and per-model colors."""

from __future__ import annotations

from typing import Any

from tempsim.engine.models import ModelKind

MODEL_COLORS: dict[ModelKind, str] = {
    ModelKind.POLYNOMIAL: "hsl(220, 70%, 50%)",
    ModelKind.LINEAR: "hsl(160, 70%, 50%)",
    ModelKind.MOVING_AVERAGE: "hsl(340, 80%, 60%)",
}
PREDICTION_COLOR = "hsl(25, 90%, 55%)"

TEMPSIM_THEME: dict[str, Any] = {
    "config": {
        "font": "Inter, system-ui, sans-serif",
        "axis": {
            "labelFontSize": 14,
            "titleFontSize": 14,
            "titleFontWeight": 600,
            "gridDash": [3, 3],
            "gridColor": "#e0e0e0",
            "domainColor": "#ccc",
            "tickColor": "#ccc",
            "titlePadding": 12,
        },
        "legend": {
            "orient": "top",
            "labelFontSize": 12,
        },
        "title": {
            "fontSize": 16,
            "fontWeight": 600,
        },
        "line": {
            "strokeWidth": 2,
            "point": {"size": 40},
        },
        "view": {
            "strokeWidth": 0,
        },
        "background": "transparent",
    },
}


def apply_theme(spec: dict[str, Any]) -> dict[str, Any]:
    """Merge the tempsim theme config into a Vega-Lite spec; spec values win."""
    themed: dict[str, Any] = dict(spec)
    config: dict[str, Any] = dict(themed.get("config", {}))
    for key, value in TEMPSIM_THEME["config"].items():
        if key not in config:
            config[key] = value
        elif isinstance(value, dict) and isinstance(config[key], dict):
            config[key] = {**value, **config[key]}
    themed["config"] = config
    themed.setdefault("$schema", "https://vega.github.io/schema/vega-lite/v5.json")
    return themed
