"""Hourly environmental forecast used by the forecast view."""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import numpy as np
import pandas as pd

from .scoring import clamp_value

FORECAST_BASE: Dict[str, float] = {
    "aqi": 198.0,
    "temperature": 42.0,
    "humidity": 65.0,
    "windSpeed": 12.0,
}

MIN_CONFIDENCE = 0.6
CONFIDENCE_DECAY = 0.02


def generate_forecast(
    base: Optional[Dict[str, float]] = None,
    hours: int = 24,
    rng: Optional[np.random.Generator] = None,
    start: Optional[datetime] = None,
) -> pd.DataFrame:
    """Return an hourly forecast frame; confidence decays with the horizon."""

    if hours < 1:
        raise ValueError("hours must be at least 1")
    values = dict(FORECAST_BASE)
    if base:
        values.update(base)
    generator = rng if rng is not None else np.random.default_rng()
    origin = start or datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0)

    rows = []
    for i in range(hours):
        aqi = values["aqi"] + math.sin(i * 0.3) * 20 + generator.random() * 10 - 5
        temperature = values["temperature"] + math.sin(i * 0.2) * 3 + generator.random() * 2 - 1
        humidity = values["humidity"] + (generator.random() - 0.5) * 10
        wind = values["windSpeed"] + (generator.random() - 0.5) * 4
        rows.append(
            {
                "timestamp": origin + timedelta(hours=i),
                "aqi": round(clamp_value(aqi, 0, 500)),
                "temperature": round(clamp_value(temperature, 20, 50), 1),
                "humidity": round(clamp_value(humidity, 20, 90)),
                "windSpeed": round(max(0.0, wind), 1),
                "confidence": max(MIN_CONFIDENCE, 1 - i * CONFIDENCE_DECAY),
            }
        )
    return pd.DataFrame(rows)


__all__ = ["FORECAST_BASE", "generate_forecast"]
