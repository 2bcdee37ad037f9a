"""City health index scoring and recommendation logic."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

import numpy as np

from .constants import HEALTH_LABELS, HEALTH_WEIGHTS
from .models import HealthMetrics

TREND_THRESHOLD = 5.0


def clamp_value(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


def health_index(metrics: HealthMetrics) -> int:
    """Weighted sum of the eight pillars, rounded to the nearest integer."""

    values = metrics.as_dict()
    for key, value in values.items():
        if not 0 <= value <= 100:
            raise ValueError(f"{key} must be between 0 and 100, got {value}")
    weighted = sum(values[key] * weight for key, weight in HEALTH_WEIGHTS.items())
    return int(clamp_value(math.floor(weighted + 0.5), 0, 100))


def health_label(score: float) -> str:
    for minimum, label in HEALTH_LABELS:
        if score >= minimum:
            return label
    return "Critical"


def health_recommendations(score: float) -> List[str]:
    if score >= 80:
        return [
            "Maintain current initiatives",
            "Continue monitoring air quality",
            "Expand green infrastructure",
        ]
    if score >= 60:
        return [
            "Increase green space coverage",
            "Improve public transportation",
            "Implement air quality monitoring",
        ]
    if score >= 40:
        return [
            "Urgent: Reduce air pollution",
            "Plant more trees immediately",
            "Improve waste management systems",
        ]
    return [
        "CRITICAL: Immediate action required",
        "Emergency air quality measures",
        "Rapid green infrastructure deployment",
    ]


def synthetic_history(
    score: float, rng: Optional[np.random.Generator] = None, months: int = 12
) -> List[float]:
    """Display-only monthly history scattered ±10 points around ``score``."""

    if months < 1:
        raise ValueError("months must be at least 1")
    generator = rng if rng is not None else np.random.default_rng()
    noise = (generator.random(months) - 0.5) * 20
    return [round(clamp_value(score + offset, 0.0, 100.0), 1) for offset in noise]


def history_trend(history: Sequence[float]) -> str:
    if len(history) < 3:
        return "stable"
    recent = sum(history[-3:]) / 3
    older = sum(history[:3]) / 3
    if recent > older + TREND_THRESHOLD:
        return "up"
    if recent < older - TREND_THRESHOLD:
        return "down"
    return "stable"


__all__ = [
    "TREND_THRESHOLD",
    "clamp_value",
    "health_index",
    "health_label",
    "health_recommendations",
    "synthetic_history",
    "history_trend",
]
