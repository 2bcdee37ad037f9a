"""Air quality index bands and the guidance shown alongside them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class AQIRange:
    minimum: int
    maximum: int
    level: str
    color: str
    description: str
    health_impact: str
    recommendations: Tuple[str, ...]


AQI_RANGES: Tuple[AQIRange, ...] = (
    AQIRange(
        0,
        50,
        "Good",
        "#22c55e",
        "Air quality is satisfactory",
        "Little or no risk",
        ("Enjoy outdoor activities", "Great day for exercise"),
    ),
    AQIRange(
        51,
        100,
        "Moderate",
        "#facc15",
        "Air quality is acceptable",
        "Unusually sensitive people may experience minor symptoms",
        ("Sensitive groups should limit prolonged outdoor exertion",),
    ),
    AQIRange(
        101,
        150,
        "Unhealthy for Sensitive Groups",
        "#f97316",
        "Members of sensitive groups may experience health effects",
        "Children, elderly and people with lung disease are at risk",
        ("Sensitive groups should reduce outdoor activities", "Consider wearing masks outdoors"),
    ),
    AQIRange(
        151,
        200,
        "Unhealthy",
        "#ef4444",
        "Everyone may begin to experience health effects",
        "Increased respiratory symptoms in the general population",
        ("Avoid prolonged outdoor activities", "Keep windows closed", "Use air purifiers indoors"),
    ),
    AQIRange(
        201,
        300,
        "Very Unhealthy",
        "#a855f7",
        "Health warnings of emergency conditions",
        "Serious respiratory effects for everyone",
        ("Stay indoors", "Avoid all outdoor physical activity", "Wear N95 masks if going outside"),
    ),
    AQIRange(
        301,
        500,
        "Hazardous",
        "#7f1d1d",
        "Health alert: everyone may experience serious effects",
        "Emergency conditions affecting the entire population",
        ("Remain indoors with air filtration", "Follow emergency advisories"),
    ),
)


def aqi_info(aqi: float) -> AQIRange:
    """Return the band containing ``aqi``; values above 500 map to Hazardous."""

    if aqi < 0:
        raise ValueError(f"AQI cannot be negative, got {aqi}")
    for band in AQI_RANGES:
        if aqi <= band.maximum:
            return band
    return AQI_RANGES[-1]


def aqi_level(aqi: float) -> str:
    return aqi_info(aqi).level


__all__ = ["AQIRange", "AQI_RANGES", "aqi_info", "aqi_level"]
