"""Shared constants and configuration for the urban planning dashboard."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Tuple


ROOT_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = Path(os.getenv("URBANPLAN_DATA_DIR", str(ROOT_DIR / "data")))

SURVEY_STORE_NAME = "urban-planning-surveys"
SURVEY_STORE_PATH = Path(
    os.getenv("URBANPLAN_SURVEY_STORE", str(DATA_DIR / f"{SURVEY_STORE_NAME}.json"))
)


def _float_env(name: str, fallback: float) -> float:
    try:
        return float(os.getenv(name, fallback))
    except (TypeError, ValueError):
        return fallback


PROCESSING_DELAY_SECONDS = _float_env("URBANPLAN_PROCESSING_DELAY", 1.5)
LOG_LEVEL = os.getenv("URBANPLAN_LOG_LEVEL", "INFO").upper()
API_HOST = os.getenv("URBANPLAN_API_HOST", "127.0.0.1")
API_PORT = int(_float_env("URBANPLAN_API_PORT", 5000))

CITIES = (
    "Mumbai, Maharashtra",
    "Delhi, NCT",
    "Bangalore, Karnataka",
    "Chennai, Tamil Nadu",
    "Kolkata, West Bengal",
)
DEFAULT_CITY = CITIES[0]
ALL_CITIES = "All Cities"

CITY_COORDINATES: Dict[str, Dict[str, float]] = {
    "Mumbai, Maharashtra": {"lat": 19.0760, "lon": 72.8777},
    "Delhi, NCT": {"lat": 28.6139, "lon": 77.2090},
    "Bangalore, Karnataka": {"lat": 12.9716, "lon": 77.5946},
    "Chennai, Tamil Nadu": {"lat": 13.0827, "lon": 80.2707},
    "Kolkata, West Bengal": {"lat": 22.5726, "lon": 88.3639},
}

# Survey categories; "community" questions are collected but never scored.
SURVEY_CATEGORIES = ("heat", "green-space", "air-quality", "infrastructure", "community")
ANALYSIS_CATEGORIES = ("heat", "green-space", "air-quality", "infrastructure")

CATEGORY_DISPLAY = {
    "heat": "Heat",
    "green-space": "Green space",
    "air-quality": "Air quality",
    "infrastructure": "Infrastructure",
    "community": "Community",
}

RATING_RANGE = (1, 5)

# Trend / priority thresholds on the 0-5 survey scale.
IMPROVING_THRESHOLD = 4.0
DECLINING_THRESHOLD = 2.0
MEDIUM_PRIORITY_THRESHOLD = 3.0

ANALYSIS_LIMITED_DATA_THRESHOLD = 5
REPORT_LIMITED_DATA_THRESHOLD = 3

HEALTH_WEIGHTS: Dict[str, float] = {
    "air_quality": 0.25,
    "temperature": 0.15,
    "vegetation": 0.20,
    "water_quality": 0.15,
    "waste_management": 0.10,
    "public_health": 0.10,
    "transport_efficiency": 0.03,
    "energy_consumption": 0.02,
}

HEALTH_LABELS: Tuple[Tuple[int, str], ...] = (
    (90, "Excellent"),
    (80, "Very Good"),
    (70, "Good"),
    (60, "Fair"),
    (50, "Poor"),
    (40, "Very Poor"),
)

HEALTH_DISPLAY = {
    "air_quality": ("Air Quality", "🌬️", "Air pollution levels and quality"),
    "temperature": ("Temperature", "🌡️", "Urban heat island effect"),
    "vegetation": ("Vegetation", "🌳", "Green space coverage"),
    "water_quality": ("Water Quality", "💧", "Water quality and availability"),
    "waste_management": ("Waste Management", "♻️", "Waste collection and processing"),
    "public_health": ("Public Health", "🏥", "Health infrastructure and outcomes"),
    "transport_efficiency": ("Transport", "🚌", "Public transportation efficiency"),
    "energy_consumption": ("Energy", "⚡", "Energy consumption patterns"),
}

DATA_SOURCES = {
    "ecostress": {
        "name": "ECOSTRESS",
        "description": "Surface Temperature and Urban Heat Index",
        "url": "https://ecostress.jpl.nasa.gov/",
        "last_updated": "2025-01-20T10:30:00Z",
        "processing_time": "2025-01-20T14:00:00Z",
        "dataset": "ECOSTRESS L2 Surface Temperature",
        "units": "°C",
        "uncertainty": "±1.5°C",
    },
    "landsat": {
        "name": "Landsat 8/9",
        "description": "Green Space Coverage and NDVI",
        "url": "https://landsat.gsfc.nasa.gov/",
        "last_updated": "2025-01-19T15:45:00Z",
        "processing_time": "2025-01-20T08:30:00Z",
        "dataset": "Landsat 8/9 OLI/TIRS",
        "units": "%",
        "uncertainty": "±2%",
    },
    "viirs": {
        "name": "VIIRS",
        "description": "Nighttime Lights and Urban Growth",
        "url": "https://viirsland.gsfc.nasa.gov/",
        "last_updated": "2025-01-20T02:15:00Z",
        "processing_time": "2025-01-20T06:00:00Z",
        "dataset": "VIIRS Day/Night Band",
        "units": "index",
        "uncertainty": "±5%",
    },
    "modis": {
        "name": "MODIS/MAIAC",
        "description": "Air Quality and Aerosol Optical Depth",
        "url": "https://modis.gsfc.nasa.gov/",
        "last_updated": "2025-01-20T12:00:00Z",
        "processing_time": "2025-01-20T16:30:00Z",
        "dataset": "MODIS MAIAC AOD + Local Sensors",
        "units": "AQI",
        "uncertainty": "±10 AQI",
    },
    "grace": {
        "name": "GRACE-FO",
        "description": "Groundwater Trends",
        "url": "https://gracefo.jpl.nasa.gov/",
        "last_updated": "2025-01-18T09:20:00Z",
        "processing_time": "2025-01-19T11:45:00Z",
        "dataset": "GRACE-FO Level-2",
        "units": "cm",
        "uncertainty": "±2cm",
    },
    "smap": {
        "name": "SMAP",
        "description": "Soil Moisture",
        "url": "https://smap.jpl.nasa.gov/",
        "last_updated": "2025-01-20T07:30:00Z",
        "processing_time": "2025-01-20T10:15:00Z",
        "dataset": "SMAP L3 Soil Moisture",
        "units": "%",
        "uncertainty": "±3%",
    },
}

READING_COLOR_SCHEMES = {
    "temperature": {
        "colors": [
            [15, 118, 110],
            [125, 211, 252],
            [253, 224, 71],
            [249, 115, 22],
            [220, 38, 38],
        ],
        "legend": "Low = cooler surfaces · High = hotter surfaces",
    },
    "ndvi": {
        "colors": [
            [237, 248, 233],
            [161, 217, 155],
            [65, 171, 93],
            [0, 90, 50],
        ],
        "legend": "Low = sparse canopy · High = richer cover",
    },
    "aqi": {
        "colors": [
            [34, 197, 94],
            [250, 204, 21],
            [249, 115, 22],
            [220, 38, 38],
            [126, 34, 206],
        ],
        "legend": "Low = cleaner air · High = heavier pollution",
    },
    "elevation": {
        "colors": [
            [220, 38, 38],
            [250, 204, 21],
            [59, 130, 246],
        ],
        "legend": "Low = flood prone · High = safer ground",
    },
}

DEFAULT_READING_COLORS = [
    [226, 232, 240],
    [148, 163, 184],
    [71, 85, 105],
]


__all__ = [
    "ROOT_DIR",
    "DATA_DIR",
    "SURVEY_STORE_NAME",
    "SURVEY_STORE_PATH",
    "PROCESSING_DELAY_SECONDS",
    "LOG_LEVEL",
    "API_HOST",
    "API_PORT",
    "CITIES",
    "DEFAULT_CITY",
    "ALL_CITIES",
    "CITY_COORDINATES",
    "SURVEY_CATEGORIES",
    "ANALYSIS_CATEGORIES",
    "CATEGORY_DISPLAY",
    "RATING_RANGE",
    "IMPROVING_THRESHOLD",
    "DECLINING_THRESHOLD",
    "MEDIUM_PRIORITY_THRESHOLD",
    "ANALYSIS_LIMITED_DATA_THRESHOLD",
    "REPORT_LIMITED_DATA_THRESHOLD",
    "HEALTH_WEIGHTS",
    "HEALTH_LABELS",
    "HEALTH_DISPLAY",
    "DATA_SOURCES",
    "READING_COLOR_SCHEMES",
    "DEFAULT_READING_COLORS",
]
