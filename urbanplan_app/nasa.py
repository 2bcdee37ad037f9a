"""Mock NASA Earth-observation data service.

Layer metadata points at the real GIBS WMS endpoint so ``layer_url`` yields a
usable GetMap request; the point readings, city insights and historical
series are sample data.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
import requests

from .constants import CITY_COORDINATES, DEFAULT_CITY

logger = logging.getLogger(__name__)

GIBS_WMS_URL = "https://gibs.earthdata.nasa.gov/wms/epsg4326/best/wms.cgi"
POINT_OFFSET = 0.01  # degrees
HISTORICAL_METRICS = ("temperature", "vegetation", "airquality")


class LayerNotFound(KeyError):
    """Raised when a data layer id is not in the catalog."""


@dataclass(frozen=True)
class DataLayer:
    id: str
    name: str
    description: str
    source: str
    url: str = GIBS_WMS_URL
    parameters: Dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "source": self.source,
            "url": self.url,
            "parameters": dict(self.parameters),
        }


def _wms_parameters(layer_name: str) -> Dict[str, Any]:
    return {"layers": layer_name, "format": "image/png", "transparent": "true", "version": "1.1.1"}


DATA_LAYERS: Tuple[DataLayer, ...] = (
    DataLayer(
        id="landsat_temperature",
        name="Landsat 8 Land Surface Temperature",
        description="Land Surface Temperature from Landsat 8 TIRS",
        source="NASA Landsat 8",
        parameters=_wms_parameters("MODIS_Terra_Land_Surface_Temperature_Day"),
    ),
    DataLayer(
        id="modis_ndvi",
        name="MODIS Vegetation Index",
        description="Normalized Difference Vegetation Index from MODIS",
        source="NASA MODIS",
        parameters=_wms_parameters("MODIS_Terra_NDVI"),
    ),
    DataLayer(
        id="modis_aerosol",
        name="MODIS Aerosol Optical Depth",
        description="Air quality monitoring from MODIS",
        source="NASA MODIS",
        parameters=_wms_parameters("MODIS_Terra_Aerosol_Optical_Depth"),
    ),
    DataLayer(
        id="srtm_elevation",
        name="SRTM Elevation Data",
        description="Topographical data for flood risk assessment",
        source="NASA SRTM",
        parameters=_wms_parameters("SRTM30_Color_Index"),
    ),
)

CITY_INSIGHTS: Dict[str, Dict[str, Any]] = {
    "Mumbai, Maharashtra": {
        "heatIslandIntensity": 5.8,
        "greenSpaceDeficit": 35,
        "airQualityIndex": 198,
        "floodRiskAreas": 28,
        "dataSources": ["Landsat 8 TIRS", "MODIS NDVI", "SRTM"],
    },
    "Delhi, NCT": {
        "heatIslandIntensity": 7.2,
        "greenSpaceDeficit": 42,
        "airQualityIndex": 285,
        "floodRiskAreas": 15,
        "dataSources": ["Landsat 8 TIRS", "MODIS Aerosol", "SRTM"],
    },
    "Bangalore, Karnataka": {
        "heatIslandIntensity": 4.1,
        "greenSpaceDeficit": 28,
        "airQualityIndex": 156,
        "floodRiskAreas": 8,
        "dataSources": ["Landsat 8 TIRS", "MODIS NDVI", "SRTM"],
    },
    "Chennai, Tamil Nadu": {
        "heatIslandIntensity": 5.3,
        "greenSpaceDeficit": 31,
        "airQualityIndex": 178,
        "floodRiskAreas": 35,
        "dataSources": ["Landsat 8 TIRS", "MODIS NDVI", "SRTM"],
    },
    "Kolkata, West Bengal": {
        "heatIslandIntensity": 4.7,
        "greenSpaceDeficit": 38,
        "airQualityIndex": 201,
        "floodRiskAreas": 42,
        "dataSources": ["Landsat 8 TIRS", "MODIS NDVI", "SRTM"],
    },
}


def get_layer(layer_id: str) -> DataLayer:
    for layer in DATA_LAYERS:
        if layer.id == layer_id:
            return layer
    raise LayerNotFound(layer_id)


def parse_bbox(value: Sequence[Any]) -> Tuple[float, float, float, float]:
    """Validate a ``(west, south, east, north)`` box of four finite numbers."""

    if isinstance(value, str):
        value = value.split(",")
    if len(value) != 4:
        raise ValueError("bbox must contain exactly four numbers")
    try:
        numbers = tuple(float(part) for part in value)
    except (TypeError, ValueError):
        raise ValueError("bbox must contain only numbers") from None
    if not all(math.isfinite(number) for number in numbers):
        raise ValueError("bbox values must be finite")
    return numbers  # type: ignore[return-value]


def _format_number(number: float) -> str:
    return str(int(number)) if float(number).is_integer() else repr(float(number))


def layer_url(layer_id: str, bbox: Sequence[Any], width: int = 512, height: int = 512) -> str:
    """Build the WMS GetMap url for ``layer_id`` over ``bbox``."""

    layer = get_layer(layer_id)
    box = parse_bbox(bbox)
    params = dict(layer.parameters)
    params.update(
        {
            "bbox": ",".join(_format_number(number) for number in box),
            "width": str(width),
            "height": str(height),
            "crs": "EPSG:4326",
        }
    )
    return requests.Request("GET", layer.url, params=params).prepare().url


def _centre(city: str) -> Dict[str, float]:
    coordinates = CITY_COORDINATES.get(city)
    if coordinates is None:
        logger.debug("No coordinates for %r; using %s", city, DEFAULT_CITY)
        coordinates = CITY_COORDINATES[DEFAULT_CITY]
    return coordinates


def _readings(city: str, samples: List[Dict[str, Any]], source: str) -> pd.DataFrame:
    centre = _centre(city)
    offsets = (0.0, POINT_OFFSET, -POINT_OFFSET)
    timestamp = datetime.now(timezone.utc).isoformat()
    rows = []
    for offset, sample in zip(offsets, samples):
        row = {"lat": round(centre["lat"] + offset, 4), "lng": round(centre["lon"] + offset, 4)}
        row.update(sample)
        row["timestamp"] = timestamp
        row["source"] = source
        rows.append(row)
    return pd.DataFrame(rows)


def temperature_readings(city: str = DEFAULT_CITY) -> pd.DataFrame:
    samples = [{"temperature": 85.2}, {"temperature": 88.1}, {"temperature": 82.8}]
    return _readings(city, samples, "Landsat 8 TIRS")


def vegetation_readings(city: str = DEFAULT_CITY) -> pd.DataFrame:
    samples = [{"ndvi": 0.45}, {"ndvi": 0.35}, {"ndvi": 0.68}]
    return _readings(city, samples, "MODIS NDVI")


def air_quality_readings(city: str = DEFAULT_CITY) -> pd.DataFrame:
    samples = [
        {"aqi": 198, "pollutant": "PM2.5"},
        {"aqi": 156, "pollutant": "PM10"},
        {"aqi": 178, "pollutant": "NO2"},
    ]
    return _readings(city, samples, "MODIS Aerosol")


def flood_risk_readings(city: str = DEFAULT_CITY) -> pd.DataFrame:
    samples = [
        {"riskLevel": "high", "elevation": 14},
        {"riskLevel": "medium", "elevation": 18},
        {"riskLevel": "low", "elevation": 25},
    ]
    return _readings(city, samples, "SRTM")


def city_insights(city: str = DEFAULT_CITY) -> Dict[str, Any]:
    insights = CITY_INSIGHTS.get(city, CITY_INSIGHTS[DEFAULT_CITY])
    return {key: list(value) if isinstance(value, list) else value for key, value in insights.items()}


def historical_series(
    city: str,
    metric: str,
    months: int = 12,
    rng: Optional[np.random.Generator] = None,
    today: Optional[date] = None,
) -> pd.DataFrame:
    """Monthly sample series dated on the first of each month, oldest first."""

    if metric not in HISTORICAL_METRICS:
        raise ValueError(f"Unknown historical metric: {metric!r}")
    if months < 1:
        raise ValueError("months must be at least 1")
    generator = rng if rng is not None else np.random.default_rng()
    current = pd.Period(today or date.today(), freq="M")

    rows = []
    for i in range(months - 1, -1, -1):
        season = math.sin((i / 12) * math.pi * 2)
        if metric == "temperature":
            value = 65 + season * 15 + generator.random() * 5
        elif metric == "vegetation":
            value = 20 + season * 15 + generator.random() * 10
        else:
            value = 100 + generator.random() * 80
        month_start = (current - i).to_timestamp().date()
        rows.append({"date": month_start.isoformat(), "value": round(value, 1)})
    logger.debug("Generated %d months of %s history for %s", months, metric, city)
    return pd.DataFrame(rows, columns=["date", "value"])


__all__ = [
    "GIBS_WMS_URL",
    "HISTORICAL_METRICS",
    "LayerNotFound",
    "DataLayer",
    "DATA_LAYERS",
    "CITY_INSIGHTS",
    "get_layer",
    "parse_bbox",
    "layer_url",
    "temperature_readings",
    "vegetation_readings",
    "air_quality_readings",
    "flood_risk_readings",
    "city_insights",
    "historical_series",
]
