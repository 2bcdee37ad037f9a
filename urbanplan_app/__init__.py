"""Support modules for the urban planning dashboard Streamlit app."""

from . import airquality, analysis, constants, models, scoring, simulator, storage, survey  # noqa: F401

__all__ = [
    "airquality",
    "analysis",
    "constants",
    "models",
    "scoring",
    "simulator",
    "storage",
    "survey",
]
