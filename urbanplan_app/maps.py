"""Map helpers for plotting NASA sample readings with pydeck."""

from __future__ import annotations

import math
from typing import Optional, Tuple

import numpy as np
import pandas as pd
import pydeck as pdk

from .constants import CITY_COORDINATES, DEFAULT_CITY, DEFAULT_READING_COLORS


def readings_map_frame(
    df: pd.DataFrame, value_column: str, colors: Optional[list[list[int]]] = None
) -> Tuple[pd.DataFrame, float, float]:
    """Attach ``color_r/g/b`` columns interpolated along a colour ramp.

    Accepts the ``lat``/``lng`` wire columns and adds a ``lon`` alias for pydeck.
    """

    if value_column not in df.columns:
        raise ValueError(f"Readings have no {value_column!r} column")
    values = pd.to_numeric(df[value_column], errors="raise").astype(float)
    vmin = float(values.min())
    vmax = float(values.max())
    if math.isclose(vmin, vmax):
        vmax = vmin + 1e-6

    normalized = ((values - vmin) / (vmax - vmin)).to_numpy()
    dataframe = df.copy()
    if "lon" not in dataframe.columns and "lng" in dataframe.columns:
        dataframe["lon"] = dataframe["lng"]
    palette = np.array(colors if colors else DEFAULT_READING_COLORS, dtype=float)
    if palette.shape[0] < 2:
        palette = np.vstack([palette, palette])
    stops = np.linspace(0.0, 1.0, palette.shape[0])
    for index, channel in enumerate(("color_r", "color_g", "color_b")):
        dataframe[channel] = np.clip(np.interp(normalized, stops, palette[:, index]), 0, 255).astype(int)
    dataframe["value"] = values
    dataframe["value_display"] = values.map(lambda v: f"{v:,.2f}")
    return dataframe, vmin, vmax


def city_map(
    city: str,
    readings: Optional[pd.DataFrame] = None,
    value_column: str = "value",
    label: str = "",
    colors: Optional[list[list[int]]] = None,
) -> pdk.Deck:
    centre = CITY_COORDINATES.get(city, CITY_COORDINATES[DEFAULT_CITY])
    view_state = pdk.ViewState(latitude=centre["lat"], longitude=centre["lon"], zoom=11, pitch=0)

    centre_layer = pdk.Layer(
        "ScatterplotLayer",
        data=pd.DataFrame([{"lat": centre["lat"], "lon": centre["lon"], "value_display": city}]),
        id="city-centre",
        get_position="[lon, lat]",
        get_radius=220,
        get_fill_color=[17, 24, 39, 255],
        get_line_color=[248, 250, 252, 200],
        pickable=True,
        line_width_min_pixels=1,
    )
    layers = [centre_layer]

    if readings is not None and not readings.empty:
        points, _, _ = readings_map_frame(readings, value_column, colors)
        layers.append(
            pdk.Layer(
                "ScatterplotLayer",
                data=points,
                id="reading-points",
                get_position="[lon, lat]",
                get_radius=400,
                get_fill_color="[color_r, color_g, color_b, 200]",
                pickable=True,
                auto_highlight=True,
            )
        )

    tooltip_html = "<b>{value_display}</b>" + (f"<br/>{label}" if label else "")
    return pdk.Deck(
        map_style=None,
        initial_view_state=view_state,
        layers=layers,
        tooltip={"html": tooltip_html, "style": {"backgroundColor": "#0f172a", "color": "#f8fafc"}},
    )


__all__ = ["readings_map_frame", "city_map"]
