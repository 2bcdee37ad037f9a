from __future__ import annotations

import pandas as pd
import pydeck as pdk
import pytest

from urbanplan_app.constants import READING_COLOR_SCHEMES
from urbanplan_app.maps import city_map, readings_map_frame
from urbanplan_app.nasa import air_quality_readings


def test_colour_ramp_spans_palette_ends():
    colors = READING_COLOR_SCHEMES["aqi"]["colors"]

    frame, vmin, vmax = readings_map_frame(air_quality_readings(), "aqi", colors)

    assert (vmin, vmax) == (156.0, 198.0)
    low = frame.loc[frame["aqi"].idxmin()]
    high = frame.loc[frame["aqi"].idxmax()]
    assert [low.color_r, low.color_g, low.color_b] == colors[0]
    assert [high.color_r, high.color_g, high.color_b] == colors[-1]
    assert "lon" in frame.columns


def test_constant_values_do_not_divide_by_zero():
    frame, _, _ = readings_map_frame(pd.DataFrame({"lat": [1.0, 2.0], "lng": [3.0, 4.0], "v": [5, 5]}), "v")

    assert frame["color_r"].notna().all()


def test_missing_value_column_raises():
    with pytest.raises(ValueError):
        readings_map_frame(air_quality_readings(), "ndvi")


def test_city_map_adds_reading_layer():
    deck = city_map("Delhi, NCT", air_quality_readings("Delhi, NCT"), "aqi", label="AQI")

    assert isinstance(deck, pdk.Deck)
    assert [layer.id for layer in deck.layers] == ["city-centre", "reading-points"]
    assert deck.initial_view_state.latitude == pytest.approx(28.6139)
