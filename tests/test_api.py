from __future__ import annotations

import pytest

from urbanplan_app import api


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_layers(client):
    payload = client.get("/api/nasa?action=layers").get_json()

    assert [layer["id"] for layer in payload["layers"]] == [
        "landsat_temperature",
        "modis_ndvi",
        "modis_aerosol",
        "srtm_elevation",
    ]
    assert payload["layers"][0]["parameters"]["version"] == "1.1.1"


def test_layer_url(client):
    response = client.get("/api/nasa?action=layer-url&layerId=modis_ndvi&bbox=72,18,73,19")

    assert response.status_code == 200
    assert response.get_json()["url"].startswith("https://gibs.earthdata.nasa.gov/wms/epsg4326/best/wms.cgi?")


@pytest.mark.parametrize(
    "query",
    ["action=layer-url&layerId=modis_ndvi", "action=layer-url&bbox=1,2,3,4", "action=historical"],
)
def test_missing_parameters_are_bad_requests(client, query):
    response = client.get(f"/api/nasa?{query}")

    assert response.status_code == 400
    assert "Missing" in response.get_json()["error"]


@pytest.mark.parametrize(
    "query",
    [
        "",
        "action=teleport",
        "action=layer-url&layerId=modis_ndvi&bbox=1,2,3",
        "action=historical&metric=humidity",
        "action=historical&metric=temperature&months=soon",
    ],
)
def test_invalid_requests_are_bad_requests(client, query):
    assert client.get(f"/api/nasa?{query}").status_code == 400


def test_unknown_layer_is_not_found(client):
    response = client.get("/api/nasa?action=layer-url&layerId=modis_fire&bbox=1,2,3,4")

    assert response.status_code == 404
    assert response.get_json() == {"error": "Layer modis_fire not found"}


@pytest.mark.parametrize(
    "action, column",
    [("temperature", "temperature"), ("vegetation", "ndvi"), ("airquality", "aqi"), ("floodrisk", "riskLevel")],
)
def test_readings(client, action, column):
    payload = client.get(
        "/api/nasa", query_string={"action": action, "city": "Chennai, Tamil Nadu"}
    ).get_json()

    assert len(payload["data"]) == 3
    assert column in payload["data"][0]
    assert payload["data"][0]["lat"] == pytest.approx(13.0827)


def test_insights_default_city(client):
    payload = client.get("/api/nasa?action=insights").get_json()

    assert payload["insights"]["heatIslandIntensity"] == 5.8


def test_historical(client):
    payload = client.get("/api/nasa?action=historical&metric=vegetation&months=6").get_json()

    assert len(payload["data"]) == 6
    assert set(payload["data"][0]) == {"date", "value"}


def test_unexpected_errors_are_logged_and_hidden(client, monkeypatch, caplog):
    def explode(city):
        raise RuntimeError("disk on fire")

    monkeypatch.setitem(api._READINGS, "temperature", explode)

    response = client.get("/api/nasa?action=temperature")

    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to fetch NASA data"}
    assert "NASA API error" in caplog.text
