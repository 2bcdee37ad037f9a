"""Flask API exposing the mock NASA data service as read-only JSON."""

from __future__ import annotations

import logging
import os
from typing import Callable, Dict, Tuple

import pandas as pd
from dotenv import load_dotenv
from flask import Flask, Response, jsonify, request

from . import nasa
from .constants import API_HOST, API_PORT, DEFAULT_CITY, LOG_LEVEL

logger = logging.getLogger(__name__)

_READINGS: Dict[str, Callable[[str], pd.DataFrame]] = {
    "temperature": nasa.temperature_readings,
    "vegetation": nasa.vegetation_readings,
    "airquality": nasa.air_quality_readings,
    "floodrisk": nasa.flood_risk_readings,
}


class MissingParameter(ValueError):
    """Raised when a required query parameter is absent."""


def _required(name: str) -> str:
    value = request.args.get(name, "").strip()
    if not value:
        raise MissingParameter(f"Missing {name} parameter")
    return value


def _records(frame: pd.DataFrame) -> list:
    return frame.to_dict(orient="records")


def _handle_nasa_action(action: str, city: str):
    if action == "layers":
        return {"layers": [layer.as_dict() for layer in nasa.DATA_LAYERS]}

    if action == "layer-url":
        layer_id = request.args.get("layerId", "").strip()
        bbox = request.args.get("bbox", "").strip()
        if not layer_id or not bbox:
            raise MissingParameter("Missing layerId or bbox parameter")
        return {"url": nasa.layer_url(layer_id, bbox)}

    if action in _READINGS:
        return {"data": _records(_READINGS[action](city))}

    if action == "insights":
        return {"insights": nasa.city_insights(city)}

    if action == "historical":
        metric = _required("metric")
        raw_months = request.args.get("months", "12")
        try:
            months = int(raw_months)
        except ValueError:
            raise ValueError(f"months must be an integer, got {raw_months!r}") from None
        return {"data": _records(nasa.historical_series(city, metric, months))}

    raise ValueError("Invalid action parameter")


def create_app() -> Flask:
    app = Flask(__name__)

    @app.route("/api/nasa", methods=["GET"])
    def nasa_data() -> Tuple[Response, int]:
        """Dispatch on the ``action`` query parameter."""

        action = request.args.get("action", "")
        city = request.args.get("city") or DEFAULT_CITY
        try:
            return jsonify(_handle_nasa_action(action, city)), 200
        except nasa.LayerNotFound as exc:
            return jsonify({"error": f"Layer {exc.args[0]} not found"}), 404
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400
        except Exception:
            logger.exception("NASA API error for action %r", action)
            return jsonify({"error": "Failed to fetch NASA data"}), 500

    @app.route("/health", methods=["GET"])
    def health() -> Tuple[Response, int]:
        return jsonify({"status": "ok"}), 200

    return app


def main() -> None:
    load_dotenv()
    logging.basicConfig(
        level=os.getenv("URBANPLAN_LOG_LEVEL", LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    host = os.getenv("URBANPLAN_API_HOST", API_HOST)
    port = int(os.getenv("URBANPLAN_API_PORT", API_PORT))
    logger.info("Starting NASA data API on %s:%s", host, port)
    create_app().run(host=host, port=port)


__all__ = ["MissingParameter", "create_app", "main"]


if __name__ == "__main__":
    main()
