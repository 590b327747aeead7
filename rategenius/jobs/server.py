"""HTTP entrypoint for competitor scans and price suggestions."""

from __future__ import annotations

import logging
import math
from functools import lru_cache
from typing import Any, Dict

from flask import Flask, jsonify, request
from flask_cors import CORS

from rategenius.core.config import get_settings
from rategenius.jobs.scan import DEFAULT_RADIUS_MILES, ScanPipeline, build_pipeline
from rategenius.pricing.aggregator import InsufficientDataError, suggest_from_competitors

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)
CORS(app, origins=get_settings().allowed_origin)


@lru_cache(maxsize=1)
def get_pipeline() -> ScanPipeline:
    """One pipeline per process so the cache and throttle are shared."""
    return build_pipeline(get_settings())


# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    return "RateGenius backend is running", 200


@app.get("/health")
def healthcheck() -> Any:
    return jsonify({"status": "ok"}), 200


@app.post("/scan")
@app.post("/api/scan")
def scan() -> Any:
    """
    Scan competitors around a facility.
    Required JSON fields: address
    Optional: facilityName, radius (miles, default 10)
    """
    payload: Dict[str, Any] = request.get_json(silent=True) or {}

    address = payload.get("address")
    if not address or not str(address).strip():
        return jsonify({"error": "address required"}), 400

    radius_raw = payload.get("radius")
    radius = DEFAULT_RADIUS_MILES
    if radius_raw not in (None, ""):
        if isinstance(radius_raw, bool):
            return jsonify({"error": "radius must be numeric"}), 400
        try:
            radius = float(radius_raw)
        except (TypeError, ValueError):
            return jsonify({"error": "radius must be numeric"}), 400
        if not math.isfinite(radius) or radius <= 0:
            return jsonify({"error": "radius must be positive"}), 400

    logger.info("Scan requested facility=%s address=%s radius=%s", payload.get("facilityName"), address, radius)
    try:
        records = get_pipeline().run(str(address), radius)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Scan failed for %s: %s", address, exc)
        return jsonify({"error": str(exc)}), 500

    return jsonify({"competitors": [record.to_dict() for record in records]}), 200


@app.post("/suggest")
@app.post("/api/suggest")
def suggest_price() -> Any:
    payload: Dict[str, Any] = request.get_json(silent=True) or {}

    competitors = payload.get("competitors") or []
    if not isinstance(competitors, list):
        return jsonify({"error": "competitors must be a list"}), 400

    try:
        suggestion = suggest_from_competitors(competitors)
    except InsufficientDataError as exc:
        return jsonify({"error": str(exc)}), 400
    except Exception as exc:  # noqa: BLE001
        logger.exception("Suggest failed for %s: %s", payload.get("facilityName"), exc)
        return jsonify({"error": str(exc)}), 500

    return jsonify(suggestion.to_dict()), 200


def main() -> None:
    port = get_settings().port
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
