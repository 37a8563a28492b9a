from __future__ import annotations

from flask import Blueprint, current_app, jsonify

health_bp = Blueprint("health_bp", __name__)


@health_bp.route("/healthz")
def healthz():
    settings = current_app.extensions.get("app_settings")
    checks = {
        "spotify_credentials": "ok" if settings is not None and settings.has_credentials else "missing",
        "spotify_api": "ok" if current_app.extensions.get("spotify_api") is not None else "unavailable",
    }
    healthy = all(value == "ok" for value in checks.values())
    status = 200 if healthy else 503
    return jsonify({"status": "ok" if healthy else "degraded", "checks": checks}), status
