from __future__ import annotations

from flask import Blueprint, current_app, jsonify

health_bp = Blueprint("health_bp", __name__)


@health_bp.route("/healthz")
def healthz():
    settings = current_app.extensions["settings"]
    checks = {
        "spotify_oauth": "ok" if settings.oauth_configured else "unconfigured",
        "prompt_interpreter": (
            "ok" if current_app.extensions.get("prompt_interpreter") is not None else "unavailable"
        ),
    }
    # Prompt parsing is optional; the BPM search works without it.
    healthy = settings.oauth_configured
    status = 200 if healthy else 503
    return jsonify({"status": "ok" if healthy else "degraded", "checks": checks}), status
