from __future__ import annotations

from flask import Blueprint, current_app, jsonify

health_bp = Blueprint("health_bp", __name__, url_prefix="/api")


@health_bp.route("/health")
def health():
    cache = current_app.extensions.get("token_cache")
    settings = current_app.extensions["proxy_settings"]
    return jsonify(
        {
            "ok": True,
            "market": settings.default_market,
            "token_cached": bool(cache is not None and cache.has_token),
        }
    )
