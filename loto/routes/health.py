"""Health check routes."""

from __future__ import annotations

from flask import Blueprint, current_app

from loto.utils.responses import ok

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health_check():
    """Liveness probe; also reports the configured environment."""

    return ok({"status": "ok", "env": current_app.config.get("APP_ENV")})
