"""Loto draw simulator: Flask application package."""

from __future__ import annotations

from flask import Flask

from dotenv import load_dotenv


def create_app(env: str | None = None) -> Flask:
    """Application factory.

    Args:
        env: Optional APP_ENV override ("development", "production", "testing").

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from loto.config import get_config
    from loto.error_handlers import register_error_handlers
    from loto.logging_config import configure_app_logging
    from loto.routes.health import health_bp
    from loto.routes.simulation import simulation_bp

    app = Flask(__name__)
    app.config.from_object(get_config(env))

    configure_app_logging(app)
    register_error_handlers(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(simulation_bp)

    return app
