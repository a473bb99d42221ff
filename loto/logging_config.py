"""Logging configuration."""

from __future__ import annotations

import logging

from flask import Flask


def configure_logging(level_name: str = "INFO") -> None:
    """Configure stdlib logging for the app and the command line runner."""

    level = getattr(logging, str(level_name or "INFO").upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    # Request lines are noise next to simulation logs.
    logging.getLogger("werkzeug").setLevel(max(level, logging.WARNING))


def configure_app_logging(app: Flask) -> None:
    configure_logging(str(app.config.get("LOG_LEVEL", "INFO")))
