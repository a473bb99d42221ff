"""Environment-based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _int_env(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Simulation
    MAX_TICKETS: int = _int_env("MAX_TICKETS", 1_000_000) or 1_000_000
    SIM_WORKERS: int = _int_env("SIM_WORKERS", 1) or 1
    SIM_SEED: int | None = _int_env("SIM_SEED", None)


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    """Development configuration."""

    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG: bool = False


@dataclass(frozen=True)
class TestingConfig(BaseConfig):
    """Configuration used by the test suite."""

    TESTING: bool = True
    DEBUG: bool = False
    MAX_TICKETS: int = 5_000


def get_config(env: str | None = None) -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV."""

    env = (env or os.getenv("APP_ENV", "development")).lower().strip()
    if env == "production":
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
