from __future__ import annotations

import importlib.util
import pathlib
import random

import pytest

from loto import create_app

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def app():
    return create_app("testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def run_draw_module():
    path = PROJECT_ROOT / "scripts" / "run_draw.py"
    spec = importlib.util.spec_from_file_location("run_draw", path)
    module = importlib.util.module_from_spec(spec)
    assert spec.loader is not None
    spec.loader.exec_module(module)
    return module
