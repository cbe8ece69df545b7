"""Shared fixtures: every test gets an empty round store and its own round log."""

import pytest
from fastapi.testclient import TestClient

from plinko.main import app
from plinko.models.round import rounds
from plinko.services import round_logger
from plinko.services.round_logger import RoundLogger


@pytest.fixture(autouse=True)
def isolated_rounds(tmp_path, monkeypatch):
    """Swap in a temporary round log and clear the in-memory store."""
    log = RoundLogger(str(tmp_path / "rounds"))
    monkeypatch.setattr(round_logger, "round_log", log)
    rounds.clear()
    yield log
    rounds.clear()


@pytest.fixture
def client():
    """HTTP client for the app."""
    return TestClient(app)
