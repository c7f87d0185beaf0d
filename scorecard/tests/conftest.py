"""Shared pytest fixtures for scorecard tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from scorecard.app import app
from scorecard.config import reset_settings_cache
from scorecard.corners.storage import CornerConfigStore, get_corner_config_store
from scorecard.rounds.provider import InMemoryRoundProvider, get_round_provider
from scorecard.tests.factories import day, player_round


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def settings_env(monkeypatch):
    reset_settings_cache()
    yield monkeypatch
    reset_settings_cache()


@pytest.fixture
def api_client(tmp_path):
    records = [
        player_round("r1", "a", day(1), {1: 4, 2: 5}),
        player_round("r1", "b", day(1), {1: 5, 2: 6}),
        player_round("r2", "a", day(2), {1: 3, 2: 6}),
        player_round("r3", "a", day(3), {1: 5, 2: 4}),
    ]
    provider = InMemoryRoundProvider(records, hole_counts={"v1": 2})
    store = CornerConfigStore(base_dir=tmp_path / "config")
    app.dependency_overrides[get_round_provider] = lambda: provider
    app.dependency_overrides[get_corner_config_store] = lambda: store
    client = TestClient(app)
    yield client, provider, store
    app.dependency_overrides.pop(get_round_provider, None)
    app.dependency_overrides.pop(get_corner_config_store, None)
