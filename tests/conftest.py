"""Shared fixtures for the spotify-status test suite."""
from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from spotify_status.config import Config, Endpoints, Settings


@pytest.fixture
def fake_settings() -> Settings:
    return Settings(
        client_id="test-client-id",
        client_secret="test-client-secret",
        refresh_token="test-refresh-token",
        cache_ttl_ms=10000,
        http_timeout=5.0,
    )


@pytest.fixture
def fake_endpoints() -> Endpoints:
    return Endpoints(
        token_endpoint="https://accounts.example.test/api/token",
        api_base="https://api.example.test",
    )


@pytest.fixture
def fake_config(fake_settings, fake_endpoints) -> Config:
    return Config(settings=fake_settings, endpoints=fake_endpoints)


@pytest.fixture
def mock_client():
    """MagicMock standing in for SpotifyClient."""
    client = MagicMock()
    client.currently_playing = MagicMock()
    client.recently_played = MagicMock()
    client.close = MagicMock()
    return client
