"""Shared pytest fixtures for feed tests."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest


@pytest.fixture(autouse=True, scope="function")
def mock_env_for_tests(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Mock env variables for reproducible tests."""
    # Credentials
    monkeypatch.setenv("TWITCH_CLIENT_ID", "test_twitch_client")
    monkeypatch.setenv("TWITCH_CLIENT_SECRET", "test_twitch_secret")
    monkeypatch.setenv("TMDB_API_KEY", "test_tmdb_key_1234567890")
    monkeypatch.setenv("LASTFM_API_KEY", "test_lastfm_key")
    monkeypatch.delenv("SPOTIFY_CLIENT_ID", raising=False)
    monkeypatch.delenv("SPOTIFY_CLIENT_SECRET", raising=False)

    # Infrastructure
    monkeypatch.setenv("BAKEBOARD_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("MUSICBRAINZ_MIN_REQUEST_DELAY", "0")

    # Environment
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("LOG_TO_FILE", "false")


class FakeClock:
    """Manual clock with an async sleep that advances it."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Fresh fake clock starting at t=1000."""
    return FakeClock()


@pytest.fixture
def mock_http() -> Callable[[Callable[[httpx.Request], Any]], httpx.AsyncClient]:
    """Factory for AsyncClients served by a MockTransport handler."""

    def factory(handler: Callable[[httpx.Request], Any]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    """Build a JSON response for MockTransport handlers."""
    return httpx.Response(status_code, json=payload)


@pytest.fixture
def respond() -> Callable[..., httpx.Response]:
    """JSON response builder."""
    return json_response
