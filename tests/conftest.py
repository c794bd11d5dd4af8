from __future__ import annotations

import os
import tempfile
from typing import Generator

import pytest

# keep test log files out of the project tree; must happen before server.logger is imported
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="simple-web-app-logs-"))

from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from server.api import create_app
from server.config import Settings
from server.stats import RequestStats


class FakeClock:
    """Manually advanced monotonic clock paired with a wall clock."""

    def __init__(self) -> None:
        self.elapsed = 0.0
        self.wall = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def monotonic(self) -> float:
        return self.elapsed

    def now(self) -> datetime:
        return self.wall + timedelta(seconds=self.elapsed)

    def advance(self, seconds: float) -> None:
        self.elapsed += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def stats(clock: FakeClock) -> RequestStats:
    return RequestStats(clock=clock.monotonic, now=clock.now)


@pytest.fixture()
def settings() -> Settings:
    return Settings(environment="development", app_version="1.0.0")


@pytest.fixture()
def api_client(settings: Settings, stats: RequestStats) -> Generator[TestClient, None, None]:
    """TestClient over a fresh app; server errors come back as 500 responses."""
    app = create_app(settings=settings, stats=stats)
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key in ("PORT", "HOST", "NODE_ENV", "APP_VERSION", "CORS_ORIGINS", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch
