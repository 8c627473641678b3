from __future__ import annotations

from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from arcade_sync.config import Settings
from arcade_sync.main import create_app
from arcade_sync.sync_engine import SyncEngine

# 2023-11-14T22:13:20Z, so lastUpdate is a stable 1700000000000.
FIXED_WALL_CLOCK = 1_700_000_000.0


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def advance_clock(clock: FakeClock) -> Callable[[float], None]:
    return clock.advance


@pytest.fixture()
def stamp_ms() -> int:
    """`lastUpdate` every player gets from the `engine` fixture."""

    return int(FIXED_WALL_CLOCK * 1000)


@pytest.fixture()
def settings() -> Settings:
    return Settings()


@pytest.fixture()
def engine(settings: Settings, clock: FakeClock) -> SyncEngine:
    return SyncEngine(settings, clock=clock, wall_clock=lambda: FIXED_WALL_CLOCK)


@pytest.fixture()
def client(settings: Settings) -> Generator[TestClient, None, None]:
    """TestClient over a freshly built app, so no world state leaks between tests."""

    with TestClient(create_app(settings)) as c:
        yield c
