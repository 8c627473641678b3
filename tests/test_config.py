from __future__ import annotations

import pytest

from arcade_sync.config import Settings, settings_from_env

_VARS = [
    "PORT",
    "ARCADE_SYNC_HOST",
    "ARCADE_SYNC_COLOR_POOL_SIZE",
    "ARCADE_SYNC_THROTTLE_MS",
    "ARCADE_SYNC_SPAWN_X",
    "ARCADE_SYNC_SPAWN_Y",
    "ARCADE_SYNC_REJECT_WHEN_POOL_EXHAUSTED",
    "ARCADE_SYNC_CORS_ORIGINS",
    "ARCADE_SYNC_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_match_settings_defaults() -> None:
    s = settings_from_env()
    assert s == Settings()
    assert s.port == 3001
    assert s.color_pool_size == 16
    assert s.throttle_interval == pytest.approx(0.016)
    assert (s.spawn_x, s.spawn_y) == (400.0, 680.0)
    assert s.cors_origins == ("*",)


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "4000")
    monkeypatch.setenv("ARCADE_SYNC_COLOR_POOL_SIZE", "4")
    monkeypatch.setenv("ARCADE_SYNC_THROTTLE_MS", "50")
    monkeypatch.setenv("ARCADE_SYNC_SPAWN_X", "12.5")
    monkeypatch.setenv("ARCADE_SYNC_REJECT_WHEN_POOL_EXHAUSTED", "true")
    monkeypatch.setenv("ARCADE_SYNC_CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("ARCADE_SYNC_LOG_LEVEL", "debug")

    s = settings_from_env()
    assert s.port == 4000
    assert s.color_pool_size == 4
    assert s.throttle_interval == pytest.approx(0.05)
    assert s.spawn_x == 12.5
    assert s.reject_join_when_pool_exhausted is True
    assert s.cors_origins == ("http://a.test", "http://b.test")
    assert s.log_level == "DEBUG"


@pytest.mark.parametrize(
    ("name", "value"),
    [("PORT", "abc"), ("PORT", "0"), ("ARCADE_SYNC_COLOR_POOL_SIZE", "0"), ("ARCADE_SYNC_SPAWN_Y", "up")],
)
def test_bad_values_name_the_variable(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError) as e:
        settings_from_env()
    assert name in str(e.value)
