from __future__ import annotations

import os
from dataclasses import dataclass, field

ENV_PREFIX = "ARCADE_SYNC_"


@dataclass(frozen=True, slots=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 3001

    # Colors are handed out as "01".."NN".
    color_pool_size: int = 16
    # ~60 accepted moves per second per connection.
    throttle_interval_ms: int = 16

    spawn_x: float = 400.0
    spawn_y: float = 680.0

    # Off: a full pool hands out "01" again. On: the join is refused.
    reject_join_when_pool_exhausted: bool = False

    cors_origins: tuple[str, ...] = field(default_factory=lambda: ("*",))
    log_level: str = "INFO"

    @property
    def throttle_interval(self) -> float:
        return self.throttle_interval_ms / 1000.0


def _env(name: str) -> str | None:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_int(name: str, default: int, *, minimum: int = 0) -> int:
    raw = _env(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


def _env_float(name: str, default: float) -> float:
    raw = _env(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def settings_from_env() -> Settings:
    origins = _env(f"{ENV_PREFIX}CORS_ORIGINS") or "*"
    return Settings(
        host=_env(f"{ENV_PREFIX}HOST") or "0.0.0.0",
        # Plain PORT so PaaS-style launchers work unchanged.
        port=_env_int("PORT", 3001, minimum=1),
        color_pool_size=_env_int(f"{ENV_PREFIX}COLOR_POOL_SIZE", 16, minimum=1),
        throttle_interval_ms=_env_int(f"{ENV_PREFIX}THROTTLE_MS", 16),
        spawn_x=_env_float(f"{ENV_PREFIX}SPAWN_X", 400.0),
        spawn_y=_env_float(f"{ENV_PREFIX}SPAWN_Y", 680.0),
        reject_join_when_pool_exhausted=_env_bool(f"{ENV_PREFIX}REJECT_WHEN_POOL_EXHAUSTED", False),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        log_level=(_env(f"{ENV_PREFIX}LOG_LEVEL") or "INFO").upper(),
    )
