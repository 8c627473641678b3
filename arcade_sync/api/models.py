from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for everything that crosses the socket.

    Attributes are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Position(WireModel):
    # NaN/Infinity would go out as bare tokens that JSON.parse rejects.
    model_config = ConfigDict(allow_inf_nan=False)

    x: float
    y: float

    @field_validator("x", "y", mode="before")
    @classmethod
    def _no_bools(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("coordinate must be a number, not a boolean")
        return v


class PlayerState(WireModel):
    id: str
    name: str
    color: str
    position: Position
    # Epoch milliseconds of the last accepted mutation (advisory).
    last_update: int


class DoorState(WireModel):
    is_open: bool = False


class ArcadeMachineOverlay(WireModel):
    is_transparent: bool = False
    for_player: str | None = None


# ---------- inbound payloads ----------


def _coerce_optional_str(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class PlayerJoinPayload(WireModel):
    name: str = ""
    # Accepted for compatibility; the server always assigns its own color.
    color: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, v: Any) -> Any:
        return "" if v is None else _coerce_optional_str(v)

    @field_validator("color", mode="before")
    @classmethod
    def _color(cls, v: Any) -> Any:
        return _coerce_optional_str(v)


class PlayerMovePayload(Position):
    pass


class ArcadeTransparencyPayload(WireModel):
    machine_id: str = Field(..., min_length=1)
    is_transparent: bool = False
    for_player: str | None = None

    @field_validator("machine_id", "for_player", mode="before")
    @classmethod
    def _ids(cls, v: Any) -> Any:
        return _coerce_optional_str(v)

    @field_validator("is_transparent", mode="before")
    @classmethod
    def _transparent(cls, v: Any) -> Any:
        return False if v is None else v

    def overlay(self) -> ArcadeMachineOverlay:
        return ArcadeMachineOverlay(is_transparent=self.is_transparent, for_player=self.for_player)


class InboundFrame(BaseModel):
    """Envelope of every websocket frame: `{"event": ..., "data": ...}`."""

    event: str = Field(..., min_length=1)
    data: Any = None


# ---------- outbound payloads ----------


class ColorAssigned(WireModel):
    color: str


class JoinSnapshot(WireModel):
    players: list[PlayerState] = Field(default_factory=list)
    door_state: DoorState


class PlayerMoved(WireModel):
    id: str
    position: Position


class JoinRejected(WireModel):
    reason: str


# ---------- HTTP responses ----------


class HealthResponse(WireModel):
    status: str = "ok"
    player_count: int


class GameStateResponse(WireModel):
    players: list[PlayerState] = Field(default_factory=list)
    door_state: DoorState
    # [[machine_id, overlay], ...] in first-seen order.
    arcade_machines: list[tuple[str, ArcadeMachineOverlay]] = Field(default_factory=list)
