from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from arcade_sync.api.models import (
    ArcadeTransparencyPayload,
    ColorAssigned,
    JoinRejected,
    JoinSnapshot,
    PlayerJoinPayload,
    PlayerMovePayload,
    PlayerMoved,
    PlayerState,
    Position,
)
from arcade_sync.colors import ColorAllocator, ColorPoolExhausted
from arcade_sync.config import Settings
from arcade_sync.core.events import Delivery, InboundEvent
from arcade_sync.fsm import ConnectionFSM, ConnectionPhase
from arcade_sync.throttle import ThrottleGate
from arcade_sync.world_state import WorldState

logger = logging.getLogger(__name__)

Handler = Callable[[ConnectionFSM, Any], list[Delivery]]


class SyncEngine:
    """Binds inbound client events to world mutations and decides who hears about them.

    Every method is synchronous: an event is fully applied (and its deliveries
    computed) before the caller gets control back. The caller owns the sockets
    and does the actual sending.

    Recipients:
      - playerColorAssigned, gameState, joinRejected: the sender only.
      - playerJoined, playerMoved, arcadeMachineTransparencyChanged: every other
        active connection.
      - doorStateChanged, playerLeft: every active connection.

    Pending connections (connected but not joined) never receive anything but
    their own join replies. Their moves are ignored; a door toggle or overlay
    change from them still applies and goes out to the active connections.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        world: WorldState | None = None,
        colors: ColorAllocator | None = None,
        throttle: ThrottleGate | None = None,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], float] = time.time,
    ) -> None:
        self.settings = settings or Settings()
        self.world = world or WorldState()
        self.colors = colors or ColorAllocator(self.settings.color_pool_size)
        self.throttle = throttle or ThrottleGate(self.settings.throttle_interval)
        self._clock = clock
        self._wall_clock = wall_clock
        self._connections: dict[str, ConnectionFSM] = {}
        self._handlers: dict[InboundEvent, Handler] = {
            "playerJoin": self._on_join,
            "playerMove": self._on_move,
            "toggleDoor": self._on_toggle_door,
            "arcadeMachineTransparency": self._on_arcade_transparency,
        }

    # ---------- connection lifecycle ----------
    def connect(self, connection_id: str) -> None:
        if connection_id in self._connections:
            return
        self._connections[connection_id] = ConnectionFSM(connection_id)
        logger.info("connection opened: %s", connection_id)

    def disconnect(self, connection_id: str) -> list[Delivery]:
        conn = self._connections.pop(connection_id, None)
        if conn is None:
            return []

        was_active = conn.joined
        conn.leave()
        if not was_active:
            logger.info("connection closed before joining: %s", connection_id)
            return []

        self.throttle.forget(connection_id)
        player = self.world.remove_player(connection_id)
        if player is not None:
            self.colors.release(player.color)
            logger.info("player %s (%s) left; %d remaining", player.name, connection_id, self.world.player_count())

        return [Delivery("playerLeft", connection_id, self._active_ids())]

    def connection_state(self, connection_id: str) -> ConnectionPhase | None:
        conn = self._connections.get(connection_id)
        return conn.phase if conn is not None else None

    def connected_ids(self) -> list[str]:
        return list(self._connections)

    # ---------- dispatch ----------
    def handle(self, connection_id: str, event: str, data: Any = None) -> list[Delivery]:
        conn = self._connections.get(connection_id)
        if conn is None:
            logger.debug("ignoring %s from unknown connection %s", event, connection_id)
            return []

        handler = self._handlers.get(event)  # type: ignore[call-overload]
        if handler is None:
            logger.warning("ignoring unknown event %r from %s", event, connection_id)
            return []

        if event == "playerMove" and not conn.joined:
            logger.debug("ignoring %s from pending connection %s", event, connection_id)
            return []

        try:
            return handler(conn, data)
        except ValidationError as e:
            logger.warning(
                "dropping malformed %s from %s: %s", event, connection_id, e.errors(include_url=False)
            )
            return []

    # ---------- handlers ----------
    def _on_join(self, conn: ConnectionFSM, data: Any) -> list[Delivery]:
        payload = PlayerJoinPayload.model_validate(data if data is not None else {})
        cid = conn.connection_id

        previous = self.world.get_player(cid) if conn.joined else None
        if previous is not None:
            # Re-join: give the old color back before picking a fresh one.
            self.colors.release(previous.color)

        try:
            color = self.colors.assign(strict=self.settings.reject_join_when_pool_exhausted)
        except ColorPoolExhausted:
            logger.warning("rejecting join from %s: color pool exhausted", cid)
            return [Delivery("joinRejected", JoinRejected(reason="color_pool_exhausted").to_wire(), (cid,))]

        player = PlayerState(
            id=cid,
            name=payload.name,
            color=color,
            position=Position(x=self.settings.spawn_x, y=self.settings.spawn_y),
            last_update=self._now_ms(),
        )
        self.world.upsert_player(cid, player)
        conn.join()
        logger.info(
            "player %s joined as %s with color %s; %d total",
            payload.name,
            cid,
            color,
            self.world.player_count(),
        )

        snapshot = JoinSnapshot(
            players=self.world.list_players(excluding=cid),
            door_state=self.world.get_door_state(),
        )
        return [
            Delivery("playerColorAssigned", ColorAssigned(color=color).to_wire(), (cid,)),
            Delivery("gameState", snapshot.to_wire(), (cid,)),
            Delivery("playerJoined", player.to_wire(), self._active_ids(excluding=cid)),
        ]

    def _on_move(self, conn: ConnectionFSM, data: Any) -> list[Delivery]:
        payload = PlayerMovePayload.model_validate(data)
        cid = conn.connection_id

        player = self.world.get_player(cid)
        if player is None:
            return []

        if not self.throttle.try_admit(cid, self._clock()):
            logger.debug("throttled move from %s", cid)
            return []

        player.position = Position(x=payload.x, y=payload.y)
        player.last_update = self._now_ms()

        moved = PlayerMoved(id=cid, position=player.position)
        return [Delivery("playerMoved", moved.to_wire(), self._active_ids(excluding=cid))]

    def _on_toggle_door(self, conn: ConnectionFSM, data: Any) -> list[Delivery]:
        door = self.world.toggle_door()
        logger.info("door toggled to %s by %s", "open" if door.is_open else "closed", conn.connection_id)
        return [Delivery("doorStateChanged", door.to_wire(), self._active_ids())]

    def _on_arcade_transparency(self, conn: ConnectionFSM, data: Any) -> list[Delivery]:
        payload = ArcadeTransparencyPayload.model_validate(data)
        self.world.set_machine_overlay(payload.machine_id, payload.overlay())
        return [
            Delivery(
                "arcadeMachineTransparencyChanged",
                payload.to_wire(),
                self._active_ids(excluding=conn.connection_id),
            )
        ]

    # ---------- helpers ----------
    def _active_ids(self, *, excluding: str | None = None) -> tuple[str, ...]:
        return tuple(cid for cid, conn in self._connections.items() if conn.joined and cid != excluding)

    def _now_ms(self) -> int:
        return int(self._wall_clock() * 1000)
