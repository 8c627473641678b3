from __future__ import annotations

from arcade_sync.api.models import GameStateResponse, HealthResponse
from arcade_sync.world_state import WorldState


class SnapshotService:
    """Read-only view of the world for health checks and debugging."""

    def __init__(self, world: WorldState) -> None:
        self._world = world

    def status(self) -> HealthResponse:
        return HealthResponse(status="ok", player_count=self._world.player_count())

    def full_state(self) -> GameStateResponse:
        return GameStateResponse(
            players=self._world.list_players(),
            door_state=self._world.get_door_state(),
            arcade_machines=self._world.get_all_machine_overlays(),
        )
