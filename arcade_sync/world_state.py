from __future__ import annotations

from arcade_sync.api.models import ArcadeMachineOverlay, DoorState, PlayerState


class WorldState:
    """Authoritative shared world: joined players, the door, arcade overlays.

    Pure storage. Reads on a missing key return None / empty, never raise.
    """

    def __init__(self) -> None:
        self._players: dict[str, PlayerState] = {}
        self._door = DoorState(is_open=False)
        self._machines: dict[str, ArcadeMachineOverlay] = {}

    # ---------- players ----------
    def upsert_player(self, player_id: str, player: PlayerState) -> None:
        self._players[player_id] = player

    def get_player(self, player_id: str) -> PlayerState | None:
        return self._players.get(player_id)

    def remove_player(self, player_id: str) -> PlayerState | None:
        return self._players.pop(player_id, None)

    def list_players(self, *, excluding: str | None = None) -> list[PlayerState]:
        return [p for pid, p in self._players.items() if pid != excluding]

    def player_ids(self) -> list[str]:
        return list(self._players)

    def player_count(self) -> int:
        return len(self._players)

    # ---------- door ----------
    def set_door_open(self, is_open: bool) -> DoorState:
        self._door.is_open = bool(is_open)
        return self.get_door_state()

    def toggle_door(self) -> DoorState:
        return self.set_door_open(not self._door.is_open)

    def get_door_state(self) -> DoorState:
        # Copy so callers can't flip the shared flag behind our back.
        return self._door.model_copy()

    # ---------- arcade machines ----------
    def set_machine_overlay(self, machine_id: str, overlay: ArcadeMachineOverlay) -> None:
        self._machines[machine_id] = overlay

    def get_machine_overlay(self, machine_id: str) -> ArcadeMachineOverlay | None:
        return self._machines.get(machine_id)

    def get_all_machine_overlays(self) -> list[tuple[str, ArcadeMachineOverlay]]:
        return list(self._machines.items())
