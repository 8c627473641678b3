from __future__ import annotations

from fastapi.testclient import TestClient

from arcade_sync.api.models import ArcadeMachineOverlay
from arcade_sync.config import Settings
from arcade_sync.main import create_app
from arcade_sync.snapshot import SnapshotService
from arcade_sync.sync_engine import SyncEngine


def test_health_on_empty_world(client: TestClient) -> None:
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok", "playerCount": 0}


def test_game_state_on_empty_world(client: TestClient) -> None:
    res = client.get("/game-state")
    assert res.status_code == 200
    assert res.json() == {"players": [], "doorState": {"isOpen": False}, "arcadeMachines": []}


def test_endpoints_read_the_engine_world() -> None:
    engine = SyncEngine(Settings(), wall_clock=lambda: 2.0)
    engine.connect("a")
    engine.handle("a", "playerJoin", {"name": "Nova"})
    engine.handle("a", "toggleDoor")
    engine.handle("a", "arcadeMachineTransparency", {"machineId": "m1", "isTransparent": True})

    with TestClient(create_app(engine=engine)) as client:
        assert client.get("/health").json() == {"status": "ok", "playerCount": 1}
        assert client.get("/game-state").json() == {
            "players": [
                {"id": "a", "name": "Nova", "color": "01", "position": {"x": 400.0, "y": 680.0}, "lastUpdate": 2000}
            ],
            "doorState": {"isOpen": True},
            "arcadeMachines": [["m1", {"isTransparent": True, "forPlayer": None}]],
        }


def test_snapshot_service_does_not_mutate(engine: SyncEngine) -> None:
    engine.connect("a")
    engine.handle("a", "playerJoin", {"name": "Nova"})
    engine.world.set_machine_overlay("m1", ArcadeMachineOverlay(is_transparent=True))
    snapshots = SnapshotService(engine.world)

    full = snapshots.full_state()
    full.door_state.is_open = True
    full.players.clear()
    full.arcade_machines.clear()

    assert snapshots.status().player_count == 1
    assert engine.world.get_door_state().is_open is False
    assert len(engine.world.get_all_machine_overlays()) == 1


def test_cors_allows_any_origin_by_default(client: TestClient) -> None:
    res = client.get("/health", headers={"Origin": "http://example.test"})
    assert res.headers["access-control-allow-origin"] == "*"
