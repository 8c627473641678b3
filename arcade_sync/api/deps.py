from __future__ import annotations

from fastapi.requests import HTTPConnection

from arcade_sync.snapshot import SnapshotService
from arcade_sync.sync_engine import SyncEngine
from arcade_sync.websocket_hub import ConnectionHub


def get_engine(conn: HTTPConnection) -> SyncEngine:
    return conn.app.state.engine


def get_hub(conn: HTTPConnection) -> ConnectionHub:
    return conn.app.state.hub


def get_snapshots(conn: HTTPConnection) -> SnapshotService:
    return conn.app.state.snapshots
