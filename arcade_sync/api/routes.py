from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from arcade_sync.api.deps import get_engine, get_hub, get_snapshots
from arcade_sync.api.models import GameStateResponse, HealthResponse, InboundFrame
from arcade_sync.snapshot import SnapshotService
from arcade_sync.sync_engine import SyncEngine
from arcade_sync.websocket_hub import ConnectionHub, new_connection_id

logger = logging.getLogger(__name__)

router = APIRouter()


def parse_frame(raw: str | bytes, *, connection_id: str) -> InboundFrame | None:
    """Decode one `{"event": ..., "data": ...}` frame; bad frames are logged and skipped."""

    try:
        return InboundFrame.model_validate_json(raw)
    except ValidationError as e:
        logger.warning("dropping malformed frame from %s: %s", connection_id, e.errors(include_url=False))
        return None


@router.websocket("/ws")
async def sync_ws(
    websocket: WebSocket,
    engine: SyncEngine = Depends(get_engine),
    hub: ConnectionHub = Depends(get_hub),
) -> None:
    cid = new_connection_id()
    await hub.connect(cid, websocket)
    engine.connect(cid)

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes")
            if raw is None:
                continue

            frame = parse_frame(raw, connection_id=cid)
            if frame is None:
                continue
            await hub.deliver(engine.handle(cid, frame.event, frame.data))
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("connection %s failed", cid)
        raise
    finally:
        hub.disconnect(cid)
        await hub.deliver(engine.disconnect(cid))


@router.get("/health", response_model=HealthResponse)
async def health(snapshots: SnapshotService = Depends(get_snapshots)) -> HealthResponse:
    return snapshots.status()


@router.get("/game-state", response_model=GameStateResponse)
async def game_state(snapshots: SnapshotService = Depends(get_snapshots)) -> GameStateResponse:
    return snapshots.full_state()
