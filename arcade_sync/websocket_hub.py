from __future__ import annotations

import logging
from collections.abc import Iterable
from uuid import uuid4

from fastapi import WebSocket

from arcade_sync.core.events import Delivery

logger = logging.getLogger(__name__)


def new_connection_id() -> str:
    return uuid4().hex[:20]


class ConnectionHub:
    """In-process registry of live sockets keyed by connection id.

    Contract:
      - register a socket with `connect(connection_id, websocket)`.
      - send engine output with `deliver(deliveries)`; sends are fire-and-forget
        and a socket that fails a send is dropped from the registry.

    No locking: everything runs on the single event loop.
    """

    def __init__(self) -> None:
        self._sockets: dict[str, WebSocket] = {}

    async def connect(self, connection_id: str, websocket: WebSocket) -> None:
        await websocket.accept()
        self._sockets[connection_id] = websocket

    def disconnect(self, connection_id: str) -> None:
        self._sockets.pop(connection_id, None)

    def __contains__(self, connection_id: object) -> bool:
        return connection_id in self._sockets

    def __len__(self) -> int:
        return len(self._sockets)

    async def deliver(self, deliveries: Iterable[Delivery]) -> None:
        for delivery in deliveries:
            frame = delivery.frame()
            for cid in delivery.recipients:
                ws = self._sockets.get(cid)
                if ws is None:
                    continue
                try:
                    await ws.send_json(frame)
                except Exception as e:
                    logger.debug("send of %s to %s failed: %s", delivery.event, cid, e)
                    self._sockets.pop(cid, None)
