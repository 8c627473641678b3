from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

InboundEvent = Literal[
    "playerJoin",
    "playerMove",
    "toggleDoor",
    "arcadeMachineTransparency",
]

OutboundEvent = Literal[
    "playerColorAssigned",
    "gameState",
    "playerJoined",
    "playerMoved",
    "doorStateChanged",
    "arcadeMachineTransparencyChanged",
    "playerLeft",
    "joinRejected",
]


@dataclass(frozen=True, slots=True)
class Delivery:
    """One outbound message and the connections it goes to.

    `data` is already JSON-ready (wire aliases applied).
    """

    event: OutboundEvent
    data: Any
    recipients: tuple[str, ...]

    def frame(self) -> dict[str, Any]:
        return {"event": self.event, "data": self.data}
