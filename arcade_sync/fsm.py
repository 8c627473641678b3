from __future__ import annotations

from enum import StrEnum

from statemachine import State, StateMachine


class ConnectionPhase(StrEnum):
    pending = "pending"
    active = "active"
    closed = "closed"


class ConnectionFSM(StateMachine):
    """Lifecycle of one websocket connection.

    - pending: connected, no player record yet; only a join does anything.
    - active: joined; re-joining stays active.
    - closed: terminal. There is no way back to pending.
    """

    pending = State(ConnectionPhase.pending.value, value=ConnectionPhase.pending.value, initial=True)
    active = State(ConnectionPhase.active.value, value=ConnectionPhase.active.value)
    closed = State(ConnectionPhase.closed.value, value=ConnectionPhase.closed.value, final=True)

    join = pending.to(active) | active.to.itself()
    leave = pending.to(closed) | active.to(closed)

    def __init__(self, connection_id: str):
        self.connection_id = connection_id
        super().__init__()

    @property
    def phase(self) -> ConnectionPhase:
        return ConnectionPhase(str(self.current_state.value))

    @property
    def joined(self) -> bool:
        return self.phase == ConnectionPhase.active
