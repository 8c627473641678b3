from __future__ import annotations


class ThrottleGate:
    """Per-connection minimum interval between accepted position updates.

    Rejected updates are not queued; only the next update that clears the
    interval gets through.
    """

    def __init__(self, interval: float = 0.016) -> None:
        if interval < 0:
            raise ValueError("Throttle interval must be >= 0")
        self.interval = interval
        self._last_admitted: dict[str, float] = {}

    def try_admit(self, connection_id: str, now: float) -> bool:
        last = self._last_admitted.get(connection_id)
        if last is not None and now - last < self.interval:
            return False
        self._last_admitted[connection_id] = now
        return True

    def forget(self, connection_id: str) -> None:
        self._last_admitted.pop(connection_id, None)

    def __len__(self) -> int:
        return len(self._last_admitted)
