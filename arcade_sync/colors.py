from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class ColorPoolExhausted(ValueError):
    pass


def color_label(slot: int) -> str:
    return f"{slot:02d}"


class ColorAllocator:
    """Hands out identity colors from a fixed pool of numbered slots.

    Contract:
      - `assign()` returns the lowest free slot ("01" before "02", ...).
      - once every slot is taken, `assign()` returns the first slot again without
        recording it, so two connections share "01" until one leaves.
        `assign(strict=True)` raises `ColorPoolExhausted` instead.
      - `release()` of a free or unknown color does nothing.
    """

    def __init__(self, size: int = 16) -> None:
        if size < 1:
            raise ValueError("Color pool needs at least one slot")
        self._slots: tuple[str, ...] = tuple(color_label(i) for i in range(1, size + 1))
        self._assigned: set[str] = set()

    @property
    def size(self) -> int:
        return len(self._slots)

    @property
    def slots(self) -> tuple[str, ...]:
        return self._slots

    @property
    def fallback(self) -> str:
        return self._slots[0]

    def assign(self, *, strict: bool = False) -> str:
        for color in self._slots:
            if color not in self._assigned:
                self._assigned.add(color)
                return color

        if strict:
            raise ColorPoolExhausted(f"All {self.size} colors are in use")
        logger.warning("color pool exhausted (%d slots); reusing %s", self.size, self.fallback)
        return self.fallback

    def release(self, color: str) -> None:
        self._assigned.discard(color)

    def is_assigned(self, color: str) -> bool:
        return color in self._assigned

    def assigned(self) -> list[str]:
        return sorted(self._assigned)
