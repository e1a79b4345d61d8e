"""Raw input event types consumed by the gesture layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

PointerPhase = Literal["pointer_down", "pointer_move", "pointer_up"]


@dataclass(frozen=True, slots=True)
class PointerEvent:
    """Raw pointer event in surface coordinates.

    ``generation`` tags moves and releases with the gesture they belong to.
    """

    event_type: PointerPhase
    x: float
    y: float
    button: int = 1
    generation: int | None = None


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """Raw key-down event."""

    value: str


__all__ = ["KeyEvent", "PointerEvent", "PointerPhase"]
