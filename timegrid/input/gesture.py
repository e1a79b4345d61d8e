"""Click-and-drag state machine for creating events on the grid surface."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from timegrid.core.models import PixelRect

logger = logging.getLogger(__name__)


class GesturePhase(StrEnum):
    """Lifecycle phase of the single in-flight gesture."""

    IDLE = "IDLE"
    DRAGGING = "DRAGGING"
    FINISHED = "FINISHED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True, slots=True)
class GestureState:
    """Immutable snapshot of the surface gesture."""

    box: PixelRect | None = None
    is_dragging: bool = False
    has_finished_dragging: bool = False
    generation: int = 0
    phase: GesturePhase = GesturePhase.IDLE


GestureListener = Callable[[GestureState], None]


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


class DragSurface:
    """Turn pointer down/move/up over a bounded surface into a drag box.

    Only one gesture is live at a time. Each move recomputes the box from the
    anchor, so repeated or duplicated moves are idempotent. Moves and releases
    may carry the generation returned by ``pointer_down``; events from an
    older generation are dropped.
    """

    def __init__(self, width: float, height: float, *, disabled: bool = False) -> None:
        self._width = float(width)
        self._height = float(height)
        self._disabled = disabled
        self._state = GestureState()
        self._anchor: tuple[float, float] | None = None
        self._generation = 0
        self._listeners: list[GestureListener] = []

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def disabled(self) -> bool:
        return self._disabled

    def subscribe(self, listener: GestureListener) -> Callable[[], None]:
        """Register a state-change listener and return its unsubscribe callback."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def contains(self, x: float, y: float) -> bool:
        """Return whether a point lies on the surface."""
        return 0 <= x <= self._width and 0 <= y <= self._height

    def set_disabled(self, disabled: bool) -> None:
        """Enable or disable the surface; disabling cancels any live gesture."""
        self._disabled = disabled
        if disabled:
            self.cancel()

    def resize(self, width: float, height: float) -> None:
        """Adopt new surface bounds, cancelling a gesture measured against the old ones."""
        if (float(width), float(height)) == (self._width, self._height):
            return
        self.cancel()
        self._width = float(width)
        self._height = float(height)

    def pointer_down(self, x: float, y: float) -> GestureState | None:
        """Start a gesture at ``(x, y)``; return ``None`` when the press is ignored."""
        if self._disabled:
            logger.debug("gesture_down_ignored reason=disabled x=%.1f y=%.1f", x, y)
            return None
        if self._state.phase is GesturePhase.DRAGGING:
            logger.debug("gesture_down_ignored reason=already_dragging generation=%d", self._generation)
            return None
        if not self.contains(x, y):
            return None
        self._generation += 1
        self._anchor = (x, y)
        logger.debug("gesture_started generation=%d x=%.1f y=%.1f", self._generation, x, y)
        return self._publish(
            GestureState(
                box=self._box_to(x, y),
                is_dragging=True,
                generation=self._generation,
                phase=GesturePhase.DRAGGING,
            )
        )

    def pointer_move(self, x: float, y: float, generation: int | None = None) -> GestureState | None:
        """Recompute the box against the current pointer position."""
        if not self._accepts(generation):
            return None
        box = self._box_to(x, y)
        if box == self._state.box:
            return self._state
        return self._publish(
            GestureState(
                box=box,
                is_dragging=True,
                generation=self._generation,
                phase=GesturePhase.DRAGGING,
            )
        )

    def pointer_up(self, x: float, y: float, generation: int | None = None) -> GestureState | None:
        """Finish the gesture; the final box stays readable until ``acknowledge``."""
        if not self._accepts(generation):
            return None
        box = self._box_to(x, y)
        self._anchor = None
        logger.debug(
            "gesture_finished generation=%d top=%.1f left=%.1f width=%.1f height=%.1f",
            self._generation,
            box.top,
            box.left,
            box.width,
            box.height,
        )
        return self._publish(
            GestureState(
                box=box,
                is_dragging=True,
                has_finished_dragging=True,
                generation=self._generation,
                phase=GesturePhase.FINISHED,
            )
        )

    def cancel(self) -> GestureState | None:
        """Drop the live gesture without a finish notification."""
        if self._state.phase is GesturePhase.IDLE:
            return None
        self._anchor = None
        logger.debug("gesture_cancelled generation=%d", self._generation)
        return self._publish(GestureState(generation=self._generation, phase=GesturePhase.CANCELLED))

    def acknowledge(self) -> GestureState | None:
        """Return to idle once the consumer has read a finished or cancelled state."""
        if self._state.phase not in (GesturePhase.FINISHED, GesturePhase.CANCELLED):
            return None
        return self._publish(GestureState(generation=self._generation))

    def _accepts(self, generation: int | None) -> bool:
        if self._state.phase is not GesturePhase.DRAGGING or self._anchor is None:
            return False
        if generation is not None and generation != self._generation:
            logger.debug("gesture_event_stale generation=%d current=%d", generation, self._generation)
            return False
        return True

    def _box_to(self, x: float, y: float) -> PixelRect:
        assert self._anchor is not None
        anchor_x, anchor_y = self._anchor
        end_x = _clamp(x, 0.0, self._width)
        end_y = _clamp(y, 0.0, self._height)
        return PixelRect.from_edges(
            top=min(anchor_y, end_y),
            left=min(anchor_x, end_x),
            bottom=max(anchor_y, end_y),
            right=max(anchor_x, end_x),
            start_x=anchor_x,
            end_x=end_x,
            start_y=anchor_y,
            end_y=end_y,
        )

    def _publish(self, state: GestureState) -> GestureState:
        self._state = state
        for listener in tuple(self._listeners):
            listener(state)
        return state
