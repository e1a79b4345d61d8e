"""Pointer and key input handling for the scheduler surface."""

from timegrid.input.events import KeyEvent, PointerEvent
from timegrid.input.gesture import DragSurface, GestureListener, GesturePhase, GestureState
from timegrid.input.keymap import map_key_name
from timegrid.input.range_box import EditKind, EventDragSession

__all__ = [
    "DragSurface",
    "EditKind",
    "EventDragSession",
    "GestureListener",
    "GesturePhase",
    "GestureState",
    "KeyEvent",
    "PointerEvent",
    "map_key_name",
]
