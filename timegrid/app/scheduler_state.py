"""Mutable scheduler state container."""

from __future__ import annotations

from dataclasses import dataclass, field

from timegrid.core.grid import Grid
from timegrid.core.models import CalendarEvent, PendingCreation
from timegrid.input.gesture import DragSurface
from timegrid.input.range_box import EventDragSession


@dataclass(slots=True)
class SchedulerState:
    """Aggregates all mutable state owned by ``TimeGridScheduler``."""

    surface: DragSurface = field(default_factory=lambda: DragSurface(0, 0))
    grid: Grid | None = None
    schedule: list[CalendarEvent] = field(default_factory=list)
    visible_schedule: list[CalendarEvent] = field(default_factory=list)
    pending_creation: PendingCreation | None = None
    active_range_index: int | None = None
    active_cell_index: int | None = None
    selected_event: CalendarEvent | None = None
    event_drag: EventDragSession | None = None
    disabled: bool = False
