"""Contracts between the scheduler core and its hosting UI layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import pendulum

from timegrid.core.models import CalendarEvent, CellInfo, PixelRect


class EventCollaborator(Protocol):
    """Event mutation surface owned by the host; calls are never retried."""

    def add_event(self, candidate: CalendarEvent) -> None:
        """Commit an event created by a finished creation gesture."""

    def edit_event(self, event_id: str, start_time: pendulum.DateTime, end_time: pendulum.DateTime) -> None:
        """Commit a changed range after a move or resize."""

    def delete_event(self, event_id: str) -> None:
        """Delete an event on explicit request."""

    def select_event(self, event: CalendarEvent) -> None:
        """Report that an event became the active one."""


@dataclass(frozen=True, slots=True)
class RangeBoxView:
    """Render geometry for one cell of one event."""

    event: CalendarEvent
    range_index: int
    cell_index: int
    cell: CellInfo
    rect: PixelRect
    is_start: bool
    is_end: bool
    is_active: bool = False
    is_pending: bool = False


class EventRenderer(Protocol):
    """Pluggable event content renderer supplied by the host."""

    def render(self, event: CalendarEvent, geometry: RangeBoxView) -> None:
        """Draw ``event`` inside ``geometry``."""
