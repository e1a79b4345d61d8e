"""In-memory event collaborator used by the demo and tests."""

from __future__ import annotations

import dataclasses
import logging
import uuid

import pendulum

from timegrid.core.models import CalendarEvent, DateRange

logger = logging.getLogger(__name__)


class InMemoryEventStore:
    """Keep events in insertion order and record every collaborator call."""

    def __init__(self, events: list[CalendarEvent] | None = None) -> None:
        self._events: dict[str, CalendarEvent] = {}
        self.selected: CalendarEvent | None = None
        self.calls: list[tuple[str, object]] = []
        for event in events or []:
            self._store(event)

    @property
    def events(self) -> list[CalendarEvent]:
        return sorted(self._events.values(), key=lambda event: event.start_time)

    def get(self, event_id: str) -> CalendarEvent | None:
        return self._events.get(event_id)

    def add_event(self, candidate: CalendarEvent) -> None:
        stored = self._store(candidate)
        self.calls.append(("add_event", stored))
        logger.debug("store_event_added event_id=%s", stored.id)

    def edit_event(self, event_id: str, start_time: pendulum.DateTime, end_time: pendulum.DateTime) -> None:
        self.calls.append(("edit_event", (event_id, start_time, end_time)))
        existing = self._events.get(event_id)
        if existing is None:
            raise KeyError(f"unknown event id: {event_id}")
        self._events[event_id] = dataclasses.replace(existing, ranges=DateRange(start_time, end_time))

    def delete_event(self, event_id: str) -> None:
        self.calls.append(("delete_event", event_id))
        self._events.pop(event_id, None)
        if self.selected is not None and self.selected.id == event_id:
            self.selected = None

    def select_event(self, event: CalendarEvent) -> None:
        self.calls.append(("select_event", event.id))
        self.selected = event

    def _store(self, event: CalendarEvent) -> CalendarEvent:
        stored = event if event.id is not None else dataclasses.replace(event, id=uuid.uuid4().hex)
        assert stored.id is not None
        self._events[stored.id] = stored
        return stored
