from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

import pendulum
import pytest

from timegrid.app.memory_store import InMemoryEventStore
from timegrid.app.ports import RangeBoxView
from timegrid.app.scheduler import TimeGridScheduler
from timegrid.app.scheduler_config import SchedulerConfig
from timegrid.core.models import CalendarEvent, DateRange

# Monday.
ORIGIN = pendulum.datetime(2024, 1, 1)
SURFACE_WIDTH = 700.0
SURFACE_HEIGHT = 960.0


def at(day: int, hour: int, minute: int = 0) -> pendulum.DateTime:
    return ORIGIN.add(days=day).set(hour=hour, minute=minute)


def make_event(event_id: str, day: int, start: tuple[int, int], end: tuple[int, int]) -> CalendarEvent:
    return CalendarEvent(ranges=DateRange(at(day, *start), at(day, *end)), id=event_id, summary=event_id)


@dataclass
class RecordingRenderer:
    calls: list[tuple[CalendarEvent, RangeBoxView]] = field(default_factory=list)

    def render(self, event: CalendarEvent, geometry: RangeBoxView) -> None:
        self.calls.append((event, geometry))


@pytest.fixture(name="at")
def at_fixture():
    return at


@pytest.fixture
def event_factory():
    return make_event


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def origin() -> pendulum.DateTime:
    return ORIGIN


@pytest.fixture
def config() -> SchedulerConfig:
    return SchedulerConfig(origin_date=ORIGIN)


@pytest.fixture
def scheduler_factory():
    def _make(
        events: list[CalendarEvent] | None = None,
        *,
        laid_out: bool = True,
        **options: int,
    ) -> tuple[TimeGridScheduler, InMemoryEventStore]:
        store = InMemoryEventStore(events)
        scheduler = TimeGridScheduler(SchedulerConfig(origin_date=ORIGIN, **options), store, schedule=store.events)
        if laid_out:
            scheduler.resize_surface(SURFACE_WIDTH, SURFACE_HEIGHT)
        return scheduler, store

    return _make


@pytest.fixture
def restore_root_logging() -> Iterator[None]:
    from timegrid.infra.logging import shutdown_logging

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    shutdown_logging()
    root.handlers[:] = handlers
    root.setLevel(level)
