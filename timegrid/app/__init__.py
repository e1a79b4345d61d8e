"""Scheduler application layer."""

from timegrid.app.memory_store import InMemoryEventStore
from timegrid.app.ports import EventCollaborator, EventRenderer, RangeBoxView
from timegrid.app.scheduler import TimeGridScheduler
from timegrid.app.scheduler_config import SchedulerConfig
from timegrid.app.scheduler_state import SchedulerState

__all__ = [
    "EventCollaborator",
    "EventRenderer",
    "InMemoryEventStore",
    "RangeBoxView",
    "SchedulerConfig",
    "SchedulerState",
    "TimeGridScheduler",
]
