"""Interactive week-view time-grid scheduler core."""

from timegrid.app import InMemoryEventStore, SchedulerConfig, TimeGridScheduler
from timegrid.core import CalendarEvent, CellInfo, DateRange, Grid, PixelRect, PrecisionPolicy

__all__ = [
    "CalendarEvent",
    "CellInfo",
    "DateRange",
    "Grid",
    "InMemoryEventStore",
    "PixelRect",
    "PrecisionPolicy",
    "SchedulerConfig",
    "TimeGridScheduler",
]
