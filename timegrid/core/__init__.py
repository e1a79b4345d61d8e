"""Geometry and temporal mapping core."""

from timegrid.core.errors import ConfigurationError, GeometryInvariantError, TimeGridError, invariant
from timegrid.core.grid import Grid, create_grid
from timegrid.core.mapping import (
    CellRangeMapper,
    create_cell_range_mapper,
    create_visual_grid_mapper,
    expect_single_range,
)
from timegrid.core.models import (
    CalendarEvent,
    CellInfo,
    DateRange,
    MoveAxis,
    PendingCreation,
    PixelRect,
    ResizeHandle,
)
from timegrid.core.precision import PrecisionPolicy, VisualRow
from timegrid.core.span import get_span

__all__ = [
    "CalendarEvent",
    "CellInfo",
    "CellRangeMapper",
    "ConfigurationError",
    "DateRange",
    "GeometryInvariantError",
    "Grid",
    "MoveAxis",
    "PendingCreation",
    "PixelRect",
    "PrecisionPolicy",
    "ResizeHandle",
    "TimeGridError",
    "VisualRow",
    "create_cell_range_mapper",
    "create_grid",
    "create_visual_grid_mapper",
    "expect_single_range",
    "get_span",
    "invariant",
]
