"""Core value types shared by the grid, mapper and gesture layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

import pendulum

MINUTES_IN_DAY = 24 * 60
DAYS_IN_WEEK = 7


class MoveAxis(StrEnum):
    """Axes along which an existing event box may be dragged."""

    NONE = "none"
    X = "x"
    Y = "y"
    BOTH = "both"

    @property
    def moves_x(self) -> bool:
        return self in (MoveAxis.X, MoveAxis.BOTH)

    @property
    def moves_y(self) -> bool:
        return self in (MoveAxis.Y, MoveAxis.BOTH)


class ResizeHandle(StrEnum):
    """Vertical resize handle of an event box."""

    TOP = "top"
    BOTTOM = "bottom"


@dataclass(frozen=True, slots=True)
class CellInfo:
    """Rectangular region of the discrete grid.

    Horizontal bounds are inclusive day columns. Vertical bounds are grid-line
    indices, so ``end_y`` may equal the number of vertical cells.
    """

    start_x: int
    end_x: int
    span_x: int
    start_y: int
    end_y: int
    span_y: int


@dataclass(frozen=True, slots=True)
class PixelRect:
    """Axis-aligned pixel rectangle with its originating coordinates."""

    top: float
    left: float
    width: float
    height: float
    bottom: float
    right: float
    start_x: float = 0
    end_x: float = 0
    start_y: float = 0
    end_y: float = 0

    @classmethod
    def from_edges(
        cls,
        *,
        top: float,
        left: float,
        bottom: float,
        right: float,
        start_x: float = 0,
        end_x: float = 0,
        start_y: float = 0,
        end_y: float = 0,
    ) -> PixelRect:
        """Build a rect from its four edges."""
        return cls(
            top=top,
            left=left,
            width=right - left,
            height=bottom - top,
            bottom=bottom,
            right=right,
            start_x=start_x,
            end_x=end_x,
            start_y=start_y,
            end_y=end_y,
        )

    def contains(self, px: float, py: float) -> bool:
        """Return whether a point is inside the rectangle."""
        return self.left <= px <= self.right and self.top <= py <= self.bottom


@dataclass(frozen=True, slots=True)
class DateRange:
    """Ordered pair of absolute timestamps with ``start < end``."""

    start: pendulum.DateTime
    end: pendulum.DateTime

    def __post_init__(self) -> None:
        if not self.start < self.end:
            raise ValueError(f"date range must have start < end, got {self.start} .. {self.end}")

    def as_tuple(self) -> tuple[pendulum.DateTime, pendulum.DateTime]:
        return self.start, self.end


@dataclass(frozen=True, slots=True)
class CalendarEvent:
    """Calendar event consumed by the scheduler; only ``ranges`` is interpreted."""

    ranges: DateRange
    id: str | None = None
    calendar_id: str | None = None
    summary: str | None = None
    description: str | None = None
    html_link: str | None = None
    payload: dict[str, object] = field(default_factory=dict)

    @property
    def start_time(self) -> pendulum.DateTime:
        return self.ranges.start

    @property
    def end_time(self) -> pendulum.DateTime:
        return self.ranges.end


@dataclass(frozen=True, slots=True)
class PendingCreation:
    """Provisional event projected from an in-progress creation gesture."""

    cell: CellInfo
    ranges: tuple[DateRange, ...]

    def as_event(self) -> CalendarEvent:
        """Return the event candidate committed for this creation (first expanded day)."""
        return CalendarEvent(ranges=self.ranges[0])
