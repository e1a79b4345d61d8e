"""Bidirectional mapping between grid cells and calendar date ranges."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import pendulum

from timegrid.core.errors import invariant
from timegrid.core.models import MINUTES_IN_DAY, CellInfo, DateRange
from timegrid.core.precision import PrecisionPolicy
from timegrid.core.span import get_span
from timegrid.core.week import at_minute, minute_of_day

_SNAP_EPSILON = 1e-9
HORIZONTAL_PRECISION = 1


def _identity_days(units: int) -> int:
    return units * HORIZONTAL_PRECISION


def _days_to_x(days: int) -> int:
    return days // HORIZONTAL_PRECISION


@dataclass(frozen=True, slots=True)
class CellRangeMapper:
    """Convert grid cells to date ranges and back, relative to ``origin_date``.

    ``from_y`` maps vertical units to minutes after midnight and ``to_y`` is its
    inverse; ``from_x``/``to_x`` do the same for day columns.
    """

    origin_date: pendulum.DateTime
    from_y: Callable[[float], float]
    to_y: Callable[[float], float]
    num_vertical_cells: int
    num_horizontal_cells: int
    from_x: Callable[[int], int] = _identity_days
    to_x: Callable[[int], int] = _days_to_x

    def cell_info_to_date_ranges(self, cell: CellInfo) -> list[DateRange]:
        """Expand ``cell`` into one range per covered day, ascending by day.

        Every range shares the cell's time-of-day bounds: a cell spanning
        several columns means the same slot repeated on each day.
        """
        invariant(
            cell.span_y > 0 and cell.end_y > cell.start_y,
            "cell must span at least one vertical unit to map to a date range",
            start_y=cell.start_y,
            end_y=cell.end_y,
            span_y=cell.span_y,
        )
        start_minute = self.from_y(cell.start_y)
        end_minute = self.from_y(cell.end_y)
        ranges: list[DateRange] = []
        for day_index in range(cell.start_x, cell.end_x + 1):
            base = self.origin_date.add(days=self.from_x(day_index))
            ranges.append(DateRange(at_minute(base, start_minute), at_minute(base, end_minute)))
        return ranges

    def date_range_to_cells(
        self, date_range: DateRange | tuple[pendulum.DateTime, pendulum.DateTime]
    ) -> list[CellInfo]:
        """Split a date range at day boundaries into the cells covering it.

        Portions outside the displayed week or the visible hours are dropped, so
        a range entirely outside the view yields an empty list.
        """
        start, end = date_range.as_tuple() if isinstance(date_range, DateRange) else date_range
        if not start < end:
            return []
        origin_day = self.origin_date.date()
        first_day = self.to_x((start.date() - origin_day).days)
        last_day = self.to_x((end.date() - origin_day).days)
        first_row = math.floor(self.to_y(minute_of_day(start)) + _SNAP_EPSILON)
        last_row = math.ceil(self.to_y(minute_of_day(end)) - _SNAP_EPSILON)

        cells: list[CellInfo] = []
        for day_index in range(max(first_day, 0), min(last_day, self.num_horizontal_cells - 1) + 1):
            start_y = first_row if day_index == first_day else 0
            end_y = last_row if day_index == last_day else self.num_vertical_cells
            start_y = max(0, min(start_y, self.num_vertical_cells))
            end_y = max(0, min(end_y, self.num_vertical_cells))
            if end_y <= start_y:
                continue
            cells.append(
                CellInfo(
                    start_x=day_index,
                    end_x=day_index,
                    span_x=get_span(day_index, day_index),
                    start_y=start_y,
                    end_y=end_y,
                    span_y=end_y - start_y,
                )
            )
        return cells


def expect_single_range(ranges: Sequence[DateRange]) -> DateRange:
    """Return the only range of ``ranges``; anything else is a mapping fault."""
    invariant(
        len(ranges) == 1,
        f"expected exactly one date range, found {len(ranges)}",
        count=len(ranges),
    )
    return ranges[0]


def create_cell_range_mapper(
    *,
    origin_date: pendulum.DateTime,
    precision: PrecisionPolicy,
    hour_start: int,
    num_vertical_cells: int,
    num_horizontal_cells: int,
) -> CellRangeMapper:
    """Build the mapper used for events: one vertical unit per drag precision."""
    day_start_minute = hour_start * 60

    def from_y(units: float) -> float:
        return day_start_minute + precision.to_minutes(units)

    def to_y(minutes: float) -> float:
        return precision.to_units(minutes - day_start_minute)

    return CellRangeMapper(
        origin_date=origin_date.start_of("day"),
        from_y=from_y,
        to_y=to_y,
        num_vertical_cells=num_vertical_cells,
        num_horizontal_cells=num_horizontal_cells,
    )


def create_visual_grid_mapper(
    *, origin_date: pendulum.DateTime, precision: PrecisionPolicy, num_horizontal_cells: int
) -> CellRangeMapper:
    """Build the mapper used to label background rows (one unit per visual precision)."""
    visual = precision.visual_grid_precision
    return CellRangeMapper(
        origin_date=origin_date.start_of("day"),
        from_y=lambda units: units * visual,
        to_y=lambda minutes: minutes / visual,
        num_vertical_cells=MINUTES_IN_DAY // visual,
        num_horizontal_cells=num_horizontal_cells,
    )
