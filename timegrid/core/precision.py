"""Precision and snapping policy shared by mapping and gestures.

Three independent precisions, all in minutes:

* ``drag_precision`` is the height of one vertical grid unit; every gesture
  snaps to it.
* ``visual_grid_precision`` only controls how the background rows are drawn.
* ``click_precision`` is the duration created by a single click.

The visual and click precisions are expected to be whole multiples of the drag
precision. That is a configuration precondition: mismatches are reported by
``compatibility_warnings`` and logged, but not rejected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from timegrid.core.errors import ConfigurationError
from timegrid.core.models import MINUTES_IN_DAY, CellInfo
from timegrid.core.span import get_span

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class VisualRow:
    """One background grid row."""

    index: int
    start_minute: int
    is_hour_start: bool


def _require_positive_minutes(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive integer number of minutes, got {value!r}")


@dataclass(frozen=True, slots=True)
class PrecisionPolicy:
    """Validated minute precisions and the unit conversions derived from them."""

    drag_precision: int = 30
    visual_grid_precision: int = 30
    click_precision: int = 30

    def __post_init__(self) -> None:
        _require_positive_minutes("drag_precision", self.drag_precision)
        _require_positive_minutes("visual_grid_precision", self.visual_grid_precision)
        _require_positive_minutes("click_precision", self.click_precision)

    def to_units(self, minutes: float) -> float:
        """Convert minutes to vertical grid units."""
        return minutes / self.drag_precision

    def to_minutes(self, units: float) -> float:
        """Convert vertical grid units to minutes."""
        return units * self.drag_precision

    @property
    def click_span_rows(self) -> int:
        return max(1, self.click_precision // self.drag_precision)

    def compatibility_warnings(self) -> list[str]:
        """Describe precision combinations that produce rendering artifacts."""
        warnings: list[str] = []
        if self.visual_grid_precision % self.drag_precision != 0:
            warnings.append(
                f"visual_grid_precision={self.visual_grid_precision} is not a multiple of "
                f"drag_precision={self.drag_precision}; grid lines and snap points will not align"
            )
        if self.click_precision % self.drag_precision != 0:
            warnings.append(
                f"click_precision={self.click_precision} is not a multiple of "
                f"drag_precision={self.drag_precision}; clicks snap to {self.click_span_rows} row(s)"
            )
        return warnings

    def apply_click_span(self, cell: CellInfo, num_vertical_cells: int) -> CellInfo:
        """Give ``cell`` the click duration, keeping it inside the grid."""
        span = min(self.click_span_rows, num_vertical_cells)
        start_y = max(0, min(cell.start_y, num_vertical_cells - span))
        return CellInfo(
            start_x=cell.start_x,
            end_x=cell.end_x,
            span_x=cell.span_x,
            start_y=start_y,
            end_y=start_y + span,
            span_y=span,
        )

    def click_cell(self, day_index: int, row: int, num_vertical_cells: int) -> CellInfo:
        """Return the cell created by a single click on ``row`` of ``day_index``."""
        cell = CellInfo(
            start_x=day_index,
            end_x=day_index,
            span_x=get_span(day_index, day_index),
            start_y=row,
            end_y=row,
            span_y=0,
        )
        return self.apply_click_span(cell, num_vertical_cells)

    def visual_rows(self, hour_start: int, hour_end: int) -> list[VisualRow]:
        """Return background rows whose start falls inside the visible hours."""
        rows: list[VisualRow] = []
        for index in range(MINUTES_IN_DAY // self.visual_grid_precision):
            start_minute = index * self.visual_grid_precision
            if hour_start * 60 <= start_minute < hour_end * 60:
                rows.append(
                    VisualRow(index=index, start_minute=start_minute, is_hour_start=start_minute % 60 == 0)
                )
        return rows

    def visual_row_to_drag_row(self, visual_index: int, hour_start: int) -> int:
        """Convert a background row index into the drag-unit row it starts on."""
        minute = visual_index * self.visual_grid_precision - hour_start * 60
        return max(0, minute // self.drag_precision)


def log_compatibility(policy: PrecisionPolicy) -> None:
    for message in policy.compatibility_warnings():
        logger.warning("precision_mismatch %s", message)
