"""Move and resize gestures for one cell of an existing event."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal

from timegrid.core.errors import invariant
from timegrid.core.grid import Grid
from timegrid.core.mapping import CellRangeMapper, expect_single_range
from timegrid.core.models import CellInfo, DateRange, MoveAxis, PixelRect, ResizeHandle
from timegrid.core.span import get_span

logger = logging.getLogger(__name__)

EditKind = Literal["move", "resize_top", "resize_bottom"]


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


@dataclass(slots=True)
class EventDragSession:
    """Drag state for one rendered cell of an event.

    Every update is computed from the original cell, never accumulated, so the
    session tolerates repeated callbacks with the same position.
    """

    grid: Grid
    cell: CellInfo
    event_id: str | None
    range_index: int
    cell_index: int
    move_axis: MoveAxis = MoveAxis.BOTH
    resize_handles: frozenset[ResizeHandle] = frozenset({ResizeHandle.TOP, ResizeHandle.BOTTOM})
    disabled: bool = False
    modified_cell: CellInfo = field(init=False)
    edit_kind: EditKind | None = field(init=False, default=None)
    is_resize_or_drag: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        self.modified_cell = self.cell

    @property
    def original_rect(self) -> PixelRect:
        return self.grid.get_rect_from_cell(self.cell)

    @property
    def rect(self) -> PixelRect:
        return self.grid.get_rect_from_cell(self.modified_cell)

    @property
    def changed(self) -> bool:
        return self.modified_cell != self.cell

    def drag_to(self, x: float, y: float) -> CellInfo:
        """Move the box so its top-left corner sits at ``(x, y)``, snapped to the grid."""
        if self.disabled or self.move_axis is MoveAxis.NONE:
            return self.modified_cell
        original = self.original_rect
        top = original.top
        left = original.left
        if self.move_axis.moves_y:
            top = _clamp(y, 0.0, self.grid.total_height - original.height)
        if self.move_axis.moves_x:
            left = _clamp(x, 0.0, self.grid.total_width - original.width)
        snapped = self.grid.get_cell_from_rect(
            PixelRect.from_edges(
                top=top,
                left=left,
                bottom=top + original.height,
                right=left + original.width,
            )
        )
        start_x = self.cell.start_x
        start_y = self.cell.start_y
        if self.move_axis.moves_x:
            start_x = min(snapped.start_x, self.grid.num_horizontal_cells - self.cell.span_x)
        if self.move_axis.moves_y:
            start_y = min(snapped.start_y, self.grid.num_vertical_cells - self.cell.span_y)
        end_x = start_x + self.cell.span_x - 1
        end_y = start_y + self.cell.span_y
        moved = CellInfo(
            start_x=start_x,
            end_x=end_x,
            span_x=get_span(start_x, end_x),
            start_y=start_y,
            end_y=end_y,
            span_y=end_y - start_y,
        )
        invariant(
            moved.span_x == self.cell.span_x and moved.span_y == self.cell.span_y,
            "expected the dragged time cell to keep its dimensions",
            before=(self.cell.span_x, self.cell.span_y),
            after=(moved.span_x, moved.span_y),
        )
        self.modified_cell = moved
        self.edit_kind = "move"
        self.is_resize_or_drag = True
        return moved

    def resize(self, handle: ResizeHandle, delta_y: float) -> CellInfo:
        """Move one vertical edge by ``delta_y`` pixels (positive is downward).

        Ignored when the handle is not enabled or the span would drop to zero.
        """
        if self.disabled or handle not in self.resize_handles:
            return self.modified_cell
        original = self.original_rect
        top = original.top
        bottom = original.bottom
        if handle is ResizeHandle.TOP:
            top += delta_y
        else:
            bottom += delta_y
        if bottom - top <= 0:
            logger.debug("resize_rejected event_id=%s handle=%s delta_y=%.1f", self.event_id, handle, delta_y)
            return self.modified_cell
        snapped = self.grid.get_cell_from_rect(
            PixelRect.from_edges(top=top, left=original.left, bottom=bottom, right=original.right)
        )
        start_y = snapped.start_y if handle is ResizeHandle.TOP else self.cell.start_y
        end_y = snapped.end_y if handle is ResizeHandle.BOTTOM else self.cell.end_y
        if end_y - start_y <= 0:
            logger.debug("resize_rejected event_id=%s handle=%s delta_y=%.1f", self.event_id, handle, delta_y)
            return self.modified_cell
        self.modified_cell = CellInfo(
            start_x=self.cell.start_x,
            end_x=self.cell.end_x,
            span_x=self.cell.span_x,
            start_y=start_y,
            end_y=end_y,
            span_y=end_y - start_y,
        )
        self.edit_kind = "resize_top" if handle is ResizeHandle.TOP else "resize_bottom"
        self.is_resize_or_drag = True
        return self.modified_cell

    def finish(self, mapper: CellRangeMapper) -> DateRange | None:
        """End the gesture and return the modified cell's range, or ``None`` if unchanged."""
        self.is_resize_or_drag = False
        if self.disabled or not self.changed:
            return None
        return expect_single_range(mapper.cell_info_to_date_ranges(self.modified_cell))
