"""Pixel-to-cell coordinate transform for one render pass."""

from __future__ import annotations

import math
from dataclasses import dataclass

from timegrid.core.errors import ConfigurationError
from timegrid.core.models import CellInfo, PixelRect
from timegrid.core.span import get_span

# Absorbs float error from ``index * cell_size / cell_size`` before snapping.
_SNAP_EPSILON = 1e-9


def _clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(upper, value))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _snap_floor(value: float) -> int:
    return math.floor(value + _SNAP_EPSILON)


def _snap_ceil(value: float) -> int:
    return math.ceil(value - _SNAP_EPSILON)


@dataclass(frozen=True, slots=True)
class Grid:
    """Immutable pixel/cell conversion for a surface of fixed size.

    Replace the instance whenever the surface resizes or the cell counts change.
    """

    total_height: float
    total_width: float
    num_horizontal_cells: int
    num_vertical_cells: int

    def __post_init__(self) -> None:
        if self.total_height <= 0 or self.total_width <= 0:
            raise ConfigurationError(
                f"grid dimensions must be positive, got {self.total_width}x{self.total_height}"
            )
        if self.num_horizontal_cells <= 0 or self.num_vertical_cells <= 0:
            raise ConfigurationError(
                "grid cell counts must be positive, "
                f"got {self.num_horizontal_cells}x{self.num_vertical_cells}"
            )

    @property
    def cell_height(self) -> float:
        return self.total_height / self.num_vertical_cells

    @property
    def cell_width(self) -> float:
        return self.total_width / self.num_horizontal_cells

    def surface_rect(self) -> PixelRect:
        """Return the full surface rectangle."""
        return PixelRect.from_edges(top=0, left=0, bottom=self.total_height, right=self.total_width)

    def get_rect_from_cell(self, cell: CellInfo) -> PixelRect:
        """Return the pixel rectangle covered by ``cell``."""
        top = cell.start_y * self.cell_height
        height = (cell.end_y - cell.start_y) * self.cell_height
        left = cell.start_x * self.cell_width
        width = cell.span_x * self.cell_width
        return PixelRect(
            top=top,
            left=left,
            width=width,
            height=height,
            bottom=top + height,
            right=left + width,
            start_x=cell.start_x,
            end_x=cell.end_x,
            start_y=cell.start_y,
            end_y=cell.end_y,
        )

    def row_at(self, y: float) -> int:
        """Return the row index under pixel ``y``, clamped to the grid."""
        return _clamp(_snap_floor(y / self.cell_height), 0, self.num_vertical_cells - 1)

    def get_cell_from_rect(self, rect: PixelRect) -> CellInfo:
        """Snap a pixel rectangle to the grid cell it covers.

        Vertical edges round half-up to the nearest grid line. The left edge
        selects the column it lies in and the right edge the column it reaches
        into. Every bound is clamped inside the grid.
        """
        start_y = _clamp(_round_half_up(rect.top / self.cell_height), 0, self.num_vertical_cells - 1)
        end_y = _clamp(_round_half_up(rect.bottom / self.cell_height), start_y, self.num_vertical_cells)
        start_x = _clamp(_snap_floor(rect.left / self.cell_width), 0, self.num_horizontal_cells - 1)
        end_x = _clamp(_snap_ceil(rect.right / self.cell_width) - 1, start_x, self.num_horizontal_cells - 1)
        return CellInfo(
            start_x=start_x,
            end_x=end_x,
            span_x=get_span(start_x, end_x),
            start_y=start_y,
            end_y=end_y,
            span_y=end_y - start_y,
        )


def create_grid(
    *,
    total_height: float,
    total_width: float,
    num_horizontal_cells: int,
    num_vertical_cells: int,
) -> Grid | None:
    """Create a grid for a laid-out surface; return ``None`` while the surface has no size."""
    if total_height <= 0 or total_width <= 0:
        return None
    return Grid(
        total_height=total_height,
        total_width=total_width,
        num_horizontal_cells=num_horizontal_cells,
        num_vertical_cells=num_vertical_cells,
    )
