import pytest

from timegrid.core.errors import ConfigurationError
from timegrid.core.grid import Grid, create_grid
from timegrid.core.models import CellInfo, PixelRect
from timegrid.core.span import get_span


def _grid() -> Grid:
    return Grid(total_height=960, total_width=700, num_horizontal_cells=7, num_vertical_cells=48)


def test_rect_from_cell_uses_cell_size() -> None:
    rect = _grid().get_rect_from_cell(CellInfo(start_x=1, end_x=1, span_x=1, start_y=2, end_y=4, span_y=2))
    assert (rect.top, rect.height, rect.left, rect.width) == (40, 40, 100, 100)
    assert (rect.bottom, rect.right) == (80, 200)


def test_cell_from_rect_round_trips_aligned_cells() -> None:
    grid = _grid()
    for cell in (
        CellInfo(start_x=0, end_x=0, span_x=1, start_y=0, end_y=1, span_y=1),
        CellInfo(start_x=3, end_x=5, span_x=3, start_y=17, end_y=23, span_y=6),
        CellInfo(start_x=6, end_x=6, span_x=1, start_y=47, end_y=48, span_y=1),
    ):
        assert grid.get_cell_from_rect(grid.get_rect_from_cell(cell)) == cell


def test_cell_from_rect_rounds_vertical_edges_half_up() -> None:
    grid = _grid()
    cell = grid.get_cell_from_rect(PixelRect.from_edges(top=30, left=10, bottom=49, right=90))
    assert (cell.start_y, cell.end_y, cell.span_y) == (2, 2, 0)
    cell = grid.get_cell_from_rect(PixelRect.from_edges(top=29.9, left=10, bottom=50, right=90))
    assert (cell.start_y, cell.end_y, cell.span_y) == (1, 3, 2)


def test_cell_from_rect_selects_columns_touched_by_horizontal_edges() -> None:
    cell = _grid().get_cell_from_rect(PixelRect.from_edges(top=0, left=150, bottom=20, right=250))
    assert (cell.start_x, cell.end_x, cell.span_x) == (1, 2, 2)
    assert cell.span_x == get_span(0, 1)


def test_cell_from_rect_clamps_to_grid_bounds() -> None:
    grid = _grid()
    cell = grid.get_cell_from_rect(PixelRect.from_edges(top=-40, left=-10, bottom=2000, right=5000))
    assert cell == CellInfo(start_x=0, end_x=6, span_x=7, start_y=0, end_y=48, span_y=48)
    cell = grid.get_cell_from_rect(PixelRect.from_edges(top=990, left=690, bottom=1000, right=700))
    assert (cell.start_x, cell.end_x) == (6, 6)
    assert (cell.start_y, cell.end_y) == (47, 48)


def test_full_day_cell_covers_whole_surface_height() -> None:
    rect = _grid().get_rect_from_cell(CellInfo(start_x=0, end_x=0, span_x=1, start_y=0, end_y=48, span_y=48))
    assert rect.top == 0
    assert rect.height == 960


def test_grid_rejects_degenerate_dimensions() -> None:
    with pytest.raises(ConfigurationError):
        Grid(total_height=0, total_width=700, num_horizontal_cells=7, num_vertical_cells=48)
    with pytest.raises(ConfigurationError):
        Grid(total_height=960, total_width=700, num_horizontal_cells=0, num_vertical_cells=48)


def test_create_grid_returns_none_until_surface_has_size() -> None:
    assert create_grid(total_height=0, total_width=700, num_horizontal_cells=7, num_vertical_cells=48) is None
    grid = create_grid(total_height=960, total_width=700, num_horizontal_cells=7, num_vertical_cells=48)
    assert grid is not None
    assert (grid.cell_width, grid.cell_height) == (100, 20)
    assert grid.surface_rect().contains(700, 960)


def test_get_span_counts_inclusive_indices() -> None:
    assert get_span(6, 6) == 1
    assert get_span(0, 1) == 2
    assert get_span(2, 5) == 4


def test_row_at_picks_row_under_pointer() -> None:
    grid = _grid()
    assert grid.row_at(215) == 10
    assert grid.row_at(219.99) == 10
    assert grid.row_at(220) == 11
    assert grid.row_at(-5) == 0
    assert grid.row_at(960) == 47
