import logging

import pytest

from timegrid.core.errors import ConfigurationError
from timegrid.core.models import CellInfo
from timegrid.core.precision import PrecisionPolicy, log_compatibility


def test_unit_conversions_follow_drag_precision() -> None:
    policy = PrecisionPolicy(drag_precision=15)
    assert policy.to_units(90) == 6
    assert policy.to_minutes(6) == 90


@pytest.mark.parametrize("value", [0, -30, True, 7.5, "30"])
def test_precisions_must_be_positive_integers(value) -> None:
    with pytest.raises(ConfigurationError):
        PrecisionPolicy(drag_precision=value)


def test_click_span_rows_is_at_least_one() -> None:
    assert PrecisionPolicy(drag_precision=15, click_precision=60).click_span_rows == 4
    assert PrecisionPolicy(drag_precision=30, click_precision=15).click_span_rows == 1


def test_compatible_precisions_produce_no_warnings() -> None:
    assert PrecisionPolicy(drag_precision=15, visual_grid_precision=60, click_precision=30).compatibility_warnings() == []


def test_mismatched_precisions_are_reported_and_logged(caplog) -> None:
    policy = PrecisionPolicy(drag_precision=20, visual_grid_precision=30, click_precision=45)
    warnings = policy.compatibility_warnings()
    assert len(warnings) == 2
    with caplog.at_level(logging.WARNING, logger="timegrid.core.precision"):
        log_compatibility(policy)
    assert sum("precision_mismatch" in message for message in caplog.messages) == 2


def test_click_cell_spans_click_duration() -> None:
    cell = PrecisionPolicy().click_cell(2, 10, 48)
    assert cell == CellInfo(start_x=2, end_x=2, span_x=1, start_y=10, end_y=11, span_y=1)


def test_click_span_is_pulled_inside_the_grid() -> None:
    policy = PrecisionPolicy(drag_precision=30, click_precision=60)
    cell = policy.apply_click_span(CellInfo(start_x=0, end_x=0, span_x=1, start_y=47, end_y=47, span_y=0), 48)
    assert (cell.start_y, cell.end_y, cell.span_y) == (46, 48, 2)


def test_visual_rows_cover_visible_hours() -> None:
    rows = PrecisionPolicy(visual_grid_precision=30).visual_rows(8, 10)
    assert [row.index for row in rows] == [16, 17, 18, 19]
    assert [row.start_minute for row in rows] == [480, 510, 540, 570]
    assert [row.is_hour_start for row in rows] == [True, False, True, False]


def test_visual_row_to_drag_row_accounts_for_hour_offset() -> None:
    policy = PrecisionPolicy(drag_precision=15, visual_grid_precision=30)
    assert policy.visual_row_to_drag_row(18, 8) == 4
    assert policy.visual_row_to_drag_row(0, 8) == 0
