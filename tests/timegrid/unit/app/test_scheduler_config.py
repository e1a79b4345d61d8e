import logging

import pendulum
import pytest

from timegrid.app.scheduler_config import SchedulerConfig
from timegrid.core.errors import ConfigurationError


def test_defaults_cover_full_week_in_half_hours() -> None:
    config = SchedulerConfig(origin_date=pendulum.datetime(2024, 1, 3, 15, 20))
    assert config.origin_date == pendulum.datetime(2024, 1, 3)
    assert config.num_vertical_cells == 48
    assert config.num_horizontal_cells == 7
    assert config.precision.drag_precision == 30


def test_for_week_of_snaps_origin_to_week_start() -> None:
    config = SchedulerConfig.for_week_of("2024-01-03T15:20:00+00:00", hour_start=8, hour_end=18)
    assert config.origin_date == pendulum.datetime(2024, 1, 1)
    assert config.visible_minutes == 600
    assert config.num_vertical_cells == 20
    sunday_first = SchedulerConfig.for_week_of(pendulum.datetime(2024, 1, 3), week_start=0)
    assert sunday_first.origin_date == pendulum.datetime(2023, 12, 31)
    assert sunday_first.week_start == 0


@pytest.mark.parametrize(
    "options",
    [
        {"hour_start": -1},
        {"hour_end": 25},
        {"hour_start": 10, "hour_end": 10},
        {"week_start": 7},
        {"num_horizontal_cells": 0},
        {"drag_precision": 0},
        {"drag_precision": 7},
        {"hour_start": 9, "hour_end": 10, "drag_precision": 45},
    ],
)
def test_invalid_configuration_is_rejected(options) -> None:
    with pytest.raises(ConfigurationError):
        SchedulerConfig(origin_date=pendulum.datetime(2024, 1, 1), **options)


def test_precision_mismatch_is_logged_not_rejected(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="timegrid.core.precision"):
        config = SchedulerConfig(origin_date=pendulum.datetime(2024, 1, 1), drag_precision=20, visual_grid_precision=30)
    assert config.num_vertical_cells == 72
    assert any("precision_mismatch" in message for message in caplog.messages)
