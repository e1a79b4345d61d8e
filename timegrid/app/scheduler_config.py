"""Validated inbound configuration for the scheduler."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field

import pendulum

from timegrid.core.errors import ConfigurationError
from timegrid.core.models import DAYS_IN_WEEK
from timegrid.core.precision import PrecisionPolicy, log_compatibility
from timegrid.core.week import start_of_week, to_timestamp


@dataclass(frozen=True, slots=True)
class SchedulerConfig:
    """Scheduler configuration; invalid values fail at construction."""

    origin_date: pendulum.DateTime
    hour_start: int = 0
    hour_end: int = 24
    week_start: int = 1
    drag_precision: int = 30
    visual_grid_precision: int = 30
    click_precision: int = 30
    num_horizontal_cells: int = DAYS_IN_WEEK
    precision: PrecisionPolicy = field(init=False)

    def __post_init__(self) -> None:
        if not 0 <= self.hour_start < 24:
            raise ConfigurationError(f"hour_start must be in [0, 24), got {self.hour_start}")
        if not 0 < self.hour_end <= 24:
            raise ConfigurationError(f"hour_end must be in (0, 24], got {self.hour_end}")
        if self.hour_start >= self.hour_end:
            raise ConfigurationError(
                f"hour_start must be before hour_end, got {self.hour_start} >= {self.hour_end}"
            )
        if not 0 <= self.week_start < DAYS_IN_WEEK:
            raise ConfigurationError(f"week_start must be in [0, 6], got {self.week_start}")
        if self.num_horizontal_cells <= 0:
            raise ConfigurationError(
                f"num_horizontal_cells must be positive, got {self.num_horizontal_cells}"
            )
        precision = PrecisionPolicy(
            drag_precision=self.drag_precision,
            visual_grid_precision=self.visual_grid_precision,
            click_precision=self.click_precision,
        )
        if self.visible_minutes % self.drag_precision != 0:
            raise ConfigurationError(
                f"visible hours ({self.visible_minutes} minutes) must divide evenly into "
                f"drag_precision={self.drag_precision}"
            )
        object.__setattr__(self, "origin_date", to_timestamp(self.origin_date).start_of("day"))
        object.__setattr__(self, "precision", precision)
        log_compatibility(precision)

    @classmethod
    def for_week_of(cls, value: datetime.datetime | str, *, week_start: int = 1, **options: int) -> SchedulerConfig:
        """Build a configuration whose origin is the start of the week containing ``value``."""
        return cls(origin_date=start_of_week(value, week_start), week_start=week_start, **options)

    @property
    def visible_minutes(self) -> int:
        return (self.hour_end - self.hour_start) * 60

    @property
    def num_vertical_cells(self) -> int:
        return self.visible_minutes // self.drag_precision
