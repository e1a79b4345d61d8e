"""Calendar-week helpers: origin dates, visible-hour filtering and projection."""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable, Mapping, Sequence

import pendulum

from timegrid.core.errors import ConfigurationError
from timegrid.core.models import DAYS_IN_WEEK, MINUTES_IN_DAY, CalendarEvent, DateRange

logger = logging.getLogger(__name__)


def to_timestamp(value: datetime.datetime | str) -> pendulum.DateTime:
    """Normalize a datetime or ISO-8601 string to ``pendulum.DateTime``."""
    if isinstance(value, pendulum.DateTime):
        return value
    if isinstance(value, datetime.datetime):
        return pendulum.instance(value)
    if isinstance(value, str):
        parsed = pendulum.parse(value)
        if not isinstance(parsed, pendulum.DateTime):
            raise ValueError(f"expected a date-time string, got {value!r}")
        return parsed
    raise TypeError(f"unsupported timestamp value: {value!r}")


def weekday_index(value: pendulum.DateTime) -> int:
    """Return the weekday with Sunday as 0."""
    return (value.weekday() + 1) % DAYS_IN_WEEK


def start_of_week(value: datetime.datetime | str, week_start: int = 1) -> pendulum.DateTime:
    """Return midnight of the first day of the week containing ``value``.

    ``week_start`` uses Sunday as 0, so the default starts weeks on Monday.
    """
    if not 0 <= week_start < DAYS_IN_WEEK:
        raise ConfigurationError(f"week_start must be in [0, 6], got {week_start}")
    day = to_timestamp(value).start_of("day")
    return day.subtract(days=(weekday_index(day) - week_start) % DAYS_IN_WEEK)


def minute_of_day(value: pendulum.DateTime) -> float:
    return value.hour * 60 + value.minute + value.second / 60 + value.microsecond / 60_000_000


def at_minute(day: pendulum.DateTime, minute: float) -> pendulum.DateTime:
    """Return the wall-clock time ``minute`` minutes after midnight of ``day``.

    ``minute`` may reach ``MINUTES_IN_DAY``, which yields the next midnight.
    """
    whole = int(minute)
    extra_days, minute_in_day = divmod(whole, MINUTES_IN_DAY)
    seconds = round((minute - whole) * 60)
    result = day.start_of("day")
    if extra_days:
        result = result.add(days=extra_days)
    return result.set(hour=minute_in_day // 60, minute=minute_in_day % 60, second=0).add(seconds=seconds)


def _end_minute(date_range: DateRange) -> float:
    end_minute = minute_of_day(date_range.end)
    if end_minute == 0 and date_range.end.date() > date_range.start.date():
        return MINUTES_IN_DAY
    return end_minute


def filter_schedule_by_hours(
    schedule: Iterable[CalendarEvent], hour_start: int, hour_end: int
) -> list[CalendarEvent]:
    """Keep events that start and end within the visible hours of their days."""
    lower = hour_start * 60
    upper = hour_end * 60
    kept: list[CalendarEvent] = []
    for event in schedule:
        if minute_of_day(event.ranges.start) >= lower and _end_minute(event.ranges) <= upper:
            kept.append(event)
        else:
            logger.debug("schedule_event_hidden id=%s start=%s end=%s", event.id, event.start_time, event.end_time)
    return kept


def earliest_time_range(ranges: Sequence[DateRange]) -> DateRange | None:
    """Return the range whose start is earliest in the day, regardless of date."""
    if not ranges:
        return None
    return min(ranges, key=lambda item: minute_of_day(item.start))


def project_onto_week(
    raw_events: Iterable[Mapping[str, object]], origin_date: datetime.datetime | str
) -> list[CalendarEvent]:
    """Project external calendar events onto the displayed week.

    Each event keeps its weekday and wall-clock time but is moved into the week
    starting at ``origin_date``. Events without timed ``start``/``end`` entries,
    or that would collapse when projected, are skipped.
    """
    origin = to_timestamp(origin_date).start_of("day")
    projected: list[CalendarEvent] = []
    for raw in raw_events:
        start_raw = _date_time_field(raw, "start")
        end_raw = _date_time_field(raw, "end")
        if start_raw is None or end_raw is None:
            logger.debug("projection_skipped_untimed id=%s", raw.get("id"))
            continue
        start = _project(origin, to_timestamp(start_raw))
        end = _project(origin, to_timestamp(end_raw))
        if not start < end:
            logger.debug("projection_skipped_collapsed id=%s start=%s end=%s", raw.get("id"), start, end)
            continue
        projected.append(
            CalendarEvent(
                ranges=DateRange(start, end),
                id=_optional_str(raw.get("id")),
                calendar_id=_optional_str(raw.get("calendarId")),
                summary=_optional_str(raw.get("summary")),
                description=_optional_str(raw.get("description")),
                html_link=_optional_str(raw.get("htmlLink")),
            )
        )
    projected.sort(key=lambda event: event.start_time)
    return projected


def _project(origin: pendulum.DateTime, value: pendulum.DateTime) -> pendulum.DateTime:
    offset = (weekday_index(value) - weekday_index(origin)) % DAYS_IN_WEEK
    return at_minute(origin.add(days=offset), minute_of_day(value))


def _date_time_field(raw: Mapping[str, object], key: str) -> str | None:
    entry = raw.get(key)
    if isinstance(entry, Mapping):
        value = entry.get("dateTime")
        return value if isinstance(value, str) else None
    return None


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)
