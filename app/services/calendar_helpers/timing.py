# /app/services/calendar_helpers/timing.py

"""
Time-range rules shared by calendar events and class schedules, plus the
weekly bucketing used by the schedule view.

All functions are pure. Datetimes are handled in their own (local)
representation; aware values are converted to the calendar timezone only
where a day-of-week has to be decided.
"""

import re
from datetime import datetime, time, timedelta, tzinfo
from typing import Dict, List, Optional, Tuple

from ...core.exceptions import InvalidInputError, InvalidRangeError

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

_CLOCK_TIME = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5][0-9])$")

END_OF_DAY = time(23, 59, 59, 999000)


def validate_time_range(start: datetime, end: datetime) -> None:
    """
    Raises:
        InvalidRangeError: when `end` is not strictly after `start`.
    """
    if end <= start:
        raise InvalidRangeError("End date and time must be after start date and time")


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(value: datetime) -> datetime:
    return value.replace(hour=END_OF_DAY.hour, minute=END_OF_DAY.minute,
                         second=END_OF_DAY.second, microsecond=END_OF_DAY.microsecond)


def normalize_all_day(event):
    """
    Stretches an all-day event over whole days: the start moves to midnight
    of its day and the end to 23:59:59.999 of its own day. Events that are
    not all-day are returned unchanged.
    """
    if event.isAllDay:
        event.startDateTime = start_of_day(event.startDateTime)
        event.endDateTime = end_of_day(event.endDateTime)
    return event


def truncate_to_seconds(event):
    """Drops sub-second precision from timed events; all-day ends keep their .999."""
    if not event.isAllDay:
        event.startDateTime = event.startDateTime.replace(microsecond=0)
        event.endDateTime = event.endDateTime.replace(microsecond=0)
    return event


def parse_clock_time(value: str) -> int:
    """Parses "HH:MM" into minutes since midnight."""
    match = _CLOCK_TIME.match(value or "")
    if not match:
        raise InvalidInputError(f"Invalid time '{value}'. Please enter time in HH:MM format")
    return int(match.group(1)) * 60 + int(match.group(2))


def validate_class_schedule(start_time: str, end_time: str) -> None:
    """
    Raises:
        InvalidInputError: if either time is not HH:MM.
        InvalidRangeError: if the end time is not after the start time.
    """
    if parse_clock_time(end_time) <= parse_clock_time(start_time):
        raise InvalidRangeError("End time must be after start time")


def duration_minutes(start: datetime, end: datetime) -> int:
    return round((end - start).total_seconds() / 60)


def to_local(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Naive wall-clock time in `tz`. Naive input is already local."""
    if value.tzinfo is None:
        return value
    if tz is not None:
        value = value.astimezone(tz)
    return value.replace(tzinfo=None)


def week_bounds(week_start: datetime) -> Tuple[datetime, datetime]:
    """
    Moves `week_start` back to the Sunday on or before it and returns the
    window [Sunday 00:00:00.000, Saturday 23:59:59.999].
    """
    days_since_sunday = (week_start.weekday() + 1) % 7
    sunday = start_of_day(week_start - timedelta(days=days_since_sunday))
    saturday_end = end_of_day(sunday + timedelta(days=6))
    return sunday, saturday_end


def day_name(value: datetime) -> str:
    return DAY_NAMES[(value.weekday() + 1) % 7]


def weekly_schedule(events: List, week_start: datetime, tz: Optional[tzinfo] = None) -> Dict[str, List]:
    """
    Buckets events under the seven day names by the local weekday of their
    start. Events starting outside the week window are left out.
    """
    window_start, window_end = week_bounds(to_local(week_start, tz))
    schedule: Dict[str, List] = {name: [] for name in DAY_NAMES}
    for event in sorted(events, key=lambda e: to_local(e.startDateTime, tz)):
        local_start = to_local(event.startDateTime, tz)
        if window_start <= local_start <= window_end:
            schedule[day_name(local_start)].append(event)
    return schedule
