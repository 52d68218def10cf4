"""Minute-resolution time-of-day helpers."""

import re
from datetime import date, datetime

MINUTES_PER_DAY = 24 * 60

# Two-digit hours and minutes, 00:00-23:59
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def is_valid_time(value: object) -> bool:
    """Check that value is an "HH:MM" string."""
    return isinstance(value, str) and TIME_PATTERN.match(value) is not None


def format_time(moment: datetime) -> str:
    """Format the time-of-day part of a datetime as "HH:MM"."""
    return f"{moment.hour:02d}:{moment.minute:02d}"


def minutes_to_time(total_minutes: int) -> str:
    """Format minutes since midnight as "HH:MM", wrapping modulo one day."""
    total_minutes %= MINUTES_PER_DAY
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def add_minutes(moment: datetime, minutes: int) -> str:
    """
    Shift the time-of-day of moment by minutes.

    The calendar date is never advanced: 23:55 + 10 gives "00:05".
    """
    return minutes_to_time(moment.hour * 60 + moment.minute + minutes)


def weekday_index(day: date) -> int:
    """Weekday number with Sunday=0 ... Saturday=6."""
    return (day.weekday() + 1) % 7
