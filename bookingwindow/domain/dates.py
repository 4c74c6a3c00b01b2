"""
Date helpers shared by the period limit calculator and the day scanner.
"""

from datetime import date, datetime

import pendulum
from pendulum import DateTime

# 0=Monday, 6=Sunday
WEEKEND_DAYS = (5, 6)

DAY_KEY_FORMAT = "YYYY-MM-DD"


def to_datetime(value: "DateTime | datetime | str") -> DateTime:
    """
    Normalize an instant to a pendulum DateTime.

    Naive datetimes and ISO strings without an offset are taken as UTC.
    """
    if isinstance(value, DateTime):
        return value
    if isinstance(value, datetime):
        return pendulum.instance(value, tz="UTC")
    if isinstance(value, str):
        parsed = pendulum.parse(value, tz="UTC")
        if not isinstance(parsed, DateTime):
            raise ValueError(f"Expected a date-time value, got {value!r}")
        return parsed
    raise TypeError(f"Unsupported time value: {value!r}")


def parse_calendar_value(value: "date | datetime | str | None") -> "date | datetime | None":
    """
    Read a configured period date.

    A bare ``YYYY-MM-DD`` string stays a calendar date, longer ISO strings
    become instants. Non-string values are returned unchanged.
    """
    if not isinstance(value, str):
        return value

    value = value.strip()
    if len(value) == 10:
        return date.fromisoformat(value)

    parsed = pendulum.parse(value)
    if not isinstance(parsed, (DateTime, date)):
        raise ValueError(f"Expected a date or date-time value, got {value!r}")
    return parsed


def fixed_offset(offset_minutes: int) -> pendulum.FixedTimezone:
    """Return a fixed timezone for a UTC offset given in minutes."""
    return pendulum.FixedTimezone(offset_minutes * 60)


def in_offset(value: DateTime, offset_minutes: int) -> DateTime:
    """Shift an instant into the given UTC offset, keeping the instant."""
    return value.in_timezone(fixed_offset(offset_minutes))


def calendar_day_in_offset(value: "date | datetime", offset_minutes: int) -> DateTime:
    """
    Resolve a configured calendar day to midnight in the given offset.

    A plain date is taken literally; an aware datetime is first converted
    into the offset and then truncated to its local day.
    """
    if isinstance(value, datetime):
        return in_offset(to_datetime(value), offset_minutes).start_of("day")
    return pendulum.datetime(
        value.year, value.month, value.day, tz=fixed_offset(offset_minutes)
    )


def day_key(value: DateTime) -> str:
    """Key used by bookability maps for the local day of ``value``."""
    return value.format(DAY_KEY_FORMAT)


def is_business_day(value: "date | datetime") -> bool:
    """Business days are Monday to Friday; holidays are not considered."""
    return value.weekday() not in WEEKEND_DAYS


def add_business_days(value: DateTime, days: int) -> DateTime:
    """
    Move ``days`` business days away from ``value``.

    Each step advances one calendar day and only counts it when it is a
    business day, so any non-zero move ends on a weekday. Zero returns
    ``value`` unchanged, even on a weekend.
    """
    step = -1 if days < 0 else 1
    remaining = abs(days)
    current = value

    while remaining > 0:
        current = current.add(days=step)
        if is_business_day(current):
            remaining -= 1

    return current
