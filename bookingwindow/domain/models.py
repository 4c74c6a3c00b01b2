"""
Domain models for booking window calculations.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, Union

import pendulum
from pendulum import DateTime

from .dates import parse_calendar_value, to_datetime

logger = logging.getLogger(__name__)

# Largest offset a fixed timezone can carry (exclusive).
MAX_UTC_OFFSET_MINUTES = 24 * 60


class PeriodType(str, Enum):
    """How far into the future an event type can be booked."""
    UNLIMITED = "UNLIMITED"
    ROLLING = "ROLLING"
    ROLLING_WINDOW = "ROLLING_WINDOW"
    RANGE = "RANGE"

    @classmethod
    def coerce(cls, value: Any) -> "PeriodType":
        """
        Map a raw value onto a period type.

        Names must match exactly. Missing or unknown values fall back to
        UNLIMITED so that a broken record never blocks bookings altogether.
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.UNLIMITED
        try:
            return cls(str(value).strip())
        except ValueError:
            logger.warning("Unknown period type %r, treating it as UNLIMITED", value)
            return cls.UNLIMITED


@dataclass(frozen=True)
class PeriodConfig:
    """
    Booking horizon policy of an event type.

    Invariant: RANGE carries both dates and the end date is not before
    the start date.
    """
    period_type: PeriodType = PeriodType.UNLIMITED
    period_days: int = 0
    period_count_calendar_days: bool = False
    period_start_date: Union[date, datetime, None] = None
    period_end_date: Union[date, datetime, None] = None

    def __post_init__(self):
        object.__setattr__(self, "period_type", PeriodType.coerce(self.period_type))
        object.__setattr__(self, "period_start_date", parse_calendar_value(self.period_start_date))
        object.__setattr__(self, "period_end_date", parse_calendar_value(self.period_end_date))
        object.__setattr__(self, "period_days", self.period_days or 0)
        object.__setattr__(
            self, "period_count_calendar_days", bool(self.period_count_calendar_days)
        )

        if self.period_days < 0:
            raise ValueError(f"period_days must not be negative, got {self.period_days}")

        if self.period_type is PeriodType.RANGE:
            if self.period_start_date is None or self.period_end_date is None:
                raise ValueError("RANGE period requires both a start and an end date")
            if _as_day(self.period_end_date) < _as_day(self.period_start_date):
                raise ValueError(
                    f"Range end {self.period_end_date} must not be before "
                    f"range start {self.period_start_date}"
                )

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "PeriodConfig":
        """Build a config from an event-type record using camelCase keys."""
        return cls(
            period_type=record.get("periodType"),
            period_days=record.get("periodDays"),
            period_count_calendar_days=record.get("periodCountCalendarDays"),
            period_start_date=record.get("periodStartDate"),
            period_end_date=record.get("periodEndDate"),
        )


def _as_day(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return to_datetime(value).date()
    return value


@dataclass(frozen=True)
class TimezoneFrame:
    """
    UTC offsets of the organizer's and the booker's local calendars.

    Both are kept because the two sides can disagree on which day an
    instant falls on.
    """
    event_utc_offset_minutes: int = 0
    booker_utc_offset_minutes: int = 0

    def __post_init__(self):
        for name in ("event_utc_offset_minutes", "booker_utc_offset_minutes"):
            offset = getattr(self, name)
            if not -MAX_UTC_OFFSET_MINUTES < offset < MAX_UTC_OFFSET_MINUTES:
                raise ValueError(f"{name} must be within +/-24h, got {offset}")

    @classmethod
    def from_timezones(
        cls,
        event_timezone: str,
        booker_timezone: str,
        at: DateTime | None = None,
    ) -> "TimezoneFrame":
        """Derive both offsets from IANA zone names at the given instant."""
        moment = to_datetime(at) if at is not None else pendulum.now("UTC")
        return cls(
            event_utc_offset_minutes=_offset_minutes(moment, event_timezone),
            booker_utc_offset_minutes=_offset_minutes(moment, booker_timezone),
        )


def _offset_minutes(moment: DateTime, timezone: str) -> int:
    offset = moment.in_timezone(timezone).utcoffset()
    return int(offset.total_seconds() // 60)


@dataclass(frozen=True)
class DayStatus:
    """Bookability of a single calendar day."""
    is_bookable: bool


# ISO day key ("YYYY-MM-DD", booker timezone) -> status
BookabilityMap = Mapping[str, DayStatus]


def is_day_bookable(status: Any) -> bool:
    """Read a bookability entry, accepting DayStatus or its wire form."""
    if status is None:
        return False
    if isinstance(status, DayStatus):
        return status.is_bookable
    if isinstance(status, Mapping):
        return bool(status.get("isBookable", status.get("is_bookable", False)))
    return bool(status)


def bookability_from_dict(data: Mapping[str, Any]) -> dict[str, DayStatus]:
    """
    Build a bookability map from its wire form.

    Example: ``{"2024-01-02": {"isBookable": true}}``
    """
    bookability: dict[str, DayStatus] = {}
    for key, status in data.items():
        bookability[str(key)] = DayStatus(is_bookable=is_day_bookable(status))
    return bookability


@dataclass(frozen=True)
class NoLimit:
    """No future limit applies."""

    def __str__(self) -> str:
        return "no future limit"


@dataclass(frozen=True)
class RollingLimit:
    """Bookable up to the end of the last rolling day, in booker timezone."""
    end: DateTime

    def __str__(self) -> str:
        return f"until {self.end.to_iso8601_string()}"


@dataclass(frozen=True)
class RangeLimit:
    """Bookable between two whole days, in event timezone."""
    start: DateTime
    end: DateTime

    def __str__(self) -> str:
        return f"{self.start.to_iso8601_string()} - {self.end.to_iso8601_string()}"


PeriodLimits = Union[NoLimit, RollingLimit, RangeLimit]


@dataclass(frozen=True)
class BookingCandidate:
    """A concrete instant someone wants to book, with the notice to enforce."""
    time: DateTime
    minimum_booking_notice_minutes: int = 0

    def __post_init__(self):
        object.__setattr__(self, "time", to_datetime(self.time))
        if self.minimum_booking_notice_minutes < 0:
            raise ValueError(
                "minimum_booking_notice_minutes must not be negative, "
                f"got {self.minimum_booking_notice_minutes}"
            )


class SlotVerdict(str, Enum):
    """Outcome of checking a candidate against the booking window."""
    BOOKABLE = "bookable"
    IN_PAST = "in_past"
    MINIMUM_NOTICE = "minimum_notice"
    FUTURE_LIMIT = "future_limit"
