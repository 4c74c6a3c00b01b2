"""
Boundary checks for concrete timeslots.
"""

import logging
from datetime import datetime

import pendulum
from pendulum import DateTime

from .dates import to_datetime
from .exceptions import PastBookingError
from .models import (
    NoLimit,
    PeriodConfig,
    PeriodLimits,
    RangeLimit,
    RollingLimit,
    TimezoneFrame,
)
from .period_limits import calculate_period_limits

logger = logging.getLogger(__name__)


def guard_against_booking_in_the_past(time: DateTime, now: DateTime) -> None:
    """Raise PastBookingError when ``time`` lies before ``now``."""
    if time < now:
        raise PastBookingError()


def is_time_out_of_bounds(
    time: "DateTime | datetime | str",
    minimum_booking_notice_minutes: int = 0,
    *,
    now: "DateTime | datetime | None" = None,
) -> bool:
    """
    Check a timeslot against the current moment and the minimum notice.

    Returns:
        True when the slot starts within the minimum booking notice

    Raises:
        PastBookingError: The slot starts before ``now``
    """
    date = to_datetime(time)
    current_time = to_datetime(now) if now is not None else pendulum.now("UTC")

    guard_against_booking_in_the_past(date, current_time)

    if minimum_booking_notice_minutes:
        minimum_booking_start = current_time.add(minutes=minimum_booking_notice_minutes)
        if date < minimum_booking_start:
            return True

    return False


def is_time_violating_future_limit(
    time: "DateTime | datetime | str",
    limits: PeriodLimits,
    log: logging.Logger | None = None,
) -> bool:
    """Check whether a timeslot falls outside the computed future limits."""
    log = log or logger
    date = to_datetime(time)

    if isinstance(limits, RollingLimit):
        is_after_rolling_end = date > limits.end
        log.debug(
            "Slot %s after rolling end %s: %s",
            date.to_iso8601_string(),
            limits.end.to_iso8601_string(),
            is_after_rolling_end,
        )
        return is_after_rolling_end

    if isinstance(limits, RangeLimit):
        return date < limits.start or date > limits.end

    if not isinstance(limits, NoLimit):
        raise TypeError(f"Unsupported period limits: {limits!r}")

    return False


def is_out_of_bounds(
    time: "DateTime | datetime | str",
    config: PeriodConfig,
    frame: TimezoneFrame,
    minimum_booking_notice_minutes: int = 0,
    *,
    now: "DateTime | datetime | None" = None,
) -> bool:
    """
    Check a timeslot against minimum notice and the event's future limit.

    ROLLING_WINDOW periods are not enforced here because no bookability map
    is at hand; use ``calculate_period_limits`` with a real map, or
    ``BookingWindowService``, for full enforcement.

    Raises:
        PastBookingError: The slot starts before ``now``
    """
    current_time = to_datetime(now) if now is not None else pendulum.now("UTC")

    return is_time_out_of_bounds(
        time, minimum_booking_notice_minutes, now=current_time
    ) or is_time_violating_future_limit(
        time,
        calculate_period_limits(
            config,
            frame,
            None,
            skip_rolling_window_check=True,
            now=current_time,
        ),
    )
