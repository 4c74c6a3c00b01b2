"""
Future limits of an event type's booking window.

ROLLING and ROLLING_WINDOW count days in the booker's timezone, so that
the earliest slot a booker's local day allows stays bookable. RANGE uses
the event timezone because the organizer picked literal calendar dates.
"""

import logging

import pendulum
from pendulum import DateTime

from .dates import add_business_days, calendar_day_in_offset, in_offset, to_datetime
from .exceptions import ConfigurationError
from .models import (
    BookabilityMap,
    NoLimit,
    PeriodConfig,
    PeriodLimits,
    PeriodType,
    RangeLimit,
    RollingLimit,
    TimezoneFrame,
)
from .rolling_window import get_rolling_window_end_date

logger = logging.getLogger(__name__)


def calculate_period_limits(
    config: PeriodConfig,
    frame: TimezoneFrame,
    bookability: BookabilityMap | None = None,
    skip_rolling_window_check: bool = False,
    *,
    now: DateTime | None = None,
    log: logging.Logger | None = None,
) -> PeriodLimits:
    """
    Compute the outer bounds of the bookable window.

    Args:
        config: Period policy of the event type
        frame: Event and booker UTC offsets
        bookability: Day bookability in booker timezone, required for
            ROLLING_WINDOW unless the check is skipped
        skip_rolling_window_check: Treat ROLLING_WINDOW as unlimited, for
            callers whose candidates were already constrained upstream
        now: Current instant, defaults to the wall clock
        log: Logger receiving trace output, defaults to the module logger

    Returns:
        NoLimit, RollingLimit or RangeLimit

    Raises:
        ConfigurationError: ROLLING_WINDOW without a bookability map
    """
    log = log or logger
    current_time = to_datetime(now) if now is not None else pendulum.now("UTC")
    current_time_in_booker_tz = in_offset(current_time, frame.booker_utc_offset_minutes)
    period_type = PeriodType.coerce(config.period_type)
    period_days = config.period_days or 0

    log.debug(
        "Calculating period limits: type=%s days=%d calendar_days=%s start=%s end=%s now=%s",
        period_type.value,
        period_days,
        config.period_count_calendar_days,
        config.period_start_date,
        config.period_end_date,
        in_offset(current_time, frame.event_utc_offset_minutes).to_iso8601_string(),
    )

    if period_type is PeriodType.ROLLING:
        if config.period_count_calendar_days:
            rolling_end_day = current_time_in_booker_tz.add(days=period_days)
        else:
            rolling_end_day = add_business_days(current_time_in_booker_tz, period_days)
        return RollingLimit(end=rolling_end_day.end_of("day"))

    if period_type is PeriodType.ROLLING_WINDOW:
        if skip_rolling_window_check:
            return NoLimit()

        if bookability is None:
            raise ConfigurationError(
                "A bookability map is required to resolve a ROLLING_WINDOW period"
            )

        end = get_rolling_window_end_date(
            start_date=current_time_in_booker_tz,
            days_needed=period_days,
            bookability=bookability,
            count_non_business_days=config.period_count_calendar_days,
            log=log,
        )
        return RollingLimit(end=end)

    if period_type is PeriodType.RANGE:
        if config.period_start_date is None or config.period_end_date is None:
            raise ConfigurationError("RANGE period requires both a start and an end date")

        start = calendar_day_in_offset(config.period_start_date, frame.event_utc_offset_minutes)
        end = calendar_day_in_offset(config.period_end_date, frame.event_utc_offset_minutes)
        return RangeLimit(start=start.start_of("day"), end=end.end_of("day"))

    return NoLimit()
