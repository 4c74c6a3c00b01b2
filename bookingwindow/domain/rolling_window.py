"""
End-of-window search for the ROLLING_WINDOW period type.

A rolling window of N days means N days that actually have availability,
so the end day is found by walking forward through a bookability map.
"""

import logging

from pendulum import DateTime

from .dates import add_business_days, day_key, to_datetime
from .models import BookabilityMap, is_day_bookable

logger = logging.getLogger(__name__)

# Never look further than about two months ahead.
ROLLING_WINDOW_PERIOD_MAX_DAYS_TO_CHECK = 30 + 31


def get_rolling_window_end_date(
    start_date: DateTime,
    days_needed: int,
    bookability: BookabilityMap,
    count_non_business_days: bool,
    log: logging.Logger | None = None,
) -> DateTime:
    """
    Find the end of the day on which the rolling window closes.

    Args:
        start_date: First day to consider, in the same offset as the keys
            of ``bookability``
        days_needed: Number of bookable days the window must contain
        bookability: Day key -> status lookup; missing days are not bookable
        count_non_business_days: Step over every calendar day instead of
            only business days
        log: Logger receiving trace output, defaults to the module logger

    Returns:
        End of the last bookable day found. When the scan hits the day
        limit without finding any bookable day, the end of the day it
        stopped at is returned instead, so there is always a future limit.
    """
    log = log or logger
    start_date = to_datetime(start_date)
    log.debug("Scanning rolling window from %s for %d bookable days", start_date, days_needed)

    counter = 1
    bookable_days_count = 0
    rolling_end_day: DateTime | None = None
    current_date = start_date.start_of("day")

    while bookable_days_count < days_needed:
        if counter > ROLLING_WINDOW_PERIOD_MAX_DAYS_TO_CHECK:
            break

        is_bookable = is_day_bookable(bookability.get(day_key(current_date)))

        if is_bookable:
            bookable_days_count += 1
            rolling_end_day = current_date

        log.debug(
            "Iteration %d: day=%s bookable=%s count=%d",
            counter,
            day_key(current_date),
            is_bookable,
            bookable_days_count,
        )

        if count_non_business_days:
            current_date = current_date.add(days=1)
        else:
            current_date = add_business_days(current_date, 1)

        counter += 1

    if rolling_end_day is None:
        if days_needed > 0:
            log.warning(
                "No bookable day found within %d days of %s, limiting window to %s",
                ROLLING_WINDOW_PERIOD_MAX_DAYS_TO_CHECK,
                day_key(start_date),
                day_key(current_date),
            )
        rolling_end_day = current_date
    elif bookable_days_count < days_needed:
        log.info(
            "Only %d of %d bookable days found, window ends on %s",
            bookable_days_count,
            days_needed,
            day_key(rolling_end_day),
        )

    # Limits are expressed in whole days
    return rolling_end_day.end_of("day")
