"""
Domain layer - Pure booking window logic without external dependencies.
"""

from .bounds import is_out_of_bounds, is_time_out_of_bounds, is_time_violating_future_limit
from .exceptions import BookingWindowError, ConfigurationError, PastBookingError
from .models import (
    BookabilityMap,
    BookingCandidate,
    DayStatus,
    NoLimit,
    PeriodConfig,
    PeriodLimits,
    PeriodType,
    RangeLimit,
    RollingLimit,
    SlotVerdict,
    TimezoneFrame,
    bookability_from_dict,
)
from .period_limits import calculate_period_limits
from .rolling_window import ROLLING_WINDOW_PERIOD_MAX_DAYS_TO_CHECK, get_rolling_window_end_date

__all__ = [
    "BookabilityMap",
    "BookingCandidate",
    "BookingWindowError",
    "ConfigurationError",
    "DayStatus",
    "NoLimit",
    "PastBookingError",
    "PeriodConfig",
    "PeriodLimits",
    "PeriodType",
    "ROLLING_WINDOW_PERIOD_MAX_DAYS_TO_CHECK",
    "RangeLimit",
    "RollingLimit",
    "SlotVerdict",
    "TimezoneFrame",
    "bookability_from_dict",
    "calculate_period_limits",
    "get_rolling_window_end_date",
    "is_out_of_bounds",
    "is_time_out_of_bounds",
    "is_time_violating_future_limit",
]
