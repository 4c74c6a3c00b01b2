"""
Booking window resolver - decides how far ahead and how soon an event
type can be booked.
"""

__version__ = "0.1.0"

from .domain import (
    BookabilityMap,
    BookingCandidate,
    BookingWindowError,
    ConfigurationError,
    DayStatus,
    NoLimit,
    PastBookingError,
    PeriodConfig,
    PeriodLimits,
    PeriodType,
    ROLLING_WINDOW_PERIOD_MAX_DAYS_TO_CHECK,
    RangeLimit,
    RollingLimit,
    SlotVerdict,
    TimezoneFrame,
    bookability_from_dict,
    calculate_period_limits,
    get_rolling_window_end_date,
    is_out_of_bounds,
    is_time_out_of_bounds,
    is_time_violating_future_limit,
)
from .services import AvailabilityProviderProtocol, BookingWindowService

__all__ = [
    "AvailabilityProviderProtocol",
    "BookabilityMap",
    "BookingCandidate",
    "BookingWindowError",
    "BookingWindowService",
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
