"""
Adapters layer - Sources of day bookability.
"""

from .file_availability import FileAvailabilityProvider
from .weekday_availability import WeekdayAvailabilityProvider

__all__ = ["FileAvailabilityProvider", "WeekdayAvailabilityProvider"]
