"""
Availability adapter deriving bookability from working days.
"""

from datetime import date
from typing import Dict, Iterable, List

from pendulum import DateTime

from ..domain.dates import day_key, in_offset
from ..domain.models import BookabilityMap, DayStatus


class WeekdayAvailabilityProvider:
    """
    Marks every day bookable except excluded weekdays and blocked dates.

    Useful when no precomputed availability is at hand, e.g. from the CLI.
    """

    def __init__(
        self,
        exclude_weekdays: Iterable[int] = (5, 6),  # 0=Monday, 6=Sunday
        blocked_dates: Iterable[date] = (),
    ):
        self.exclude_weekdays: List[int] = list(exclude_weekdays)
        self.blocked_days = {day.isoformat() for day in blocked_dates}

    def is_bookable_day(self, day: DateTime) -> bool:
        """Check if a local day can take bookings."""
        if day.weekday() in self.exclude_weekdays:
            return False
        return day_key(day) not in self.blocked_days

    async def get_bookability(
        self,
        start: DateTime,
        end: DateTime,
        utc_offset_minutes: int,
    ) -> BookabilityMap:
        """Build a bookability map covering every local day of the window."""
        bookability: Dict[str, DayStatus] = {}

        current = in_offset(start, utc_offset_minutes).start_of("day")
        last = in_offset(end, utc_offset_minutes)

        while current <= last:
            bookability[day_key(current)] = DayStatus(is_bookable=self.is_bookable_day(current))
            current = current.add(days=1)

        return bookability
