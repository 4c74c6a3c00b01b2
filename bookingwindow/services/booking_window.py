"""
Application service for enforcing booking windows.

The service pulls day bookability from an availability adapter and
delegates the window arithmetic to the domain functions. Unlike
``is_out_of_bounds`` it enforces ROLLING_WINDOW periods fully, because it
can fetch the bookability map those periods depend on.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Protocol

import pendulum
from pendulum import DateTime

from ..domain.bounds import is_time_out_of_bounds, is_time_violating_future_limit
from ..domain.dates import add_business_days, in_offset, to_datetime
from ..domain.exceptions import PastBookingError
from ..domain.models import (
    BookabilityMap,
    BookingCandidate,
    PeriodConfig,
    PeriodLimits,
    PeriodType,
    SlotVerdict,
    TimezoneFrame,
)
from ..domain.period_limits import calculate_period_limits
from ..domain.rolling_window import ROLLING_WINDOW_PERIOD_MAX_DAYS_TO_CHECK

logger = logging.getLogger(__name__)


class AvailabilityProviderProtocol(Protocol):
    """Protocol describing the availability source needed by the service."""

    async def get_bookability(
        self,
        start: DateTime,
        end: DateTime,
        utc_offset_minutes: int,
    ) -> BookabilityMap:
        """Return day bookability keyed by local day in the given offset."""


def _utc_now() -> DateTime:
    return pendulum.now("UTC")


class BookingWindowService:
    """
    Resolves booking windows and classifies candidate slots.

    The clock is injectable so that callers and tests can freeze "now".
    """

    def __init__(
        self,
        availability_provider: AvailabilityProviderProtocol,
        clock: Callable[[], DateTime] | None = None,
    ) -> None:
        self._availability_provider = availability_provider
        self._clock = clock or _utc_now

    def now(self) -> DateTime:
        return to_datetime(self._clock())

    async def resolve_limits(
        self,
        config: PeriodConfig,
        frame: TimezoneFrame,
    ) -> PeriodLimits:
        """Compute the future limits, fetching bookability when required."""
        return await self._resolve_limits(config, frame, self.now())

    async def fetch_bookability(
        self,
        *,
        frame: TimezoneFrame,
        now: DateTime,
    ) -> BookabilityMap:
        """
        Fetch bookability for every day the rolling window scan can reach.

        The scan may step over business days only, so the window is sized
        in business days, which also covers calendar-day stepping.
        """
        start = in_offset(now, frame.booker_utc_offset_minutes).start_of("day")
        end = add_business_days(start, ROLLING_WINDOW_PERIOD_MAX_DAYS_TO_CHECK).end_of("day")

        logger.debug("Fetching bookability from %s to %s", start, end)

        return await self._availability_provider.get_bookability(
            start=start,
            end=end,
            utc_offset_minutes=frame.booker_utc_offset_minutes,
        )

    async def classify(
        self,
        candidate: BookingCandidate,
        config: PeriodConfig,
        frame: TimezoneFrame,
    ) -> SlotVerdict:
        """Classify a single candidate slot."""
        now = self.now()
        limits = await self._resolve_limits(config, frame, now)
        return self.classify_with_limits(candidate, limits, now=now)

    async def filter_bookable(
        self,
        times: Iterable[DateTime],
        config: PeriodConfig,
        frame: TimezoneFrame,
        minimum_booking_notice_minutes: int = 0,
    ) -> List[DateTime]:
        """
        Keep only the slots that can be booked right now.

        Limits are computed once for the whole batch.
        """
        now = self.now()
        limits = await self._resolve_limits(config, frame, now)

        bookable: List[DateTime] = []
        for time in times:
            candidate = BookingCandidate(
                time=time,
                minimum_booking_notice_minutes=minimum_booking_notice_minutes,
            )
            if self.classify_with_limits(candidate, limits, now=now) is SlotVerdict.BOOKABLE:
                bookable.append(candidate.time)

        return bookable

    @staticmethod
    def classify_with_limits(
        candidate: BookingCandidate,
        limits: PeriodLimits,
        *,
        now: DateTime,
    ) -> SlotVerdict:
        """Classify a candidate against precomputed limits."""
        try:
            if is_time_out_of_bounds(
                candidate.time,
                candidate.minimum_booking_notice_minutes,
                now=now,
            ):
                return SlotVerdict.MINIMUM_NOTICE
        except PastBookingError:
            return SlotVerdict.IN_PAST

        if is_time_violating_future_limit(candidate.time, limits):
            return SlotVerdict.FUTURE_LIMIT

        return SlotVerdict.BOOKABLE

    async def _resolve_limits(
        self,
        config: PeriodConfig,
        frame: TimezoneFrame,
        now: DateTime,
    ) -> PeriodLimits:
        bookability = None
        if config.period_type is PeriodType.ROLLING_WINDOW:
            bookability = await self.fetch_bookability(frame=frame, now=now)

        return calculate_period_limits(config, frame, bookability, now=now)
