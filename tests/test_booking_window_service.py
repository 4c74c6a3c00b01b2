"""
Tests for the BookingWindowService orchestration layer.
"""

import asyncio
from typing import Dict, List

import pendulum

from bookingwindow.domain.dates import add_business_days
from bookingwindow.domain.models import (
    BookingCandidate,
    DayStatus,
    NoLimit,
    PeriodConfig,
    PeriodType,
    RollingLimit,
    SlotVerdict,
    TimezoneFrame,
)
from bookingwindow.domain.rolling_window import ROLLING_WINDOW_PERIOD_MAX_DAYS_TO_CHECK
from bookingwindow.services.booking_window import BookingWindowService

NOW = pendulum.datetime(2024, 1, 1, tz="UTC")  # Monday
UTC_FRAME = TimezoneFrame()


class StubAvailabilityProvider:
    """Minimal stub matching AvailabilityProviderProtocol."""

    def __init__(self, bookability: Dict[str, DayStatus]):
        self._bookability = bookability
        self.calls: List[Dict[str, object]] = []

    async def get_bookability(self, start, end, utc_offset_minutes):
        self.calls.append(
            {
                "start": start,
                "end": end,
                "utc_offset_minutes": utc_offset_minutes,
            }
        )
        return self._bookability


def _build_service(bookability: Dict[str, DayStatus]) -> BookingWindowService:
    return BookingWindowService(
        availability_provider=StubAvailabilityProvider(bookability),
        clock=lambda: NOW,
    )


ROLLING_WINDOW = PeriodConfig(
    period_type=PeriodType.ROLLING_WINDOW,
    period_days=2,
    period_count_calendar_days=True,
)

BOOKABLE_DAYS = {
    "2024-01-02": DayStatus(is_bookable=True),
    "2024-01-03": DayStatus(is_bookable=True),
}


def test_resolve_limits_fetches_bookability_for_rolling_window():
    """Rolling windows should be resolved with provider data."""
    service = _build_service(BOOKABLE_DAYS)

    limits = asyncio.run(service.resolve_limits(ROLLING_WINDOW, UTC_FRAME))

    assert limits == RollingLimit(end=pendulum.datetime(2024, 1, 3, tz="UTC").end_of("day"))

    provider = service._availability_provider
    assert len(provider.calls) == 1
    call = provider.calls[0]
    assert call["utc_offset_minutes"] == 0
    assert call["start"] == NOW
    assert call["end"] == add_business_days(NOW, ROLLING_WINDOW_PERIOD_MAX_DAYS_TO_CHECK).end_of("day")


def test_bookability_is_requested_in_booker_frame():
    """The provider should be asked for days in the booker's offset."""
    service = _build_service({})
    frame = TimezoneFrame(event_utc_offset_minutes=60, booker_utc_offset_minutes=-300)

    asyncio.run(service.resolve_limits(ROLLING_WINDOW, frame))

    call = service._availability_provider.calls[0]
    assert call["utc_offset_minutes"] == -300
    assert call["start"].to_date_string() == "2023-12-31"


def test_other_period_types_skip_provider():
    """Only rolling windows need bookability data."""
    service = _build_service(BOOKABLE_DAYS)
    rolling = PeriodConfig(period_type=PeriodType.ROLLING, period_days=3)

    asyncio.run(service.resolve_limits(rolling, UTC_FRAME))
    limits = asyncio.run(service.resolve_limits(PeriodConfig(), UTC_FRAME))

    assert limits == NoLimit()
    assert service._availability_provider.calls == []


def test_classify_verdicts():
    """Each kind of violation should map to its own verdict."""
    service = _build_service(BOOKABLE_DAYS)

    def classify(time, notice=0):
        candidate = BookingCandidate(time=time, minimum_booking_notice_minutes=notice)
        return asyncio.run(service.classify(candidate, ROLLING_WINDOW, UTC_FRAME))

    assert classify(NOW.subtract(minutes=1)) is SlotVerdict.IN_PAST
    assert classify(NOW.add(minutes=30), notice=60) is SlotVerdict.MINIMUM_NOTICE
    assert classify("2024-01-03T12:00:00Z") is SlotVerdict.BOOKABLE
    assert classify("2024-01-04T09:00:00Z") is SlotVerdict.FUTURE_LIMIT


def test_filter_bookable_keeps_only_valid_slots():
    """Filtering should drop past, too-soon and too-far slots."""
    service = _build_service(BOOKABLE_DAYS)
    times = [
        NOW.subtract(hours=1),
        NOW.add(minutes=15),
        pendulum.datetime(2024, 1, 2, 9, tz="UTC"),
        pendulum.datetime(2024, 1, 3, 16, tz="UTC"),
        pendulum.datetime(2024, 1, 4, 9, tz="UTC"),
    ]

    bookable = asyncio.run(
        service.filter_bookable(times, ROLLING_WINDOW, UTC_FRAME, minimum_booking_notice_minutes=60)
    )

    assert bookable == [
        pendulum.datetime(2024, 1, 2, 9, tz="UTC"),
        pendulum.datetime(2024, 1, 3, 16, tz="UTC"),
    ]
    # Limits are computed once for the whole batch
    assert len(service._availability_provider.calls) == 1


def test_default_clock_is_wall_clock():
    """Without an injected clock the service uses the current time."""
    service = BookingWindowService(availability_provider=StubAvailabilityProvider({}))

    before = pendulum.now("UTC")
    assert service.now() >= before
