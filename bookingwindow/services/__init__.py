"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .booking_window import AvailabilityProviderProtocol, BookingWindowService

__all__ = ["AvailabilityProviderProtocol", "BookingWindowService"]
