"""
Business logic for lawn-care bookings.

The ``BookingService`` validates raw input, delegates persistence to the
configured ``Storage`` backend and applies the status transition
policy.  Endpoints call the service and translate its exceptions into
HTTP responses; the service itself knows nothing about HTTP.
"""

import logging
from typing import Any, List, Mapping

from lawncare_api.app.core.errors import BookingNotFoundError, InvalidStatusTransitionError
from lawncare_api.app.schemas.booking import (
    BookingRead,
    validate_booking_input,
    validate_status,
)
from lawncare_api.app.schemas.stats import DashboardStats
from lawncare_api.app.services.lifecycle import can_transition
from lawncare_api.app.storage.base import Storage


logger = logging.getLogger(__name__)


class BookingService:
    """Service for creating, querying and transitioning bookings."""

    def __init__(self, storage: Storage, enforce_transitions: bool = False) -> None:
        self.storage = storage
        self.enforce_transitions = enforce_transitions

    async def create_booking(self, raw: Mapping[str, Any]) -> BookingRead:
        """Validate ``raw`` and store it as a new pending booking.

        Raises ``BookingValidationError`` listing every invalid field.
        Any ``price``, ``status``, ``id`` or ``createdAt`` in ``raw`` is
        discarded.
        """
        data = validate_booking_input(raw)
        booking = await self.storage.create_booking(data)
        logger.info(
            "Booking %s created: %s service, %s sq ft, price %.2f",
            booking.id,
            booking.service_type.value,
            booking.lawn_size,
            booking.price,
        )
        return booking

    async def get_booking(self, booking_id: int) -> BookingRead:
        booking = await self.storage.get_booking_by_id(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    async def list_bookings(self) -> List[BookingRead]:
        return await self.storage.get_all_bookings()

    async def list_bookings_by_status(self, raw_status: Any) -> List[BookingRead]:
        """Bookings with the given status; raises ``BookingValidationError`` for unknown statuses."""
        booking_status = validate_status(raw_status)
        return await self.storage.get_bookings_by_status(booking_status)

    async def update_status(self, booking_id: int, raw_status: Any) -> BookingRead:
        """Change the status of a booking.

        Without transition enforcement any status may follow any other
        and concurrent updates resolve as last write wins.  With
        enforcement, a change outside ``ALLOWED_TRANSITIONS`` raises
        ``InvalidStatusTransitionError``.
        """
        new_status = validate_status(raw_status)
        current = await self.storage.get_booking_by_id(booking_id)
        if current is None:
            raise BookingNotFoundError(booking_id)
        if self.enforce_transitions and not can_transition(current.status, new_status):
            raise InvalidStatusTransitionError(current.status.value, new_status.value)
        updated = await self.storage.update_booking_status(booking_id, new_status)
        if updated is None:
            raise BookingNotFoundError(booking_id)
        logger.info(
            "Booking %s status changed: %s -> %s",
            booking_id,
            current.status.value,
            updated.status.value,
        )
        return updated

    async def dashboard_stats(self) -> DashboardStats:
        return await self.storage.get_dashboard_stats()
