"""
Booking status lifecycle.

Admins move bookings between four statuses.  By default any status can
be set from any other so that staff can correct mistakes manually.
When ``ENFORCE_STATUS_TRANSITIONS`` is enabled the table below is
applied: cancelled bookings can be restored to pending, completed
bookings are final.
"""

from typing import Dict, FrozenSet

from lawncare_api.app.schemas.booking import BookingStatus


ALLOWED_TRANSITIONS: Dict[BookingStatus, FrozenSet[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.APPROVED, BookingStatus.CANCELLED}),
    BookingStatus.APPROVED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.CANCELLED: frozenset({BookingStatus.PENDING}),
    BookingStatus.COMPLETED: frozenset(),
}

# Statuses whose price counts towards dashboard revenue.
REVENUE_STATUSES: FrozenSet[BookingStatus] = frozenset({BookingStatus.APPROVED, BookingStatus.COMPLETED})


def can_transition(current: BookingStatus, new: BookingStatus) -> bool:
    """Return True if ``current`` may change to ``new`` under the strict table.

    Re-applying the current status is always allowed.
    """
    current = BookingStatus(current)
    new = BookingStatus(new)
    if current == new:
        return True
    return new in ALLOWED_TRANSITIONS[current]
