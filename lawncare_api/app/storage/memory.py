"""
In-memory storage backend.

Keeps users and bookings in dictionaries keyed by id.  Suitable for
development and tests; all data is lost when the process exits.  A
lock serialises id assignment, the username uniqueness check and
status changes.
"""

import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional

from lawncare_api.app.core.errors import DuplicateUsernameError
from lawncare_api.app.schemas.booking import BookingCreate, BookingRead, BookingStatus
from lawncare_api.app.schemas.stats import DashboardStats
from lawncare_api.app.schemas.user import UserInDB
from lawncare_api.app.services.lifecycle import REVENUE_STATUSES
from lawncare_api.app.services.pricing import calculate_price
from lawncare_api.app.storage.base import Storage


class MemoryStorage(Storage):
    def __init__(self) -> None:
        self._users: Dict[int, UserInDB] = {}
        self._bookings: Dict[int, BookingRead] = {}
        self._next_user_id = 1
        self._next_booking_id = 1
        self._lock = threading.Lock()

    async def create_user(self, username: str, password_hash: str, is_admin: bool = False) -> UserInDB:
        with self._lock:
            if any(user.username == username for user in self._users.values()):
                raise DuplicateUsernameError(username)
            user = UserInDB(
                id=self._next_user_id,
                username=username,
                password=password_hash,
                is_admin=is_admin,
            )
            self._users[user.id] = user
            self._next_user_id += 1
            return user.model_copy()

    async def get_user(self, user_id: int) -> Optional[UserInDB]:
        user = self._users.get(user_id)
        return user.model_copy() if user else None

    async def get_user_by_username(self, username: str) -> Optional[UserInDB]:
        for user in list(self._users.values()):
            if user.username == username:
                return user.model_copy()
        return None

    async def create_booking(self, data: BookingCreate) -> BookingRead:
        with self._lock:
            booking = BookingRead(
                **data.model_dump(),
                id=self._next_booking_id,
                status=BookingStatus.PENDING,
                price=calculate_price(data.service_type, data.lawn_size),
                created_at=datetime.now(timezone.utc),
            )
            self._bookings[booking.id] = booking
            self._next_booking_id += 1
            return booking.model_copy()

    async def get_booking_by_id(self, booking_id: int) -> Optional[BookingRead]:
        booking = self._bookings.get(booking_id)
        return booking.model_copy() if booking else None

    async def get_all_bookings(self) -> List[BookingRead]:
        bookings = sorted(
            list(self._bookings.values()),
            key=lambda b: (b.created_at, b.id),
            reverse=True,
        )
        return [b.model_copy() for b in bookings]

    async def get_bookings_by_status(self, status: BookingStatus) -> List[BookingRead]:
        matching = [b for b in list(self._bookings.values()) if b.status == status]
        matching.sort(key=lambda b: (b.service_date, b.id))
        return [b.model_copy() for b in matching]

    async def update_booking_status(self, booking_id: int, status: BookingStatus) -> Optional[BookingRead]:
        with self._lock:
            booking = self._bookings.get(booking_id)
            if booking is None:
                return None
            updated = booking.model_copy(update={"status": BookingStatus(status)})
            self._bookings[booking_id] = updated
            return updated.model_copy()

    async def get_dashboard_stats(self) -> DashboardStats:
        bookings = list(self._bookings.values())
        revenue = sum(b.price for b in bookings if b.status in REVENUE_STATUSES)
        return DashboardStats(
            total_bookings=len(bookings),
            pending_bookings=sum(1 for b in bookings if b.status == BookingStatus.PENDING),
            completed_bookings=sum(1 for b in bookings if b.status == BookingStatus.COMPLETED),
            total_revenue=round(revenue, 2),
        )
