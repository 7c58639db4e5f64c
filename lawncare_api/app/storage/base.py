"""
Storage interface.

``Storage`` is the single authority over persisted users and bookings.
It assigns identifiers, computes prices, sets the initial status and
answers queries.  Concrete backends (``MemoryStorage``,
``SQLiteStorage``) implement every method; the API layer only ever
talks to this interface.

Lookups return ``None`` for unknown ids instead of raising.  Records
handed out by a backend are copies: mutating them has no effect on
stored state.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from lawncare_api.app.schemas.booking import BookingCreate, BookingRead, BookingStatus
from lawncare_api.app.schemas.stats import DashboardStats
from lawncare_api.app.schemas.user import UserInDB


class Storage(ABC):
    """Abstract persistence layer for users and bookings."""

    async def open(self) -> None:
        """Prepare the backend (create tables, apply migrations)."""

    async def close(self) -> None:
        """Release resources held by the backend."""

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    @abstractmethod
    async def create_user(self, username: str, password_hash: str, is_admin: bool = False) -> UserInDB:
        """Insert a user.  Raises ``DuplicateUsernameError`` if the name is taken."""

    @abstractmethod
    async def get_user(self, user_id: int) -> Optional[UserInDB]:
        ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[UserInDB]:
        ...

    # ------------------------------------------------------------------
    # Bookings
    # ------------------------------------------------------------------
    @abstractmethod
    async def create_booking(self, data: BookingCreate) -> BookingRead:
        """Store a validated booking with a new id, computed price and status ``pending``."""

    @abstractmethod
    async def get_booking_by_id(self, booking_id: int) -> Optional[BookingRead]:
        ...

    @abstractmethod
    async def get_all_bookings(self) -> List[BookingRead]:
        """All bookings, most recently created first."""

    @abstractmethod
    async def get_bookings_by_status(self, status: BookingStatus) -> List[BookingRead]:
        """Bookings with ``status``, soonest service date first."""

    @abstractmethod
    async def update_booking_status(self, booking_id: int, status: BookingStatus) -> Optional[BookingRead]:
        """Set the status of a booking.  Returns ``None`` if it does not exist."""

    @abstractmethod
    async def get_dashboard_stats(self) -> DashboardStats:
        ...
