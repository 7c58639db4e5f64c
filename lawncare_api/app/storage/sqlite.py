"""
SQLite storage backend.

Each operation opens its own connection through ``core.db`` and runs in
a single transaction.  Identifiers come from ``AUTOINCREMENT`` columns
and username uniqueness is enforced by a ``UNIQUE`` constraint, so
concurrent requests cannot produce duplicate ids or usernames.

``sqlite3`` calls block, so every public method runs its query in a
worker thread via ``asyncio.to_thread``; connections are never shared
between threads.
"""

import asyncio
import logging
import sqlite3
from datetime import datetime, timezone
from typing import List, Optional

from lawncare_api.app.core.db import get_cursor, get_database_path, init_db
from lawncare_api.app.core.errors import DuplicateUsernameError
from lawncare_api.app.schemas.booking import MAX_INTEGER, BookingCreate, BookingRead, BookingStatus
from lawncare_api.app.schemas.stats import DashboardStats
from lawncare_api.app.schemas.user import UserInDB
from lawncare_api.app.services.pricing import calculate_price
from lawncare_api.app.storage.base import Storage


logger = logging.getLogger(__name__)

BOOKING_COLUMNS = (
    "id, first_name, last_name, email, phone, address, city, zip_code, "
    "service_type, service_date, service_time, lawn_size, lawn_condition, "
    "obstacles, status, price, created_at"
)


def _storable(row_id: int) -> bool:
    # sqlite3 raises OverflowError for ints outside this range; no such row can exist.
    return -MAX_INTEGER - 1 <= row_id <= MAX_INTEGER


def _row_to_user(row: sqlite3.Row) -> UserInDB:
    return UserInDB(
        id=row["id"],
        username=row["username"],
        password=row["password"],
        is_admin=bool(row["is_admin"]),
    )


def _row_to_booking(row: sqlite3.Row) -> BookingRead:
    return BookingRead.model_validate({key: row[key] for key in row.keys()})


class SQLiteStorage(Storage):
    def __init__(self, database_url: str) -> None:
        self.db_path = get_database_path(database_url)

    async def open(self) -> None:
        version = await asyncio.to_thread(init_db, self.db_path)
        logger.info("SQLite storage ready at %s (schema version %s)", self.db_path, version)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    async def create_user(self, username: str, password_hash: str, is_admin: bool = False) -> UserInDB:
        def _insert() -> int:
            with get_cursor(self.db_path) as cursor:
                cursor.execute(
                    "INSERT INTO users (username, password, is_admin) VALUES (?, ?, ?)",
                    (username, password_hash, 1 if is_admin else 0),
                )
                return cursor.lastrowid

        try:
            user_id = await asyncio.to_thread(_insert)
        except sqlite3.IntegrityError as exc:
            raise DuplicateUsernameError(username) from exc
        return UserInDB(id=user_id, username=username, password=password_hash, is_admin=is_admin)

    async def get_user(self, user_id: int) -> Optional[UserInDB]:
        if not _storable(user_id):
            return None

        def _select() -> Optional[sqlite3.Row]:
            with get_cursor(self.db_path) as cursor:
                return cursor.execute(
                    "SELECT id, username, password, is_admin FROM users WHERE id = ?",
                    (user_id,),
                ).fetchone()

        row = await asyncio.to_thread(_select)
        return _row_to_user(row) if row else None

    async def get_user_by_username(self, username: str) -> Optional[UserInDB]:
        def _select() -> Optional[sqlite3.Row]:
            with get_cursor(self.db_path) as cursor:
                return cursor.execute(
                    "SELECT id, username, password, is_admin FROM users WHERE username = ?",
                    (username,),
                ).fetchone()

        row = await asyncio.to_thread(_select)
        return _row_to_user(row) if row else None

    # ------------------------------------------------------------------
    # Bookings
    # ------------------------------------------------------------------
    async def create_booking(self, data: BookingCreate) -> BookingRead:
        price = calculate_price(data.service_type, data.lawn_size)
        created_at = datetime.now(timezone.utc)

        def _insert() -> int:
            with get_cursor(self.db_path) as cursor:
                cursor.execute(
                    """
                    INSERT INTO bookings (
                        first_name, last_name, email, phone, address, city, zip_code,
                        service_type, service_date, service_time, lawn_size,
                        lawn_condition, obstacles, status, price, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        data.first_name,
                        data.last_name,
                        data.email,
                        data.phone,
                        data.address,
                        data.city,
                        data.zip_code,
                        data.service_type.value,
                        data.service_date.isoformat(),
                        data.service_time.value,
                        data.lawn_size,
                        data.lawn_condition.value if data.lawn_condition else None,
                        data.obstacles,
                        BookingStatus.PENDING.value,
                        price,
                        created_at.isoformat(),
                    ),
                )
                return cursor.lastrowid

        booking_id = await asyncio.to_thread(_insert)
        return BookingRead(
            **data.model_dump(),
            id=booking_id,
            status=BookingStatus.PENDING,
            price=price,
            created_at=created_at,
        )

    async def get_booking_by_id(self, booking_id: int) -> Optional[BookingRead]:
        if not _storable(booking_id):
            return None

        def _select() -> Optional[sqlite3.Row]:
            with get_cursor(self.db_path) as cursor:
                return cursor.execute(
                    f"SELECT {BOOKING_COLUMNS} FROM bookings WHERE id = ?",
                    (booking_id,),
                ).fetchone()

        row = await asyncio.to_thread(_select)
        return _row_to_booking(row) if row else None

    async def get_all_bookings(self) -> List[BookingRead]:
        def _select() -> List[sqlite3.Row]:
            with get_cursor(self.db_path) as cursor:
                return cursor.execute(
                    f"SELECT {BOOKING_COLUMNS} FROM bookings ORDER BY created_at DESC, id DESC"
                ).fetchall()

        rows = await asyncio.to_thread(_select)
        return [_row_to_booking(row) for row in rows]

    async def get_bookings_by_status(self, status: BookingStatus) -> List[BookingRead]:
        def _select() -> List[sqlite3.Row]:
            with get_cursor(self.db_path) as cursor:
                return cursor.execute(
                    f"SELECT {BOOKING_COLUMNS} FROM bookings WHERE status = ? "
                    "ORDER BY service_date ASC, id ASC",
                    (BookingStatus(status).value,),
                ).fetchall()

        rows = await asyncio.to_thread(_select)
        return [_row_to_booking(row) for row in rows]

    async def update_booking_status(self, booking_id: int, status: BookingStatus) -> Optional[BookingRead]:
        if not _storable(booking_id):
            return None

        def _update() -> Optional[sqlite3.Row]:
            with get_cursor(self.db_path) as cursor:
                cursor.execute(
                    "UPDATE bookings SET status = ? WHERE id = ?",
                    (BookingStatus(status).value, booking_id),
                )
                if cursor.rowcount == 0:
                    return None
                return cursor.execute(
                    f"SELECT {BOOKING_COLUMNS} FROM bookings WHERE id = ?",
                    (booking_id,),
                ).fetchone()

        row = await asyncio.to_thread(_update)
        return _row_to_booking(row) if row else None

    async def get_dashboard_stats(self) -> DashboardStats:
        def _select() -> sqlite3.Row:
            with get_cursor(self.db_path) as cursor:
                return cursor.execute(
                    """
                    SELECT
                        COUNT(*) AS total,
                        COALESCE(SUM(CASE WHEN status = 'pending' THEN 1 ELSE 0 END), 0) AS pending,
                        COALESCE(SUM(CASE WHEN status = 'completed' THEN 1 ELSE 0 END), 0) AS completed,
                        COALESCE(SUM(CASE WHEN status IN ('approved', 'completed') THEN price ELSE 0 END), 0) AS revenue
                    FROM bookings
                    """
                ).fetchone()

        row = await asyncio.to_thread(_select)
        return DashboardStats(
            total_bookings=row["total"],
            pending_bookings=row["pending"],
            completed_bookings=row["completed"],
            total_revenue=round(row["revenue"], 2),
        )
