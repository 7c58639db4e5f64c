"""Contract tests run against every storage backend."""

import threading
from datetime import date, timedelta

import pytest

from lawncare_api.app.core.errors import DuplicateUsernameError
from lawncare_api.app.schemas.booking import BookingStatus, validate_booking_input
from lawncare_api.app.storage import SQLiteStorage
from lawncare_api.app.storage import sqlite as sqlite_storage


def _in_days(days):
    return (date.today() + timedelta(days=days)).isoformat()


@pytest.mark.asyncio
async def test_create_booking_is_pending_priced_and_uniquely_numbered(storage, booking_payload):
    ids = set()
    for service_type in ("standard", "premium", "complete"):
        booking = await storage.create_booking(validate_booking_input(booking_payload(serviceType=service_type)))
        assert booking.status == BookingStatus.PENDING
        assert booking.price > 0
        assert booking.id not in ids
        ids.add(booking.id)


@pytest.mark.asyncio
async def test_create_booking_computes_price(storage, booking_payload):
    standard = await storage.create_booking(validate_booking_input(booking_payload(serviceType="standard", lawnSize=1000)))
    premium = await storage.create_booking(validate_booking_input(booking_payload(serviceType="premium", lawnSize=2000)))
    complete = await storage.create_booking(validate_booking_input(booking_payload(serviceType="complete", lawnSize=500)))
    assert standard.price == 60.00
    assert premium.price == 105.00
    assert complete.price == 110.00


@pytest.mark.asyncio
async def test_get_booking_by_id_returns_created_record(storage, booking_payload):
    created = await storage.create_booking(validate_booking_input(booking_payload(lawnCondition=None, obstacles=None)))
    fetched = await storage.get_booking_by_id(created.id)
    assert fetched.model_dump() == created.model_dump()
    assert fetched.lawn_condition is None
    assert fetched.obstacles is None


@pytest.mark.asyncio
async def test_unknown_booking_id_returns_none(storage):
    assert await storage.get_booking_by_id(4242) is None


@pytest.mark.asyncio
async def test_ids_beyond_integer_range_are_not_found(storage, booking_payload):
    await storage.create_booking(validate_booking_input(booking_payload()))
    for huge in (2**63, 10**20, -(2**63) - 1):
        assert await storage.get_booking_by_id(huge) is None
        assert await storage.update_booking_status(huge, BookingStatus.APPROVED) is None
        assert await storage.get_user(huge) is None


@pytest.mark.asyncio
async def test_get_all_bookings_newest_first(storage, booking_payload):
    created = []
    for name in ("Ann", "Bob", "Cid", "Dee"):
        created.append(await storage.create_booking(validate_booking_input(booking_payload(firstName=name))))
    bookings = await storage.get_all_bookings()
    assert [b.id for b in bookings] == [b.id for b in reversed(created)]
    assert [b.created_at for b in bookings] == sorted((b.created_at for b in bookings), reverse=True)


@pytest.mark.asyncio
async def test_get_bookings_by_status_orders_by_service_date(storage, booking_payload):
    late = await storage.create_booking(validate_booking_input(booking_payload(serviceDate=_in_days(30))))
    soon = await storage.create_booking(validate_booking_input(booking_payload(serviceDate=_in_days(2))))
    middle = await storage.create_booking(validate_booking_input(booking_payload(serviceDate=_in_days(10))))

    pending = await storage.get_bookings_by_status(BookingStatus.PENDING)
    assert [b.id for b in pending] == [soon.id, middle.id, late.id]

    await storage.update_booking_status(middle.id, BookingStatus.APPROVED)
    pending = await storage.get_bookings_by_status(BookingStatus.PENDING)
    assert [b.id for b in pending] == [soon.id, late.id]
    approved = await storage.get_bookings_by_status(BookingStatus.APPROVED)
    assert [b.id for b in approved] == [middle.id]
    assert await storage.get_bookings_by_status(BookingStatus.CANCELLED) == []


@pytest.mark.asyncio
async def test_update_booking_status_changes_only_status(storage, booking_payload):
    created = await storage.create_booking(validate_booking_input(booking_payload()))
    updated = await storage.update_booking_status(created.id, BookingStatus.CANCELLED)
    assert updated.status == BookingStatus.CANCELLED
    assert updated.model_dump(exclude={"status"}) == created.model_dump(exclude={"status"})
    assert (await storage.get_booking_by_id(created.id)).status == BookingStatus.CANCELLED


@pytest.mark.asyncio
async def test_update_unknown_booking_creates_nothing(storage, booking_payload):
    await storage.create_booking(validate_booking_input(booking_payload()))
    assert await storage.update_booking_status(999, BookingStatus.APPROVED) is None
    assert await storage.get_booking_by_id(999) is None
    assert len(await storage.get_all_bookings()) == 1


@pytest.mark.asyncio
async def test_returned_records_are_copies(storage, booking_payload):
    created = await storage.create_booking(validate_booking_input(booking_payload()))
    created.status = BookingStatus.COMPLETED
    created.price = 0
    fetched = await storage.get_booking_by_id(created.id)
    assert fetched.status == BookingStatus.PENDING
    assert fetched.price == 60.0


@pytest.mark.asyncio
async def test_dashboard_stats_revenue_counts_approved_and_completed_only(storage, booking_payload):
    approved = await storage.create_booking(validate_booking_input(booking_payload(serviceType="standard", lawnSize=1000)))
    completed = await storage.create_booking(validate_booking_input(booking_payload(serviceType="premium", lawnSize=2000)))
    cancelled = await storage.create_booking(validate_booking_input(booking_payload(serviceType="complete", lawnSize=500)))
    await storage.create_booking(validate_booking_input(booking_payload(serviceType="complete", lawnSize=3000)))

    await storage.update_booking_status(approved.id, BookingStatus.APPROVED)
    await storage.update_booking_status(completed.id, BookingStatus.COMPLETED)
    await storage.update_booking_status(cancelled.id, BookingStatus.CANCELLED)

    stats = await storage.get_dashboard_stats()
    assert stats.total_bookings == 4
    assert stats.pending_bookings == 1
    assert stats.completed_bookings == 1
    assert stats.total_revenue == pytest.approx(165.0)


@pytest.mark.asyncio
async def test_dashboard_stats_empty(storage):
    stats = await storage.get_dashboard_stats()
    assert stats.total_bookings == 0
    assert stats.total_revenue == 0


@pytest.mark.asyncio
async def test_users_are_found_by_id_and_username(storage):
    user = await storage.create_user("owner", "salt$hash")
    assert user.is_admin is False
    assert (await storage.get_user(user.id)).model_dump() == user.model_dump()
    assert (await storage.get_user_by_username("owner")).model_dump() == user.model_dump()
    assert await storage.get_user(user.id + 100) is None
    assert await storage.get_user_by_username("nobody") is None


@pytest.mark.asyncio
async def test_duplicate_username_is_rejected(storage):
    original = await storage.create_user("owner", "first$hash")
    with pytest.raises(DuplicateUsernameError):
        await storage.create_user("owner", "second$hash", is_admin=True)
    stored = await storage.get_user_by_username("owner")
    assert stored.model_dump() == original.model_dump()
    assert stored.password == "first$hash"
    assert stored.is_admin is False


@pytest.mark.asyncio
async def test_sqlite_queries_run_off_the_event_loop(tmp_path, monkeypatch, booking_payload):
    query_threads = []
    real_get_cursor = sqlite_storage.get_cursor

    def recording_get_cursor(db_path):
        query_threads.append(threading.get_ident())
        return real_get_cursor(db_path)

    monkeypatch.setattr(sqlite_storage, "get_cursor", recording_get_cursor)
    backend = SQLiteStorage(str(tmp_path / "threads.db"))
    await backend.open()
    created = await backend.create_booking(validate_booking_input(booking_payload()))
    assert (await backend.get_booking_by_id(created.id)).id == created.id
    await backend.get_dashboard_stats()

    assert len(query_threads) == 3
    assert threading.get_ident() not in query_threads
