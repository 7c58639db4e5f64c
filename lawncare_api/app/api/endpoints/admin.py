"""
Admin endpoints.

Listing bookings, filtering them by status, changing a booking's
status and reading dashboard statistics.  Every route requires an
authenticated administrator: anonymous requests get 401 and
non-admin users get 403.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from lawncare_api.app.core.errors import (
    BookingNotFoundError,
    BookingValidationError,
    InvalidStatusTransitionError,
)
from lawncare_api.app.schemas.booking import BookingRead, BookingStatusUpdate
from lawncare_api.app.schemas.stats import DashboardStats
from lawncare_api.app.services.booking_service import BookingService
from lawncare_api.app.api.deps import get_booking_service, require_admin
from lawncare_api.app.api.endpoints.bookings import parse_booking_id


router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/bookings", response_model=List[BookingRead])
async def list_bookings(
    service: BookingService = Depends(get_booking_service),
) -> List[BookingRead]:
    """All bookings, newest first."""
    return await service.list_bookings()


@router.get("/bookings/status/{booking_status}", response_model=List[BookingRead])
async def list_bookings_by_status(
    booking_status: str = Path(..., description="pending, approved, completed or cancelled"),
    service: BookingService = Depends(get_booking_service),
) -> List[BookingRead]:
    """Bookings with the given status, soonest service date first.

    An unknown status yields HTTP 400; a valid status with no bookings
    yields an empty list.
    """
    try:
        return await service.list_bookings_by_status(booking_status)
    except BookingValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e


@router.patch("/bookings/{booking_id}/status", response_model=BookingRead)
async def update_booking_status(
    body: BookingStatusUpdate,
    booking_id: str = Path(..., description="ID of the booking"),
    service: BookingService = Depends(get_booking_service),
) -> BookingRead:
    """Set a booking's status.

    Returns 400 for a malformed id or status, 404 if the booking does
    not exist and 409 if transition enforcement is enabled and the
    change is not allowed.
    """
    parsed_id = parse_booking_id(booking_id)
    try:
        return await service.update_status(parsed_id, body.status)
    except BookingValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except BookingNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found") from e
    except InvalidStatusTransitionError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e


@router.get("/dashboard/stats", response_model=DashboardStats)
async def dashboard_stats(
    service: BookingService = Depends(get_booking_service),
) -> DashboardStats:
    """Booking counts and revenue from approved and completed bookings."""
    return await service.dashboard_stats()
