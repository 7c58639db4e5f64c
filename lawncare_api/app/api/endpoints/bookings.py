"""
Public booking endpoints.

Customers submit the booking form here and fetch the result for the
confirmation page.  No authentication is required.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Path, status

from lawncare_api.app.core.errors import BookingNotFoundError, BookingValidationError
from lawncare_api.app.schemas.booking import BookingRead
from lawncare_api.app.services.booking_service import BookingService
from lawncare_api.app.api.deps import get_booking_service


router = APIRouter()


def parse_booking_id(raw: str) -> int:
    """Convert a path segment to a booking id or fail with HTTP 400."""
    try:
        return int(raw)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid booking ID") from None


@router.post(
    "/bookings",
    response_model=BookingRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_booking(
    payload: Dict[str, Any] = Body(..., description="Booking form fields (camelCase keys)"),
    service: BookingService = Depends(get_booking_service),
) -> BookingRead:
    """Create a booking from the customer form.

    The price and status are set by the server.  Returns HTTP 400 with
    a list of every invalid field if the payload does not validate.
    """
    try:
        return await service.create_booking(payload)
    except BookingValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": e.message, "errors": e.errors},
        ) from e


@router.get(
    "/bookings/{booking_id}",
    response_model=BookingRead,
    summary="Get a single booking",
)
async def get_booking(
    booking_id: str = Path(..., description="ID of the booking"),
    service: BookingService = Depends(get_booking_service),
) -> BookingRead:
    """Retrieve a booking by id, e.g. for the confirmation page."""
    try:
        return await service.get_booking(parse_booking_id(booking_id))
    except BookingNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found") from e
