"""
Pydantic models for lawn-care bookings.

These schemas define the structures used to create and return
bookings.  JSON payloads use camelCase keys (``firstName``,
``lawnSize``) to match the web client, while Python code works with
snake_case attributes.  Both spellings are accepted on input.

Fields owned by the server (``id``, ``status``, ``price`` and
``createdAt``) are stripped from incoming payloads by
``validate_booking_input`` and never reach storage.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from lawncare_api.app.core.errors import BookingValidationError


class ServiceType(str, Enum):
    STANDARD = "standard"
    PREMIUM = "premium"
    COMPLETE = "complete"


class ServiceTime(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class LawnCondition(str, Enum):
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class BookingStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Largest value a SQLite INTEGER column holds; used for lawn sizes and ids.
MAX_INTEGER = 2**63 - 1

# Keys the client may send but which are always computed server side.
SERVER_OWNED_FIELDS = frozenset({"id", "status", "price", "createdAt", "created_at"})


class BookingBase(BaseModel):
    first_name: str = Field(..., min_length=1, examples=["Jane"])
    last_name: str = Field(..., min_length=1, examples=["Doe"])
    email: str = Field(..., min_length=1, examples=["jane@example.com"])
    phone: str = Field(..., min_length=1, examples=["555-0100"])
    address: str = Field(..., min_length=1, examples=["12 Elm Street"])
    city: str = Field(..., min_length=1, examples=["Springfield"])
    zip_code: str = Field(..., min_length=1, examples=["12345"])
    service_type: ServiceType = Field(..., examples=["standard"])
    # Lawn area in square feet.
    lawn_size: int = Field(..., gt=0, le=MAX_INTEGER, strict=True, examples=[1000])
    lawn_condition: Optional[LawnCondition] = Field(default=None, examples=["good"])
    obstacles: Optional[str] = Field(default=None, description="Anything the crew should know about")
    service_date: date = Field(..., examples=["2030-05-01"])
    service_time: ServiceTime = Field(..., examples=["morning"])

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "str_strip_whitespace": True,
    }


class BookingCreate(BookingBase):
    """Schema for creating a booking.

    Unknown keys are ignored, which keeps ``price`` or ``status`` sent by
    a client from having any effect.
    """

    @field_validator("lawn_condition", mode="before")
    @classmethod
    def _blank_condition_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("service_date")
    @classmethod
    def _not_in_past(cls, value: date) -> date:
        if value < date.today():
            raise ValueError("Service date cannot be in the past")
        return value


class BookingRead(BookingBase):
    id: int
    status: BookingStatus
    price: float = Field(..., ge=0)
    created_at: datetime

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


class BookingStatusUpdate(BaseModel):
    """Body of ``PATCH /api/admin/bookings/{id}/status``.

    The value is kept as a plain string so that an unknown status is
    reported with the same message as the status filter endpoint.
    """

    status: Optional[str] = Field(default=None, examples=["approved"])


def _format_errors(exc: ValidationError) -> List[Dict[str, str]]:
    errors = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())) or "__root__"
        errors.append({"field": field, "message": error.get("msg", "Invalid value")})
    return errors


def validate_booking_input(raw: Mapping[str, Any]) -> BookingCreate:
    """Validate a raw booking payload.

    Server-owned keys are dropped first.  On failure a
    ``BookingValidationError`` is raised listing every invalid field.
    """
    if not isinstance(raw, Mapping):
        raise BookingValidationError(
            "Invalid booking data",
            [{"field": "__root__", "message": "Booking payload must be a JSON object"}],
        )
    cleaned = {key: value for key, value in raw.items() if key not in SERVER_OWNED_FIELDS}
    try:
        return BookingCreate.model_validate(cleaned)
    except ValidationError as exc:
        raise BookingValidationError("Invalid booking data", _format_errors(exc)) from exc


def validate_status(raw: Any) -> BookingStatus:
    """Return ``raw`` as a ``BookingStatus`` or raise ``BookingValidationError``."""
    try:
        return BookingStatus(raw)
    except (ValueError, TypeError):
        allowed = ", ".join(status.value for status in BookingStatus)
        raise BookingValidationError(
            "Invalid booking status",
            [{"field": "status", "message": f"Status must be one of: {allowed}"}],
        ) from None
