"""
Domain exceptions.

Services raise these; the API layer maps each one to an HTTP status
code.  Anything that is not a ``LawnCareError`` is treated as an
unexpected failure and reported as a generic 500.
"""

from typing import Dict, List, Optional


class LawnCareError(Exception):
    """Base class for all expected application errors."""


class BookingValidationError(LawnCareError):
    """Input failed validation.

    ``errors`` lists every failing field as ``{"field": ..., "message": ...}``.
    """

    def __init__(self, message: str, errors: Optional[List[Dict[str, str]]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class BookingNotFoundError(LawnCareError):
    def __init__(self, booking_id: int) -> None:
        super().__init__(f"Booking {booking_id} not found")
        self.booking_id = booking_id


class DuplicateUsernameError(LawnCareError):
    def __init__(self, username: str) -> None:
        super().__init__(f"Username {username!r} already exists")
        self.username = username


class InvalidStatusTransitionError(LawnCareError):
    def __init__(self, current: str, new: str) -> None:
        super().__init__(f"Cannot change booking status from {current} to {new}")
        self.current = current
        self.new = new


class AuthenticationError(LawnCareError):
    """Credentials or token were rejected."""
