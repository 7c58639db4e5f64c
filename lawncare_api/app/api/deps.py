"""
FastAPI dependencies shared by the endpoint modules.

The storage backend, settings and token blocklist are created once by
``create_app`` and stored on ``app.state``; services are built per
request around them.  The authentication dependencies verify the
bearer token and resolve its subject through ``UserService``.
"""

from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from lawncare_api.app.core.config import Settings
from lawncare_api.app.core.security import TokenBlocklist, decode_access_token
from lawncare_api.app.schemas.user import UserInDB
from lawncare_api.app.services.booking_service import BookingService
from lawncare_api.app.services.user_service import UserService
from lawncare_api.app.storage.base import Storage


bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_token_blocklist(request: Request) -> TokenBlocklist:
    return request.app.state.token_blocklist


def get_booking_service(
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
) -> BookingService:
    return BookingService(storage, enforce_transitions=settings.enforce_status_transitions)


def get_user_service(storage: Storage = Depends(get_storage)) -> UserService:
    return UserService(storage)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_token_payload(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
    blocklist: TokenBlocklist = Depends(get_token_blocklist),
) -> Dict[str, Any]:
    """Return the verified payload of the bearer token.

    Raises HTTP 401 if the header is missing or the token is invalid,
    expired or revoked.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")
    payload = decode_access_token(credentials.credentials, settings.secret_key)
    if not payload:
        raise _unauthorized("Invalid or expired token")
    if blocklist.is_revoked(payload.get("jti")):
        raise _unauthorized("Token has been revoked")
    return payload


async def get_current_user(
    payload: Dict[str, Any] = Depends(get_token_payload),
    users: UserService = Depends(get_user_service),
) -> UserInDB:
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise _unauthorized("Invalid or expired token") from None
    user = await users.get_user(user_id)
    if user is None:
        raise _unauthorized("User no longer exists")
    return user


async def require_admin(current_user: UserInDB = Depends(get_current_user)) -> UserInDB:
    """Allow only administrators; other authenticated users get HTTP 403."""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )
    return current_user
