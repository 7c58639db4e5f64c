"""
Authentication endpoints.

Registration, login, logout and the current-user lookup used by the
web client to decide whether to show the admin dashboard.  Sessions are
bearer tokens; logging out revokes the token.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Response, status

from lawncare_api.app.core.errors import AuthenticationError, DuplicateUsernameError
from lawncare_api.app.core.config import Settings
from lawncare_api.app.core.security import TokenBlocklist, create_access_token
from lawncare_api.app.schemas.user import TokenResponse, UserCreate, UserInDB, UserLogin, UserRead
from lawncare_api.app.services.user_service import UserService
from lawncare_api.app.api.deps import (
    get_current_user,
    get_settings,
    get_token_blocklist,
    get_token_payload,
    get_user_service,
)


router = APIRouter()


def _issue_token(settings: Settings, user: UserInDB) -> TokenResponse:
    token = create_access_token(
        {"sub": str(user.id)},
        secret_key=settings.secret_key,
        expires_delta=settings.access_token_expire_minutes * 60,
    )
    return TokenResponse(access_token=token, user=user.public())


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: UserCreate,
    service: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_settings),
) -> TokenResponse:
    """Register a regular user and log them in."""
    try:
        user = await service.register(data)
    except DuplicateUsernameError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already exists") from e
    return _issue_token(settings, user)


@router.post("/login", response_model=TokenResponse)
async def login(
    data: UserLogin,
    service: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_settings),
) -> TokenResponse:
    try:
        user = await service.authenticate(data.username, data.password)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    return _issue_token(settings, user)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    payload: Dict[str, Any] = Depends(get_token_payload),
    blocklist: TokenBlocklist = Depends(get_token_blocklist),
) -> Response:
    """Revoke the presented token."""
    jti = payload.get("jti")
    if jti:
        blocklist.revoke(jti, int(payload["exp"]))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/user", response_model=UserRead)
async def current_user(user: UserInDB = Depends(get_current_user)) -> UserRead:
    return user.public()
