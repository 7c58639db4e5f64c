"""
Pydantic models for user data.

Defines schemas for registering, logging in and reading users.
Password hashes live only on ``UserInDB`` and are never returned
through the API.
"""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


_CAMEL = {
    "alias_generator": to_camel,
    "populate_by_name": True,
}


class UserCreate(BaseModel):
    """Schema for registering a user."""

    username: str = Field(..., min_length=1, examples=["owner@example.com"])
    password: str = Field(..., min_length=1, examples=["strongpassword"])

    model_config = {**_CAMEL, "str_strip_whitespace": True}


class UserLogin(UserCreate):
    """Credentials submitted to ``/api/login``."""


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: int
    username: str
    is_admin: bool = False

    model_config = {**_CAMEL, "from_attributes": True}


class UserInDB(UserRead):
    """User record as held by storage, including the password hash."""

    password: str

    def public(self) -> UserRead:
        return UserRead(id=self.id, username=self.username, is_admin=self.is_admin)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead

    model_config = _CAMEL
