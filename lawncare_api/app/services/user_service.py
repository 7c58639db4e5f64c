"""
Business logic for users.

Passwords are hashed before they reach storage and verified with a
constant-time comparison.  The administrator account is only ever
created by ``ensure_admin`` during application startup; no public
operation can grant admin rights.
"""

import logging
from typing import Optional

from lawncare_api.app.core.errors import AuthenticationError, DuplicateUsernameError
from lawncare_api.app.core.security import hash_password, verify_password
from lawncare_api.app.schemas.user import UserCreate, UserInDB
from lawncare_api.app.storage.base import Storage


logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    async def register(self, data: UserCreate) -> UserInDB:
        """Create a regular (non-admin) user.

        Raises ``DuplicateUsernameError`` if the username is taken; the
        existing user is left unchanged.
        """
        user = await self.storage.create_user(data.username, hash_password(data.password))
        logger.info("Registered user %s (id %s)", user.username, user.id)
        return user

    async def authenticate(self, username: str, password: str) -> UserInDB:
        """Return the user matching the credentials or raise ``AuthenticationError``."""
        user = await self.storage.get_user_by_username(username)
        if user is None or not verify_password(password, user.password):
            logger.warning("Failed login attempt for %s", username)
            raise AuthenticationError("Invalid credentials")
        return user

    async def get_user(self, user_id: int) -> Optional[UserInDB]:
        return await self.storage.get_user(user_id)

    async def ensure_admin(self, username: str, password: str) -> Optional[UserInDB]:
        """Seed the administrator account if it does not exist yet.

        Returns the created admin, or ``None`` when the username is
        already present (the existing record is not modified).
        """
        if await self.storage.get_user_by_username(username) is not None:
            logger.info("Admin bootstrap skipped: user %s already exists", username)
            return None
        try:
            admin = await self.storage.create_user(username, hash_password(password), is_admin=True)
        except DuplicateUsernameError:
            logger.info("Admin bootstrap skipped: user %s already exists", username)
            return None
        logger.info("Created administrator account %s (id %s)", admin.username, admin.id)
        return admin
