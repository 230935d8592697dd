"""
Identity Service

Maps a display name to a stable user identity. There is no
authentication: the oldest user with an exactly matching name is
reused, otherwise a new one is created.
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, ValidationError, translate_storage_errors
from app.models.user import User
from app.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)


class IdentityService:
    """Service for resolving display names to users."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repo = UserRepository(db)

    @translate_storage_errors("resolve identity")
    async def resolve(self, name: str) -> User:
        """
        Get the user with this name, creating it on first use.

        Args:
            name: Display name; surrounding whitespace is ignored

        Raises:
            ValidationError: If the name is blank
            StorageUnavailableError: If the store cannot be reached
        """
        name = name.strip()
        if not name:
            raise ValidationError("Please enter a name to continue", field="name")

        user = await self.user_repo.get_first_by_name(name)
        if user:
            return user

        user = await self.user_repo.create_user(name)
        logger.info(f"Created user {user.id} for name {name!r}")
        return user

    @translate_storage_errors("load user")
    async def get_user(self, user_id: UUID) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found", entity="user", id=str(user_id))
        return user
