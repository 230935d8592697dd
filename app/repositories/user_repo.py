"""
User Repository

Data access layer for User model.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.repositories.base import BaseRepository
from app.models import User


class UserRepository(BaseRepository[User]):
    """Repository for User model."""

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    # =================
    # Get by name
    # =================
    async def get_first_by_name(self, name: str) -> Optional[User]:
        """Oldest user with exactly this name, if any."""
        result = await self.db.execute(
            select(User)
            .where(User.name == name)
            .order_by(User.created_at, User.id)
            .limit(1)
        )
        return result.scalars().first()

    # =================
    # Create user
    # =================
    async def create_user(self, name: str) -> User:
        """Create a new user."""
        return await self.create(name=name)
