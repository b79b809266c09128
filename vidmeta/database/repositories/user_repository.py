"""
User repository for user-related database operations
"""
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from vidmeta.database.repositories.base import BaseRepository
from vidmeta.database.models.user import User


class UserRepository(BaseRepository[User]):
    """
    Repository for User model operations
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize UserRepository

        Args:
            session: Async database session
        """
        super().__init__(User, session)

    async def create(
        self,
        email: str,
        hashed_password: str,
        name: Optional[str] = None,
    ) -> User:
        """
        Create a new user

        Args:
            email: Email address
            hashed_password: Already hashed password
            name: Optional display name

        Returns:
            Created user instance
        """
        return await super().create(
            email=email,
            hashed_password=hashed_password,
            name=name,
        )

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email

        Args:
            email: Email address

        Returns:
            User instance or None if not found
        """
        stmt = select(User).where(User.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
