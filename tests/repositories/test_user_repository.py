"""
Unit tests for UserRepository
"""
import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vidmeta.database.models.user import User
from vidmeta.database.repositories.user_repository import UserRepository


class TestUserRepository:
    """Tests for UserRepository"""

    async def test_create_user_success(self, test_db: AsyncSession, security):
        """Test successful user creation"""
        repo = UserRepository(test_db)

        user = await repo.create(
            email="newuser@example.com",
            hashed_password=security.hash_password("Password123"),
            name="New",
        )

        assert user.id is not None
        assert user.email == "newuser@example.com"
        assert user.name == "New"
        assert user.created_at is not None
        assert security.verify_password("Password123", user.hashed_password)

    async def test_get_by_email_success(self, test_db: AsyncSession, test_user: User):
        """Test getting user by email"""
        repo = UserRepository(test_db)

        user = await repo.get_by_email(test_user.email)

        assert user is not None
        assert user.id == test_user.id

    async def test_get_by_email_not_found(self, test_db: AsyncSession):
        """Test getting non-existent user by email"""
        repo = UserRepository(test_db)

        assert await repo.get_by_email("nobody@example.com") is None

    async def test_get_by_id_not_found(self, test_db: AsyncSession):
        repo = UserRepository(test_db)

        assert await repo.get_by_id(99999) is None

    async def test_email_is_unique(self, test_db: AsyncSession, test_user: User):
        repo = UserRepository(test_db)

        with pytest.raises(IntegrityError):
            await repo.create(email=test_user.email, hashed_password="x")

