"""
Base repository for common database operations
"""
from typing import Generic, TypeVar, Optional, Type, Any

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from vidmeta.database.models.base import BaseModel

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """
    Base repository with CRUD operations

    Provides common database operations for all models.
    """

    def __init__(self, model: Type[T], session: AsyncSession):
        """
        Initialize repository with model and session

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    async def create(self, **kwargs: Any) -> T:
        """
        Create a new record

        Args:
            **kwargs: Model field values

        Returns:
            Created model instance
        """
        obj = self.model(**kwargs)
        self.session.add(obj)
        await self.session.flush()
        return obj

    async def get_by_id(self, id: int) -> Optional[T]:
        """
        Get record by ID

        Args:
            id: Record ID

        Returns:
            Model instance or None if not found
        """
        stmt = select(self.model).where(self.model.id == id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete(self, obj: T) -> bool:
        """
        Delete a record

        Args:
            obj: Model instance to delete

        Returns:
            True if deleted successfully
        """
        await self.session.delete(obj)
        await self.session.flush()
        return True
