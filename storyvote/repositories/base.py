"""
Base repository pattern implementation for database operations.

This module provides a generic async repository that specific model
repositories extend with their own queries. Repositories only stage changes
(add + flush); committing is left to the calling service so several writes
can share one transaction.
"""

from typing import List, Optional, Dict, Any, TypeVar, Generic, Type
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from storyvote.models.base import Base

# Type variable for the model
T = TypeVar('T', bound=Base)

logger = logging.getLogger(__name__)

class BaseRepository(Generic[T]):
    """
    Generic repository for database operations.

    Attributes:
        db (AsyncSession): SQLAlchemy database session
        model (Type[T]): SQLAlchemy model class
    """

    def __init__(self, db: AsyncSession, model: Type[T]):
        """
        Initialize the repository with a database session and model class.

        Args:
            db (AsyncSession): SQLAlchemy database session
            model (Type[T]): SQLAlchemy model class
        """
        self.db = db
        self.model = model

    async def get_by_id(self, id: Any) -> Optional[T]:
        """
        Get a record by ID.

        Args:
            id (Any): Primary key value

        Returns:
            Optional[T]: Model instance if found, None otherwise
        """
        result = await self.db.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def create(self, data: Dict[str, Any]) -> T:
        """
        Stage a new record and flush it so defaults and constraints apply.

        Args:
            data (Dict[str, Any]): Dictionary of field values

        Returns:
            T: Created model instance
        """
        db_item = self.model(**data)
        self.db.add(db_item)
        await self.db.flush()
        return db_item

    async def update(self, db_item: T, data: Dict[str, Any]) -> T:
        """
        Apply field values to a loaded record and flush.

        Args:
            db_item (T): Instance to update
            data (Dict[str, Any]): Dictionary of field values to update

        Returns:
            T: Updated model instance
        """
        for key, value in data.items():
            if hasattr(db_item, key):
                setattr(db_item, key, value)
        await self.db.flush()
        return db_item
