"""
Repositories for stories and episodes.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from storyvote.repositories.base import BaseRepository
from storyvote.models.story import Story, Episode

logger = logging.getLogger(__name__)

class StoryRepository(BaseRepository[Story]):
    """Story queries."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Story)

    async def get_current(self) -> Optional[Story]:
        """The most recently created story that is still in progress."""
        result = await self.db.execute(
            select(Story)
            .where(Story.is_complete == False)  # noqa: E712
            .order_by(Story.created_at.desc(), Story.story_number.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_stories(self, include_completed: bool = False) -> List[Story]:
        """Stories by number, newest first."""
        stmt = select(Story).order_by(Story.story_number.desc())
        if not include_completed:
            stmt = stmt.where(Story.is_complete == False)  # noqa: E712
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_max_story_number(self) -> int:
        result = await self.db.execute(select(func.max(Story.story_number)))
        return result.scalar() or 0

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(Story))
        return result.scalar() or 0

class EpisodeRepository(BaseRepository[Episode]):
    """Episode queries."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Episode)

    async def list_for_story(self, story_id: UUID, limit: Optional[int] = None) -> List[Episode]:
        """Episodes of a story in episode order."""
        stmt = (
            select(Episode)
            .where(Episode.story_id == story_id)
            .order_by(Episode.episode_number.asc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
