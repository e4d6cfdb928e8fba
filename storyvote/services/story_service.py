"""
Service for stories and their episodes.
This module handles the logic for:
- Finding the story in progress and listing stories
- Creating stories with sequential numbers
- Appending episodes with contiguous numbering
- Keeping story totals and the completion flag up to date
"""

import logging
from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from storyvote.exceptions import ConflictError, NotFoundError, StoryCompleteError
from storyvote.models.base import utc_now
from storyvote.models.story import Episode, Story
from storyvote.repositories.story import EpisodeRepository, StoryRepository
from storyvote.schemas.story import EpisodeCreate
from storyvote.services.story_progress import StoryStatus, build_story_status, has_reached_completion

logger = logging.getLogger(__name__)

class StoryService:
    """Service for managing stories and episodes."""

    def __init__(self, db_session: AsyncSession):
        """Initialize the service.

        Args:
            db_session: The database session
        """
        self.db_session = db_session
        self.stories = StoryRepository(db_session)
        self.episodes = EpisodeRepository(db_session)

    async def get_current_story(self) -> Optional[Story]:
        """The story in progress, or None."""
        return await self.stories.get_current()

    async def list_stories(self, include_completed: bool = False) -> List[Story]:
        return await self.stories.list_stories(include_completed)

    async def get_story(self, story_id: UUID) -> Story:
        """
        Get a story by id.

        Raises:
            NotFoundError: If the story does not exist
        """
        story = await self.stories.get_by_id(story_id)
        if story is None:
            raise NotFoundError("Story not found")
        return story

    async def create_story(self, title: Optional[str] = None) -> Story:
        """
        Create the next story.

        Args:
            title: Optional title, defaults to "Story #<number>"

        Returns:
            The created Story
        """
        story_number = await self.stories.get_max_story_number() + 1
        try:
            story = await self.stories.create({
                "story_number": story_number,
                "title": title or f"Story #{story_number}",
                "total_duration_seconds": 0,
                "episode_count": 0,
                "is_complete": False,
            })
            await self.db_session.commit()
        except IntegrityError as e:
            await self.db_session.rollback()
            logger.error(f"Story number {story_number} already taken: {str(e)}")
            raise ConflictError("Another story was created at the same time, please retry")

        logger.info(f"Created story #{story.story_number} ({story.id})")
        return story

    async def list_episodes(self, story_id: UUID, limit: Optional[int] = None) -> List[Episode]:
        return await self.episodes.list_for_story(story_id, limit)

    async def add_episode(self, data: EpisodeCreate) -> Episode:
        """
        Append an episode to a story.

        The episode gets number ``episode_count + 1``. The story's episode count
        and total duration are updated in the same transaction, and the story
        is marked complete once its total reaches the completion band.

        Args:
            data: Validated request body

        Returns:
            The created Episode

        Raises:
            NotFoundError: If the story does not exist
            StoryCompleteError: If the story is already complete
            ConflictError: If the episode number was taken concurrently
        """
        story = await self.get_story(data.story_id)
        if story.is_complete:
            raise StoryCompleteError("Cannot add episodes to completed story")

        episode_number = story.episode_count + 1
        duration = data.duration_seconds or 0

        try:
            episode = await self.episodes.create({
                "story_id": story.id,
                "episode_number": episode_number,
                "video_url": data.video_url,
                "duration_seconds": data.duration_seconds,
                "winning_phrase": data.winning_phrase,
                "story_prompt": data.story_prompt,
            })

            new_total = (story.total_duration_seconds or 0) + duration
            changes = {
                "episode_count": episode_number,
                "total_duration_seconds": new_total,
            }
            if has_reached_completion(new_total):
                changes["is_complete"] = True
                changes["completed_at"] = utc_now()
            await self.stories.update(story, changes)
            await self.db_session.commit()
        except IntegrityError as e:
            await self.db_session.rollback()
            logger.error(f"Episode {episode_number} of story {data.story_id} already exists: {str(e)}")
            raise ConflictError("Episode was added concurrently, please retry")

        logger.info(f"Added episode {episode_number} to story #{story.story_number} (total {new_total}s)")
        if story.is_complete:
            logger.info(f"Story #{story.story_number} completed at {new_total}s")
        return episode

    async def get_story_status(self, story: Optional[Story] = None) -> StoryStatus:
        """Progress summary of ``story``, or of the story in progress when omitted."""
        if story is None:
            story = await self.get_current_story()
        if story is None:
            return build_story_status(None)
        episodes = await self.episodes.list_for_story(story.id)
        return build_story_status(story, episodes)
