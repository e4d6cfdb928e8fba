"""
Demo data for local development.

Seeds one in-progress story with three sample episodes so the web client has
something to play before the episode generator has run.
"""

import logging
from datetime import timedelta
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from storyvote.models.base import utc_now
from storyvote.models.story import Episode, Story
from storyvote.repositories.story import StoryRepository

logger = logging.getLogger(__name__)

SAMPLE_VIDEO_BASE = "https://commondatastorage.googleapis.com/gtv-videos-bucket/sample"

DEMO_STORY_TITLE = "The Enchanted Garden"

DEMO_EPISODES = [
    {
        "video": "BigBuckBunny.mp4",
        "winning_phrase": "magical butterfly garden",
        "story_prompt": "A magical butterfly garden filled with colorful flowers and sparkling fairy dust",
    },
    {
        "video": "ElephantsDream.mp4",
        "winning_phrase": "dancing fairy",
        "story_prompt": "A graceful fairy appears among the flowers, dancing in the moonlight",
    },
    {
        "video": "ForBiggerBlazes.mp4",
        "winning_phrase": "mysterious door",
        "story_prompt": "The fairy discovers a mysterious glowing door hidden behind the ancient rose bushes",
    },
]

DEMO_EPISODE_SECONDS = 20


async def seed_demo_data(db_session: AsyncSession) -> Optional[Story]:
    """
    Insert the demo story when the database has no stories yet.

    Args:
        db_session: The database session

    Returns:
        The created Story, or None when stories already exist
    """
    stories = StoryRepository(db_session)
    if await stories.count() > 0:
        logger.info("Stories already present, skipping demo data")
        return None

    now = utc_now()
    story = Story(
        story_number=1,
        title=DEMO_STORY_TITLE,
        total_duration_seconds=DEMO_EPISODE_SECONDS * len(DEMO_EPISODES),
        episode_count=len(DEMO_EPISODES),
        is_complete=False,
        created_at=now - timedelta(days=len(DEMO_EPISODES) + 1),
    )
    db_session.add(story)
    await db_session.flush()

    for number, sample in enumerate(DEMO_EPISODES, start=1):
        db_session.add(Episode(
            story_id=story.id,
            episode_number=number,
            video_url=f"{SAMPLE_VIDEO_BASE}/{sample['video']}",
            duration_seconds=DEMO_EPISODE_SECONDS,
            winning_phrase=sample["winning_phrase"],
            story_prompt=sample["story_prompt"],
            created_at=now - timedelta(days=len(DEMO_EPISODES) - number + 1),
        ))

    await db_session.commit()
    logger.info(f"Seeded demo story '{DEMO_STORY_TITLE}' with {len(DEMO_EPISODES)} episodes")
    return story
