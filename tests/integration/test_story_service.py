"""
Integration tests for the story service and the demo data seed.
"""

from uuid import uuid4

import pytest

from storyvote.exceptions import NotFoundError, StoryCompleteError
from storyvote.models import Episode
from storyvote.repositories.story import EpisodeRepository
from storyvote.schemas.story import EpisodeCreate
from storyvote.services.story_service import StoryService
from storyvote.utils.seed import DEMO_STORY_TITLE, seed_demo_data


def episode_data(story, seconds, phrase="a winning phrase"):
    return EpisodeCreate(
        story_id=story.id,
        winning_phrase=phrase,
        video_url="https://videos.example/episode.mp4",
        duration_seconds=seconds,
        story_prompt="A prompt",
    )


@pytest.mark.asyncio
async def test_story_numbers_are_sequential(db_session):
    service = StoryService(db_session)

    first = await service.create_story("The Beginning")
    second = await service.create_story()

    assert first.story_number == 1
    assert first.title == "The Beginning"
    assert second.story_number == 2
    assert second.title == "Story #2"
    assert second.episode_count == 0
    assert second.total_duration_seconds == 0
    assert not second.is_complete


@pytest.mark.asyncio
async def test_current_story_is_newest_in_progress(db_session):
    service = StoryService(db_session)
    assert await service.get_current_story() is None

    await service.create_story()
    newest = await service.create_story()

    current = await service.get_current_story()
    assert current.id == newest.id


@pytest.mark.asyncio
async def test_add_episode_numbers_and_totals(db_session):
    service = StoryService(db_session)
    story = await service.create_story()

    first = await service.add_episode(episode_data(story, 30))
    second = await service.add_episode(episode_data(story, 45))
    third = await service.add_episode(episode_data(story, None))

    assert [first.episode_number, second.episode_number, third.episode_number] == [1, 2, 3]
    assert story.episode_count == 3
    assert story.total_duration_seconds == 75
    assert not story.is_complete

    episodes = await service.list_episodes(story.id)
    assert [e.episode_number for e in episodes] == [1, 2, 3]
    limited = await service.list_episodes(story.id, limit=2)
    assert [e.episode_number for e in limited] == [1, 2]


@pytest.mark.asyncio
async def test_story_completes_once_band_is_reached(db_session):
    service = StoryService(db_session)
    story = await service.create_story()

    await service.add_episode(episode_data(story, 200))
    await service.add_episode(episode_data(story, 200))
    assert not story.is_complete
    assert story.completed_at is None

    await service.add_episode(episode_data(story, 30))
    assert story.total_duration_seconds == 430
    assert story.is_complete
    assert story.completed_at is not None

    with pytest.raises(StoryCompleteError):
        await service.add_episode(episode_data(story, 10))

    assert await service.get_current_story() is None
    assert [s.id for s in await service.list_stories(include_completed=True)] == [story.id]
    assert await service.list_stories() == []


@pytest.mark.asyncio
async def test_overshooting_episode_completes_story(db_session):
    service = StoryService(db_session)
    story = await service.create_story()

    await service.add_episode(episode_data(story, 600))

    assert story.is_complete
    assert story.total_duration_seconds == 600


@pytest.mark.asyncio
async def test_add_episode_to_unknown_story(db_session):
    service = StoryService(db_session)
    data = EpisodeCreate(story_id=uuid4(), winning_phrase="lost", duration_seconds=10)

    with pytest.raises(NotFoundError):
        await service.add_episode(data)


@pytest.mark.asyncio
async def test_get_story_unknown(db_session):
    with pytest.raises(NotFoundError):
        await StoryService(db_session).get_story(uuid4())


@pytest.mark.asyncio
async def test_story_status(db_session):
    service = StoryService(db_session)
    story = await service.create_story()
    await service.add_episode(episode_data(story, 100))
    await service.add_episode(episode_data(story, 50))

    status = await service.get_story_status()

    assert status.current_story.id == story.id
    assert status.total_duration == 150
    assert status.next_episode_number == 3
    assert len(status.episodes) == 2
    assert status.stage.status == "growing"
    assert not status.should_complete


@pytest.mark.asyncio
async def test_story_status_without_story(db_session):
    status = await StoryService(db_session).get_story_status()
    assert status.current_story is None
    assert status.next_episode_number == 1


@pytest.mark.asyncio
async def test_seed_demo_data_runs_once(db_session):
    story = await seed_demo_data(db_session)

    assert story.story_number == 1
    assert story.title == DEMO_STORY_TITLE
    assert story.episode_count == 3
    assert story.total_duration_seconds == 60

    episodes = await EpisodeRepository(db_session).list_for_story(story.id)
    assert [e.episode_number for e in episodes] == [1, 2, 3]
    assert all(isinstance(e, Episode) and e.video_url for e in episodes)

    assert await seed_demo_data(db_session) is None

    # the next story continues the numbering
    next_story = await StoryService(db_session).create_story()
    assert next_story.story_number == 2
