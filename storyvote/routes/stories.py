"""
Router for story endpoints.
This module handles API routes for:
- Listing stories
- Getting the story in progress and its progress summary
- Creating stories (admin only)
"""

import logging
from uuid import UUID
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from storyvote.schemas.story import (
    CompletionStageResponse,
    EpisodeResponse,
    StoryCreate,
    StoryResponse,
    StoryStatusResponse,
)
from storyvote.services.story_progress import StoryStatus, format_duration
from storyvote.services.story_service import StoryService
from storyvote.utils.api_response import create_response
from storyvote.utils.auth import verify_admin_key
from storyvote.utils.config import Settings, get_settings
from storyvote.utils.database import get_db

router = APIRouter(
    prefix="/api/stories",
    tags=["stories"]
)

logger = logging.getLogger(__name__)

def serialize_story(story) -> dict:
    return StoryResponse.model_validate(story).model_dump(mode="json")

def serialize_status(story_status: StoryStatus) -> dict:
    """Turn a StoryStatus into the JSON-ready response body."""
    response = StoryStatusResponse(
        current_story=(
            StoryResponse.model_validate(story_status.current_story)
            if story_status.current_story is not None else None
        ),
        episodes=[EpisodeResponse.model_validate(e) for e in story_status.episodes],
        should_complete=story_status.should_complete,
        next_episode_number=story_status.next_episode_number,
        total_duration=story_status.total_duration,
        formatted_duration=format_duration(story_status.total_duration),
        progress_percentage=round(story_status.progress_percentage, 2),
        stage=CompletionStageResponse.model_validate(story_status.stage),
    )
    return response.model_dump(mode="json")

@router.get("")
async def list_stories(
    include_completed: bool = Query(False, alias="includeCompleted"),
    db: AsyncSession = Depends(get_db)
):
    """List stories, newest first; in-progress only unless includeCompleted is set"""
    service = StoryService(db)
    stories = await service.list_stories(include_completed)
    return create_response(data={"stories": [serialize_story(s) for s in stories]})

@router.get("/current")
async def get_current_story(db: AsyncSession = Depends(get_db)):
    """Get the story in progress (null when there is none)"""
    service = StoryService(db)
    story = await service.get_current_story()
    # success_response drops a None payload, so build the body explicitly
    return JSONResponse(content={
        "success": True,
        "data": {"story": serialize_story(story) if story is not None else None}
    })

@router.get("/current/status")
async def get_current_story_status(db: AsyncSession = Depends(get_db)):
    """Get the progress summary of the story in progress"""
    service = StoryService(db)
    story_status = await service.get_story_status()
    return create_response(data=serialize_status(story_status))

@router.get("/{story_id}")
async def get_story(story_id: UUID, db: AsyncSession = Depends(get_db)):
    """Get a story by id"""
    service = StoryService(db)
    story = await service.get_story(story_id)
    return create_response(data={"story": serialize_story(story)})

@router.get("/{story_id}/status")
async def get_story_status(story_id: UUID, db: AsyncSession = Depends(get_db)):
    """Get the progress summary of any story"""
    service = StoryService(db)
    story = await service.get_story(story_id)
    story_status = await service.get_story_status(story)
    return create_response(data=serialize_status(story_status))

@router.post("")
async def create_story(
    request: Request,
    story: StoryCreate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> JSONResponse:
    """Create the next story (admin only)"""
    verify_admin_key(request, story.admin_key, settings.ADMIN_API_KEY)

    service = StoryService(db)
    created = await service.create_story(story.title)

    return create_response(
        data={"story": serialize_story(created)},
        message="Story created successfully",
        status_code=status.HTTP_201_CREATED
    )
