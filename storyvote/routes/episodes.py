"""
Router for episode endpoints.
This module handles API routes for:
- Listing the episodes of a story
- Appending a generated episode to a story (admin only)
"""

import logging
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from storyvote.routes.stories import serialize_story
from storyvote.schemas.story import EpisodeCreate, EpisodeResponse
from storyvote.services.story_service import StoryService
from storyvote.utils.api_response import create_response
from storyvote.utils.auth import verify_admin_key
from storyvote.utils.config import Settings, get_settings
from storyvote.utils.database import get_db

router = APIRouter(
    prefix="/api/episodes",
    tags=["episodes"]
)

logger = logging.getLogger(__name__)

@router.get("")
async def list_episodes(
    story_id: UUID = Query(..., alias="storyId"),
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: AsyncSession = Depends(get_db)
):
    """List the episodes of a story in order"""
    service = StoryService(db)
    episodes = await service.list_episodes(story_id, limit)
    return create_response(data={
        "episodes": [EpisodeResponse.model_validate(e).model_dump(mode="json") for e in episodes]
    })

@router.post("")
async def create_episode(
    request: Request,
    episode: EpisodeCreate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> JSONResponse:
    """Append a generated episode to a story (admin only)"""
    verify_admin_key(request, episode.admin_key, settings.ADMIN_API_KEY)

    service = StoryService(db)
    created = await service.add_episode(episode)
    story = await service.get_story(episode.story_id)

    return create_response(
        data={
            "episode": EpisodeResponse.model_validate(created).model_dump(mode="json"),
            "story": serialize_story(story),
        },
        message="Episode created successfully",
        status_code=status.HTTP_201_CREATED
    )
