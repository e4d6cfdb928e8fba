"""
Pydantic models for stories and episodes.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

class AdminRequest(BaseModel):
    """Body fields shared by admin-only endpoints."""
    model_config = ConfigDict(populate_by_name=True)

    admin_key: Optional[str] = Field(None, alias="adminKey")

class StoryCreate(AdminRequest):
    """Body of POST /api/stories."""
    title: Optional[str] = Field(None, max_length=200)

class EpisodeCreate(AdminRequest):
    """Body of POST /api/episodes."""
    story_id: UUID = Field(..., alias="storyId")
    winning_phrase: str = Field(..., alias="winningPhrase", min_length=1)
    video_url: Optional[str] = Field(None, alias="videoUrl")
    duration_seconds: Optional[int] = Field(None, alias="durationSeconds", ge=0)
    story_prompt: Optional[str] = Field(None, alias="storyPrompt")

class StoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    story_number: int
    title: Optional[str] = None
    total_duration_seconds: int
    episode_count: int
    is_complete: bool
    completed_at: Optional[datetime] = None
    full_video_url: Optional[str] = None
    created_at: Optional[datetime] = None

class EpisodeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    story_id: UUID
    episode_number: int
    video_url: Optional[str] = None
    duration_seconds: Optional[int] = None
    winning_phrase: Optional[str] = None
    story_prompt: Optional[str] = None
    created_at: Optional[datetime] = None

class CompletionStageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status: str
    message: str

class StoryStatusResponse(BaseModel):
    """Progress summary of the story in progress."""
    model_config = ConfigDict(from_attributes=True)

    current_story: Optional[StoryResponse] = None
    episodes: List[EpisodeResponse] = []
    should_complete: bool
    next_episode_number: int
    total_duration: int
    formatted_duration: str
    progress_percentage: float
    stage: CompletionStageResponse
