"""
Request and response models for the API.
"""

from storyvote.schemas.submission import (
    SubmissionCreate,
    SubmissionResponse,
    VoteCreate,
    VoteResponse,
    ParticipationStatus,
)
from storyvote.schemas.story import (
    StoryCreate,
    StoryResponse,
    EpisodeCreate,
    EpisodeResponse,
    StoryStatusResponse,
)
from storyvote.schemas.user import AnonymousUserCreate, AnonymousUserResponse

__all__ = [
    'SubmissionCreate', 'SubmissionResponse', 'VoteCreate', 'VoteResponse',
    'ParticipationStatus', 'StoryCreate', 'StoryResponse', 'EpisodeCreate',
    'EpisodeResponse', 'StoryStatusResponse', 'AnonymousUserCreate',
    'AnonymousUserResponse',
]
