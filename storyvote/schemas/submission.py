"""
Pydantic models for submissions and votes.

Request bodies use the camelCase names the web client sends; responses use
the snake_case column names.
"""

import re
from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storyvote.services.voting_session import SESSION_COUNT

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")

class SessionSlot(BaseModel):
    """Session slot fields shared by the request bodies."""
    model_config = ConfigDict(populate_by_name=True)

    session_date: date = Field(..., alias="sessionDate")
    session_time: int = Field(..., alias="sessionTime", ge=0, le=SESSION_COUNT - 1)

    @field_validator("session_date", mode="before")
    @classmethod
    def _iso_date_only(cls, value):
        if isinstance(value, date) and not isinstance(value, datetime):
            return value
        if not isinstance(value, str) or not _ISO_DATE.fullmatch(value):
            raise ValueError("sessionDate must be formatted as YYYY-MM-DD")
        return value

class SubmissionCreate(SessionSlot):
    """Body of POST /api/submissions."""
    phrase: str
    anonymous_user_id: UUID = Field(..., alias="anonymousUserId")

class VoteCreate(SessionSlot):
    """Body of POST /api/votes."""
    submission_id: UUID = Field(..., alias="submissionId")
    anonymous_user_id: UUID = Field(..., alias="anonymousUserId")

class SubmissionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    phrase: str
    word_count: int
    session_date: date
    session_time: int
    anonymous_user_id: UUID
    votes: int
    created_at: Optional[datetime] = None

class VoteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    submission_id: UUID
    anonymous_user_id: UUID
    session_date: date
    session_time: int
    created_at: Optional[datetime] = None

class ParticipationStatus(BaseModel):
    """Whether an anonymous user already took part in a session slot."""
    has_voted: bool = Field(False, serialization_alias="hasVoted")
    has_submitted: bool = Field(False, serialization_alias="hasSubmitted")
    submission_id: Optional[UUID] = Field(None, serialization_alias="submissionId")
