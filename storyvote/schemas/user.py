"""
Pydantic models for anonymous users.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

class AnonymousUserCreate(BaseModel):
    """Body of POST /api/users/anonymous."""
    fingerprint: str = Field(..., min_length=1, max_length=255)

class AnonymousUserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    first_seen: Optional[datetime] = None
    last_active: Optional[datetime] = None
