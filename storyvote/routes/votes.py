"""
Router for vote endpoints.
This module handles API routes for:
- Checking whether a user already voted or submitted in a session slot
- Casting a vote
"""

import logging
from datetime import date, datetime, tzinfo
from uuid import UUID
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from storyvote.dependencies import get_now, get_rate_limiter, get_session_timezone
from storyvote.routes.common import enforce_rate_limit, ensure_session_open
from storyvote.schemas.submission import VoteCreate, VoteResponse
from storyvote.services.submission_service import SubmissionService
from storyvote.services.vote_service import VoteService
from storyvote.services.voting_session import SESSION_COUNT
from storyvote.utils.api_response import create_response
from storyvote.utils.config import Settings, get_settings
from storyvote.utils.database import get_db
from storyvote.utils.request_utils import RateLimiter, get_client_ip, hash_ip

router = APIRouter(
    prefix="/api/votes",
    tags=["votes"]
)

logger = logging.getLogger(__name__)

@router.get("")
async def get_participation_status(
    session_date: date = Query(..., alias="sessionDate"),
    session_time: int = Query(..., alias="sessionTime", ge=0, le=SESSION_COUNT - 1),
    anonymous_user_id: UUID = Query(..., alias="anonymousUserId"),
    db: AsyncSession = Depends(get_db)
):
    """Tell whether a user already voted and submitted in a session slot"""
    service = SubmissionService(db)
    participation = await service.participation_status(anonymous_user_id, session_date, session_time)
    return create_response(data=participation.model_dump(mode="json", by_alias=True))

@router.post("")
async def cast_vote(
    request: Request,
    vote: VoteCreate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    limiter: RateLimiter = Depends(get_rate_limiter),
    now: datetime = Depends(get_now),
    tz: tzinfo = Depends(get_session_timezone)
) -> JSONResponse:
    """Vote for a submission of the open session slot"""
    ensure_session_open(settings, vote.session_date, vote.session_time, now, tz)

    service = VoteService(db)
    await service.check_vote(vote)

    ip_hash = hash_ip(get_client_ip(request), settings.IP_SALT)
    enforce_rate_limit(limiter, settings, "vote", ip_hash, vote.session_date, vote.session_time)

    created = await service.cast_vote(vote)

    return create_response(
        data={"vote": VoteResponse.model_validate(created).model_dump(mode="json")},
        message="Vote cast successfully",
        status_code=status.HTTP_201_CREATED
    )
