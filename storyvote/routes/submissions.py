"""
Router for submission endpoints.
This module handles API routes for:
- Listing the submissions of a session slot
- Getting the winning submission of a slot
- Submitting a phrase
"""

import logging
from datetime import date, datetime, tzinfo
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from storyvote.dependencies import get_now, get_rate_limiter, get_session_timezone
from storyvote.routes.common import enforce_rate_limit, ensure_session_open
from storyvote.schemas.submission import SubmissionCreate, SubmissionResponse
from storyvote.services.submission_service import SubmissionService
from storyvote.services.voting_session import SESSION_COUNT
from storyvote.utils.api_response import create_response
from storyvote.utils.config import Settings, get_settings
from storyvote.utils.database import get_db
from storyvote.utils.request_utils import RateLimiter, get_client_ip, hash_ip

router = APIRouter(
    prefix="/api/submissions",
    tags=["submissions"]
)

logger = logging.getLogger(__name__)

def _serialize(submission) -> dict:
    return SubmissionResponse.model_validate(submission).model_dump(mode="json")

@router.get("")
async def list_submissions(
    session_date: date = Query(..., alias="sessionDate", description="Session date (YYYY-MM-DD)"),
    session_time: int = Query(..., alias="sessionTime", ge=0, le=SESSION_COUNT - 1,
                              description="Session slot index"),
    db: AsyncSession = Depends(get_db)
):
    """List the submissions of a session slot, most voted first"""
    service = SubmissionService(db)
    submissions = await service.list_for_session(session_date, session_time)
    return create_response(data={"submissions": [_serialize(s) for s in submissions]})

@router.get("/winner")
async def get_winning_submission(
    session_date: date = Query(..., alias="sessionDate"),
    session_time: int = Query(..., alias="sessionTime", ge=0, le=SESSION_COUNT - 1),
    db: AsyncSession = Depends(get_db)
):
    """Get the submission currently winning a session slot"""
    service = SubmissionService(db)
    winner = await service.get_winner(session_date, session_time)
    return create_response(data={"submission": _serialize(winner)})

@router.post("")
async def create_submission(
    request: Request,
    submission: SubmissionCreate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    limiter: RateLimiter = Depends(get_rate_limiter),
    now: datetime = Depends(get_now),
    tz: tzinfo = Depends(get_session_timezone)
) -> JSONResponse:
    """Submit a phrase for the open session slot"""
    SubmissionService.check_phrase(submission.phrase)
    ensure_session_open(settings, submission.session_date, submission.session_time, now, tz)

    ip_hash = hash_ip(get_client_ip(request), settings.IP_SALT)
    enforce_rate_limit(limiter, settings, "submission", ip_hash,
                       submission.session_date, submission.session_time)

    service = SubmissionService(db)
    created = await service.create_submission(submission, ip_hash=ip_hash)

    return create_response(
        data={"submission": _serialize(created)},
        message="Submission created successfully",
        status_code=status.HTTP_201_CREATED
    )
