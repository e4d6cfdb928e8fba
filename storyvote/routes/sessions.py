"""
Router for voting session information.
"""

from datetime import datetime, tzinfo
from fastapi import APIRouter, Depends

from storyvote.dependencies import get_now, get_session_timezone
from storyvote.services.voting_session import get_session_status
from storyvote.utils.api_response import create_response

router = APIRouter(
    prefix="/api/sessions",
    tags=["sessions"]
)

@router.get("/status")
async def session_status(
    now: datetime = Depends(get_now),
    tz: tzinfo = Depends(get_session_timezone)
):
    """Current and next session slots with countdowns"""
    return create_response(data=get_session_status(now, tz).to_dict())
