"""
Router for anonymous user registration.
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storyvote.schemas.user import AnonymousUserCreate, AnonymousUserResponse
from storyvote.services.anonymous_user_service import AnonymousUserService
from storyvote.utils.api_response import create_response
from storyvote.utils.database import get_db

router = APIRouter(
    prefix="/api/users",
    tags=["users"]
)

logger = logging.getLogger(__name__)

@router.post("/anonymous")
async def register_anonymous_user(
    payload: AnonymousUserCreate,
    db: AsyncSession = Depends(get_db)
):
    """Get or create the anonymous user for a browser fingerprint"""
    service = AnonymousUserService(db)
    user = await service.register(payload.fingerprint)
    return create_response(data={"user": AnonymousUserResponse.model_validate(user).model_dump(mode="json")})
