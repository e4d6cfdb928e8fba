"""
Repository for anonymous users.
"""

from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storyvote.repositories.base import BaseRepository
from storyvote.models.anonymous_user import AnonymousUser

class AnonymousUserRepository(BaseRepository[AnonymousUser]):

    def __init__(self, db: AsyncSession):
        super().__init__(db, AnonymousUser)

    async def get_by_fingerprint(self, fingerprint: str) -> Optional[AnonymousUser]:
        result = await self.db.execute(
            select(AnonymousUser).where(AnonymousUser.fingerprint == fingerprint)
        )
        return result.scalar_one_or_none()
