"""
Service for pseudonymous identities.
"""

import logging
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from storyvote.models.anonymous_user import AnonymousUser
from storyvote.models.base import utc_now
from storyvote.repositories.anonymous_user import AnonymousUserRepository

logger = logging.getLogger(__name__)

class AnonymousUserService:
    """Creates and refreshes anonymous users."""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session
        self.users = AnonymousUserRepository(db_session)

    async def register(self, fingerprint: str) -> AnonymousUser:
        """
        Upsert an anonymous user by browser fingerprint.

        The same fingerprint always maps to the same id; ``last_active`` is
        refreshed on every call.

        Args:
            fingerprint: Visitor id computed by the client

        Returns:
            The stored AnonymousUser
        """
        user = await self.users.get_by_fingerprint(fingerprint)
        if user is not None:
            user.last_active = utc_now()
            await self.db_session.commit()
            return user

        try:
            user = await self.users.create({"fingerprint": fingerprint})
            await self.db_session.commit()
        except IntegrityError:
            # Another request registered the same fingerprint first
            await self.db_session.rollback()
            user = await self.users.get_by_fingerprint(fingerprint)
            if user is None:
                raise
        logger.info(f"Registered anonymous user {user.id}")
        return user

    async def ensure_exists(self, user_id: UUID) -> AnonymousUser:
        """
        Load an anonymous user by id, creating it when unknown.

        Clients fall back to a random id when fingerprinting fails, so an
        unknown id is not an error. The change is flushed, not committed.
        """
        user = await self.users.get_by_id(user_id)
        if user is None:
            logger.info(f"Creating anonymous user for unregistered id {user_id}")
            return await self.users.create({"id": user_id})
        user.last_active = utc_now()
        await self.db_session.flush()
        return user
