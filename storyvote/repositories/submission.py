"""
Repositories for submissions and votes.
"""

from datetime import date
from typing import List, Optional
from uuid import UUID
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from storyvote.repositories.base import BaseRepository
from storyvote.models.submission import Submission, Vote

logger = logging.getLogger(__name__)

class SubmissionRepository(BaseRepository[Submission]):
    """Queries over submissions, always scoped to a session slot."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Submission)

    async def list_for_session(self, session_date: date, session_time: int,
                               limit: Optional[int] = None) -> List[Submission]:
        """
        Submissions of a slot, most voted first, earliest first on ties.

        Args:
            session_date (date): Slot date
            session_time (int): Slot index
            limit (Optional[int]): Maximum number of records to return

        Returns:
            List[Submission]: Ordered submissions
        """
        stmt = (
            select(Submission)
            .where(
                Submission.session_date == session_date,
                Submission.session_time == session_time
            )
            .order_by(Submission.votes.desc(), Submission.created_at.asc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_for_user(self, anonymous_user_id: UUID, session_date: date,
                           session_time: int) -> Optional[Submission]:
        result = await self.db.execute(
            select(Submission).where(
                Submission.anonymous_user_id == anonymous_user_id,
                Submission.session_date == session_date,
                Submission.session_time == session_time
            )
        )
        return result.scalar_one_or_none()

    async def increment_votes(self, submission_id: UUID) -> None:
        """Add one vote to the stored count in a single UPDATE statement."""
        await self.db.execute(
            update(Submission)
            .where(Submission.id == submission_id)
            .values(votes=Submission.votes + 1)
        )

class VoteRepository(BaseRepository[Vote]):
    """Queries over votes."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Vote)

    async def get_for_user(self, anonymous_user_id: UUID, session_date: date,
                           session_time: int) -> Optional[Vote]:
        result = await self.db.execute(
            select(Vote).where(
                Vote.anonymous_user_id == anonymous_user_id,
                Vote.session_date == session_date,
                Vote.session_time == session_time
            )
        )
        return result.scalar_one_or_none()
