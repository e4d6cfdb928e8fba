"""
Service for casting votes on submissions.
"""

import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from storyvote.exceptions import ConflictError, InvalidRequestError, NotFoundError
from storyvote.models.submission import Submission, Vote
from storyvote.repositories.submission import SubmissionRepository, VoteRepository
from storyvote.schemas.submission import VoteCreate
from storyvote.services.anonymous_user_service import AnonymousUserService

logger = logging.getLogger(__name__)

class VoteService:
    """Service for managing votes."""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session
        self.submissions = SubmissionRepository(db_session)
        self.votes = VoteRepository(db_session)
        self.users = AnonymousUserService(db_session)

    async def check_vote(self, data: VoteCreate) -> Submission:
        """
        Check that a vote may be cast, without writing anything.

        Args:
            data: Validated request body

        Returns:
            The submission being voted for

        Raises:
            NotFoundError: If the submission does not exist
            InvalidRequestError: If the user votes for their own submission, or
                the submission belongs to another session slot
            ConflictError: If the user already voted in this slot
        """
        submission = await self.submissions.get_by_id(data.submission_id)
        if submission is None:
            raise NotFoundError("Submission not found")

        if submission.anonymous_user_id == data.anonymous_user_id:
            raise InvalidRequestError("Cannot vote on your own submission")

        if submission.session_date != data.session_date or submission.session_time != data.session_time:
            raise InvalidRequestError("Invalid submission for this session")

        existing = await self.votes.get_for_user(
            data.anonymous_user_id, data.session_date, data.session_time
        )
        if existing is not None:
            raise ConflictError("You have already voted in this session")

        return submission

    async def cast_vote(self, data: VoteCreate) -> Vote:
        """
        Record a vote and add it to the submission's count.

        The vote insert and the count update are committed together.

        Args:
            data: Validated request body

        Returns:
            The created Vote

        Raises:
            NotFoundError, InvalidRequestError, ConflictError: See ``check_vote``
        """
        await self.check_vote(data)

        try:
            await self.users.ensure_exists(data.anonymous_user_id)
            vote = await self.votes.create({
                "submission_id": data.submission_id,
                "anonymous_user_id": data.anonymous_user_id,
                "session_date": data.session_date,
                "session_time": data.session_time,
            })
            await self.submissions.increment_votes(data.submission_id)
            await self.db_session.commit()
        except IntegrityError as e:
            await self.db_session.rollback()
            logger.warning(f"Duplicate vote for user {data.anonymous_user_id}: {str(e)}")
            raise ConflictError("You have already voted in this session")

        logger.info(f"Vote {vote.id} cast for submission {data.submission_id}")
        return vote
