"""
Service for phrase submissions.
This module handles the logic for:
- Validating and storing a user's phrase for a session slot
- Listing the submissions of a slot in ranking order
- Picking the winning submission of a slot
- Reporting whether a user already submitted or voted in a slot
"""

import logging
from datetime import date
from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from storyvote.exceptions import ConflictError, InvalidRequestError, NotFoundError
from storyvote.models.submission import Submission
from storyvote.repositories.submission import SubmissionRepository, VoteRepository
from storyvote.schemas.submission import SubmissionCreate, ParticipationStatus
from storyvote.services.anonymous_user_service import AnonymousUserService
from storyvote.utils.validation import count_words, sanitize_phrase, validate_submission

logger = logging.getLogger(__name__)

class SubmissionService:
    """Service for managing submissions."""

    def __init__(self, db_session: AsyncSession):
        """Initialize the service.

        Args:
            db_session: The database session
        """
        self.db_session = db_session
        self.submissions = SubmissionRepository(db_session)
        self.votes = VoteRepository(db_session)
        self.users = AnonymousUserService(db_session)

    @staticmethod
    def check_phrase(raw_phrase: str) -> str:
        """
        Validate a phrase and return its sanitized form.

        Raises:
            InvalidRequestError: With every broken rule listed in ``details``
        """
        validation = validate_submission(raw_phrase)
        if not validation.is_valid:
            raise InvalidRequestError("Invalid phrase", details=validation.errors)

        # The stored text has to pass the same rules
        phrase = sanitize_phrase(raw_phrase)
        validation = validate_submission(phrase)
        if not validation.is_valid:
            raise InvalidRequestError("Invalid phrase", details=validation.errors)
        return phrase

    async def create_submission(self, data: SubmissionCreate, ip_hash: Optional[str] = None) -> Submission:
        """
        Store a user's phrase for a session slot.

        Args:
            data: Validated request body
            ip_hash: Salted hash of the client IP

        Returns:
            The created Submission

        Raises:
            InvalidRequestError: If the phrase breaks the phrase rules
            ConflictError: If the user already submitted in this slot
        """
        phrase = self.check_phrase(data.phrase)

        existing = await self.submissions.get_for_user(
            data.anonymous_user_id, data.session_date, data.session_time
        )
        if existing is not None:
            raise ConflictError("You have already submitted for this session")

        try:
            await self.users.ensure_exists(data.anonymous_user_id)
            submission = await self.submissions.create({
                "phrase": phrase,
                "word_count": count_words(phrase),
                "session_date": data.session_date,
                "session_time": data.session_time,
                "anonymous_user_id": data.anonymous_user_id,
                "ip_hash": ip_hash,
                "votes": 0,
            })
            await self.db_session.commit()
        except IntegrityError as e:
            await self.db_session.rollback()
            logger.warning(f"Duplicate submission for user {data.anonymous_user_id}: {str(e)}")
            raise ConflictError("You have already submitted for this session")

        logger.info(
            f"Created submission {submission.id} for session "
            f"{data.session_date.isoformat()}/{data.session_time}"
        )
        return submission

    async def list_for_session(self, session_date: date, session_time: int) -> List[Submission]:
        """Submissions of a slot, most voted first."""
        return await self.submissions.list_for_session(session_date, session_time)

    async def get_winner(self, session_date: date, session_time: int) -> Submission:
        """
        The winning submission of a slot: most votes, earliest on ties.

        Raises:
            NotFoundError: If nobody submitted in the slot
        """
        ranked = await self.submissions.list_for_session(session_date, session_time, limit=1)
        if not ranked:
            raise NotFoundError("No submissions for this session")
        return ranked[0]

    async def participation_status(self, anonymous_user_id: UUID, session_date: date,
                                   session_time: int) -> ParticipationStatus:
        """Whether the user already voted and/or submitted in the slot."""
        vote = await self.votes.get_for_user(anonymous_user_id, session_date, session_time)
        submission = await self.submissions.get_for_user(anonymous_user_id, session_date, session_time)
        return ParticipationStatus(
            has_voted=vote is not None,
            has_submitted=submission is not None,
            submission_id=submission.id if submission else None,
        )
