from uuid import uuid4
from sqlalchemy import Column, String, Date, DateTime, Integer, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship

from storyvote.models.base import Base, utc_now
from storyvote.models.custom_types import UUIDType

class Submission(Base):
    """
    A phrase submitted by an anonymous user for one session slot.

    Attributes:
        id (UUID): Primary key, automatically generated UUID
        phrase (str): Sanitized phrase text
        word_count (int): Number of words in the phrase
        session_date (date): Local date of the session slot
        session_time (int): Slot index (0=8am, 1=10am, 2=12pm, 3=2pm)
        anonymous_user_id (UUID): Author of the submission
        ip_hash (str): Salted hash of the submitting client's IP
        votes (int): Number of votes cast for this submission
        created_at (datetime): Creation timestamp

    Constraints:
        One submission per anonymous user per session slot.
    """
    __tablename__ = "submissions"
    __table_args__ = (
        UniqueConstraint(
            "anonymous_user_id", "session_date", "session_time",
            name="uq_submissions_user_session"
        ),
        Index("ix_submissions_session", "session_date", "session_time"),
    )

    id = Column(UUIDType, primary_key=True, default=uuid4)
    phrase = Column(String(300), nullable=False)
    word_count = Column(Integer, nullable=False)
    session_date = Column(Date, nullable=False)
    session_time = Column(Integer, nullable=False)
    anonymous_user_id = Column(UUIDType, ForeignKey("anonymous_users.id"), nullable=False)
    ip_hash = Column(String(64))
    votes = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    # Relationships
    anonymous_user = relationship("AnonymousUser", back_populates="submissions")
    vote_records = relationship("Vote", back_populates="submission")

    def __repr__(self):
        return f"<Submission {self.phrase!r} ({self.votes} votes)>"

class Vote(Base):
    """
    A vote for a submission, cast by an anonymous user in one session slot.

    Constraints:
        One vote per anonymous user per session slot.
    """
    __tablename__ = "votes"
    __table_args__ = (
        UniqueConstraint(
            "anonymous_user_id", "session_date", "session_time",
            name="uq_votes_user_session"
        ),
    )

    id = Column(UUIDType, primary_key=True, default=uuid4)
    submission_id = Column(UUIDType, ForeignKey("submissions.id"), nullable=False, index=True)
    anonymous_user_id = Column(UUIDType, ForeignKey("anonymous_users.id"), nullable=False)
    session_date = Column(Date, nullable=False)
    session_time = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    # Relationships
    submission = relationship("Submission", back_populates="vote_records")
    anonymous_user = relationship("AnonymousUser", back_populates="votes")

    def __repr__(self):
        return f"<Vote {self.id} -> {self.submission_id}>"
