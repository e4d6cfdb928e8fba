from uuid import uuid4
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from storyvote.models.base import Base, utc_now
from storyvote.models.custom_types import UUIDType

class AnonymousUser(Base):
    """
    Pseudonymous identity derived from a browser fingerprint.

    No account, no credentials: the id is only used to enforce one submission
    and one vote per session slot.

    Attributes:
        id (UUID): Primary key, automatically generated UUID
        fingerprint (str): Browser fingerprint the client reported (unique, nullable
            for ids the client generated itself)
        first_seen (datetime): When the identity was first recorded
        last_active (datetime): Last time the identity was used
    """
    __tablename__ = "anonymous_users"

    id = Column(UUIDType, primary_key=True, default=uuid4)
    fingerprint = Column(String, unique=True, nullable=True)
    first_seen = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    last_active = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    # Relationships
    submissions = relationship("Submission", back_populates="anonymous_user")
    votes = relationship("Vote", back_populates="anonymous_user")

    def __repr__(self):
        return f"<AnonymousUser {self.id}>"
