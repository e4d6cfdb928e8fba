from uuid import uuid4
from sqlalchemy import Column, String, Text, Boolean, DateTime, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from storyvote.models.base import Base, utc_now
from storyvote.models.custom_types import UUIDType

class Story(Base):
    """
    An ordered accumulation of episodes.

    A story is in progress until its accumulated episode duration reaches the
    completion band, after which it is marked complete and closed to new
    episodes.

    Attributes:
        id (UUID): Primary key, automatically generated UUID
        story_number (int): Sequential, human-facing number starting at 1
        title (str): Story title
        total_duration_seconds (int): Sum of episode durations
        episode_count (int): Number of episodes; the next episode is episode_count + 1
        is_complete (bool): Whether the story has reached the completion band
        completed_at (datetime): When the story was marked complete
        full_video_url (str): Stitched video of the whole story, once rendered
        created_at (datetime): Creation timestamp

    Relationships:
        episodes: One-to-many relationship with Episode
    """
    __tablename__ = "stories"

    id = Column(UUIDType, primary_key=True, default=uuid4)
    story_number = Column(Integer, unique=True, nullable=False)
    title = Column(String)
    total_duration_seconds = Column(Integer, nullable=False, default=0)
    episode_count = Column(Integer, nullable=False, default=0)
    is_complete = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime(timezone=True))
    full_video_url = Column(String)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    # Relationships
    episodes = relationship(
        "Episode",
        back_populates="story",
        order_by="Episode.episode_number",
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Story #{self.story_number} {self.title!r}>"

class Episode(Base):
    """
    A single generated video segment tied to one winning phrase.

    Attributes:
        id (UUID): Primary key, automatically generated UUID
        story_id (UUID): Story the episode belongs to
        episode_number (int): Position in the story, contiguous from 1
        video_url (str): Hosted video location
        duration_seconds (int): Video length
        winning_phrase (str): Phrase that won the session vote
        story_prompt (str): Prompt used to generate the video
        created_at (datetime): Creation timestamp
    """
    __tablename__ = "episodes"
    __table_args__ = (
        UniqueConstraint("story_id", "episode_number", name="uq_episodes_story_number"),
    )

    id = Column(UUIDType, primary_key=True, default=uuid4)
    story_id = Column(UUIDType, ForeignKey("stories.id"), nullable=False, index=True)
    episode_number = Column(Integer, nullable=False)
    video_url = Column(String)
    duration_seconds = Column(Integer)
    winning_phrase = Column(String)
    story_prompt = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    # Relationships
    story = relationship("Story", back_populates="episodes")

    def __repr__(self):
        return f"<Episode {self.episode_number} of {self.story_id}>"
