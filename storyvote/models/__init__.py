"""
This package contains the database models for the application.
"""

from storyvote.models.base import Base
from storyvote.models.anonymous_user import AnonymousUser
from storyvote.models.submission import Submission, Vote
from storyvote.models.story import Story, Episode

__all__ = ['Base', 'AnonymousUser', 'Submission', 'Vote', 'Story', 'Episode']
