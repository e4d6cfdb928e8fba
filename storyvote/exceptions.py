"""
Custom exceptions for the application.

Each exception carries the error code that the API reports; the central
exception handlers map the classes to HTTP status codes.
"""

from typing import Any, Optional


class StoryVoteError(Exception):
    """Base exception for StoryVote errors."""

    code = "storyvote_error"

    def __init__(self, message: str = "", details: Optional[Any] = None):
        super().__init__(message)
        self.details = details


class NotFoundError(StoryVoteError):
    """Raised when a requested record does not exist."""

    code = "not_found"


class InvalidRequestError(StoryVoteError):
    """Raised when a request is well-formed but breaks a business rule."""

    code = "invalid_request"


class ConflictError(StoryVoteError):
    """Raised when a uniqueness rule would be broken (second submission or vote)."""

    code = "conflict"


class SessionClosedError(InvalidRequestError):
    """Raised when submitting or voting outside the slot that is currently open."""

    code = "session_closed"


class StoryCompleteError(InvalidRequestError):
    """Raised when adding an episode to a story that is already complete."""

    code = "story_complete"


class RateLimitExceededError(StoryVoteError):
    """Raised when a client exceeds its request allowance."""

    code = "rate_limited"


class UnauthorizedError(StoryVoteError):
    """Raised when an admin endpoint is called without a valid key."""

    code = "unauthorized"
