"""
Checks shared by the submission and vote routes.
"""

import logging
from datetime import date, datetime, tzinfo

from storyvote.exceptions import RateLimitExceededError, SessionClosedError
from storyvote.services.voting_session import is_session_open
from storyvote.utils.config import Settings
from storyvote.utils.request_utils import RateLimiter

logger = logging.getLogger(__name__)

def ensure_session_open(settings: Settings, session_date: date, session_time: int,
                        now: datetime, tz: tzinfo) -> None:
    """
    Refuse writes for a slot that is not currently open.

    Raises:
        SessionClosedError: If ENFORCE_SESSION_WINDOW is on and the slot is closed
    """
    if not settings.ENFORCE_SESSION_WINDOW:
        return
    if not is_session_open(session_date, session_time, now, tz):
        raise SessionClosedError("This voting session is not open")

def enforce_rate_limit(limiter: RateLimiter, settings: Settings, action: str, ip_hash: str,
                       session_date: date, session_time: int) -> None:
    """
    Allow one ``action`` per hashed IP per session slot.

    Raises:
        RateLimitExceededError: If the IP already performed the action in the slot
    """
    if not settings.RATE_LIMIT_ENABLED:
        return
    key = f"{action}:{ip_hash}:{session_date.isoformat()}:{session_time}"
    result = limiter.check(key, max_requests=1)
    if not result.allowed:
        raise RateLimitExceededError(f"Rate limit exceeded. Only one {action} per session allowed.")
