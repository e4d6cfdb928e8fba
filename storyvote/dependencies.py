"""
Shared FastAPI dependencies.

Tests override these to pin the clock, swap settings and reset rate limits.
"""

from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo

from fastapi import Depends

from storyvote.utils.config import Settings, get_settings
from storyvote.utils.request_utils import RateLimiter

_rate_limiter = RateLimiter(max_requests=1, window_seconds=get_settings().RATE_LIMIT_WINDOW_SECONDS)

def get_now() -> datetime:
    """Current instant (UTC)."""
    return datetime.now(timezone.utc)

def get_session_timezone(settings: Settings = Depends(get_settings)) -> tzinfo:
    """Time zone in which the daily session slots are laid out."""
    return ZoneInfo(settings.SESSION_TIMEZONE)

def get_rate_limiter() -> RateLimiter:
    """Process-wide limiter for submissions and votes."""
    return _rate_limiter
