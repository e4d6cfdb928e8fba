"""
Voting session windows.

There are four fixed two-hour session slots per day, starting at 8:00, 10:00,
12:00 and 14:00 in the configured session time zone. A slot is identified by
its local date and its index (0..3). Windows are half-open: a slot includes its
start instant and excludes its end instant, so at 10:00 exactly slot 1 is open
and slot 0 is closed.

All functions take the current instant explicitly, which keeps them pure and
easy to test. ``now`` may be naive (interpreted as UTC) or timezone-aware.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Any, Dict, List, Optional

# Slot start times as (hour, minute) in the session time zone
VOTING_TIMES = [
    (8, 0),   # 8:00 AM
    (10, 0),  # 10:00 AM
    (12, 0),  # 12:00 PM
    (14, 0),  # 2:00 PM
]

SESSION_DURATION = timedelta(hours=2)

CATEGORIES = [
    "Character/Subject",
    "Action/Verb",
    "Object/Setting",
    "Mood/Twist",
]

SESSION_COUNT = len(VOTING_TIMES)


@dataclass(frozen=True)
class VotingSession:
    """One session slot on one day."""

    date: date
    time: int
    start_time: datetime
    end_time: datetime
    is_active: bool
    category: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "time": self.time,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "is_active": self.is_active,
            "category": self.category,
        }


@dataclass(frozen=True)
class SessionStatus:
    current_session: Optional[VotingSession]
    next_session: VotingSession
    time_until_next_ms: int
    time_until_end_ms: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_session": self.current_session.to_dict() if self.current_session else None,
            "next_session": self.next_session.to_dict(),
            "time_until_next_ms": self.time_until_next_ms,
            "time_until_end_ms": self.time_until_end_ms,
            "time_until_next": format_time_remaining(self.time_until_next_ms),
            "time_until_end": format_time_remaining(self.time_until_end_ms),
        }


def _localize(now: Optional[datetime], tz: Optional[tzinfo]) -> datetime:
    tz = tz or timezone.utc
    if now is None:
        return datetime.now(tz)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(tz)


def _slot_window(day: date, index: int, tz: tzinfo):
    hour, minute = VOTING_TIMES[index]
    start = datetime(day.year, day.month, day.day, hour, minute, tzinfo=tz)
    return start, start + SESSION_DURATION


def build_session(day: date, index: int, tz: Optional[tzinfo] = None, is_active: bool = False) -> VotingSession:
    """Build the VotingSession for slot ``index`` on ``day``."""
    if not 0 <= index < SESSION_COUNT:
        raise ValueError(f"Session time must be between 0 and {SESSION_COUNT - 1}, got {index}")
    start, end = _slot_window(day, index, tz or timezone.utc)
    return VotingSession(
        date=day,
        time=index,
        start_time=start,
        end_time=end,
        is_active=is_active,
        category=CATEGORIES[index],
    )


def sessions_for_day(day: date, tz: Optional[tzinfo] = None) -> List[VotingSession]:
    """All four slots of ``day``, none marked active."""
    return [build_session(day, index, tz) for index in range(SESSION_COUNT)]


def get_current_session(now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> Optional[VotingSession]:
    """Return the slot open at ``now``, or None between slots."""
    local_now = _localize(now, tz)
    for index in range(SESSION_COUNT):
        start, end = _slot_window(local_now.date(), index, local_now.tzinfo)
        if start <= local_now < end:
            return build_session(local_now.date(), index, local_now.tzinfo, is_active=True)
    return None


def get_next_session(now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> VotingSession:
    """Return the next slot to start after ``now``, rolling over to tomorrow's first slot."""
    local_now = _localize(now, tz)
    today = local_now.date()
    for index in range(SESSION_COUNT):
        start, _ = _slot_window(today, index, local_now.tzinfo)
        if local_now < start:
            return build_session(today, index, local_now.tzinfo)
    return build_session(today + timedelta(days=1), 0, local_now.tzinfo)


def _milliseconds_between(start: datetime, end: datetime) -> int:
    # Compare in UTC so a DST change between the two instants is accounted for
    delta = end.astimezone(timezone.utc) - start.astimezone(timezone.utc)
    return int(delta.total_seconds() * 1000)


def time_until_next_session(now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> int:
    """Milliseconds until the next slot starts."""
    local_now = _localize(now, tz)
    return _milliseconds_between(local_now, get_next_session(local_now, tz).start_time)


def time_until_session_end(now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> int:
    """Milliseconds until the open slot ends, 0 when no slot is open."""
    local_now = _localize(now, tz)
    current = get_current_session(local_now, tz)
    if current is None:
        return 0
    return _milliseconds_between(local_now, current.end_time)


def format_time_remaining(milliseconds: int) -> str:
    """Format a countdown as HH:MM:SS."""
    if milliseconds <= 0:
        return "00:00:00"

    total_seconds = int(milliseconds // 1000)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def get_session_status(now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> SessionStatus:
    """Current slot, next slot and both countdowns at ``now``."""
    local_now = _localize(now, tz)
    return SessionStatus(
        current_session=get_current_session(local_now, tz),
        next_session=get_next_session(local_now, tz),
        time_until_next_ms=time_until_next_session(local_now, tz),
        time_until_end_ms=time_until_session_end(local_now, tz),
    )


def is_session_open(session_date: date, session_time: int,
                    now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> bool:
    """True when the given slot is the one open at ``now``."""
    current = get_current_session(now, tz)
    return current is not None and current.date == session_date and current.time == session_time
