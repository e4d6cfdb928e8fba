"""
Unit tests for the voting session windows.
"""

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from storyvote.services.voting_session import (
    CATEGORIES,
    build_session,
    format_time_remaining,
    get_current_session,
    get_next_session,
    get_session_status,
    is_session_open,
    sessions_for_day,
    time_until_next_session,
    time_until_session_end,
)

UTC = timezone.utc
DAY = date(2025, 1, 15)


def at(hour, minute=0, second=0, day=DAY, tz=UTC):
    return datetime(day.year, day.month, day.day, hour, minute, second, tzinfo=tz)


@pytest.mark.parametrize("hour, minute, expected", [
    (8, 0, 0),
    (9, 59, 0),
    (10, 0, 1),
    (12, 30, 2),
    (15, 59, 3),
])
def test_current_session_inside_windows(hour, minute, expected):
    session = get_current_session(at(hour, minute))
    assert session is not None
    assert session.time == expected
    assert session.date == DAY
    assert session.is_active
    assert session.category == CATEGORIES[expected]


@pytest.mark.parametrize("hour, minute, second", [
    (0, 0, 0),
    (7, 59, 59),
    (16, 0, 0),
    (23, 30, 0),
])
def test_no_current_session_outside_windows(hour, minute, second):
    assert get_current_session(at(hour, minute, second)) is None


def test_session_boundaries_are_half_open():
    session = get_current_session(at(10))
    assert session.time == 1
    assert session.start_time == at(10)
    assert session.end_time == at(12)


def test_next_session_later_today():
    assert get_next_session(at(7)).time == 0
    assert get_next_session(at(8)).time == 1
    assert get_next_session(at(13, 15)).time == 3
    assert get_next_session(at(13, 15)).date == DAY


def test_next_session_rolls_over_to_tomorrow():
    upcoming = get_next_session(at(14, 30))
    assert upcoming.date == date(2025, 1, 16)
    assert upcoming.time == 0
    assert not upcoming.is_active


def test_time_until_next_session():
    assert time_until_next_session(at(9, 30)) == 30 * 60 * 1000
    # 16:30 until 8:00 the next morning
    assert time_until_next_session(at(16, 30)) == int(15.5 * 60 * 60 * 1000)


def test_time_until_session_end():
    assert time_until_session_end(at(8, 45)) == 75 * 60 * 1000
    assert time_until_session_end(at(17)) == 0


def test_naive_datetimes_are_treated_as_utc():
    naive = datetime(2025, 1, 15, 9, 30)
    assert get_current_session(naive).time == 0
    assert time_until_session_end(naive) == 30 * 60 * 1000


def test_sessions_follow_configured_timezone():
    new_york = ZoneInfo("America/New_York")
    # 13:30 UTC is 08:30 in New York in January
    now = at(13, 30)
    session = get_current_session(now, new_york)
    assert session.time == 0
    assert session.date == DAY
    assert session.start_time.utcoffset().total_seconds() == -5 * 3600


def test_countdown_across_daylight_saving_change():
    new_york = ZoneInfo("America/New_York")
    # 01:00 EST on the night clocks spring forward; 08:00 EDT is six real hours away
    now = datetime(2025, 3, 9, 6, 0, tzinfo=UTC)
    assert time_until_next_session(now, new_york) == 6 * 60 * 60 * 1000


def test_local_date_is_used_near_midnight():
    tokyo = ZoneInfo("Asia/Tokyo")
    # 23:30 UTC on the 14th is 08:30 on the 15th in Tokyo
    now = datetime(2025, 1, 14, 23, 30, tzinfo=UTC)
    session = get_current_session(now, tokyo)
    assert session.date == DAY
    assert session.time == 0


@pytest.mark.parametrize("milliseconds, expected", [
    (0, "00:00:00"),
    (-5000, "00:00:00"),
    (999, "00:00:00"),
    (3_723_000, "01:02:03"),
    (30 * 60 * 1000, "00:30:00"),
    (26 * 60 * 60 * 1000, "26:00:00"),
])
def test_format_time_remaining(milliseconds, expected):
    assert format_time_remaining(milliseconds) == expected


def test_build_session_rejects_unknown_slot():
    with pytest.raises(ValueError):
        build_session(DAY, 4)
    with pytest.raises(ValueError):
        build_session(DAY, -1)


def test_sessions_for_day():
    sessions = sessions_for_day(DAY)
    assert [s.time for s in sessions] == [0, 1, 2, 3]
    assert [s.start_time.hour for s in sessions] == [8, 10, 12, 14]
    assert not any(s.is_active for s in sessions)


def test_is_session_open():
    now = at(10, 15)
    assert is_session_open(DAY, 1, now)
    assert not is_session_open(DAY, 0, now)
    assert not is_session_open(date(2025, 1, 14), 1, now)
    assert not is_session_open(DAY, 1, at(18))


def test_session_status_to_dict():
    status = get_session_status(at(9, 30)).to_dict()

    assert status["current_session"]["time"] == 0
    assert status["current_session"]["date"] == "2025-01-15"
    assert status["next_session"]["time"] == 1
    assert status["time_until_next_ms"] == 30 * 60 * 1000
    assert status["time_until_end_ms"] == 30 * 60 * 1000
    assert status["time_until_next"] == "00:30:00"
    assert status["time_until_end"] == "00:30:00"


def test_session_status_between_sessions():
    status = get_session_status(at(20))
    assert status.current_session is None
    assert status.time_until_end_ms == 0
    assert status.next_session.date == date(2025, 1, 16)
    assert status.to_dict()["current_session"] is None
