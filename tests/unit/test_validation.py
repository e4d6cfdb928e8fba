"""
Unit tests for phrase validation and sanitization.
"""

from datetime import date
from uuid import uuid4

import pytest
from pydantic import ValidationError

from storyvote.exceptions import InvalidRequestError
from storyvote.schemas.submission import VoteCreate
from storyvote.services.submission_service import SubmissionService
from storyvote.utils.validation import count_words, sanitize_phrase, validate_submission


def test_valid_phrase():
    result = validate_submission("a brave little knight")
    assert result.is_valid
    assert result.errors == []
    assert result.word_count == 4


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_empty_phrase(text):
    result = validate_submission(text)
    assert not result.is_valid
    assert result.errors == ["Please enter at least one word"]
    assert result.word_count == 0


def test_too_many_words():
    result = validate_submission(" ".join(["word"] * 11))
    assert result.errors == ["Maximum 10 words allowed"]
    assert result.word_count == 11


def test_ten_words_allowed():
    assert validate_submission(" ".join(["word"] * 10)).is_valid


def test_word_too_long():
    result = validate_submission("tiny " + "x" * 31)
    assert result.errors == ["Each word must be 30 characters or less"]


def test_phrase_too_long():
    # ten words of thirty characters are fine individually but exceed 300 characters together
    result = validate_submission(" ".join(["y" * 30] * 10))
    assert result.errors == ["Phrase is too long (max 300 characters)"]


def test_profanity_is_rejected():
    result = validate_submission("what the HELL")
    assert result.errors == ["Please keep submissions family-friendly"]


def test_profanity_matches_whole_words_only():
    assert validate_submission("hello seashell classic").is_valid


def test_all_errors_are_reported():
    result = validate_submission(" ".join(["damn"] * 10 + ["z" * 31]))
    assert "Maximum 10 words allowed" in result.errors
    assert "Each word must be 30 characters or less" in result.errors
    assert "Please keep submissions family-friendly" in result.errors


def test_count_words():
    assert count_words("  one   two\tthree\n") == 3
    assert count_words("") == 0


@pytest.mark.parametrize("raw, expected", [
    ("  Hello,   world!  ", "Hello world"),
    ("rock'n'roll - yes", "rock'n'roll - yes"),
    ("<script>alert(1)</script>", "scriptalert1script"),
    ("tabs\tand\nnewlines", "tabs and newlines"),
])
def test_sanitize_phrase(raw, expected):
    assert sanitize_phrase(raw) == expected


def test_check_phrase_returns_sanitized_text():
    assert SubmissionService.check_phrase("  the dragon sleeps!! ") == "the dragon sleeps"


def test_check_phrase_lists_errors():
    with pytest.raises(InvalidRequestError) as exc_info:
        SubmissionService.check_phrase(" ".join(["word"] * 12))
    assert exc_info.value.details == ["Maximum 10 words allowed"]


def test_check_phrase_rejects_punctuation_only():
    with pytest.raises(InvalidRequestError):
        SubmissionService.check_phrase("?!")


@pytest.mark.parametrize("raw", ["sh.it happens", "what the h*e*l*l"])
def test_check_phrase_validates_sanitized_text(raw):
    with pytest.raises(InvalidRequestError) as exc_info:
        SubmissionService.check_phrase(raw)
    assert exc_info.value.details == ["Please keep submissions family-friendly"]


@pytest.mark.parametrize("session_date", [1736899200, "2025-1-15", "2025-01-15T08:00:00"])
def test_session_date_format_is_strict(session_date):
    with pytest.raises(ValidationError):
        VoteCreate(
            submissionId=str(uuid4()),
            anonymousUserId=str(uuid4()),
            sessionDate=session_date,
            sessionTime=0,
        )


def test_session_date_accepts_iso_string_and_date():
    body = {"submissionId": str(uuid4()), "anonymousUserId": str(uuid4()), "sessionTime": 1}
    assert VoteCreate(sessionDate="2025-01-15", **body).session_date == date(2025, 1, 15)
    assert VoteCreate(sessionDate=date(2025, 1, 15), **body).session_date == date(2025, 1, 15)
