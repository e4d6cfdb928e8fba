"""
Phrase validation and sanitization.

Phrases are short: at most 10 words, 30 characters per word and 300
characters in total, and they have to be family-friendly.
"""

import re
from dataclasses import dataclass, field
from typing import List

MAX_WORDS = 10
MAX_WORD_LENGTH = 30
MAX_PHRASE_LENGTH = 300

INAPPROPRIATE_PATTERNS = [
    re.compile(r"\b(fuck|shit|damn|hell|bitch|ass|crap)\b", re.IGNORECASE),
]

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED_CHARACTERS = re.compile(r"[^\w\s'-]")


@dataclass
class SubmissionValidation:
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    word_count: int = 0


def split_words(text: str) -> List[str]:
    return [word for word in _WHITESPACE.split(text.strip()) if word]


def count_words(text: str) -> int:
    return len(split_words(text))


def validate_submission(text: str) -> SubmissionValidation:
    """
    Check a phrase against the submission rules.

    All rules are evaluated so the client can show every problem at once.

    Args:
        text: Raw phrase as typed by the user

    Returns:
        SubmissionValidation: validity, the list of error messages and the word count
    """
    errors = []
    words = split_words(text)
    word_count = len(words)

    if word_count == 0:
        errors.append("Please enter at least one word")

    if word_count > MAX_WORDS:
        errors.append(f"Maximum {MAX_WORDS} words allowed")

    if any(len(word) > MAX_WORD_LENGTH for word in words):
        errors.append(f"Each word must be {MAX_WORD_LENGTH} characters or less")

    if len(text) > MAX_PHRASE_LENGTH:
        errors.append(f"Phrase is too long (max {MAX_PHRASE_LENGTH} characters)")

    if any(pattern.search(text) for pattern in INAPPROPRIATE_PATTERNS):
        errors.append("Please keep submissions family-friendly")

    return SubmissionValidation(
        is_valid=not errors,
        errors=errors,
        word_count=word_count
    )


def sanitize_phrase(phrase: str) -> str:
    """Trim, collapse whitespace and keep only letters, digits, spaces, hyphens and apostrophes."""
    collapsed = _WHITESPACE.sub(" ", phrase.strip())
    return _DISALLOWED_CHARACTERS.sub("", collapsed)
