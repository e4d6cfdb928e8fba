"""
Story completion and progress accounting.

A story is meant to end between 7 and 9 minutes of accumulated episode time.
The functions here are pure; StoryService persists their results.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from storyvote.models.story import Episode, Story

# Completion band in seconds: a story should complete between 7 and 9 minutes
COMPLETION_MIN_SECONDS = 420
COMPLETION_MAX_SECONDS = 540

# Stage thresholds
STARTING_UNTIL_SECONDS = 120
GROWING_UNTIL_SECONDS = 300

STAGE_MESSAGES = {
    "starting": "Story just beginning...",
    "growing": "Story developing...",
    "climax": "Approaching climax...",
    "complete": "Story complete!",
}


@dataclass(frozen=True)
class CompletionStage:
    status: str
    message: str


@dataclass
class StoryStatus:
    current_story: Optional[Story]
    episodes: List[Episode] = field(default_factory=list)
    should_complete: bool = False
    next_episode_number: int = 1
    total_duration: int = 0
    progress_percentage: float = 0.0
    stage: CompletionStage = CompletionStage("starting", STAGE_MESSAGES["starting"])


def total_duration(episodes: Iterable[Episode]) -> int:
    """Sum of episode durations; episodes without a duration count as 0."""
    return sum(episode.duration_seconds or 0 for episode in episodes)


def should_complete(total_seconds: int) -> bool:
    """True when the duration lies inside the completion band."""
    return COMPLETION_MIN_SECONDS <= total_seconds < COMPLETION_MAX_SECONDS


def has_reached_completion(total_seconds: int) -> bool:
    """True once the duration has reached the band floor, overshoot included."""
    return total_seconds >= COMPLETION_MIN_SECONDS


def progress_percentage(total_seconds: int) -> float:
    """Progress towards the band ceiling, capped at 100."""
    return min(total_seconds / COMPLETION_MAX_SECONDS * 100, 100.0)


def completion_stage(total_seconds: int) -> CompletionStage:
    if total_seconds < STARTING_UNTIL_SECONDS:
        status = "starting"
    elif total_seconds < GROWING_UNTIL_SECONDS:
        status = "growing"
    elif total_seconds < COMPLETION_MIN_SECONDS:
        status = "climax"
    else:
        status = "complete"
    return CompletionStage(status, STAGE_MESSAGES[status])


def format_duration(seconds: int) -> str:
    """Format seconds as M:SS."""
    minutes, remaining = divmod(int(seconds), 60)
    return f"{minutes}:{remaining:02d}"


def build_story_status(story: Optional[Story], episodes: Sequence[Episode] = ()) -> StoryStatus:
    """
    Compute the progress summary of a story from its episodes.

    Args:
        story: The story, or None when no story is in progress
        episodes: The story's episodes

    Returns:
        StoryStatus: Totals, progress and stage. With no story, an empty
        status whose next episode number is 1.
    """
    if story is None:
        return StoryStatus(current_story=None)

    episodes = list(episodes)
    total = total_duration(episodes)
    return StoryStatus(
        current_story=story,
        episodes=episodes,
        should_complete=should_complete(total),
        next_episode_number=len(episodes) + 1,
        total_duration=total,
        progress_percentage=progress_percentage(total),
        stage=completion_stage(total),
    )
