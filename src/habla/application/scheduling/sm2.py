"""
SM-2 review scheduling.

Pure transition function from (progress, quality) to the next progress
state. Every update returns a new ProgressRecord; nothing is mutated.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, replace

from habla.domain.constants import (
    DAY_MS,
    FIRST_INTERVAL_DAYS,
    INITIAL_EASE,
    MAX_QUALITY,
    MIN_QUALITY,
    MINIMUM_EASE,
    PASSING_QUALITY,
    QUALITY_CORRECT,
    QUALITY_INCORRECT,
    QUALITY_SKIPPED,
    SECOND_INTERVAL_DAYS,
)
from habla.domain.models import ProgressRecord

Clock = Callable[[], int]


def system_clock() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class ScheduleParameters:
    """Tunable SM-2 constants."""

    initial_ease: float = INITIAL_EASE
    minimum_ease: float = MINIMUM_EASE
    first_interval: int = FIRST_INTERVAL_DAYS
    second_interval: int = SECOND_INTERVAL_DAYS
    passing_quality: int = PASSING_QUALITY


def create_initial_progress(
    phrase_id: int, params: ScheduleParameters | None = None
) -> ProgressRecord:
    params = params or ScheduleParameters()
    return ProgressRecord(phrase_id=phrase_id, ease_factor=params.initial_ease)


def calculate_next_review(
    progress: ProgressRecord,
    quality: int,
    now: int,
    params: ScheduleParameters | None = None,
) -> ProgressRecord:
    """
    Apply one review to a progress record.

    Args:
        progress: Current state.
        quality: 0 (blackout) .. 5 (perfect). 3 and above counts as a pass.
        now: Review time in epoch milliseconds.
        params: SM-2 constants; defaults if not provided.

    Returns:
        The new state. `next_review` is `now` plus the new interval in
        fixed 24h days.

    Raises:
        ValueError: If quality is outside 0..5.
    """
    if not MIN_QUALITY <= quality <= MAX_QUALITY:
        raise ValueError(f"quality must be between {MIN_QUALITY} and {MAX_QUALITY}, got {quality}")

    params = params or ScheduleParameters()
    correct_reviews = progress.correct_reviews

    if quality >= params.passing_quality:
        correct_reviews += 1

        if progress.repetitions == 0:
            interval = params.first_interval
        elif progress.repetitions == 1:
            interval = params.second_interval
        else:
            interval = round(progress.interval * progress.ease_factor)

        repetitions = progress.repetitions + 1
    else:
        # Lapse: start the streak over
        repetitions = 0
        interval = params.first_interval

    # Quadratic penalty in (5 - quality): +0.1 at 5, 0 at 4, -0.14 at 3, -0.8 at 0
    miss = MAX_QUALITY - quality
    ef_change = 0.1 - miss * (0.08 + miss * 0.02)
    ease_factor = max(params.minimum_ease, progress.ease_factor + ef_change)

    return replace(
        progress,
        ease_factor=ease_factor,
        interval=interval,
        repetitions=repetitions,
        next_review=now + interval * DAY_MS,
        last_review=now,
        total_reviews=progress.total_reviews + 1,
        correct_reviews=correct_reviews,
    )


def quality_for_outcome(correct: bool, skipped: bool = False) -> int:
    """
    Map a review outcome to a quality signal.

    A skip is a blackout (0); a correct answer is 4, never 5;
    a wrong answer is 1.
    """
    if skipped:
        return QUALITY_SKIPPED
    if correct:
        return QUALITY_CORRECT
    return QUALITY_INCORRECT
