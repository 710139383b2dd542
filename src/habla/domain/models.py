"""
Domain models for phrases, review progress and answer checking.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from .constants import INITIAL_EASE


@dataclass(frozen=True)
class Category:
    """A phrase category (display data only)."""

    id: str
    name: str
    color: str | None = None


@dataclass(frozen=True)
class Phrase:
    """
    A target-language phrase to learn.

    Attributes:
        id: Unique, stable identifier.
        text: The phrase the learner has to produce.
        english: Prompt shown to the learner.
        category: Category id.
        emoji: Optional decoration for the prompt.
        image: Optional image reference.
        metadata: Any extra keys from the source file, untouched.
    """

    id: int
    text: str
    english: str | None = None
    category: str | None = None
    emoji: str | None = None
    image: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True)
class ProgressRecord:
    """
    SM-2 learning state for a single phrase.

    Attributes:
        phrase_id: The phrase this record belongs to.
        ease_factor: Interval growth multiplier, never below 1.3.
        interval: Days until the next review.
        repetitions: Consecutive successful reviews (0 after a failure).
        next_review: Epoch ms when the phrase becomes due (0 = new).
        last_review: Epoch ms of the last review, None if never reviewed.
        total_reviews: All reviews recorded.
        correct_reviews: Reviews with a passing quality.
    """

    phrase_id: int
    ease_factor: float = INITIAL_EASE
    interval: int = 0
    repetitions: int = 0
    next_review: int = 0
    last_review: int | None = None
    total_reviews: int = 0
    correct_reviews: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProgressRecord":
        last_review = data.get("last_review")
        return cls(
            phrase_id=int(data["phrase_id"]),
            ease_factor=float(data.get("ease_factor", INITIAL_EASE)),
            interval=int(data.get("interval", 0)),
            repetitions=int(data.get("repetitions", 0)),
            next_review=int(data.get("next_review", 0)),
            last_review=int(last_review) if last_review is not None else None,
            total_reviews=int(data.get("total_reviews", 0)),
            correct_reviews=int(data.get("correct_reviews", 0)),
        )


@dataclass(frozen=True)
class MatchResult:
    """
    Outcome of comparing an answer with the expected phrase.

    `distance` is None when the comparison short-circuited
    (exact match or empty answer).
    """

    matches: bool
    similarity: float
    exact: bool
    distance: int | None = None


class FeedbackType(str, Enum):
    CORRECT = "correct"
    PARTIAL = "partial"
    CLOSE = "close"
    INCORRECT = "incorrect"


@dataclass(frozen=True)
class Feedback:
    type: FeedbackType
    message: str


@dataclass
class ReviewStats:
    """Summary counters over all progress records."""

    total_phrases: int = 0
    learned: int = 0  # Reviewed at least once
    mastered: int = 0  # Interval >= 21 days
    due_now: int = 0
    due_today: int = 0  # Due within 24 hours
    average_ease: float = 0.0
    total_reviews: int = 0
    accuracy: float = 0.0
