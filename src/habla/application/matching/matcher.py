"""
Fuzzy answer matching.

Decides whether a typed answer is an acceptable rendition of the
expected phrase, tolerating case, punctuation, accents and a bounded
number of typos, and turns the result into learner feedback.

This is a pure computation module with no I/O.
"""

from dataclasses import dataclass

from habla.application.utils.text import normalize, remove_accents
from habla.domain.constants import (
    CHARS_PER_ALLOWED_EDIT,
    CLOSE_SIMILARITY,
    DEFAULT_MIN_SIMILARITY,
    PARTIAL_MIN_LENGTH,
)
from habla.domain.models import Feedback, FeedbackType, MatchResult

from .distance import levenshtein_distance


@dataclass(frozen=True)
class MatchOptions:
    """
    Thresholds for accepting an answer.

    Both the distance and the similarity gate must pass.
    """

    max_distance: int | None = None  # None = one edit per 5 chars of the expected phrase
    min_similarity: float = DEFAULT_MIN_SIMILARITY
    strict_accents: bool = False


FEEDBACK_MESSAGES = {
    "exact": "Perfect!",
    "fuzzy": "Close enough!",
    FeedbackType.PARTIAL: "Keep going...",
    FeedbackType.CLOSE: "Almost! Check your spelling.",
    FeedbackType.INCORRECT: "Try again",
}


class FuzzyMatcher:
    """
    Compares answers against expected phrases using a fixed set of options.

    Stateless and side-effect free.
    """

    def __init__(self, options: MatchOptions | None = None):
        self.options = options or MatchOptions()

    def match(self, answer: str | None, expected: str | None) -> MatchResult:
        opts = self.options

        normalized_answer = normalize(answer)
        normalized_expected = normalize(expected)

        if not opts.strict_accents:
            normalized_answer = remove_accents(normalized_answer)
            normalized_expected = remove_accents(normalized_expected)

        if normalized_answer == normalized_expected:
            return MatchResult(matches=True, similarity=1.0, exact=True)

        if not normalized_answer:
            return MatchResult(matches=False, similarity=0.0, exact=False)

        distance = levenshtein_distance(normalized_answer, normalized_expected)
        max_len = max(len(normalized_answer), len(normalized_expected))
        similarity = 1 - distance / max_len

        if opts.max_distance is not None:
            allowed = opts.max_distance
        else:
            allowed = len(normalized_expected) // CHARS_PER_ALLOWED_EDIT

        return MatchResult(
            matches=distance <= allowed and similarity >= opts.min_similarity,
            similarity=similarity,
            exact=False,
            distance=distance,
        )

    def feedback(self, answer: str | None, expected: str | None) -> Feedback:
        """
        Classify an answer into correct / partial / close / incorrect.

        Checked in priority order: a full match wins, then a correct prefix
        of at least 3 characters (learner still typing), then similarity >= 0.7.
        """
        result = self.match(answer, expected)

        if result.matches:
            key = "exact" if result.exact else "fuzzy"
            return Feedback(FeedbackType.CORRECT, FEEDBACK_MESSAGES[key])

        normalized_answer = normalize(answer)
        normalized_expected = normalize(expected)

        if (
            normalized_expected.startswith(normalized_answer)
            and len(normalized_answer) >= PARTIAL_MIN_LENGTH
        ):
            return Feedback(FeedbackType.PARTIAL, FEEDBACK_MESSAGES[FeedbackType.PARTIAL])

        if result.similarity >= CLOSE_SIMILARITY:
            return Feedback(FeedbackType.CLOSE, FEEDBACK_MESSAGES[FeedbackType.CLOSE])

        return Feedback(FeedbackType.INCORRECT, FEEDBACK_MESSAGES[FeedbackType.INCORRECT])


def match_answer(
    answer: str | None, expected: str | None, options: MatchOptions | None = None
) -> MatchResult:
    return FuzzyMatcher(options).match(answer, expected)


def get_feedback(answer: str | None, expected: str | None) -> Feedback:
    """Feedback using the default matching options."""
    return FuzzyMatcher().feedback(answer, expected)
