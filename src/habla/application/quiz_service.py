"""
Quiz flow: check a typed answer, give feedback and record the review.
"""

import logging
from dataclasses import dataclass

from habla.domain.models import Feedback, MatchResult, Phrase, ProgressRecord

from .matching.matcher import FuzzyMatcher
from .phrases import PhraseCatalog
from .review_service import ReviewScheduler

logger = logging.getLogger(__name__)


class EmptyAnswerError(ValueError):
    """Raised when a blank answer is submitted."""


@dataclass
class SubmissionResult:
    """Result of submitting an answer for a phrase."""

    phrase: Phrase
    match: MatchResult
    feedback: Feedback
    progress: ProgressRecord


class QuizService:
    def __init__(
        self,
        scheduler: ReviewScheduler,
        catalog: PhraseCatalog,
        matcher: FuzzyMatcher | None = None,
    ):
        self.scheduler = scheduler
        self.catalog = catalog
        self.matcher = matcher or FuzzyMatcher()

    async def next_phrase(self) -> Phrase | None:
        return await self.scheduler.get_next_phrase()

    async def submit(self, phrase_id: int, answer: str) -> SubmissionResult:
        """
        Check an answer against the phrase text and record the review.

        Raises:
            KeyError: If the phrase id is unknown.
            EmptyAnswerError: If the answer is blank; nothing is recorded.
        """
        phrase = self.catalog.get(phrase_id)
        if phrase is None:
            raise KeyError(phrase_id)

        if not answer or not answer.strip():
            raise EmptyAnswerError("Answer is empty")

        result = self.matcher.match(answer, phrase.text)
        feedback = self.matcher.feedback(answer, phrase.text)
        progress = await self.scheduler.record_review(phrase.id, correct=result.matches)

        logger.debug(f"Answer for phrase {phrase.id}: {feedback.type.value} ({result.similarity:.2f})")
        return SubmissionResult(phrase=phrase, match=result, feedback=feedback, progress=progress)

    async def skip(self, phrase_id: int) -> ProgressRecord:
        if self.catalog.get(phrase_id) is None:
            raise KeyError(phrase_id)
        return await self.scheduler.record_review(phrase_id, correct=False, skipped=True)
