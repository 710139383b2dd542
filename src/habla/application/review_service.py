"""
Review Scheduler — Application layer orchestrator.

Coordinates the progress store with the SM-2 transition function,
next-phrase selection and statistics.
"""

import logging
from collections.abc import Sequence

from habla.domain.models import Phrase, ProgressRecord, ReviewStats
from habla.domain.ports import ProgressStore

from .scheduling.selection import select_next_phrase
from .scheduling.sm2 import (
    Clock,
    ScheduleParameters,
    calculate_next_review,
    create_initial_progress,
    quality_for_outcome,
    system_clock,
)
from .stats.aggregator import StatsAggregator

logger = logging.getLogger(__name__)


class ReviewScheduler:
    """
    Application service for scheduling phrase reviews.

    Holds no progress state of its own: every call reads from the store,
    computes, and writes back. Store errors propagate to the caller.
    """

    def __init__(
        self,
        store: ProgressStore,
        phrases: Sequence[Phrase],
        params: ScheduleParameters | None = None,
        clock: Clock | None = None,
        aggregator: StatsAggregator | None = None,
    ):
        """
        Args:
            store: The progress store (port).
            phrases: All phrases, in authored order.
            params: SM-2 constants; defaults if not provided.
            clock: Returns the current epoch ms; wall clock if not provided.
            aggregator: Optional custom stats aggregator.
        """
        self._store = store
        self._phrases = list(phrases)
        self._params = params or ScheduleParameters()
        self._clock = clock or system_clock
        self._aggregator = aggregator or StatsAggregator()

    @property
    def phrases(self) -> list[Phrase]:
        return self._phrases

    def create_initial_progress(self, phrase_id: int) -> ProgressRecord:
        return create_initial_progress(phrase_id, self._params)

    def calculate_next_review(self, progress: ProgressRecord, quality: int) -> ProgressRecord:
        return calculate_next_review(progress, quality, self._clock(), self._params)

    async def record_review(
        self, phrase_id: int, correct: bool, skipped: bool = False
    ) -> ProgressRecord:
        """
        Record the outcome of a review and persist the new progress.

        Creates the progress record on the first review of a phrase.

        Returns:
            The saved ProgressRecord.
        """
        progress = await self._store.get_progress(phrase_id)
        if progress is None:
            progress = self.create_initial_progress(phrase_id)

        quality = quality_for_outcome(correct, skipped)
        updated = self.calculate_next_review(progress, quality)
        await self._store.save_progress(updated)

        logger.info(
            f"Reviewed phrase {phrase_id}: quality={quality} "
            f"interval={updated.interval}d ease={updated.ease_factor:.2f}"
        )
        return updated

    async def get_next_phrase(self) -> Phrase | None:
        records = await self._store.get_all_progress()
        return select_next_phrase(self._phrases, records, self._clock())

    async def get_due_for_review(self) -> list[ProgressRecord]:
        """All records whose review time has passed, including freshly failed ones."""
        now = self._clock()
        records = await self._store.get_all_progress()
        return [r for r in records if r.next_review <= now]

    async def get_stats(self) -> ReviewStats:
        records = await self._store.get_all_progress()
        return self._aggregator.summarize(records, len(self._phrases), self._clock())
