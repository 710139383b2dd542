"""
Summary statistics over a progress snapshot.

This is a pure computation module with no I/O.
"""

from collections.abc import Iterable

from habla.domain.constants import DAY_MS, MASTERED_INTERVAL_DAYS
from habla.domain.models import ProgressRecord, ReviewStats


class StatsAggregator:
    """
    Derives ReviewStats from progress records in a single pass.

    Stateless and side-effect free.
    """

    def summarize(
        self,
        records: Iterable[ProgressRecord],
        total_phrases: int,
        now: int,
    ) -> ReviewStats:
        """
        Args:
            records: All progress records.
            total_phrases: Size of the phrase catalog.
            now: Current time in epoch milliseconds.
        """
        stats = ReviewStats(total_phrases=total_phrases)

        ease_sum = 0.0
        correct_sum = 0
        review_sum = 0

        for record in records:
            stats.learned += 1
            ease_sum += record.ease_factor
            correct_sum += record.correct_reviews
            review_sum += record.total_reviews

            if record.interval >= MASTERED_INTERVAL_DAYS:
                stats.mastered += 1
            if record.next_review <= now:
                stats.due_now += 1
            if record.next_review <= now + DAY_MS:
                stats.due_today += 1

        if stats.learned > 0:
            stats.average_ease = ease_sum / stats.learned

        stats.total_reviews = review_sum
        if review_sum > 0:
            stats.accuracy = correct_sum / review_sum

        return stats
