import pytest

from habla.application.stats.aggregator import StatsAggregator
from habla.domain.constants import DAY_MS
from habla.domain.models import ProgressRecord

NOW = 1_700_000_000_000


@pytest.fixture
def aggregator():
    return StatsAggregator()


def test_empty(aggregator):
    stats = aggregator.summarize([], total_phrases=3, now=NOW)
    assert stats.total_phrases == 3
    assert stats.learned == 0
    assert stats.average_ease == 0
    assert stats.accuracy == 0
    assert stats.total_reviews == 0


def test_summary(aggregator):
    records = [
        ProgressRecord(
            phrase_id=1, ease_factor=2.5, interval=30, repetitions=5,
            next_review=NOW - 1000, last_review=NOW - DAY_MS,
            total_reviews=5, correct_reviews=4,
        ),
        ProgressRecord(
            phrase_id=2, ease_factor=2.0, interval=3, repetitions=2,
            next_review=NOW + DAY_MS, last_review=NOW,
            total_reviews=3, correct_reviews=2,
        ),
        ProgressRecord(
            phrase_id=3, ease_factor=1.3, interval=21, repetitions=4,
            next_review=NOW + 2 * DAY_MS, last_review=NOW,
            total_reviews=4, correct_reviews=3,
        ),
    ]

    stats = aggregator.summarize(records, total_phrases=10, now=NOW)

    assert stats.total_phrases == 10
    assert stats.learned == 3
    assert stats.mastered == 2
    assert stats.due_now == 1
    assert stats.due_today == 2  # within 24h inclusive
    assert stats.average_ease == pytest.approx((2.5 + 2.0 + 1.3) / 3)
    assert stats.total_reviews == 12
    assert stats.accuracy == pytest.approx(9 / 12)


def test_records_without_reviews_keep_accuracy_zero(aggregator):
    stats = aggregator.summarize([ProgressRecord(phrase_id=1)], total_phrases=1, now=NOW)
    assert stats.learned == 1
    assert stats.due_now == 1  # next_review 0
    assert stats.accuracy == 0
