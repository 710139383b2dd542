from habla.application.scheduling.selection import select_next_phrase
from habla.domain.constants import DAY_MS
from habla.domain.models import Phrase, ProgressRecord

NOW = 1_700_000_000_000

PHRASES = [
    Phrase(id=1, text="Hola"),
    Phrase(id=2, text="Buenos días"),
    Phrase(id=3, text="Gracias"),
]


def record(phrase_id: int, next_review: int, repetitions: int = 1) -> ProgressRecord:
    return ProgressRecord(
        phrase_id=phrase_id,
        interval=1,
        repetitions=repetitions,
        next_review=next_review,
        last_review=next_review - DAY_MS,
        total_reviews=1,
        correct_reviews=1 if repetitions else 0,
    )


def test_no_progress_returns_first_phrase():
    assert select_next_phrase(PHRASES, [], NOW).id == 1


def test_due_beats_new():
    records = [record(1, NOW - 1000)]
    assert select_next_phrase(PHRASES, records, NOW).id == 1


def test_not_due_falls_through_to_new():
    records = [record(1, NOW + DAY_MS)]
    assert select_next_phrase(PHRASES, records, NOW).id == 2


def test_earliest_due_first():
    records = [record(1, NOW - 10), record(3, NOW - 5000), record(2, NOW - 100)]
    assert select_next_phrase(PHRASES, records, NOW).id == 3


def test_due_exactly_now():
    records = [record(2, NOW)]
    assert select_next_phrase(PHRASES, records, NOW).id == 2


def test_due_tie_keeps_snapshot_order():
    records = [record(3, NOW - 10), record(2, NOW - 10)]
    assert select_next_phrase(PHRASES, records, NOW).id == 3


def test_failed_record_is_not_due():
    # Overdue but repetitions == 0: a new phrase comes first
    records = [record(1, NOW - 1000, repetitions=0)]
    assert select_next_phrase(PHRASES, records, NOW).id == 2


def test_catch_all_returns_soonest():
    records = [
        record(1, NOW + 3 * DAY_MS),
        record(2, NOW + DAY_MS),
        record(3, NOW - 1000, repetitions=0),
    ]
    assert select_next_phrase(PHRASES, records, NOW).id == 3


def test_catch_all_tie_first_encountered():
    records = [record(2, NOW + DAY_MS), record(1, NOW + DAY_MS), record(3, NOW + 2 * DAY_MS)]
    assert select_next_phrase(PHRASES, records, NOW).id == 2


def test_no_phrases():
    assert select_next_phrase([], [], NOW) is None
    assert select_next_phrase([], [record(1, NOW - 1)], NOW) is None


def test_records_for_unknown_phrases_ignored():
    records = [record(99, NOW - 1000), record(1, NOW + DAY_MS)]
    assert select_next_phrase(PHRASES, records, NOW).id == 2
