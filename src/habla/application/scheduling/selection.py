"""
Selection of the next phrase to present.

Priority:
1. Due phrases (reviewed before, repetitions > 0), earliest due first
2. New phrases, in authored order
3. The phrase due soonest, so something is always offered
"""

import logging
from collections.abc import Iterable, Sequence

from habla.domain.models import Phrase, ProgressRecord

logger = logging.getLogger(__name__)


def select_next_phrase(
    phrases: Sequence[Phrase],
    records: Iterable[ProgressRecord],
    now: int,
) -> Phrase | None:
    """
    Pick the phrase to review next.

    Records whose phrase is not in `phrases` are ignored. Freshly failed
    records (repetitions == 0) are never treated as due; they come back
    through the catch-all once nothing else is pending.

    Args:
        phrases: All phrases, in authored order.
        records: Snapshot of progress records, any order.
        now: Current time in epoch milliseconds.

    Returns:
        The selected phrase, or None if there are no phrases.
    """
    by_id = {p.id: p for p in phrases}
    known = [r for r in records if r.phrase_id in by_id]

    due = [r for r in known if r.next_review <= now and r.repetitions > 0]
    if due:
        # Stable sort keeps snapshot order among equal due times
        due.sort(key=lambda r: r.next_review)
        logger.debug(f"{len(due)} phrases due, picking {due[0].phrase_id}")
        return by_id[due[0].phrase_id]

    reviewed = {r.phrase_id for r in known}
    for phrase in phrases:
        if phrase.id not in reviewed:
            logger.debug(f"No phrases due, introducing new phrase {phrase.id}")
            return phrase

    if known:
        soonest = min(known, key=lambda r: r.next_review)
        logger.debug(f"All phrases reviewed, picking soonest due {soonest.phrase_id}")
        return by_id[soonest.phrase_id]

    return None
