# Scheduling Package
from .selection import select_next_phrase
from .sm2 import (
    ScheduleParameters,
    calculate_next_review,
    create_initial_progress,
    quality_for_outcome,
    system_clock,
)

__all__ = [
    "ScheduleParameters",
    "calculate_next_review",
    "create_initial_progress",
    "quality_for_outcome",
    "select_next_phrase",
    "system_clock",
]
