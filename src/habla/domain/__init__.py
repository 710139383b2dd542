# Domain Package
from .models import (
    Category,
    Feedback,
    FeedbackType,
    MatchResult,
    Phrase,
    ProgressRecord,
    ReviewStats,
)
from .ports import ProgressStore

__all__ = [
    "Category",
    "Feedback",
    "FeedbackType",
    "MatchResult",
    "Phrase",
    "ProgressRecord",
    "ProgressStore",
    "ReviewStats",
]
