# Answer Matching Package
from .distance import levenshtein_distance
from .matcher import FuzzyMatcher, MatchOptions, get_feedback, match_answer

__all__ = [
    "FuzzyMatcher",
    "MatchOptions",
    "get_feedback",
    "levenshtein_distance",
    "match_answer",
]
