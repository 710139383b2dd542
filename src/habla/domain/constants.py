"""Centralized constants for habla.

Scheduling and matching defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Time ----------
DAY_MS = 24 * 60 * 60 * 1000

# ---------- SM-2 ----------
INITIAL_EASE = 2.5
MINIMUM_EASE = 1.3
FIRST_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 6
PASSING_QUALITY = 3
MIN_QUALITY = 0
MAX_QUALITY = 5

# Quality signals for review outcomes
QUALITY_SKIPPED = 0
QUALITY_INCORRECT = 1
QUALITY_CORRECT = 4  # "with hesitation", never 5

# ---------- Stats ----------
MASTERED_INTERVAL_DAYS = 21

# ---------- Matching ----------
PUNCTUATION = "¿¡?!.,;:'\"()[]{}…—–-"
DEFAULT_MIN_SIMILARITY = 0.85
CHARS_PER_ALLOWED_EDIT = 5
CLOSE_SIMILARITY = 0.7
PARTIAL_MIN_LENGTH = 3

# ---------- Storage ----------
DEFAULT_PROGRESS_FILENAME = "progress.json"
