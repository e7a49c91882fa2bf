"""Shared scheduling types and defaults for vocabulary progress."""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum

MIN_EASE = 1.3
MAX_EASE = 3.0
DEFAULT_EASE = 2.5
DEFAULT_INTERVAL = 0
DEFAULT_REVIEW_COUNT = 0

# Upper bound for stored day counts; also the largest timedelta in days
MAX_INTERVAL = 999_999_999
MAX_REVIEW_COUNT = 999_999_999

# Mastery tier thresholds, in days
MASTERED_MIN_INTERVAL = 21
NEEDS_REVIEW_MAX_INTERVAL = 7

# Keys of the per-user progress document
WORDS_KEY = "words"
LEGACY_MAP_KEY = "map"
HISTORY_KEY = "wordsHistory"
MASTERED_KEY = "mastered"
NEEDS_REVIEW_KEY = "needsReview"

TZ = dt.timezone.utc


class MasteryTier(str, Enum):
    """Coarse classification derived from the review interval."""

    MASTERED = "mastered"
    NEEDS_REVIEW = "needs_review"
    LEARNING = "learning"


@dataclass(slots=True, frozen=True)
class ProgressEntry:
    """Scheduling state for one (user, vocabulary item) pair."""

    ease: float = DEFAULT_EASE
    interval: int = DEFAULT_INTERVAL
    review_count: int = DEFAULT_REVIEW_COUNT
    last_reviewed: dt.datetime | None = None
    next_review: dt.datetime | None = None

    @property
    def tier(self) -> MasteryTier:
        return classify(self.interval)


DEFAULT_ENTRY = ProgressEntry()


def classify(interval: int) -> MasteryTier:
    """Return the mastery tier implied by ``interval``."""

    if interval >= MASTERED_MIN_INTERVAL:
        return MasteryTier.MASTERED
    if interval < NEEDS_REVIEW_MAX_INTERVAL:
        return MasteryTier.NEEDS_REVIEW
    return MasteryTier.LEARNING
