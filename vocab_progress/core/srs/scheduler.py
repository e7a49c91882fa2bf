"""Review scheduling for vocabulary flashcards.

A simplified SM-2 variant with three outcomes. Stored schedules depend on the
exact arithmetic below: "easy" grows the interval with the *updated* ease and
intervals are rounded up with ``math.ceil``.
"""
from __future__ import annotations

import datetime as dt
import math
from enum import Enum
from typing import Any

from vocab_progress.core.srs.entry import (
    MAX_EASE,
    MAX_INTERVAL,
    MAX_REVIEW_COUNT,
    MIN_EASE,
    TZ,
    ProgressEntry,
)
from vocab_progress.utils.exceptions import InvalidOutcomeError

EASY_EASE_BONUS = 0.15
MEDIUM_EASE_PENALTY = 0.05
HARD_EASE_PENALTY = 0.2
MEDIUM_INTERVAL_FACTOR = 1.2
FIRST_INTERVAL = 1  # days
LATEST_REVIEW = dt.datetime.max.replace(tzinfo=TZ)


class ReviewOutcome(str, Enum):
    """Learner self-assessment after seeing a flashcard."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


def parse_outcome(value: Any) -> ReviewOutcome:
    """Return the matching outcome or raise ``InvalidOutcomeError``."""

    if isinstance(value, ReviewOutcome):
        return value
    if isinstance(value, str):
        try:
            return ReviewOutcome(value.strip().lower())
        except ValueError:
            pass
    raise InvalidOutcomeError(
        f"Invalid review outcome: {value!r}",
        details={"allowed": [outcome.value for outcome in ReviewOutcome]},
    )


def next_ease(ease: float, outcome: ReviewOutcome) -> float:
    if outcome is ReviewOutcome.EASY:
        return min(MAX_EASE, ease + EASY_EASE_BONUS)
    if outcome is ReviewOutcome.MEDIUM:
        return max(MIN_EASE, ease - MEDIUM_EASE_PENALTY)
    return max(MIN_EASE, ease - HARD_EASE_PENALTY)


def next_interval(interval: int, new_ease: float, outcome: ReviewOutcome) -> int:
    """Return the next interval in days, never above ``MAX_INTERVAL``."""

    if outcome is ReviewOutcome.HARD:
        return FIRST_INTERVAL
    if interval == 0:
        return FIRST_INTERVAL
    interval = min(interval, MAX_INTERVAL)
    if outcome is ReviewOutcome.EASY:
        grown = math.ceil(interval * new_ease)
    else:
        grown = math.ceil(interval * MEDIUM_INTERVAL_FACTOR)
    return min(MAX_INTERVAL, grown)


def due_after(now: dt.datetime, interval: int) -> dt.datetime:
    """Return ``now`` plus ``interval`` days, saturating at the largest representable time."""

    try:
        return now + dt.timedelta(days=interval)
    except OverflowError:
        return LATEST_REVIEW


def schedule(prior: ProgressEntry, outcome: ReviewOutcome, now: dt.datetime) -> ProgressEntry:
    """Return the entry that follows ``prior`` after a review at ``now``.

    Args:
        prior: Normalized entry before the review.
        outcome: Parsed review outcome.
        now: Review time; naive values are treated as UTC.

    Returns:
        A new entry with ``review_count`` incremented by one and
        ``next_review`` set ``interval`` whole days after ``now``.
    """

    if now.tzinfo is None:
        now = now.replace(tzinfo=TZ)

    ease = next_ease(prior.ease, outcome)
    interval = next_interval(prior.interval, ease, outcome)

    return ProgressEntry(
        ease=ease,
        interval=interval,
        review_count=min(MAX_REVIEW_COUNT, prior.review_count + 1),
        last_reviewed=now,
        next_review=due_after(now, interval),
    )
