"""Unit tests for the review scheduler."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from vocab_progress.core.srs import MasteryTier, ProgressEntry, ReviewOutcome, parse_outcome, schedule
from vocab_progress.core.srs.entry import MAX_INTERVAL, MAX_REVIEW_COUNT
from vocab_progress.core.srs.scheduler import LATEST_REVIEW
from vocab_progress.utils.exceptions import InvalidOutcomeError

NOW = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)


def test_first_easy_review_schedules_one_day() -> None:
    result = schedule(ProgressEntry(ease=2.5, interval=0), ReviewOutcome.EASY, NOW)

    assert result.ease == pytest.approx(2.65)
    assert result.interval == 1
    assert result.review_count == 1
    assert result.last_reviewed == NOW
    assert result.next_review == NOW + timedelta(days=1)


def test_easy_growth_uses_updated_ease() -> None:
    result = schedule(ProgressEntry(ease=2.5, interval=10, review_count=4), ReviewOutcome.EASY, NOW)

    assert result.ease == pytest.approx(2.65)
    # ceil(10 * 2.65), not ceil(10 * 2.5)
    assert result.interval == 27
    assert result.review_count == 5
    assert result.tier is MasteryTier.MASTERED


def test_hard_resets_interval_and_floors_ease() -> None:
    result = schedule(ProgressEntry(ease=1.35, interval=5), ReviewOutcome.HARD, NOW)

    assert result.ease == pytest.approx(1.3)
    assert result.interval == 1
    assert result.tier is MasteryTier.NEEDS_REVIEW


def test_medium_grows_interval_by_fixed_factor() -> None:
    result = schedule(ProgressEntry(ease=2.0, interval=10), ReviewOutcome.MEDIUM, NOW)

    assert result.ease == pytest.approx(1.95)
    assert result.interval == 12
    assert result.next_review == NOW + timedelta(days=12)


def test_medium_rounds_interval_up() -> None:
    result = schedule(ProgressEntry(ease=2.5, interval=3), ReviewOutcome.MEDIUM, NOW)

    # 3 * 1.2 = 3.6
    assert result.interval == 4


def test_medium_first_review_schedules_one_day() -> None:
    result = schedule(ProgressEntry(), ReviewOutcome.MEDIUM, NOW)

    assert result.interval == 1
    assert result.ease == pytest.approx(2.45)


def test_easy_ease_is_capped() -> None:
    result = schedule(ProgressEntry(ease=2.95, interval=30), ReviewOutcome.EASY, NOW)

    assert result.ease == 3.0
    assert result.interval == 90


@pytest.mark.parametrize("outcome", list(ReviewOutcome))
def test_every_outcome_respects_bounds(outcome: ReviewOutcome) -> None:
    entry = ProgressEntry()
    for _ in range(12):
        previous = entry
        entry = schedule(entry, outcome, NOW)
        assert 1.3 <= entry.ease <= 3.0
        assert entry.interval >= 1
        assert entry.review_count == previous.review_count + 1


def test_next_review_saturates_instead_of_overflowing() -> None:
    result = schedule(ProgressEntry(ease=3.0, interval=5_000_000), ReviewOutcome.EASY, NOW)

    assert result.interval == 15_000_000
    assert result.next_review == LATEST_REVIEW


@pytest.mark.parametrize("outcome", [ReviewOutcome.EASY, ReviewOutcome.MEDIUM])
@pytest.mark.parametrize("interval", [MAX_INTERVAL, 10**308, 10**400])
def test_interval_growth_is_capped(outcome: ReviewOutcome, interval: int) -> None:
    result = schedule(ProgressEntry(ease=3.0, interval=interval), outcome, NOW)

    assert result.interval == MAX_INTERVAL
    assert result.next_review == LATEST_REVIEW
    assert result.tier is MasteryTier.MASTERED


def test_review_count_is_capped() -> None:
    result = schedule(ProgressEntry(review_count=MAX_REVIEW_COUNT), ReviewOutcome.HARD, NOW)

    assert result.review_count == MAX_REVIEW_COUNT


def test_naive_now_is_treated_as_utc() -> None:
    result = schedule(ProgressEntry(), ReviewOutcome.HARD, datetime(2026, 3, 1, 9, 30))

    assert result.last_reviewed == NOW


@pytest.mark.parametrize("raw", ["easy", "Medium", " HARD "])
def test_parse_outcome_accepts_known_values(raw: str) -> None:
    assert parse_outcome(raw).value == raw.strip().lower()


@pytest.mark.parametrize("raw", ["again", "", None, 3])
def test_parse_outcome_rejects_unknown_values(raw) -> None:
    with pytest.raises(InvalidOutcomeError) as excinfo:
        parse_outcome(raw)

    assert excinfo.value.details["allowed"] == ["easy", "medium", "hard"]
