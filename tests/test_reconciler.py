"""Tests for the progress document write path."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from vocab_progress.core.srs import (
    MasteryTier,
    ProgressEntry,
    ReviewOutcome,
    apply,
    canonicalize,
    classify,
    normalize,
    purge,
    schedule,
)
from vocab_progress.core.srs.reconciler import references

NOW = datetime(2026, 3, 1, tzinfo=timezone.utc)


def membership(record: dict, word_id: str) -> tuple[bool, bool]:
    return word_id in record["mastered"], word_id in record["needsReview"]


@pytest.mark.parametrize(
    ("interval", "tier"),
    [
        (0, MasteryTier.NEEDS_REVIEW),
        (6, MasteryTier.NEEDS_REVIEW),
        (7, MasteryTier.LEARNING),
        (20, MasteryTier.LEARNING),
        (21, MasteryTier.MASTERED),
        (400, MasteryTier.MASTERED),
    ],
)
def test_classify_thresholds(interval: int, tier: MasteryTier) -> None:
    assert classify(interval) is tier


def test_apply_creates_all_projections() -> None:
    record = apply(None, 5, ProgressEntry(interval=1, review_count=1))

    assert record["words"]["5"]["interval"] == 1
    assert record["wordsHistory"] == [{"wordId": "5", **record["words"]["5"]}]
    assert membership(record, "5") == (False, True)


def test_apply_moves_word_between_tiers() -> None:
    record = apply(None, 5, ProgressEntry(interval=1))
    record = apply(record, 5, ProgressEntry(interval=27))
    assert membership(record, "5") == (True, False)

    record = apply(record, 5, ProgressEntry(interval=10))
    assert membership(record, "5") == (False, False)

    record = apply(record, 5, ProgressEntry(interval=1))
    assert membership(record, "5") == (False, True)


def test_apply_upserts_history_in_place() -> None:
    record = apply(None, 1, ProgressEntry(interval=1))
    record = apply(record, 2, ProgressEntry(interval=1))
    record = apply(record, 3, ProgressEntry(interval=1))

    record = apply(record, 2, ProgressEntry(interval=9, review_count=2))

    assert [row["wordId"] for row in record["wordsHistory"]] == ["1", "2", "3"]
    assert record["wordsHistory"][1]["interval"] == 9


def test_apply_collapses_duplicate_history_rows() -> None:
    legacy = {
        "wordsHistory": [
            {"wordId": "4", "interval": 1},
            {"wordId": "8", "interval": 2},
            {"wordId": 4, "interval": 3},
        ]
    }

    record = apply(legacy, 4, ProgressEntry(interval=30))

    assert [row["wordId"] for row in record["wordsHistory"]] == ["4", "8"]
    assert record["wordsHistory"][0]["interval"] == 30


def test_apply_leaves_other_words_untouched() -> None:
    record = {
        "words": {"9": {"interval": 25}},
        "wordsHistory": [{"wordId": "9", "interval": 25}],
        "mastered": ["9"],
        "needsReview": ["12"],
    }

    updated = apply(record, 5, ProgressEntry(interval=2))

    assert updated["words"]["9"] == {"interval": 25}
    assert updated["mastered"] == ["9"]
    assert updated["needsReview"] == ["12", "5"]


def test_apply_does_not_mutate_input() -> None:
    record = {"words": {}, "wordsHistory": [], "mastered": [], "needsReview": []}

    apply(record, 5, ProgressEntry(interval=2))

    assert record == {"words": {}, "wordsHistory": [], "mastered": [], "needsReview": []}


def test_apply_replaces_legacy_nested_entry() -> None:
    record = {"words": {"map": {"5": {"interval": 40}, "6": {"interval": 3}}}}

    updated = apply(record, 5, ProgressEntry(interval=2))

    assert updated["words"]["map"] == {"6": {"interval": 3}}
    assert normalize(updated, 5).interval == 2


def test_membership_invariant_over_review_sequences() -> None:
    outcomes = [ReviewOutcome.EASY] * 5 + [ReviewOutcome.MEDIUM, ReviewOutcome.HARD, ReviewOutcome.EASY]
    record: dict | None = None
    for outcome in outcomes:
        entry = schedule(normalize(record, 3), outcome, NOW)
        record = apply(record, 3, entry)
        mastered, needs_review = membership(record, "3")
        assert not (mastered and needs_review)
        assert mastered == (entry.interval >= 21)
        assert needs_review == (entry.interval < 7)
        assert len([row for row in record["wordsHistory"] if row["wordId"] == "3"]) == 1


def test_purge_removes_every_reference() -> None:
    record = apply(None, 5, ProgressEntry(interval=30))
    record = apply(record, 6, ProgressEntry(interval=2))
    record["words"]["map"] = {"5": {"interval": 1}}
    record["needsReview"].append("5")

    purged = purge(record, 5)

    assert "5" not in purged["words"]
    assert "map" not in purged["words"]
    assert [row["wordId"] for row in purged["wordsHistory"]] == ["6"]
    assert purged["mastered"] == []
    assert purged["needsReview"] == ["6"]
    assert not references(purged, 5)
    assert references(purged, 6)


def test_canonicalize_folds_legacy_shapes() -> None:
    legacy = {
        "words": {"map": {"1": {"ease": 2.2, "interval": 25}}, "2": {"interval": 8}},
        "wordsHistory": [{"wordId": "3", "interval": 1}, {"wordId": "3", "interval": 2}],
        "mastered": ["2", "3"],
        "needsReview": ["1"],
        "savedStories": ["abc"],
    }

    record = canonicalize(legacy)

    assert set(record["words"]) == {"1", "2", "3"}
    assert [row["wordId"] for row in record["wordsHistory"]] == ["3", "2", "1"]
    assert record["mastered"] == ["1"]
    assert record["needsReview"] == ["3"]
    assert record["savedStories"] == ["abc"]
    assert canonicalize(record) == record
