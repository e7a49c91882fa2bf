"""Tests for due-set evaluation and catalog merging."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from vocab_progress.core.srs import DEFAULT_ENTRY, ProgressEntry, apply, due_items, is_due, merge_progress

NOW = datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)


@dataclass
class Item:
    id: int
    portuguese: str


CATALOG = [Item(1, "casa"), Item(2, "obrigado"), Item(3, "rua"), Item(4, "sol")]


def test_entry_without_next_review_is_due() -> None:
    assert is_due(DEFAULT_ENTRY, NOW)


def test_boundary_is_inclusive() -> None:
    assert is_due(ProgressEntry(next_review=NOW), NOW)
    assert not is_due(ProgressEntry(next_review=NOW + timedelta(seconds=1)), NOW)


def test_naive_now_is_compared_as_utc() -> None:
    assert is_due(ProgressEntry(next_review=NOW), datetime(2026, 3, 1, 8, 0))


def test_due_items_keep_catalog_order() -> None:
    record = apply(None, 1, ProgressEntry(interval=1, next_review=NOW - timedelta(days=2)))
    record = apply(record, 2, ProgressEntry(interval=3, next_review=NOW + timedelta(days=3)))
    record = apply(record, 3, ProgressEntry(interval=1, next_review=NOW - timedelta(days=5)))

    due = due_items(CATALOG, record, NOW)

    # word 3 is more overdue but catalog order wins
    assert [view.item.id for view in due] == [1, 3, 4]
    assert due[-1].progress == DEFAULT_ENTRY


def test_user_without_record_has_everything_due() -> None:
    far_future = NOW + timedelta(days=3650)

    assert [view.item.id for view in due_items(CATALOG, None, far_future)] == [1, 2, 3, 4]


def test_merge_progress_attaches_normalized_entries() -> None:
    record = {"wordsHistory": [{"wordId": "2", "interval": 12, "reviewCount": 3}]}

    views = merge_progress(CATALOG, record)

    assert [view.item for view in views] == CATALOG
    assert views[1].progress.interval == 12
    assert views[1].progress.review_count == 3
    assert views[0].progress == DEFAULT_ENTRY
