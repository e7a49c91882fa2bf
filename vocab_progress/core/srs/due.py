"""Read path: pair catalog items with progress and select the due ones."""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Generic, Iterable, TypeVar

from vocab_progress.core.srs.codec import normalize
from vocab_progress.core.srs.entry import TZ, ProgressEntry

ItemT = TypeVar("ItemT")


@dataclass(slots=True)
class ProgressView(Generic[ItemT]):
    """A catalog item merged with the learner's normalized progress."""

    item: ItemT
    progress: ProgressEntry


def is_due(entry: ProgressEntry, now: dt.datetime) -> bool:
    """An entry is due when it was never scheduled or its review time has passed."""

    if entry.next_review is None:
        return True
    if now.tzinfo is None:
        now = now.replace(tzinfo=TZ)
    return entry.next_review <= now


def merge_progress(catalog: Iterable[ItemT], record: Any) -> list[ProgressView[ItemT]]:
    """Attach the normalized entry to every item, keeping catalog order."""

    return [ProgressView(item=item, progress=normalize(record, item.id)) for item in catalog]


def due_items(catalog: Iterable[ItemT], record: Any, now: dt.datetime) -> list[ProgressView[ItemT]]:
    """Return the catalog items due at ``now``, in catalog order."""

    return [view for view in merge_progress(catalog, record) if is_due(view.progress, now)]
