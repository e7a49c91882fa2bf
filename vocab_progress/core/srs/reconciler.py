"""Write path for per-user progress documents.

The keyed map is the source of truth. The history log and the two membership
lists are projections of it, rewritten on every write so they cannot drift.
All functions return a new document and leave their input untouched, which
lets callers persist the result as one unit.
"""
from __future__ import annotations

from typing import Any

from vocab_progress.core.srs.codec import (
    ensure_record,
    entry_to_document,
    history_entries,
    history_row,
    known_word_ids,
    normalize,
    word_key,
)
from vocab_progress.core.srs.entry import (
    HISTORY_KEY,
    LEGACY_MAP_KEY,
    MASTERED_KEY,
    NEEDS_REVIEW_KEY,
    WORDS_KEY,
    MasteryTier,
    ProgressEntry,
    classify,
)


def _discard(ids: list[str], key: str) -> list[str]:
    return [item for item in ids if item != key]


def _upsert_history(history: list[dict[str, Any]], key: str, row: dict[str, Any]) -> list[dict[str, Any]]:
    updated: list[dict[str, Any]] = []
    replaced = False
    for existing in history:
        if word_key(existing.get("wordId")) != key:
            updated.append(existing)
        elif not replaced:
            updated.append(row)
            replaced = True
        # later duplicates of the same id are dropped
    if not replaced:
        updated.append(row)
    return updated


def _reclassify(record: dict[str, Any], key: str, interval: int) -> None:
    mastered = _discard(record[MASTERED_KEY], key)
    needs_review = _discard(record[NEEDS_REVIEW_KEY], key)
    tier = classify(interval)
    if tier is MasteryTier.MASTERED:
        mastered.append(key)
    elif tier is MasteryTier.NEEDS_REVIEW:
        needs_review.append(key)
    record[MASTERED_KEY] = mastered
    record[NEEDS_REVIEW_KEY] = needs_review


def _drop_legacy_key(words: dict[str, Any], key: str) -> None:
    nested = words.get(LEGACY_MAP_KEY)
    if isinstance(nested, dict) and key in nested:
        nested = dict(nested)
        nested.pop(key)
        if nested:
            words[LEGACY_MAP_KEY] = nested
        else:
            words.pop(LEGACY_MAP_KEY)


def apply(record: Any, word_id: Any, entry: ProgressEntry) -> dict[str, Any]:
    """Write ``entry`` for ``word_id`` into a copy of ``record``.

    Upserts the keyed map, upserts the history log in place (or appends), and
    moves ``word_id`` into exactly the membership list its interval implies.
    """

    key = word_key(word_id)
    updated = ensure_record(record)

    words = updated[WORDS_KEY]
    _drop_legacy_key(words, key)
    words[key] = entry_to_document(entry)

    updated[HISTORY_KEY] = _upsert_history(updated[HISTORY_KEY], key, history_row(key, entry))
    _reclassify(updated, key, entry.interval)
    return updated


def purge(record: Any, word_id: Any) -> dict[str, Any]:
    """Remove every trace of ``word_id`` from a copy of ``record``."""

    key = word_key(word_id)
    updated = ensure_record(record)
    updated[WORDS_KEY].pop(key, None)
    _drop_legacy_key(updated[WORDS_KEY], key)
    updated[HISTORY_KEY] = [
        row for row in updated[HISTORY_KEY] if word_key(row.get("wordId")) != key
    ]
    updated[MASTERED_KEY] = _discard(updated[MASTERED_KEY], key)
    updated[NEEDS_REVIEW_KEY] = _discard(updated[NEEDS_REVIEW_KEY], key)
    return updated


def references(record: Any, word_id: Any) -> bool:
    """Return ``True`` when ``word_id`` appears anywhere in ``record``."""

    key = word_key(word_id)
    if key in known_word_ids(record):
        return True
    current = ensure_record(record)
    return key in current[MASTERED_KEY] or key in current[NEEDS_REVIEW_KEY]


def canonicalize(record: Any) -> dict[str, Any]:
    """Fold legacy shapes into the canonical document.

    Every known id is resolved through the codec and written back, so the
    nested map disappears, history-only entries gain a keyed entry, duplicate
    log rows collapse, and both membership lists are rebuilt from scratch.
    """

    logged = [word_key(row.get("wordId")) for row in history_entries(record) if row.get("wordId") is not None]
    ids = list(dict.fromkeys(logged + known_word_ids(record)))
    resolved = [(key, normalize(record, key)) for key in ids]

    updated = ensure_record(record)
    updated[WORDS_KEY] = {}
    updated[HISTORY_KEY] = []
    updated[MASTERED_KEY] = []
    updated[NEEDS_REVIEW_KEY] = []
    for key, entry in resolved:
        updated = apply(updated, key, entry)
    return updated
