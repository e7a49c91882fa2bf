"""Normalization of stored progress documents.

User records have been written through three shapes over time:

* a flat keyed map, ``progress["words"][word_id]`` (canonical),
* a nested keyed map, ``progress["words"]["map"][word_id]``,
* a history log, ``progress["wordsHistory"]`` of ``{"wordId": ..., ...}`` rows.

Every reader goes through :func:`normalize`, which never fails: missing or
malformed structure at any level resolves to :data:`DEFAULT_ENTRY`.
"""
from __future__ import annotations

import copy
import datetime as dt
import math
from typing import Any, Mapping

from vocab_progress.core.srs.entry import (
    DEFAULT_EASE,
    DEFAULT_ENTRY,
    DEFAULT_INTERVAL,
    DEFAULT_REVIEW_COUNT,
    HISTORY_KEY,
    LEGACY_MAP_KEY,
    MASTERED_KEY,
    MAX_EASE,
    MAX_INTERVAL,
    MAX_REVIEW_COUNT,
    MIN_EASE,
    NEEDS_REVIEW_KEY,
    TZ,
    WORDS_KEY,
    ProgressEntry,
)


def word_key(word_id: Any) -> str:
    """Return the string key used for ``word_id`` inside progress documents."""

    return str(word_id)


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def _coerce_ease(value: Any) -> float:
    if not _is_number(value):
        return DEFAULT_EASE
    return float(max(MIN_EASE, min(MAX_EASE, value)))


def _coerce_count(value: Any, default: int, upper: int) -> int:
    if not _is_number(value):
        return default
    return max(0, min(upper, int(value)))


def parse_timestamp(value: Any) -> dt.datetime | None:
    """Return an aware UTC datetime or ``None`` for anything unreadable."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, dt.datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = dt.datetime.fromisoformat(text)
        except ValueError:
            return None
    elif _is_number(value):
        # JavaScript clients store epoch milliseconds
        try:
            parsed = dt.datetime.fromtimestamp(value / 1000, tz=TZ)
        except (OverflowError, OSError, ValueError):
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=TZ)
    return parsed.astimezone(TZ)


def format_timestamp(value: dt.datetime | None) -> str | None:
    if value is None:
        return None
    return value.astimezone(TZ).isoformat()


def normalize_entry(raw: Any) -> ProgressEntry:
    """Default-fill a single raw entry (dict-like or ``None``)."""

    if isinstance(raw, ProgressEntry):
        return raw
    if not isinstance(raw, Mapping):
        return DEFAULT_ENTRY

    return ProgressEntry(
        ease=_coerce_ease(raw.get("ease")),
        interval=_coerce_count(raw.get("interval"), DEFAULT_INTERVAL, MAX_INTERVAL),
        review_count=_coerce_count(raw.get("reviewCount"), DEFAULT_REVIEW_COUNT, MAX_REVIEW_COUNT),
        last_reviewed=parse_timestamp(raw.get("lastReviewed")),
        next_review=parse_timestamp(raw.get("nextReview")),
    )


def entry_to_document(entry: ProgressEntry) -> dict[str, Any]:
    """Return the JSON-compatible stored form of ``entry``."""

    return {
        "ease": entry.ease,
        "interval": entry.interval,
        "reviewCount": entry.review_count,
        "lastReviewed": format_timestamp(entry.last_reviewed),
        "nextReview": format_timestamp(entry.next_review),
    }


def history_row(word_id: Any, entry: ProgressEntry) -> dict[str, Any]:
    return {"wordId": word_key(word_id), **entry_to_document(entry)}


def _words_map(record: Any) -> Mapping[str, Any]:
    if not isinstance(record, Mapping):
        return {}
    words = record.get(WORDS_KEY)
    return words if isinstance(words, Mapping) else {}


def keyed_entry(record: Any, word_id: Any) -> Any | None:
    """Return the raw keyed-map entry for ``word_id``, checking the legacy nested map."""

    key = word_key(word_id)
    words = _words_map(record)
    raw = words.get(key)
    if isinstance(raw, Mapping):
        return raw
    nested = words.get(LEGACY_MAP_KEY)
    if isinstance(nested, Mapping):
        raw = nested.get(key)
        if isinstance(raw, Mapping):
            return raw
    return None


def history_entries(record: Any) -> list[Mapping[str, Any]]:
    if not isinstance(record, Mapping):
        return []
    history = record.get(HISTORY_KEY)
    if not isinstance(history, list):
        return []
    return [row for row in history if isinstance(row, Mapping)]


def history_entry(record: Any, word_id: Any) -> Mapping[str, Any] | None:
    key = word_key(word_id)
    for row in history_entries(record):
        if word_key(row.get("wordId")) == key:
            return row
    return None


def normalize(record: Any, word_id: Any) -> ProgressEntry:
    """Resolve the progress entry for ``word_id`` from a user record.

    The keyed map wins; the history log is only a fallback for records
    written before the keyed map existed.
    """

    raw = keyed_entry(record, word_id)
    if raw is None:
        raw = history_entry(record, word_id)
    if raw is None:
        return DEFAULT_ENTRY
    return normalize_entry(raw)


def _id_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    seen: list[str] = []
    for item in value:
        key = word_key(item)
        if key not in seen:
            seen.append(key)
    return seen


def ensure_record(record: Any) -> dict[str, Any]:
    """Return a deep copy of ``record`` with every top-level structure present."""

    base = copy.deepcopy(dict(record)) if isinstance(record, Mapping) else {}
    words = base.get(WORDS_KEY)
    base[WORDS_KEY] = dict(words) if isinstance(words, Mapping) else {}
    base[HISTORY_KEY] = [dict(row) for row in history_entries(base)]
    base[MASTERED_KEY] = _id_list(base.get(MASTERED_KEY))
    base[NEEDS_REVIEW_KEY] = _id_list(base.get(NEEDS_REVIEW_KEY))
    return base


def known_word_ids(record: Any) -> list[str]:
    """Return every word id present in the keyed map(s) or the history log, in first-seen order."""

    ids: list[str] = []
    words = _words_map(record)
    for key, value in words.items():
        if key == LEGACY_MAP_KEY and isinstance(value, Mapping):
            continue
        if isinstance(value, Mapping) and key not in ids:
            ids.append(key)
    nested = words.get(LEGACY_MAP_KEY)
    if isinstance(nested, Mapping):
        for key, value in nested.items():
            if isinstance(value, Mapping) and word_key(key) not in ids:
                ids.append(word_key(key))
    for row in history_entries(record):
        key = row.get("wordId")
        if key is not None and word_key(key) not in ids:
            ids.append(word_key(key))
    return ids
