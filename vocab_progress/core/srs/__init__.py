"""Spaced-repetition progress engine."""

from vocab_progress.core.srs.codec import normalize
from vocab_progress.core.srs.due import ProgressView, due_items, is_due, merge_progress
from vocab_progress.core.srs.entry import DEFAULT_ENTRY, MasteryTier, ProgressEntry, classify
from vocab_progress.core.srs.reconciler import apply, canonicalize, purge
from vocab_progress.core.srs.scheduler import ReviewOutcome, parse_outcome, schedule

__all__ = [
    "DEFAULT_ENTRY",
    "MasteryTier",
    "ProgressEntry",
    "ProgressView",
    "ReviewOutcome",
    "apply",
    "canonicalize",
    "classify",
    "due_items",
    "is_due",
    "merge_progress",
    "normalize",
    "parse_outcome",
    "purge",
    "schedule",
]
