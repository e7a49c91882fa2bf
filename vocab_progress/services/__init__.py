"""Service layer package."""

from vocab_progress.services.progress import ProgressService, ProgressSummary
from vocab_progress.services.store import StoredRecord, UserProgressStore
from vocab_progress.services.vocabulary import VocabularyCatalog

__all__ = [
    "ProgressService",
    "ProgressSummary",
    "StoredRecord",
    "UserProgressStore",
    "VocabularyCatalog",
]
