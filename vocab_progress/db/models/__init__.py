"""Database models package."""
from vocab_progress.db.models.user import User
from vocab_progress.db.models.vocabulary import VocabularyWord

__all__ = [
    "User",
    "VocabularyWord",
]
