"""Vocabulary database models."""
from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from vocab_progress.db.base import Base
from vocab_progress.db.types import StringList


class VocabularyWord(Base):
    """Represents a vocabulary word in the catalog."""

    __tablename__ = "vocabulary_words"

    id = Column(Integer, primary_key=True)
    portuguese = Column(String(255), nullable=False, index=True)
    english = Column(String(255), nullable=False)

    part_of_speech = Column(String(50))
    gender = Column(String(10))
    difficulty = Column(String(20), default="beginner")
    group = Column(String(100), nullable=True, index=True)

    examples = Column(StringList, nullable=True)
    image_url = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<VocabularyWord portuguese={self.portuguese!r} group={self.group!r}>"
