"""Pydantic models for learner progress endpoints."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from vocab_progress.core.srs import MasteryTier, ProgressEntry, ProgressView
from vocab_progress.core.srs.entry import MAX_INTERVAL, MAX_REVIEW_COUNT
from vocab_progress.schemas.vocabulary import VocabularyWordRead


class ReviewRequest(BaseModel):
    """Payload for submitting a review."""

    word_id: int = Field(..., ge=1)
    outcome: str = Field(..., description="One of easy, medium or hard")


class ProgressFields(BaseModel):
    """Scheduling state for one word."""

    ease: float
    interval: int
    review_count: int
    last_reviewed: datetime | None = None
    next_review: datetime | None = None
    tier: MasteryTier

    @classmethod
    def fields_from_entry(cls, entry: ProgressEntry) -> dict:
        return {
            "ease": entry.ease,
            "interval": entry.interval,
            "review_count": entry.review_count,
            "last_reviewed": entry.last_reviewed,
            "next_review": entry.next_review,
            "tier": entry.tier,
        }


class ReviewResponse(ProgressFields):
    """Response after scheduling a review."""

    word_id: int

    @classmethod
    def from_entry(cls, word_id: int, entry: ProgressEntry) -> "ReviewResponse":
        return cls(word_id=word_id, **cls.fields_from_entry(entry))


class WordProgressRead(VocabularyWordRead, ProgressFields):
    """Vocabulary item merged with the learner's progress."""

    @classmethod
    def from_view(cls, view: ProgressView) -> "WordProgressRead":
        word = VocabularyWordRead.model_validate(view.item).model_dump()
        return cls(**word, **cls.fields_from_entry(view.progress))


class ProgressUpdateRequest(BaseModel):
    """Manual override of a word's scheduling fields."""

    ease: float | None = Field(None, ge=1.3, le=3.0)
    interval: int | None = Field(None, ge=0, le=MAX_INTERVAL)
    review_count: int | None = Field(None, ge=0, le=MAX_REVIEW_COUNT)
    last_reviewed: datetime | None = None
    next_review: datetime | None = None


class ProgressSummaryRead(BaseModel):
    """Aggregate progress counters for a learner."""

    total_words: int
    reviewed: int
    mastered: int
    needs_review: int
    learning: int
    due: int

    model_config = ConfigDict(from_attributes=True)
