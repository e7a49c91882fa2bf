"""Pydantic schemas for vocabulary endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class VocabularyWordRead(BaseModel):
    """Representation of a vocabulary word."""

    id: int
    portuguese: str
    english: str
    part_of_speech: Optional[str] = None
    gender: Optional[str] = None
    difficulty: Optional[str] = None
    group: Optional[str] = None
    examples: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("examples", mode="before")
    @classmethod
    def _examples_default(cls, value):
        return value or []


class VocabularyListResponse(BaseModel):
    """Paginated vocabulary response payload."""

    total: int
    items: list[VocabularyWordRead]


class WordRemovalResponse(BaseModel):
    """Outcome of deleting a catalog item."""

    word_id: int
    purged_users: int
