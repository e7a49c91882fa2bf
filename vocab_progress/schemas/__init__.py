"""Pydantic schemas package."""

from vocab_progress.schemas.progress import (
    ProgressSummaryRead,
    ProgressUpdateRequest,
    ReviewRequest,
    ReviewResponse,
    WordProgressRead,
)
from vocab_progress.schemas.vocabulary import (
    VocabularyListResponse,
    VocabularyWordRead,
    WordRemovalResponse,
)

__all__ = [
    "ProgressSummaryRead",
    "ProgressUpdateRequest",
    "ReviewRequest",
    "ReviewResponse",
    "WordProgressRead",
    "VocabularyListResponse",
    "VocabularyWordRead",
    "WordRemovalResponse",
]
