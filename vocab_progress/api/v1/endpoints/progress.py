"""Endpoints for learner vocabulary progress."""
from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, Query

from vocab_progress.api.deps import get_progress_service
from vocab_progress.schemas import (
    ProgressSummaryRead,
    ProgressUpdateRequest,
    ReviewRequest,
    ReviewResponse,
    WordProgressRead,
)
from vocab_progress.services.progress import ProgressService


router = APIRouter(prefix="/users/{user_id}/progress", tags=["progress"])


@router.get("", response_model=list[WordProgressRead])
def list_progress(
    *,
    user_id: uuid.UUID,
    group: str | None = Query(None, description="Group label; 'Ungrouped' selects words without one"),
    service: ProgressService = Depends(get_progress_service),
) -> list[WordProgressRead]:
    """Return every vocabulary word merged with the learner's progress."""

    views = service.list_progress(user_id=user_id, group=group)
    return [WordProgressRead.from_view(view) for view in views]


@router.get("/due", response_model=list[WordProgressRead])
def list_due(
    *,
    user_id: uuid.UUID,
    now: datetime | None = Query(None, description="Evaluate due dates at this instant instead of the server clock"),
    group: str | None = Query(None),
    service: ProgressService = Depends(get_progress_service),
) -> list[WordProgressRead]:
    """Return the words due for review, in catalog order."""

    views = service.due_list(user_id=user_id, now=now, group=group)
    return [WordProgressRead.from_view(view) for view in views]


@router.get("/summary", response_model=ProgressSummaryRead)
def get_summary(
    *,
    user_id: uuid.UUID,
    service: ProgressService = Depends(get_progress_service),
) -> ProgressSummaryRead:
    """Return mastery tier and due counters for the learner."""

    return ProgressSummaryRead.model_validate(service.progress_summary(user_id=user_id))


@router.post("/review", response_model=ReviewResponse)
def submit_review(
    *,
    user_id: uuid.UUID,
    payload: ReviewRequest,
    service: ProgressService = Depends(get_progress_service),
) -> ReviewResponse:
    """Register a learner review and return the new schedule."""

    entry = service.review_word(user_id=user_id, word_id=payload.word_id, outcome=payload.outcome)
    return ReviewResponse.from_entry(payload.word_id, entry)


@router.get("/{word_id}", response_model=WordProgressRead)
def get_word_progress(
    *,
    user_id: uuid.UUID,
    word_id: int,
    service: ProgressService = Depends(get_progress_service),
) -> WordProgressRead:
    """Return one vocabulary word merged with the learner's progress."""

    return WordProgressRead.from_view(service.get_word_progress(user_id=user_id, word_id=word_id))


@router.put("/{word_id}", response_model=WordProgressRead)
def update_word_progress(
    *,
    user_id: uuid.UUID,
    word_id: int,
    payload: ProgressUpdateRequest,
    service: ProgressService = Depends(get_progress_service),
) -> WordProgressRead:
    """Overwrite scheduling fields for one word."""

    view = service.set_progress(user_id=user_id, word_id=word_id, **payload.model_dump())
    return WordProgressRead.from_view(view)
