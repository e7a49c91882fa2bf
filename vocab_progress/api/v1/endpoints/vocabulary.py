"""Vocabulary browsing and removal endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from vocab_progress.api import deps
from vocab_progress.schemas import VocabularyListResponse, VocabularyWordRead, WordRemovalResponse
from vocab_progress.services.progress import ProgressService
from vocab_progress.services.vocabulary import VocabularyCatalog

router = APIRouter(prefix="/vocabulary", tags=["vocabulary"])


@router.get("/", response_model=VocabularyListResponse)
def list_vocabulary(
    group: str | None = Query(default=None, description="Group label to filter by"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    catalog: VocabularyCatalog = Depends(deps.get_vocabulary_catalog),
) -> VocabularyListResponse:
    """Return vocabulary items with optional pagination."""

    items = catalog.list_words(group=group, limit=limit, offset=offset)
    total = catalog.count_words(group=group)
    return VocabularyListResponse(
        total=total, items=[VocabularyWordRead.model_validate(item) for item in items]
    )


@router.get("/{word_id}", response_model=VocabularyWordRead)
def get_vocabulary_word(
    word_id: int, catalog: VocabularyCatalog = Depends(deps.get_vocabulary_catalog)
) -> VocabularyWordRead:
    """Retrieve a vocabulary word by identifier."""

    return VocabularyWordRead.model_validate(catalog.get_by_id(word_id))


@router.delete("/{word_id}", response_model=WordRemovalResponse)
def delete_vocabulary_word(
    word_id: int, service: ProgressService = Depends(deps.get_progress_service)
) -> WordRemovalResponse:
    """Delete a vocabulary word and purge it from every learner's progress."""

    purged = service.remove_word(word_id=word_id)
    return WordRemovalResponse(word_id=word_id, purged_users=purged)
