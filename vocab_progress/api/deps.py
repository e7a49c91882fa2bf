"""Shared API dependencies."""
from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from vocab_progress.db.session import get_db
from vocab_progress.services.progress import ProgressService
from vocab_progress.services.vocabulary import VocabularyCatalog

__all__ = ["get_db", "get_progress_service", "get_vocabulary_catalog"]


def get_progress_service(db: Session = Depends(get_db)) -> ProgressService:
    """Assemble the progress service around the request-scoped session."""

    return ProgressService(db)


def get_vocabulary_catalog(db: Session = Depends(get_db)) -> VocabularyCatalog:
    """Return the catalog bound to the request-scoped session."""

    return VocabularyCatalog(db)
