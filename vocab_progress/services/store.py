"""Persistence boundary for per-user progress documents.

Writes are optimistic: ``save`` only succeeds when the row still carries the
version observed by ``load``. Callers retry the whole load-compute-save cycle
on :class:`ConcurrentUpdateConflict`.
"""
from __future__ import annotations

import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

from loguru import logger
from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vocab_progress.core.srs.codec import ensure_record
from vocab_progress.db.models.user import User
from vocab_progress.utils.exceptions import (
    ConcurrentUpdateConflict,
    StoreUnavailableError,
    UserNotFoundError,
)


@contextmanager
def store_errors(db: Session, action: str) -> Iterator[None]:
    """Translate driver failures into ``StoreUnavailableError`` after rolling back."""

    try:
        yield
    except SQLAlchemyError as exc:
        logger.error(f"Store failure while trying to {action}: {exc}")
        db.rollback()
        raise StoreUnavailableError(f"Could not {action}", details={"error": str(exc)}) from exc


@dataclass(slots=True)
class StoredRecord:
    """A user's progress document together with the version it was read at."""

    user_id: uuid.UUID
    document: dict[str, Any]
    version: int


class UserProgressStore:
    """Load and compare-and-swap save progress documents stored on ``users``."""

    def __init__(self, db: Session):
        self.db = db

    def load(self, user_id: uuid.UUID) -> StoredRecord:
        """Return the user's document (canonical structure) and its version."""

        with store_errors(self.db, "load user progress"):
            row = self.db.execute(
                select(User.progress, User.progress_version).where(User.id == user_id)
            ).first()
        if row is None:
            raise UserNotFoundError("User not found", details={"user_id": str(user_id)})
        return StoredRecord(
            user_id=user_id,
            document=ensure_record(row.progress),
            version=row.progress_version or 0,
        )

    def save(self, user_id: uuid.UUID, document: dict[str, Any], expected_version: int) -> int:
        """Write ``document`` if the stored version is still ``expected_version``.

        Returns the new version. The caller owns the transaction and commits.
        """

        stmt = (
            update(User)
            .where(User.id == user_id, User.progress_version == expected_version)
            .values(
                progress=document,
                progress_version=User.progress_version + 1,
                updated_at=func.now(),
            )
            .execution_options(synchronize_session=False)
        )
        with store_errors(self.db, "save user progress"):
            result = self.db.execute(stmt)
        if result.rowcount != 1:
            raise ConcurrentUpdateConflict(
                "Progress record changed since it was loaded",
                details={"user_id": str(user_id), "expected_version": expected_version},
            )
        return expected_version + 1

    def user_ids_with_progress(self) -> list[uuid.UUID]:
        """Return the ids of users holding a progress document."""

        with store_errors(self.db, "list users with progress"):
            return list(self.db.scalars(select(User.id).where(User.progress.isnot(None))))
