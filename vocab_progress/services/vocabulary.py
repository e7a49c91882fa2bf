"""Read access to the vocabulary catalog."""
from __future__ import annotations

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from vocab_progress.db.models.vocabulary import VocabularyWord
from vocab_progress.services.store import store_errors
from vocab_progress.utils.exceptions import VocabularyNotFoundError

UNGROUPED = "Ungrouped"
ALL_GROUPS = "All"


class VocabularyCatalog:
    """Provide querying utilities over the vocabulary catalog."""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _filtered(stmt, group: str | None):
        if not group or group == ALL_GROUPS:
            return stmt
        if group == UNGROUPED:
            return stmt.where(or_(VocabularyWord.group.is_(None), VocabularyWord.group == ""))
        return stmt.where(VocabularyWord.group == group)

    def list_all(self, *, group: str | None = None) -> list[VocabularyWord]:
        """Return every catalog item ordered by source term."""

        stmt = self._filtered(select(VocabularyWord), group).order_by(
            VocabularyWord.portuguese.asc(), VocabularyWord.id.asc()
        )
        with store_errors(self.db, "list vocabulary"):
            return list(self.db.scalars(stmt))

    def list_words(
        self, *, group: str | None = None, limit: int, offset: int
    ) -> list[VocabularyWord]:
        """Return a page of the catalog ordered by source term."""

        stmt = (
            self._filtered(select(VocabularyWord), group)
            .order_by(VocabularyWord.portuguese.asc(), VocabularyWord.id.asc())
            .offset(offset)
            .limit(limit)
        )
        with store_errors(self.db, "list vocabulary"):
            return list(self.db.scalars(stmt))

    def count_words(self, *, group: str | None = None) -> int:
        """Return the number of catalog items matching the filter."""

        stmt = self._filtered(select(func.count()).select_from(VocabularyWord), group)
        with store_errors(self.db, "count vocabulary"):
            return int(self.db.scalar(stmt) or 0)

    def get_by_id(self, word_id: int) -> VocabularyWord:
        """Retrieve a single vocabulary word by identifier."""

        with store_errors(self.db, "load vocabulary word"):
            word = self.db.get(VocabularyWord, word_id)
        if not word:
            raise VocabularyNotFoundError("Vocabulary word not found", details={"word_id": word_id})
        return word

    def delete(self, word: VocabularyWord) -> None:
        """Delete ``word`` and commit."""

        with store_errors(self.db, "delete vocabulary word"):
            self.db.delete(word)
            self.db.commit()
