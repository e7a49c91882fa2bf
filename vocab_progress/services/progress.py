"""Business logic for learner vocabulary progress."""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, TypeVar

from loguru import logger
from sqlalchemy.orm import Session

from vocab_progress.config import settings
from vocab_progress.core.srs import (
    MasteryTier,
    ProgressEntry,
    ProgressView,
    apply,
    canonicalize,
    due_items,
    is_due,
    merge_progress,
    normalize,
    parse_outcome,
    purge,
    schedule,
)
from vocab_progress.core.srs.codec import parse_timestamp
from vocab_progress.core.srs.entry import MAX_EASE, MAX_INTERVAL, MAX_REVIEW_COUNT, MIN_EASE
from vocab_progress.core.srs.reconciler import references
from vocab_progress.db.models.vocabulary import VocabularyWord
from vocab_progress.services.store import UserProgressStore, store_errors
from vocab_progress.services.vocabulary import VocabularyCatalog
from vocab_progress.utils.exceptions import ConcurrentUpdateConflict

ResultT = TypeVar("ResultT")

# A mutation receives the freshly loaded document and returns the document to
# save (``None`` to skip the write) plus the value handed back to the caller.
Mutation = Callable[[dict[str, Any]], tuple[dict[str, Any] | None, ResultT]]


@dataclass(slots=True)
class ProgressSummary:
    """Aggregate counters over the catalog for one learner."""

    total_words: int
    reviewed: int
    mastered: int
    needs_review: int
    learning: int
    due: int


class ProgressService:
    """High level helper for vocabulary progress workflows."""

    def __init__(
        self,
        db: Session,
        *,
        store: UserProgressStore | None = None,
        catalog: VocabularyCatalog | None = None,
        max_attempts: int | None = None,
    ) -> None:
        self.db = db
        self.store = store or UserProgressStore(db)
        self.catalog = catalog or VocabularyCatalog(db)
        self.max_attempts = max_attempts or settings.REVIEW_MAX_ATTEMPTS

    # ------------------------------------------------------------------
    # Write helpers
    # ------------------------------------------------------------------
    def _update_record(self, user_id: uuid.UUID, mutate: Mutation) -> ResultT:
        """Run load -> mutate -> compare-and-swap save, retrying on conflicts.

        Every attempt starts from a fresh load; a result computed against an
        older version is never written.
        """

        for attempt in range(1, self.max_attempts + 1):
            record = self.store.load(user_id)
            try:
                document, result = mutate(record.document)
            except Exception:
                self.db.rollback()
                raise
            if document is None:
                self.db.rollback()
                return result
            try:
                self.store.save(user_id, document, expected_version=record.version)
            except ConcurrentUpdateConflict:
                self.db.rollback()
                logger.warning(
                    f"Progress write conflict for user {user_id} "
                    f"(attempt {attempt}/{self.max_attempts}, version {record.version})"
                )
                continue
            with store_errors(self.db, "commit user progress"):
                self.db.commit()
            return result

        raise ConcurrentUpdateConflict(
            "Could not save progress after repeated concurrent updates",
            details={"user_id": str(user_id), "attempts": self.max_attempts},
        )

    # ------------------------------------------------------------------
    # Review
    # ------------------------------------------------------------------
    def review_word(
        self,
        *,
        user_id: uuid.UUID,
        word_id: int,
        outcome: Any,
        now: datetime | None = None,
    ) -> ProgressEntry:
        """Schedule the next review of ``word_id`` and persist it atomically."""

        parsed = parse_outcome(outcome)
        self.catalog.get_by_id(word_id)
        now = now or datetime.now(timezone.utc)

        def mutate(document: dict[str, Any]) -> tuple[dict[str, Any], ProgressEntry]:
            # re-checked on every attempt; the word may be removed between retries
            self.catalog.get_by_id(word_id)
            prior = normalize(document, word_id)
            entry = schedule(prior, parsed, now)
            return apply(document, word_id, entry), entry

        entry = self._update_record(user_id, mutate)
        logger.info(
            f"User {user_id} reviewed word {word_id} as {parsed.value}: "
            f"interval={entry.interval} ease={entry.ease:.2f} tier={entry.tier.value}"
        )
        return entry

    def set_progress(
        self,
        *,
        user_id: uuid.UUID,
        word_id: int,
        ease: float | None = None,
        interval: int | None = None,
        review_count: int | None = None,
        last_reviewed: datetime | None = None,
        next_review: datetime | None = None,
        now: datetime | None = None,
    ) -> ProgressView[VocabularyWord]:
        """Overwrite scheduling fields for one word.

        Omitted fields keep their current value, ``last_reviewed`` defaults to
        ``now`` and the review count never moves backwards.
        """

        word = self.catalog.get_by_id(word_id)
        now = now or datetime.now(timezone.utc)

        def mutate(document: dict[str, Any]) -> tuple[dict[str, Any], ProgressEntry]:
            self.catalog.get_by_id(word_id)
            prior = normalize(document, word_id)
            entry = ProgressEntry(
                ease=prior.ease if ease is None else max(MIN_EASE, min(MAX_EASE, ease)),
                interval=prior.interval if interval is None else max(0, min(MAX_INTERVAL, interval)),
                review_count=min(MAX_REVIEW_COUNT, max(prior.review_count, review_count or 0)),
                last_reviewed=parse_timestamp(last_reviewed or now),
                next_review=prior.next_review if next_review is None else parse_timestamp(next_review),
            )
            return apply(document, word_id, entry), entry

        entry = self._update_record(user_id, mutate)
        logger.info(f"User {user_id} progress for word {word_id} set: interval={entry.interval}")
        return ProgressView(item=word, progress=entry)

    # ------------------------------------------------------------------
    # Read helpers
    # ------------------------------------------------------------------
    def list_progress(
        self, *, user_id: uuid.UUID, group: str | None = None
    ) -> list[ProgressView[VocabularyWord]]:
        """Return the whole catalog merged with the learner's progress."""

        record = self.store.load(user_id)
        return merge_progress(self.catalog.list_all(group=group), record.document)

    def due_list(
        self,
        *,
        user_id: uuid.UUID,
        now: datetime | None = None,
        group: str | None = None,
    ) -> list[ProgressView[VocabularyWord]]:
        """Return catalog items due for review at ``now``, in catalog order."""

        now = now or datetime.now(timezone.utc)
        record = self.store.load(user_id)
        return due_items(self.catalog.list_all(group=group), record.document, now)

    def get_word_progress(self, *, user_id: uuid.UUID, word_id: int) -> ProgressView[VocabularyWord]:
        """Return one catalog item merged with the learner's progress."""

        record = self.store.load(user_id)
        word = self.catalog.get_by_id(word_id)
        return ProgressView(item=word, progress=normalize(record.document, word_id))

    def progress_summary(
        self, *, user_id: uuid.UUID, now: datetime | None = None
    ) -> ProgressSummary:
        """Count mastery tiers and due items across the catalog."""

        now = now or datetime.now(timezone.utc)
        views = self.list_progress(user_id=user_id)
        tiers = [view.progress.tier for view in views]
        return ProgressSummary(
            total_words=len(views),
            reviewed=sum(1 for view in views if view.progress.review_count > 0),
            mastered=tiers.count(MasteryTier.MASTERED),
            needs_review=tiers.count(MasteryTier.NEEDS_REVIEW),
            learning=tiers.count(MasteryTier.LEARNING),
            due=sum(1 for view in views if is_due(view.progress, now)),
        )

    # ------------------------------------------------------------------
    # Catalog removal
    # ------------------------------------------------------------------
    def remove_word(self, *, word_id: int) -> int:
        """Delete a catalog item and purge it from every learner's record.

        Returns the number of user records that were rewritten.
        """

        word = self.catalog.get_by_id(word_id)
        self.catalog.delete(word)

        def mutate(document: dict[str, Any]) -> tuple[dict[str, Any] | None, bool]:
            if not references(document, word_id):
                return None, False
            return purge(document, word_id), True

        purged = 0
        for user_id in self.store.user_ids_with_progress():
            if self._update_record(user_id, mutate):
                purged += 1
        logger.info(f"Removed word {word_id}; purged from {purged} user record(s)")
        return purged

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------
    def canonicalize_records(self, *, dry_run: bool = False) -> dict[str, int]:
        """Rewrite legacy-shaped documents into the canonical form."""

        def mutate(document: dict[str, Any]) -> tuple[dict[str, Any] | None, bool]:
            updated = canonicalize(document)
            changed = updated != document
            if not changed or dry_run:
                return None, changed
            return updated, True

        stats = {"checked": 0, "rewritten": 0}
        for user_id in self.store.user_ids_with_progress():
            stats["checked"] += 1
            if self._update_record(user_id, mutate):
                stats["rewritten"] += 1
                logger.info(f"{'Would rewrite' if dry_run else 'Rewrote'} progress for user {user_id}")
        return stats
