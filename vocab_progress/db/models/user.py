"""User database model."""
import uuid

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from vocab_progress.db.base import Base
from vocab_progress.db.types import ProgressDocument


class User(Base):
    """A learner and the progress document they own."""

    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    display_name = Column(String(255))

    # Keyed map, history log and mastery lists; see core.srs.codec
    progress = Column(ProgressDocument, nullable=True)
    # Bumped on every progress write, compared on save
    progress_version = Column(Integer, nullable=False, default=0, server_default="0")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<User email={self.email!r} progress_version={self.progress_version!r}>"
