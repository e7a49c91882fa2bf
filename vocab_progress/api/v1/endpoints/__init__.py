"""API endpoint modules for v1."""

from vocab_progress.api.v1.endpoints import progress, vocabulary

__all__ = ["progress", "vocabulary"]
