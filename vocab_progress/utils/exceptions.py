"""Custom exception classes and error handling utilities."""
from typing import Any, Dict, Optional
from fastapi import HTTPException, status
from loguru import logger


class ProgressEngineException(Exception):
    """Base exception for the application."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NotFoundError(ProgressEngineException):
    """A referenced user or vocabulary item does not exist."""
    pass


class UserNotFoundError(NotFoundError):
    """Raised when a user lookup fails."""
    pass


class VocabularyNotFoundError(NotFoundError):
    """Raised when a vocabulary item cannot be located."""
    pass


class InvalidOutcomeError(ProgressEngineException):
    """Review outcome outside easy/medium/hard."""
    pass


class ConcurrentUpdateConflict(ProgressEngineException):
    """A user record changed between load and save."""
    pass


class StoreUnavailableError(ProgressEngineException):
    """Persistence boundary failure."""
    pass


def handle_not_found_error(error: NotFoundError) -> HTTPException:
    """Handle missing users and vocabulary items."""
    logger.info(f"Not found: {error.message}")
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=error.message
    )


def handle_invalid_outcome_error(error: InvalidOutcomeError) -> HTTPException:
    """Handle review outcome validation errors."""
    logger.warning(f"Invalid outcome: {error.message}")
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={
            "message": error.message,
            "details": error.details
        }
    )


def handle_conflict_error(error: ConcurrentUpdateConflict) -> HTTPException:
    """Handle exhausted compare-and-swap retries."""
    logger.error(f"Concurrent update conflict: {error.message}")
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="Progress was updated concurrently. Please retry."
    )


def handle_store_unavailable_error(error: StoreUnavailableError) -> HTTPException:
    """Handle persistence failures."""
    logger.error(f"Store unavailable: {error.message}")
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Progress store is temporarily unavailable. Please try again later."
    )


def to_http_exception(error: ProgressEngineException) -> HTTPException:
    """Map an application error to the matching HTTP response."""
    if isinstance(error, NotFoundError):
        return handle_not_found_error(error)
    if isinstance(error, InvalidOutcomeError):
        return handle_invalid_outcome_error(error)
    if isinstance(error, ConcurrentUpdateConflict):
        return handle_conflict_error(error)
    if isinstance(error, StoreUnavailableError):
        return handle_store_unavailable_error(error)
    logger.error(f"Unhandled application error: {error.message}")
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=error.message
    )
