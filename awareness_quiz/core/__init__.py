"""Cross-cutting helpers: exceptions and logging."""

from .exceptions import (
    AttemptLimitExceededError,
    AttemptStateConflict,
    AwarenessQuizError,
    BadRequestError,
    ConflictError,
    DuplicateAttemptError,
    ForbiddenError,
    InvalidStateError,
    NotAvailableError,
    NotFoundError,
    QuizValidationError,
)
from .logging_config import get_logger, setup_logging

__all__ = [
    "AwarenessQuizError",
    "NotFoundError",
    "NotAvailableError",
    "AttemptLimitExceededError",
    "InvalidStateError",
    "BadRequestError",
    "ForbiddenError",
    "QuizValidationError",
    "ConflictError",
    "DuplicateAttemptError",
    "AttemptStateConflict",
    "get_logger",
    "setup_logging",
]
