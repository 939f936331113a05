"""
Custom exceptions for the quiz service.

Each public error carries the HTTP status code the API answers with.
"""


class AwarenessQuizError(Exception):
    """Base exception for all quiz service errors."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(AwarenessQuizError):
    """Raised when a quiz or attempt does not exist."""

    status_code = 404


class NotAvailableError(AwarenessQuizError):
    """Raised when a quiz is not published."""

    status_code = 400


class AttemptLimitExceededError(AwarenessQuizError):
    """Raised when a user has used up the allowed attempts."""

    status_code = 400

    def __init__(self, max_attempts: int):
        self.max_attempts = max_attempts
        super().__init__(f"Maximum attempts ({max_attempts}) reached for this quiz")


class InvalidStateError(AwarenessQuizError):
    """Raised when an attempt is not in progress at submission time."""

    status_code = 400


class BadRequestError(AwarenessQuizError):
    """Raised when a request payload is malformed."""

    status_code = 400

    def __init__(self, message: str, details: list | None = None):
        self.details = details or []
        super().__init__(message)


class ForbiddenError(AwarenessQuizError):
    """Raised when a user reads an attempt they do not own."""

    status_code = 403


class QuizValidationError(AwarenessQuizError):
    """Raised when a quiz definition is invalid for the requested operation."""

    status_code = 400

    def __init__(self, message: str, details: list | None = None):
        self.details = details or []
        super().__init__(message)


class ConflictError(AwarenessQuizError):
    """Raised when concurrent writes keep colliding."""

    status_code = 409


class DuplicateAttemptError(AwarenessQuizError):
    """Raised by a store when (quiz, user, attempt number) already exists."""

    status_code = 409


class AttemptStateConflict(AwarenessQuizError):
    """Raised by a store when a conditional status write finds another state."""

    status_code = 409
