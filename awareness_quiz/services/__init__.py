"""Application services used by the API and the CLI."""

from .attempt_service import AttemptService
from .quiz_service import QuizService

__all__ = ["AttemptService", "QuizService"]
