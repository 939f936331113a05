"""Quiz and attempt stores."""

from .base import AttemptStore, QuizStore
from .memory import MemoryAttemptStore, MemoryQuizStore

__all__ = [
    "QuizStore",
    "AttemptStore",
    "MemoryQuizStore",
    "MemoryAttemptStore",
]
