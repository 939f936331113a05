"""Store contracts consumed by the quiz and attempt services."""

from abc import ABC, abstractmethod

from awareness_quiz.models import Attempt, AttemptAggregate, Quiz


class QuizStore(ABC):
    """Persistence of quiz definitions."""

    @abstractmethod
    async def find_by_id(self, quiz_id: str) -> Quiz | None:
        """Return the quiz with this id, or None."""

    @abstractmethod
    async def find_many(
        self,
        status: str | None = None,
        category: str | None = None,
        difficulty: str | None = None,
        search: str | None = None,
    ) -> list[Quiz]:
        """
        List quizzes, newest first.

        Args:
            status: Exact status filter
            category: Exact category filter
            difficulty: Exact difficulty filter
            search: Case-insensitive literal match on title, description or tags

        Returns:
            Matching quizzes
        """

    @abstractmethod
    async def create(self, quiz: Quiz) -> Quiz:
        """Insert a new quiz."""

    @abstractmethod
    async def save(self, quiz: Quiz) -> Quiz:
        """Replace a stored quiz with this version."""

    @abstractmethod
    async def delete(self, quiz_id: str) -> bool:
        """Delete a quiz; returns False if it did not exist."""

    @abstractmethod
    async def count(self) -> int:
        """Number of stored quizzes."""


class AttemptStore(ABC):
    """Persistence of quiz attempts."""

    @abstractmethod
    async def create(self, attempt: Attempt) -> Attempt:
        """
        Insert a new attempt.

        Raises:
            DuplicateAttemptError: (quiz_id, user_id, attempt_number) is taken
        """

    @abstractmethod
    async def find_by_id(self, attempt_id: str) -> Attempt | None:
        """Return the attempt with this id, or None."""

    @abstractmethod
    async def count_by_quiz_and_user(self, quiz_id: str, user_id: str) -> int:
        """Number of attempts, in any state, by this user on this quiz."""

    @abstractmethod
    async def list_by_user(self, user_id: str, quiz_id: str | None = None) -> list[Attempt]:
        """Attempts of a user, newest first, optionally for one quiz."""

    @abstractmethod
    async def recent_by_quiz(self, quiz_id: str, limit: int) -> list[Attempt]:
        """Most recent attempts on a quiz by any user."""

    @abstractmethod
    async def complete(self, attempt: Attempt) -> Attempt:
        """
        Write a graded attempt if the stored one is still in progress.

        Raises:
            AttemptStateConflict: the stored attempt is no longer in progress
        """

    @abstractmethod
    async def aggregate_by_quiz(self, quiz_id: str) -> AttemptAggregate:
        """Raw means over the completed attempts of a quiz."""
