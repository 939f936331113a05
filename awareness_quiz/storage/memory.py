"""In-process stores backed by dictionaries."""

import asyncio
import re

from awareness_quiz.core.exceptions import AttemptStateConflict, DuplicateAttemptError
from awareness_quiz.models import Attempt, AttemptAggregate, AttemptStatus, Quiz

from .base import AttemptStore, QuizStore


def _matches_search(quiz: Quiz, pattern: re.Pattern) -> bool:
    if pattern.search(quiz.title) or pattern.search(quiz.description):
        return True
    return any(pattern.search(tag) for tag in quiz.tags)


class MemoryQuizStore(QuizStore):
    """Quiz store kept in a dict; copies go in and out."""

    def __init__(self) -> None:
        self._quizzes: dict[str, Quiz] = {}
        self._lock = asyncio.Lock()

    async def find_by_id(self, quiz_id: str) -> Quiz | None:
        quiz = self._quizzes.get(quiz_id)
        return quiz.model_copy(deep=True) if quiz else None

    async def find_many(
        self,
        status: str | None = None,
        category: str | None = None,
        difficulty: str | None = None,
        search: str | None = None,
    ) -> list[Quiz]:
        pattern = re.compile(re.escape(search), re.IGNORECASE) if search else None
        results = []
        for quiz in self._quizzes.values():
            if status and quiz.status != status:
                continue
            if category and quiz.category != category:
                continue
            if difficulty and quiz.difficulty != difficulty:
                continue
            if pattern and not _matches_search(quiz, pattern):
                continue
            results.append(quiz.model_copy(deep=True))
        results.sort(key=lambda q: q.created_at, reverse=True)
        return results

    async def create(self, quiz: Quiz) -> Quiz:
        async with self._lock:
            self._quizzes[quiz.id] = quiz.model_copy(deep=True)
        return quiz

    async def save(self, quiz: Quiz) -> Quiz:
        async with self._lock:
            self._quizzes[quiz.id] = quiz.model_copy(deep=True)
        return quiz

    async def delete(self, quiz_id: str) -> bool:
        async with self._lock:
            return self._quizzes.pop(quiz_id, None) is not None

    async def count(self) -> int:
        return len(self._quizzes)


class MemoryAttemptStore(AttemptStore):
    """Attempt store kept in a dict, with the same uniqueness rules as MongoDB."""

    def __init__(self) -> None:
        self._attempts: dict[str, Attempt] = {}
        self._lock = asyncio.Lock()

    async def create(self, attempt: Attempt) -> Attempt:
        async with self._lock:
            for existing in self._attempts.values():
                if (
                    existing.quiz_id == attempt.quiz_id
                    and existing.user_id == attempt.user_id
                    and existing.attempt_number == attempt.attempt_number
                ):
                    raise DuplicateAttemptError(
                        f"Attempt {attempt.attempt_number} already exists for this user"
                    )
            self._attempts[attempt.id] = attempt.model_copy(deep=True)
        return attempt

    async def find_by_id(self, attempt_id: str) -> Attempt | None:
        attempt = self._attempts.get(attempt_id)
        return attempt.model_copy(deep=True) if attempt else None

    async def count_by_quiz_and_user(self, quiz_id: str, user_id: str) -> int:
        return sum(
            1
            for a in self._attempts.values()
            if a.quiz_id == quiz_id and a.user_id == user_id
        )

    async def list_by_user(self, user_id: str, quiz_id: str | None = None) -> list[Attempt]:
        attempts = [
            a.model_copy(deep=True)
            for a in self._attempts.values()
            if a.user_id == user_id and (quiz_id is None or a.quiz_id == quiz_id)
        ]
        attempts.sort(key=lambda a: a.created_at, reverse=True)
        return attempts

    async def recent_by_quiz(self, quiz_id: str, limit: int) -> list[Attempt]:
        attempts = [a for a in self._attempts.values() if a.quiz_id == quiz_id]
        attempts.sort(key=lambda a: a.created_at, reverse=True)
        return [a.model_copy(deep=True) for a in attempts[:limit]]

    async def complete(self, attempt: Attempt) -> Attempt:
        async with self._lock:
            stored = self._attempts.get(attempt.id)
            if stored is None or stored.status != AttemptStatus.IN_PROGRESS:
                raise AttemptStateConflict("Quiz attempt is not in progress")
            self._attempts[attempt.id] = attempt.model_copy(deep=True)
        return attempt

    async def aggregate_by_quiz(self, quiz_id: str) -> AttemptAggregate:
        completed = [
            a
            for a in self._attempts.values()
            if a.quiz_id == quiz_id and a.status == AttemptStatus.COMPLETED
        ]
        if not completed:
            return AttemptAggregate()
        count = len(completed)
        return AttemptAggregate(
            total_attempts=count,
            average_score=sum(a.percentage for a in completed) / count,
            average_time=sum(a.time_spent for a in completed) / count,
            pass_rate=sum(1 for a in completed if a.passed) / count,
        )
