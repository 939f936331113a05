"""Quiz administration: CRUD and publication state."""

from typing import Any

from pydantic import ValidationError

from awareness_quiz.core.exceptions import NotFoundError, QuizValidationError
from awareness_quiz.core.logging_config import get_logger
from awareness_quiz.data.sample_quizzes import SAMPLE_QUIZZES
from awareness_quiz.models import (
    Quiz,
    QuizCreate,
    QuizStatus,
    QuizSummary,
    QuizUpdate,
)
from awareness_quiz.models.quiz import new_id, utcnow
from awareness_quiz.storage.base import QuizStore

logger = get_logger(__name__)


def validation_details(error: ValidationError) -> list[str]:
    """Flatten pydantic errors into 'location: message' strings."""
    details = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"])
        details.append(f"{location}: {err['msg']}" if location else err["msg"])
    return details


def load_quiz_payload(payload: dict[str, Any] | QuizCreate) -> QuizCreate:
    """Validate a raw quiz definition.

    Raises:
        QuizValidationError: the definition is invalid
    """
    if isinstance(payload, QuizCreate):
        return payload
    try:
        return QuizCreate.model_validate(payload)
    except ValidationError as e:
        raise QuizValidationError("Validation failed", details=validation_details(e)) from e


def check_publishable(quiz: Quiz) -> None:
    """A quiz needs at least one question to be published."""
    if not quiz.questions:
        raise QuizValidationError("Cannot publish quiz with no questions")


class QuizService:
    """Admin operations on quizzes."""

    def __init__(self, quizzes: QuizStore) -> None:
        self.quizzes = quizzes

    async def list_quizzes(
        self,
        status: str | None = None,
        category: str | None = None,
        difficulty: str | None = None,
        search: str | None = None,
    ) -> list[Quiz]:
        return await self.quizzes.find_many(status, category, difficulty, search)

    async def get_quiz(self, quiz_id: str) -> Quiz:
        quiz = await self.quizzes.find_by_id(quiz_id)
        if quiz is None:
            raise NotFoundError("Quiz not found")
        return quiz

    async def create_quiz(
        self, payload: dict[str, Any] | QuizCreate, created_by: str | None = None
    ) -> Quiz:
        """Create a quiz; new quizzes always start as drafts."""
        data = load_quiz_payload(payload)
        quiz = Quiz(**data.model_dump(), status=QuizStatus.DRAFT, created_by=created_by)
        await self.quizzes.create(quiz)
        logger.info("Created quiz %s with %d questions", quiz.id, quiz.question_count)
        return quiz

    async def update_quiz(self, quiz_id: str, payload: dict[str, Any] | QuizUpdate) -> Quiz:
        """Apply the provided fields to a quiz."""
        quiz = await self.get_quiz(quiz_id)
        if not isinstance(payload, QuizUpdate):
            try:
                payload = QuizUpdate.model_validate(payload)
            except ValidationError as e:
                raise QuizValidationError(
                    "Validation failed", details=validation_details(e)
                ) from e

        changes = payload.model_dump(exclude_unset=True)
        data = quiz.model_dump()
        data.update(changes)
        data["updated_at"] = utcnow()
        try:
            updated = Quiz.model_validate(data)
        except ValidationError as e:
            raise QuizValidationError("Validation failed", details=validation_details(e)) from e

        if updated.status == QuizStatus.PUBLISHED:
            check_publishable(updated)
        await self.quizzes.save(updated)
        logger.info("Updated quiz %s fields: %s", quiz_id, ", ".join(sorted(changes)))
        return updated

    async def delete_quiz(self, quiz_id: str) -> None:
        if not await self.quizzes.delete(quiz_id):
            raise NotFoundError("Quiz not found")
        logger.info("Deleted quiz %s", quiz_id)

    async def publish_quiz(self, quiz_id: str) -> Quiz:
        """Publish a quiz; the stored quiz is untouched if it has no questions."""
        quiz = await self.get_quiz(quiz_id)
        check_publishable(quiz)
        now = utcnow()
        published = quiz.model_copy(
            update={"status": QuizStatus.PUBLISHED, "published_at": now, "updated_at": now}
        )
        await self.quizzes.save(published)
        logger.info("Published quiz %s", quiz_id)
        return published

    async def unpublish_quiz(self, quiz_id: str) -> Quiz:
        quiz = await self.get_quiz(quiz_id)
        draft = quiz.model_copy(
            update={"status": QuizStatus.DRAFT, "published_at": None, "updated_at": utcnow()}
        )
        await self.quizzes.save(draft)
        logger.info("Unpublished quiz %s", quiz_id)
        return draft

    async def archive_quiz(self, quiz_id: str) -> Quiz:
        quiz = await self.get_quiz(quiz_id)
        archived = quiz.model_copy(
            update={"status": QuizStatus.ARCHIVED, "updated_at": utcnow()}
        )
        await self.quizzes.save(archived)
        logger.info("Archived quiz %s", quiz_id)
        return archived

    async def duplicate_quiz(self, quiz_id: str) -> Quiz:
        """Copy a quiz as a new draft."""
        original = await self.get_quiz(quiz_id)
        now = utcnow()
        copy = original.model_copy(
            deep=True,
            update={
                "id": new_id(),
                "title": f"{original.title} (Copy)",
                "status": QuizStatus.DRAFT,
                "published_at": None,
                "created_at": now,
                "updated_at": now,
            },
        )
        await self.quizzes.create(copy)
        logger.info("Duplicated quiz %s as %s", quiz_id, copy.id)
        return copy

    async def quiz_summary(self, quiz_id: str) -> QuizSummary:
        quiz = await self.get_quiz(quiz_id)
        return QuizSummary(
            total_questions=quiz.question_count,
            total_points=quiz.total_points,
            time_limit=quiz.time_limit,
            difficulty=quiz.difficulty,
            category=quiz.category,
        )

    async def seed_sample_quizzes(self) -> list[Quiz]:
        """Load the bundled sample quizzes as published, if the store is empty."""
        if await self.quizzes.count() > 0:
            logger.info("Quiz store not empty, skipping sample quizzes")
            return []

        seeded = []
        for payload in SAMPLE_QUIZZES:
            quiz = await self.create_quiz(payload)
            seeded.append(await self.publish_quiz(quiz.id))
        logger.info("Seeded %d sample quizzes", len(seeded))
        return seeded
