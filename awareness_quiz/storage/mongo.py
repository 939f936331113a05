"""MongoDB stores built on the pymongo async client."""

import re
from typing import Any

from pymongo import ASCENDING, DESCENDING, AsyncMongoClient
from pymongo.errors import DuplicateKeyError

from awareness_quiz.core.exceptions import AttemptStateConflict, DuplicateAttemptError
from awareness_quiz.core.logging_config import get_logger
from awareness_quiz.models import Attempt, AttemptAggregate, AttemptStatus, Quiz

from .base import AttemptStore, QuizStore

logger = get_logger(__name__)


def to_document(model: Quiz | Attempt) -> dict[str, Any]:
    """Dump a model to a MongoDB document keyed by ``_id``."""
    document = model.model_dump(exclude=set(type(model).model_computed_fields))
    document["_id"] = document.pop("id")
    return document


def from_document(document: dict[str, Any]) -> dict[str, Any]:
    """Turn a MongoDB document back into model fields."""
    data = dict(document)
    data["id"] = str(data.pop("_id"))
    return data


def build_quiz_filter(
    status: str | None = None,
    category: str | None = None,
    difficulty: str | None = None,
    search: str | None = None,
) -> dict[str, Any]:
    """Build the find() filter for a quiz listing."""
    condition: dict[str, Any] = {}
    if status:
        condition["status"] = status
    if category:
        condition["category"] = category
    if difficulty:
        condition["difficulty"] = difficulty
    if search:
        regex = {"$regex": re.escape(search), "$options": "i"}
        condition["$or"] = [
            {"title": regex},
            {"description": regex},
            {"tags": {"$elemMatch": regex}},
        ]
    return condition


class MongoQuizStore(QuizStore):
    """Quizzes stored in the ``quizzes`` collection."""

    def __init__(self, database) -> None:
        self._collection = database["quizzes"]

    async def ensure_indexes(self) -> None:
        await self._collection.create_index([("status", ASCENDING)])
        await self._collection.create_index([("created_at", DESCENDING)])

    async def find_by_id(self, quiz_id: str) -> Quiz | None:
        document = await self._collection.find_one({"_id": quiz_id})
        return Quiz.model_validate(from_document(document)) if document else None

    async def find_many(
        self,
        status: str | None = None,
        category: str | None = None,
        difficulty: str | None = None,
        search: str | None = None,
    ) -> list[Quiz]:
        cursor = self._collection.find(
            build_quiz_filter(status, category, difficulty, search)
        ).sort("created_at", DESCENDING)
        documents = await cursor.to_list(length=None)
        return [Quiz.model_validate(from_document(d)) for d in documents]

    async def create(self, quiz: Quiz) -> Quiz:
        await self._collection.insert_one(to_document(quiz))
        return quiz

    async def save(self, quiz: Quiz) -> Quiz:
        await self._collection.replace_one({"_id": quiz.id}, to_document(quiz), upsert=True)
        return quiz

    async def delete(self, quiz_id: str) -> bool:
        result = await self._collection.delete_one({"_id": quiz_id})
        return result.deleted_count > 0

    async def count(self) -> int:
        return await self._collection.count_documents({})


class MongoAttemptStore(AttemptStore):
    """Attempts stored in the ``quiz_attempts`` collection.

    A unique index on (quiz_id, user_id, attempt_number) turns concurrent
    starts into a DuplicateKeyError instead of two attempts sharing a number.
    """

    def __init__(self, database) -> None:
        self._collection = database["quiz_attempts"]

    async def ensure_indexes(self) -> None:
        await self._collection.create_index(
            [("quiz_id", ASCENDING), ("user_id", ASCENDING), ("attempt_number", ASCENDING)],
            unique=True,
            name="quiz_user_attempt_number",
        )
        await self._collection.create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])
        await self._collection.create_index([("quiz_id", ASCENDING), ("status", ASCENDING)])

    async def create(self, attempt: Attempt) -> Attempt:
        try:
            await self._collection.insert_one(to_document(attempt))
        except DuplicateKeyError as e:
            raise DuplicateAttemptError(
                f"Attempt {attempt.attempt_number} already exists for this user"
            ) from e
        return attempt

    async def find_by_id(self, attempt_id: str) -> Attempt | None:
        document = await self._collection.find_one({"_id": attempt_id})
        return Attempt.model_validate(from_document(document)) if document else None

    async def count_by_quiz_and_user(self, quiz_id: str, user_id: str) -> int:
        return await self._collection.count_documents({"quiz_id": quiz_id, "user_id": user_id})

    async def list_by_user(self, user_id: str, quiz_id: str | None = None) -> list[Attempt]:
        condition = {"user_id": user_id}
        if quiz_id:
            condition["quiz_id"] = quiz_id
        cursor = self._collection.find(condition).sort("created_at", DESCENDING)
        documents = await cursor.to_list(length=None)
        return [Attempt.model_validate(from_document(d)) for d in documents]

    async def recent_by_quiz(self, quiz_id: str, limit: int) -> list[Attempt]:
        if limit <= 0:
            return []
        cursor = (
            self._collection.find({"quiz_id": quiz_id})
            .sort("created_at", DESCENDING)
            .limit(limit)
        )
        documents = await cursor.to_list(length=None)
        return [Attempt.model_validate(from_document(d)) for d in documents]

    async def complete(self, attempt: Attempt) -> Attempt:
        fields = to_document(attempt)
        fields.pop("_id")
        result = await self._collection.update_one(
            {"_id": attempt.id, "status": AttemptStatus.IN_PROGRESS.value},
            {"$set": fields},
        )
        if result.matched_count == 0:
            raise AttemptStateConflict("Quiz attempt is not in progress")
        return attempt

    async def aggregate_by_quiz(self, quiz_id: str) -> AttemptAggregate:
        pipeline = [
            {"$match": {"quiz_id": quiz_id, "status": AttemptStatus.COMPLETED.value}},
            {
                "$group": {
                    "_id": None,
                    "total_attempts": {"$sum": 1},
                    "average_score": {"$avg": "$percentage"},
                    "average_time": {"$avg": "$time_spent"},
                    "pass_rate": {"$avg": {"$cond": ["$passed", 1, 0]}},
                }
            },
        ]
        cursor = await self._collection.aggregate(pipeline)
        rows = await cursor.to_list(length=None)
        if not rows:
            return AttemptAggregate()
        row = rows[0]
        row.pop("_id", None)
        return AttemptAggregate.model_validate(row)


class MongoConnection:
    """Owns the client and the two stores for one database."""

    def __init__(self, uri: str, database: str) -> None:
        self.client = AsyncMongoClient(uri, tz_aware=True)
        db = self.client[database]
        self.quizzes = MongoQuizStore(db)
        self.attempts = MongoAttemptStore(db)

    async def connect(self) -> None:
        await self.quizzes.ensure_indexes()
        await self.attempts.ensure_indexes()
        logger.info("MongoDB indexes ensured")

    async def close(self) -> None:
        await self.client.close()
