"""Tests for the quiz administration service."""

import pytest

from awareness_quiz.core.exceptions import NotFoundError, QuizValidationError
from awareness_quiz.data.sample_quizzes import SAMPLE_QUIZZES
from awareness_quiz.models import QuizDifficulty, QuizStatus
from awareness_quiz.services.quiz_service import load_quiz_payload


class TestLoadQuizPayload:
    """Test validation of raw quiz definitions."""

    def test_valid_payload(self, sample_quiz_payload):
        """Test loading a valid definition."""
        data = load_quiz_payload(sample_quiz_payload)

        assert data.title == "Password Hygiene"
        assert len(data.questions) == 2

    def test_invalid_payload_has_details(self, sample_quiz_payload):
        """Test that validation failures list their locations."""
        sample_quiz_payload["passingScore"] = 150
        sample_quiz_payload["questions"][0]["options"] = ["Only one"]

        with pytest.raises(QuizValidationError) as exc_info:
            load_quiz_payload(sample_quiz_payload)

        assert exc_info.value.message == "Validation failed"
        assert any("passingScore" in d for d in exc_info.value.details)
        assert any("options" in d for d in exc_info.value.details)


class TestQuizCrud:
    """Test creating, reading, updating and deleting quizzes."""

    @pytest.mark.asyncio
    async def test_create_starts_as_draft(self, quiz_service, sample_quiz_payload):
        """Test that new quizzes are drafts with their creator recorded."""
        sample_quiz_payload["status"] = "published"

        quiz = await quiz_service.create_quiz(sample_quiz_payload, created_by="admin-1")

        assert quiz.status == QuizStatus.DRAFT
        assert quiz.created_by == "admin-1"
        assert quiz.total_points == 3
        assert (await quiz_service.get_quiz(quiz.id)).title == "Password Hygiene"

    @pytest.mark.asyncio
    async def test_get_missing(self, quiz_service):
        """Test that a missing quiz raises NotFoundError."""
        with pytest.raises(NotFoundError):
            await quiz_service.get_quiz("missing")

    @pytest.mark.asyncio
    async def test_update_partial(self, quiz_service, sample_quiz_payload):
        """Test that only the provided fields change."""
        quiz = await quiz_service.create_quiz(sample_quiz_payload)

        updated = await quiz_service.update_quiz(quiz.id, {"passingScore": 90, "title": "New"})

        assert updated.passing_score == 90
        assert updated.title == "New"
        assert updated.max_attempts == 2
        assert updated.question_count == 2
        assert updated.updated_at >= quiz.updated_at

    @pytest.mark.asyncio
    async def test_update_invalid(self, quiz_service, sample_quiz_payload):
        """Test that an invalid update is rejected and nothing changes."""
        quiz = await quiz_service.create_quiz(sample_quiz_payload)

        with pytest.raises(QuizValidationError):
            await quiz_service.update_quiz(quiz.id, {"passingScore": -5})

        assert (await quiz_service.get_quiz(quiz.id)).passing_score == 50

    @pytest.mark.asyncio
    async def test_delete(self, quiz_service, sample_quiz_payload):
        """Test deleting a quiz, then deleting it again."""
        quiz = await quiz_service.create_quiz(sample_quiz_payload)

        await quiz_service.delete_quiz(quiz.id)

        with pytest.raises(NotFoundError):
            await quiz_service.delete_quiz(quiz.id)

    @pytest.mark.asyncio
    async def test_list_filters(self, quiz_service, sample_quiz_payload):
        """Test listing with status, difficulty and search filters."""
        draft = await quiz_service.create_quiz(sample_quiz_payload)
        other = await quiz_service.create_quiz(
            {"title": "Tailgating", "difficulty": "hard", "tags": ["physical"]}
        )
        await quiz_service.publish_quiz(draft.id)

        published = await quiz_service.list_quizzes(status="published")
        hard = await quiz_service.list_quizzes(difficulty=QuizDifficulty.HARD)
        searched = await quiz_service.list_quizzes(search="PHYSICAL")

        assert [q.id for q in published] == [draft.id]
        assert [q.id for q in hard] == [other.id]
        assert [q.id for q in searched] == [other.id]

    @pytest.mark.asyncio
    async def test_search_escapes_regex(self, quiz_service):
        """Test that search text is matched literally."""
        await quiz_service.create_quiz({"title": "Passwords (basics)"})

        assert len(await quiz_service.list_quizzes(search="(basics")) == 1
        assert await quiz_service.list_quizzes(search=".*x") == []


class TestPublication:
    """Test publication state changes."""

    @pytest.mark.asyncio
    async def test_publish(self, quiz_service, sample_quiz_payload):
        """Test publishing a quiz with questions."""
        quiz = await quiz_service.create_quiz(sample_quiz_payload)

        published = await quiz_service.publish_quiz(quiz.id)

        assert published.status == QuizStatus.PUBLISHED
        assert published.published_at is not None

    @pytest.mark.asyncio
    async def test_publish_without_questions(self, quiz_service):
        """Test that an empty quiz cannot be published and stays a draft."""
        quiz = await quiz_service.create_quiz({"title": "Empty"})

        with pytest.raises(QuizValidationError, match="Cannot publish quiz with no questions"):
            await quiz_service.publish_quiz(quiz.id)

        stored = await quiz_service.get_quiz(quiz.id)
        assert stored.status == QuizStatus.DRAFT
        assert stored.published_at is None

    @pytest.mark.asyncio
    async def test_published_quiz_keeps_its_questions(self, quiz_service, sample_quiz_payload):
        """Test that a published quiz cannot be emptied by an update."""
        quiz = await quiz_service.create_quiz(sample_quiz_payload)
        await quiz_service.publish_quiz(quiz.id)

        with pytest.raises(QuizValidationError, match="Cannot publish quiz with no questions"):
            await quiz_service.update_quiz(quiz.id, {"questions": []})

        stored = await quiz_service.get_quiz(quiz.id)
        assert stored.status == QuizStatus.PUBLISHED
        assert len(stored.questions) == 2

    @pytest.mark.asyncio
    async def test_draft_quiz_can_be_emptied(self, quiz_service, sample_quiz_payload):
        """Test that drafts may drop all their questions."""
        quiz = await quiz_service.create_quiz(sample_quiz_payload)

        updated = await quiz_service.update_quiz(quiz.id, {"questions": []})

        assert updated.questions == []
        assert updated.status == QuizStatus.DRAFT

    @pytest.mark.asyncio
    async def test_unpublish(self, quiz_service, sample_quiz_payload):
        """Test returning a published quiz to draft."""
        quiz = await quiz_service.create_quiz(sample_quiz_payload)
        await quiz_service.publish_quiz(quiz.id)

        draft = await quiz_service.unpublish_quiz(quiz.id)

        assert draft.status == QuizStatus.DRAFT
        assert draft.published_at is None

    @pytest.mark.asyncio
    async def test_archive(self, quiz_service, sample_quiz_payload):
        """Test archiving a quiz."""
        quiz = await quiz_service.create_quiz(sample_quiz_payload)

        archived = await quiz_service.archive_quiz(quiz.id)

        assert archived.status == QuizStatus.ARCHIVED

    @pytest.mark.asyncio
    async def test_duplicate(self, quiz_service, sample_quiz_payload):
        """Test that a copy is a new draft with the same questions."""
        quiz = await quiz_service.create_quiz(sample_quiz_payload)
        await quiz_service.publish_quiz(quiz.id)

        copy = await quiz_service.duplicate_quiz(quiz.id)

        assert copy.id != quiz.id
        assert copy.title == "Password Hygiene (Copy)"
        assert copy.status == QuizStatus.DRAFT
        assert [q.id for q in copy.questions] == ["p1", "p2"]
        assert (await quiz_service.get_quiz(quiz.id)).status == QuizStatus.PUBLISHED

    @pytest.mark.asyncio
    async def test_summary(self, quiz_service, sample_quiz_payload):
        """Test the static quiz summary."""
        quiz = await quiz_service.create_quiz(sample_quiz_payload)

        summary = await quiz_service.quiz_summary(quiz.id)

        assert summary.total_questions == 2
        assert summary.total_points == 3
        assert summary.difficulty == QuizDifficulty.EASY


class TestSeeding:
    """Test loading the sample quizzes."""

    @pytest.mark.asyncio
    async def test_seed_empty_store(self, quiz_service):
        """Test that samples are created and published."""
        seeded = await quiz_service.seed_sample_quizzes()

        assert len(seeded) == len(SAMPLE_QUIZZES)
        assert all(q.status == QuizStatus.PUBLISHED for q in seeded)

    @pytest.mark.asyncio
    async def test_seed_skips_non_empty_store(self, quiz_service, sample_quiz_payload):
        """Test that an existing store is left alone."""
        await quiz_service.create_quiz(sample_quiz_payload)

        assert await quiz_service.seed_sample_quizzes() == []
