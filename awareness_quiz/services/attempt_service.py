"""Attempt lifecycle: start, submit and grade, read, statistics."""

from typing import Any

from awareness_quiz.core.exceptions import (
    AttemptLimitExceededError,
    AttemptStateConflict,
    ConflictError,
    DuplicateAttemptError,
    ForbiddenError,
    InvalidStateError,
    NotAvailableError,
    NotFoundError,
)
from awareness_quiz.core.logging_config import get_logger
from awareness_quiz.grading.scorer import (
    ManualGradingPolicy,
    grade_submission,
    parse_submission,
    round_half_up,
)
from awareness_quiz.models import (
    Attempt,
    AttemptStatus,
    QuizReference,
    QuizStatistics,
    QuizStatisticsReport,
    QuizStatus,
    SubmissionOutcome,
)
from awareness_quiz.models.quiz import utcnow
from awareness_quiz.storage.base import AttemptStore, QuizStore

logger = get_logger(__name__)


class AttemptService:
    """Grades quiz attempts on top of a quiz store and an attempt store."""

    def __init__(
        self,
        quizzes: QuizStore,
        attempts: AttemptStore,
        manual_grading_policy: ManualGradingPolicy = "review",
        create_retries: int = 5,
        recent_attempts_limit: int = 10,
    ) -> None:
        self.quizzes = quizzes
        self.attempts = attempts
        self.manual_grading_policy = manual_grading_policy
        self.create_retries = create_retries
        self.recent_attempts_limit = recent_attempts_limit

    async def start_attempt(
        self,
        quiz_id: str,
        user_id: str,
        ip_address: str = "",
        user_agent: str = "",
    ) -> Attempt:
        """
        Create a new in-progress attempt.

        The attempt number is count + 1. When a concurrent start takes the
        same number the store rejects the insert and the count is redone,
        so numbers stay unique and the attempt limit holds.

        Raises:
            NotFoundError: the quiz does not exist
            NotAvailableError: the quiz is not published
            AttemptLimitExceededError: the user has no attempts left
            ConflictError: every retry collided with another start
        """
        quiz = await self.quizzes.find_by_id(quiz_id)
        if quiz is None:
            raise NotFoundError("Quiz not found")
        if quiz.status != QuizStatus.PUBLISHED:
            raise NotAvailableError("Quiz is not available for attempts")

        for _ in range(self.create_retries):
            existing = await self.attempts.count_by_quiz_and_user(quiz_id, user_id)
            if quiz.max_attempts > 0 and existing >= quiz.max_attempts:
                raise AttemptLimitExceededError(quiz.max_attempts)

            attempt = Attempt(
                quiz_id=quiz_id,
                user_id=user_id,
                attempt_number=existing + 1,
                ip_address=ip_address,
                user_agent=user_agent,
            )
            try:
                await self.attempts.create(attempt)
            except DuplicateAttemptError:
                logger.warning(
                    "Attempt number %d taken for quiz %s, retrying",
                    attempt.attempt_number,
                    quiz_id,
                )
                continue

            logger.info(
                "Started attempt %d on quiz %s",
                attempt.attempt_number,
                quiz_id,
                extra={"user_id": user_id, "attempt_id": attempt.id},
            )
            return attempt

        raise ConflictError("Could not allocate an attempt number, please retry")

    async def submit_answers(self, attempt_id: str, answers: Any) -> SubmissionOutcome:
        """
        Grade submitted answers and complete the attempt.

        Args:
            attempt_id: Attempt to complete
            answers: Raw list of {questionId, answer, timeSpent} objects

        Returns:
            The completed attempt and its results summary

        Raises:
            NotFoundError: the attempt or its quiz does not exist
            InvalidStateError: the attempt is not in progress
            BadRequestError: the answers payload is malformed
        """
        attempt = await self.attempts.find_by_id(attempt_id)
        if attempt is None:
            raise NotFoundError("Quiz attempt not found")
        if attempt.status != AttemptStatus.IN_PROGRESS:
            raise InvalidStateError("Quiz attempt is not in progress")

        submitted = parse_submission(answers)

        quiz = await self.quizzes.find_by_id(attempt.quiz_id)
        if quiz is None:
            raise NotFoundError("Quiz not found")

        graded = grade_submission(quiz, submitted, self.manual_grading_policy)
        results = graded.results

        completed = attempt.model_copy(
            update={
                "answers": graded.answers,
                "score": results.score,
                "percentage": results.percentage,
                "passed": results.passed,
                "time_spent": graded.time_spent,
                "status": AttemptStatus.COMPLETED,
                "completed_at": utcnow(),
            }
        )
        try:
            await self.attempts.complete(completed)
        except AttemptStateConflict as e:
            raise InvalidStateError("Quiz attempt is not in progress") from e

        logger.info(
            "Graded attempt %s: %d/%d points, %d%%, passed=%s",
            attempt_id,
            results.score,
            results.total_possible,
            results.percentage,
            results.passed,
            extra={"user_id": attempt.user_id, "quiz_id": quiz.id},
        )
        return SubmissionOutcome(attempt=completed, results=results)

    async def get_attempt(
        self, attempt_id: str, requesting_user_id: str, is_admin: bool = False
    ) -> Attempt:
        """Fetch an attempt owned by the requester, or any attempt for admins."""
        attempt = await self.attempts.find_by_id(attempt_id)
        if attempt is None:
            raise NotFoundError("Quiz attempt not found")
        if attempt.user_id != requesting_user_id and not is_admin:
            raise ForbiddenError("Access denied")
        return attempt

    async def list_attempts(self, user_id: str, quiz_id: str | None = None) -> list[Attempt]:
        """Attempts of a user, newest first."""
        return await self.attempts.list_by_user(user_id, quiz_id)

    async def get_quiz_statistics(self, quiz_id: str) -> QuizStatisticsReport:
        """Aggregate completed attempts of a quiz."""
        quiz = await self.quizzes.find_by_id(quiz_id)
        if quiz is None:
            raise NotFoundError("Quiz not found")

        aggregate = await self.attempts.aggregate_by_quiz(quiz_id)
        statistics = QuizStatistics(
            total_attempts=aggregate.total_attempts,
            average_score=round_half_up(aggregate.average_score),
            average_time=round(aggregate.average_time, 2),
            pass_rate=round_half_up(aggregate.pass_rate * 100),
        )
        recent = await self.attempts.recent_by_quiz(quiz_id, self.recent_attempts_limit)

        return QuizStatisticsReport(
            quiz=QuizReference(
                id=quiz.id,
                title=quiz.title,
                total_questions=quiz.question_count,
                passing_score=quiz.passing_score,
            ),
            statistics=statistics,
            recent_attempts=recent,
        )
