"""Scoring of submitted answers against a quiz's question bank.

Functions:
- round_half_up: percentage rounding with halves going up.
- parse_submission: validate a raw answers payload.
- grade_answer: grade one answer against its question.
- grade_submission: grade a full submission and build the results summary.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import TypeAdapter, ValidationError

from awareness_quiz.core.exceptions import BadRequestError
from awareness_quiz.models import (
    AttemptResults,
    GradedAnswer,
    Quiz,
    SubmittedAnswer,
)
from awareness_quiz.models.quiz import QuestionBase

ManualGradingPolicy = Literal["review", "exact-match"]

_submission_adapter = TypeAdapter(list[SubmittedAnswer])


@dataclass
class GradedSubmission:
    """Everything computed from one submission, ready to persist."""

    answers: list[GradedAnswer] = field(default_factory=list)
    results: AttemptResults | None = None
    time_spent: float = 0.0


def round_half_up(value: float) -> int:
    """Round a non-negative number to the nearest integer, halves up."""
    return int(math.floor(value + 0.5))


def parse_submission(raw: Any) -> list[SubmittedAnswer]:
    """Validate a raw answers payload.

    Raises:
        BadRequestError: the payload is not a list of well-formed answers
    """
    if not isinstance(raw, list):
        raise BadRequestError("Answers array is required")
    try:
        answers = _submission_adapter.validate_python(raw)
    except ValidationError as e:
        raise BadRequestError(
            "Answers array is malformed",
            details=[err["msg"] for err in e.errors()],
        ) from e

    # one answer per question keeps the score within the quiz's total
    seen: set[str] = set()
    for submitted in answers:
        if submitted.question_id in seen:
            raise BadRequestError(f"Duplicate answer for question {submitted.question_id}")
        seen.add(submitted.question_id)
    return answers


def is_auto_graded(question: QuestionBase, policy: ManualGradingPolicy) -> bool:
    """Whether a question counts towards the automatic score."""
    return not (policy == "review" and question.requires_manual_review)


def grade_answer(
    question: QuestionBase,
    submitted: SubmittedAnswer,
    policy: ManualGradingPolicy = "review",
) -> GradedAnswer:
    """Grade a single answer; manually graded questions are left pending."""
    if not is_auto_graded(question, policy):
        return GradedAnswer(
            question_id=submitted.question_id,
            answer=submitted.answer,
            is_correct=False,
            points_awarded=0,
            time_spent=submitted.time_spent,
            pending_review=True,
        )

    correct = question.is_correct(submitted.answer)
    return GradedAnswer(
        question_id=submitted.question_id,
        answer=submitted.answer,
        is_correct=correct,
        points_awarded=question.points if correct else 0,
        time_spent=submitted.time_spent,
    )


def grade_submission(
    quiz: Quiz,
    answers: list[SubmittedAnswer],
    policy: ManualGradingPolicy = "review",
) -> GradedSubmission:
    """Grade a submission against a quiz.

    Answers to unknown question ids are skipped. The result does not depend
    on the order of the submitted answers.
    """
    graded = []
    for submitted in answers:
        question = quiz.get_question(submitted.question_id)
        if question is None:
            continue
        graded.append(grade_answer(question, submitted, policy))

    score = sum(a.points_awarded for a in graded)
    total_possible = sum(q.points for q in quiz.questions if is_auto_graded(q, policy))
    percentage = round_half_up(100 * score / total_possible) if total_possible > 0 else 0

    results = AttemptResults(
        score=score,
        total_possible=total_possible,
        percentage=percentage,
        passed=percentage >= quiz.passing_score,
        correct_answers=sum(1 for a in graded if a.is_correct),
        total_questions=quiz.question_count,
        passing_score=quiz.passing_score,
        pending_review=sum(1 for a in graded if a.pending_review),
    )
    return GradedSubmission(
        answers=graded,
        results=results,
        time_spent=sum(a.time_spent for a in answers),
    )
