"""Data models for quizzes and attempts."""

from .attempt import (
    Attempt,
    AttemptAggregate,
    AttemptResults,
    AttemptStatus,
    GradedAnswer,
    QuizReference,
    QuizStatistics,
    QuizStatisticsReport,
    SubmissionOutcome,
    SubmittedAnswer,
)
from .quiz import (
    MultipleChoiceQuestion,
    Question,
    QuestionKind,
    Quiz,
    QuizCreate,
    QuizDifficulty,
    QuizStatus,
    QuizSummary,
    QuizUpdate,
    TextQuestion,
    TrueFalseQuestion,
)

__all__ = [
    "Question",
    "QuestionKind",
    "MultipleChoiceQuestion",
    "TrueFalseQuestion",
    "TextQuestion",
    "Quiz",
    "QuizCreate",
    "QuizUpdate",
    "QuizDifficulty",
    "QuizStatus",
    "QuizSummary",
    "Attempt",
    "AttemptStatus",
    "AttemptAggregate",
    "AttemptResults",
    "GradedAnswer",
    "SubmittedAnswer",
    "SubmissionOutcome",
    "QuizStatistics",
    "QuizReference",
    "QuizStatisticsReport",
]
