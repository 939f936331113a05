"""Pydantic models for quiz attempts, grading results and statistics."""

from datetime import datetime
from enum import Enum

from pydantic import Field, computed_field, field_validator

from .quiz import CamelModel, new_id, utcnow


class AttemptStatus(str, Enum):
    """Lifecycle state of an attempt."""

    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class SubmittedAnswer(CamelModel):
    """One raw answer sent by the learner."""

    question_id: str = Field(..., min_length=1)
    answer: str = Field(default="")
    time_spent: float = Field(default=0, ge=0, description="Seconds")

    @field_validator("answer", mode="before")
    @classmethod
    def coerce_answer(cls, v):
        """Accept numeric and boolean answers as their string form."""
        if isinstance(v, bool):
            return str(v)
        if isinstance(v, float) and v.is_integer():
            return str(int(v))
        if isinstance(v, (int, float)):
            return str(v)
        return v


class GradedAnswer(CamelModel):
    """A submitted answer after grading."""

    question_id: str
    answer: str
    is_correct: bool
    points_awarded: int = Field(default=0, ge=0)
    time_spent: float = Field(default=0, ge=0)
    pending_review: bool = Field(
        default=False,
        description="Answer to a manually graded question, not auto-scored",
    )


class Attempt(CamelModel):
    """One learner's attempt at a quiz."""

    id: str = Field(default_factory=new_id)
    quiz_id: str
    user_id: str
    attempt_number: int = Field(default=1, ge=1)
    status: AttemptStatus = Field(default=AttemptStatus.IN_PROGRESS)
    answers: list[GradedAnswer] = Field(default_factory=list)
    score: int = Field(default=0, ge=0)
    percentage: int = Field(default=0, ge=0, le=100)
    passed: bool = False
    time_spent: float = Field(default=0, ge=0, description="Total seconds")
    completed_at: datetime | None = None
    created_at: datetime = Field(default_factory=utcnow)
    ip_address: str = ""
    user_agent: str = ""

    @computed_field
    @property
    def duration(self) -> float:
        """Seconds from start to completion, or the reported time spent."""
        if self.completed_at and self.created_at:
            return (self.completed_at - self.created_at).total_seconds()
        return self.time_spent


class AttemptResults(CamelModel):
    """Summary returned to the learner after submission."""

    score: int
    total_possible: int
    percentage: int
    passed: bool
    correct_answers: int
    total_questions: int
    passing_score: int
    pending_review: int = 0


class SubmissionOutcome(CamelModel):
    """Graded attempt together with its results summary."""

    attempt: Attempt
    results: AttemptResults


class AttemptAggregate(CamelModel):
    """Raw aggregate over completed attempts, as computed by a store."""

    total_attempts: int = 0
    average_score: float = 0.0
    average_time: float = 0.0
    pass_rate: float = 0.0


class QuizStatistics(CamelModel):
    """Aggregate statistics over completed attempts of a quiz."""

    total_attempts: int = 0
    average_score: int = 0
    average_time: float = 0.0
    pass_rate: int = 0


class QuizReference(CamelModel):
    """Short description of the quiz a report refers to."""

    id: str
    title: str
    total_questions: int
    passing_score: int


class QuizStatisticsReport(CamelModel):
    """Statistics plus the most recent attempts of a quiz."""

    quiz: QuizReference
    statistics: QuizStatistics
    recent_attempts: list[Attempt] = Field(default_factory=list)
