"""Pydantic models for quizzes and their question bank."""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import (
    BaseModel,
    Field,
    PositiveInt,
    computed_field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def new_id() -> str:
    """Generate a new document identifier."""
    return uuid.uuid4().hex


class QuestionKind(str, Enum):
    """Answer-format category of a question."""

    MULTIPLE_CHOICE = "multiple-choice"
    TRUE_FALSE = "true-false"
    TEXT = "text"


class QuizDifficulty(str, Enum):
    """Quiz difficulty levels."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class QuizStatus(str, Enum):
    """Publication state of a quiz."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class CamelModel(BaseModel):
    """Base model accepting both snake_case and camelCase field names."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class QuestionBase(CamelModel):
    """Fields shared by every question kind."""

    id: str = Field(
        default_factory=new_id,
        description="Unique identifier for the question within its quiz",
    )
    prompt: str = Field(..., min_length=1, description="The question text")
    options: list[str] = Field(
        default_factory=list,
        description="Ordered answer choices",
    )
    correct_answer: str = Field(
        default="",
        description="String encoding of the correct response",
    )
    explanation: str = Field(default="", description="Why the answer is correct")
    points: PositiveInt = Field(default=1, description="Weight of the question")

    @field_validator("prompt")
    @classmethod
    def validate_prompt(cls, v: str) -> str:
        """Reject prompts made only of whitespace."""
        if not v.strip():
            raise ValueError("Question prompt cannot be empty")
        return v

    @property
    def requires_manual_review(self) -> bool:
        """Whether the question cannot be graded automatically."""
        return False

    def is_correct(self, answer: str) -> bool:
        """Compare a submitted answer against the correct answer."""
        raise NotImplementedError


def parse_index(value: str) -> int | None:
    """Parse an option index, returning None for non-numeric input."""
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


class MultipleChoiceQuestion(QuestionBase):
    """Question answered by picking one option by its index."""

    kind: Literal["multiple-choice"] = "multiple-choice"
    options: list[str] = Field(..., description="Ordered answer choices")
    correct_answer: str = Field(
        ...,
        min_length=1,
        description="Index of the correct option, as a string (e.g. '0')",
    )

    @field_validator("options")
    @classmethod
    def validate_options(cls, v: list[str]) -> list[str]:
        """Ensure there are at least two non-empty options."""
        if len(v) < 2:
            raise ValueError(
                f"Multiple choice questions need at least 2 options (has {len(v)})"
            )
        for i, option in enumerate(v):
            if not option or not option.strip():
                raise ValueError(f"Option {i} cannot be empty")
        return v

    @model_validator(mode="after")
    def validate_correct_index(self):
        """The correct answer must point at one of the options."""
        index = parse_index(self.correct_answer)
        if index is None or not 0 <= index < len(self.options):
            raise ValueError(
                f"Correct answer must be an option index between 0 and {len(self.options) - 1}"
            )
        return self

    @property
    def correct_option(self) -> str | None:
        """Text of the correct option, if the stored index is valid."""
        index = parse_index(self.correct_answer)
        if index is None or not 0 <= index < len(self.options):
            return None
        return self.options[index]

    def is_correct(self, answer: str) -> bool:
        expected = parse_index(self.correct_answer)
        given = parse_index(answer)
        return expected is not None and given is not None and expected == given


class TrueFalseQuestion(QuestionBase):
    """Question answered with True or False."""

    kind: Literal["true-false"] = "true-false"
    options: list[str] = Field(default_factory=lambda: ["True", "False"])
    correct_answer: str = Field(..., description="'True' or 'False'")

    @field_validator("correct_answer")
    @classmethod
    def validate_correct_answer(cls, v: str) -> str:
        """Normalize the correct answer to 'True' or 'False'."""
        normalized = v.strip().capitalize()
        if normalized not in {"True", "False"}:
            raise ValueError("True/false questions need 'True' or 'False' as answer")
        return normalized

    def is_correct(self, answer: str) -> bool:
        return str(answer).lower() == self.correct_answer.lower()


class TextQuestion(QuestionBase):
    """Free-text question; an empty correct answer means manual grading."""

    kind: Literal["text"] = "text"

    @property
    def requires_manual_review(self) -> bool:
        return not self.correct_answer.strip()

    def is_correct(self, answer: str) -> bool:
        return str(answer).strip().lower() == self.correct_answer.strip().lower()


Question = Annotated[
    Union[MultipleChoiceQuestion, TrueFalseQuestion, TextQuestion],
    Field(discriminator="kind"),
]


def _unique_question_ids(questions: list[QuestionBase]) -> None:
    seen: set[str] = set()
    for question in questions:
        if question.id in seen:
            raise ValueError(f"Duplicate question id: {question.id}")
        seen.add(question.id)


class QuizFields(CamelModel):
    """Admin-editable quiz fields."""

    title: str = Field(..., min_length=1, description="Quiz title")
    description: str = Field(default="", description="Quiz description")
    category: str = Field(default="general", description="e.g. phishing, passwords")
    difficulty: QuizDifficulty = Field(default=QuizDifficulty.MEDIUM)
    questions: list[Question] = Field(default_factory=list)
    time_limit: int = Field(default=0, ge=0, description="Minutes, 0 = no limit")
    passing_score: int = Field(default=70, ge=0, le=100, description="Pass percentage")
    max_attempts: int = Field(default=0, ge=0, description="0 = unlimited")
    tags: list[str] = Field(default_factory=list)
    instructions: str = Field(default="")
    badge_title: str = Field(default="")
    badge_description: str = Field(default="")

    @model_validator(mode="after")
    def validate_question_ids(self):
        """Question ids must be unique within a quiz."""
        _unique_question_ids(self.questions)
        return self


class QuizCreate(QuizFields):
    """Payload for creating a quiz."""

    model_config = {
        "json_schema_extra": {
            "example": {
                "title": "Phishing Awareness",
                "category": "phishing",
                "difficulty": "easy",
                "passingScore": 70,
                "maxAttempts": 3,
                "questions": [
                    {
                        "prompt": "Which is a common sign of a phishing email?",
                        "kind": "multiple-choice",
                        "options": ["Urgent request for credentials", "Company logo"],
                        "correctAnswer": "0",
                        "points": 2,
                    }
                ],
            }
        }
    }


class QuizUpdate(CamelModel):
    """Partial update of a quiz; only provided fields are applied."""

    title: str | None = Field(None, min_length=1)
    description: str | None = None
    category: str | None = None
    difficulty: QuizDifficulty | None = None
    questions: list[Question] | None = None
    time_limit: int | None = Field(None, ge=0)
    passing_score: int | None = Field(None, ge=0, le=100)
    max_attempts: int | None = Field(None, ge=0)
    tags: list[str] | None = None
    instructions: str | None = None
    badge_title: str | None = None
    badge_description: str | None = None

    @field_validator("questions")
    @classmethod
    def validate_questions(cls, v):
        """Question ids must be unique within a quiz."""
        if v is not None:
            _unique_question_ids(v)
        return v


class Quiz(QuizFields):
    """A stored quiz with its question bank and policy fields."""

    id: str = Field(default_factory=new_id)
    status: QuizStatus = Field(default=QuizStatus.DRAFT)
    created_by: str | None = Field(None, description="Admin who created the quiz")
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    published_at: datetime | None = None

    @computed_field
    @property
    def total_points(self) -> int:
        """Sum of the points of every question."""
        return sum(q.points for q in self.questions)

    @computed_field
    @property
    def question_count(self) -> int:
        """Number of questions in the quiz."""
        return len(self.questions)

    def get_question(self, question_id: str) -> QuestionBase | None:
        """Look up a question by id."""
        return next((q for q in self.questions if q.id == question_id), None)


class QuizSummary(CamelModel):
    """Static figures describing a quiz."""

    total_questions: int
    total_points: int
    time_limit: int
    difficulty: QuizDifficulty
    category: str
