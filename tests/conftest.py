"""Shared test fixtures and configuration for pytest."""

from typing import Any

import pytest
from fastapi.testclient import TestClient

from awareness_quiz.api.app import create_app
from awareness_quiz.config.settings import Settings
from awareness_quiz.models import (
    MultipleChoiceQuestion,
    Quiz,
    QuizStatus,
    TextQuestion,
    TrueFalseQuestion,
)
from awareness_quiz.services import AttemptService, QuizService
from awareness_quiz.storage import MemoryAttemptStore, MemoryQuizStore


@pytest.fixture
def sample_mc_question() -> MultipleChoiceQuestion:
    """Multiple choice question whose correct option is index 1."""
    return MultipleChoiceQuestion(
        id="q1",
        prompt="Which of these is a sign of a phishing email?",
        options=["Company logo", "Urgent request for your password", "A signature"],
        correct_answer="1",
        explanation="Legitimate services never ask for your password by email.",
        points=2,
    )


@pytest.fixture
def sample_tf_question() -> TrueFalseQuestion:
    """True/false question whose answer is True."""
    return TrueFalseQuestion(
        id="q2",
        prompt="You should lock your screen when leaving your desk.",
        correct_answer="True",
        points=1,
    )


@pytest.fixture
def sample_text_question() -> TextQuestion:
    """Auto-graded free-text question."""
    return TextQuestion(
        id="q3",
        prompt="What does MFA stand for?",
        correct_answer="Multi-Factor Authentication",
        points=2,
    )


@pytest.fixture
def manual_text_question() -> TextQuestion:
    """Free-text question without a correct answer (manual review)."""
    return TextQuestion(
        id="q4",
        prompt="Describe how you would report a suspicious email.",
        correct_answer="",
        points=3,
    )


@pytest.fixture
def sample_quiz(
    sample_mc_question: MultipleChoiceQuestion,
    sample_tf_question: TrueFalseQuestion,
) -> Quiz:
    """Published quiz worth 3 points with a 70% pass mark."""
    return Quiz(
        id="quiz-1",
        title="Phishing Basics",
        description="Recognise common phishing tricks",
        category="phishing",
        questions=[sample_mc_question, sample_tf_question],
        passing_score=70,
        tags=["email", "phishing"],
        status=QuizStatus.PUBLISHED,
    )


@pytest.fixture
def sample_quiz_payload() -> dict[str, Any]:
    """Raw camelCase quiz definition as sent by the admin UI."""
    return {
        "title": "Password Hygiene",
        "description": "Choosing and storing passwords",
        "category": "passwords",
        "difficulty": "easy",
        "passingScore": 50,
        "maxAttempts": 2,
        "tags": ["passwords"],
        "questions": [
            {
                "id": "p1",
                "kind": "multiple-choice",
                "prompt": "Where should you store your passwords?",
                "options": ["Sticky note", "Password manager", "Plain text file"],
                "correctAnswer": "1",
                "points": 2,
            },
            {
                "id": "p2",
                "kind": "true-false",
                "prompt": "Reusing passwords across sites is safe.",
                "correctAnswer": "False",
            },
        ],
    }


@pytest.fixture
def quiz_store() -> MemoryQuizStore:
    return MemoryQuizStore()


@pytest.fixture
def attempt_store() -> MemoryAttemptStore:
    return MemoryAttemptStore()


@pytest.fixture
def quiz_service(quiz_store: MemoryQuizStore) -> QuizService:
    return QuizService(quiz_store)


@pytest.fixture
def attempt_service(
    quiz_store: MemoryQuizStore, attempt_store: MemoryAttemptStore
) -> AttemptService:
    return AttemptService(quiz_store, attempt_store)


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings that never touch MongoDB or the real output directory."""
    return Settings(
        STORAGE_BACKEND="memory",
        SEED_SAMPLE_QUIZZES=False,
        DEFAULT_OUTPUT_DIR=str(tmp_path / "output"),
    )


@pytest.fixture
def client(
    test_settings: Settings,
    quiz_store: MemoryQuizStore,
    attempt_store: MemoryAttemptStore,
):
    """API test client sharing the memory stores with the fixtures above."""
    app = create_app(test_settings, quiz_store=quiz_store, attempt_store=attempt_store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"X-User-Id": "admin-1", "X-User-Role": "admin"}


@pytest.fixture
def employee_headers() -> dict[str, str]:
    return {"X-User-Id": "user-1", "X-User-Role": "employee"}
