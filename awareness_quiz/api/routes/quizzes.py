"""Quiz administration routes."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from awareness_quiz.api.deps import CurrentUser, get_quiz_service, require_admin
from awareness_quiz.models import Quiz, QuizDifficulty, QuizStatus, QuizSummary
from awareness_quiz.services import QuizService

router = APIRouter(prefix="/quizzes", tags=["quizzes"])


@router.get("", response_model=list[Quiz])
async def list_quizzes(
    quiz_status: QuizStatus | None = Query(None, alias="status"),
    category: str | None = None,
    difficulty: QuizDifficulty | None = None,
    q: str | None = Query(None, description="Search title, description and tags"),
    service: QuizService = Depends(get_quiz_service),
):
    return await service.list_quizzes(quiz_status, category, difficulty, q)


@router.get("/{quiz_id}", response_model=Quiz)
async def get_quiz(quiz_id: str, service: QuizService = Depends(get_quiz_service)):
    return await service.get_quiz(quiz_id)


@router.post("", response_model=Quiz, status_code=status.HTTP_201_CREATED)
async def create_quiz(
    payload: dict[str, Any] = Body(...),
    user: CurrentUser = Depends(require_admin),
    service: QuizService = Depends(get_quiz_service),
):
    """Create a draft quiz. Invalid definitions answer 400 with details."""
    return await service.create_quiz(payload, created_by=user.id)


@router.put("/{quiz_id}", response_model=Quiz)
async def update_quiz(
    quiz_id: str,
    payload: dict[str, Any] = Body(...),
    _: CurrentUser = Depends(require_admin),
    service: QuizService = Depends(get_quiz_service),
):
    return await service.update_quiz(quiz_id, payload)


@router.delete("/{quiz_id}")
async def delete_quiz(
    quiz_id: str,
    _: CurrentUser = Depends(require_admin),
    service: QuizService = Depends(get_quiz_service),
):
    await service.delete_quiz(quiz_id)
    return {"ok": True}


@router.post("/{quiz_id}/publish", response_model=Quiz)
async def publish_quiz(
    quiz_id: str,
    _: CurrentUser = Depends(require_admin),
    service: QuizService = Depends(get_quiz_service),
):
    return await service.publish_quiz(quiz_id)


@router.post("/{quiz_id}/unpublish", response_model=Quiz)
async def unpublish_quiz(
    quiz_id: str,
    _: CurrentUser = Depends(require_admin),
    service: QuizService = Depends(get_quiz_service),
):
    return await service.unpublish_quiz(quiz_id)


@router.post("/{quiz_id}/archive", response_model=Quiz)
async def archive_quiz(
    quiz_id: str,
    _: CurrentUser = Depends(require_admin),
    service: QuizService = Depends(get_quiz_service),
):
    return await service.archive_quiz(quiz_id)


@router.get("/{quiz_id}/stats", response_model=QuizSummary)
async def quiz_summary(quiz_id: str, service: QuizService = Depends(get_quiz_service)):
    return await service.quiz_summary(quiz_id)


@router.post("/{quiz_id}/duplicate", response_model=Quiz, status_code=status.HTTP_201_CREATED)
async def duplicate_quiz(
    quiz_id: str,
    _: CurrentUser = Depends(require_admin),
    service: QuizService = Depends(get_quiz_service),
):
    return await service.duplicate_quiz(quiz_id)
