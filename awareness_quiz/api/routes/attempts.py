"""Quiz attempt routes: start, submit, read, statistics."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, status

from awareness_quiz.api.deps import (
    CurrentUser,
    get_attempt_service,
    get_current_user,
    require_admin,
)
from awareness_quiz.models import Attempt, QuizStatisticsReport, SubmissionOutcome
from awareness_quiz.services import AttemptService

router = APIRouter(prefix="/quiz-attempts", tags=["attempts"])


@router.post("/quiz/{quiz_id}/start", response_model=Attempt, status_code=status.HTTP_201_CREATED)
async def start_attempt(
    quiz_id: str,
    request: Request,
    user: CurrentUser = Depends(get_current_user),
    service: AttemptService = Depends(get_attempt_service),
):
    return await service.start_attempt(
        quiz_id,
        user.id,
        ip_address=request.client.host if request.client else "",
        user_agent=request.headers.get("user-agent", ""),
    )


@router.post("/{attempt_id}/submit", response_model=SubmissionOutcome)
async def submit_answers(
    attempt_id: str,
    payload: dict[str, Any] = Body(...),
    _: CurrentUser = Depends(get_current_user),
    service: AttemptService = Depends(get_attempt_service),
):
    """Grade the answers; body is {"answers": [{questionId, answer, timeSpent}]}."""
    return await service.submit_answers(attempt_id, payload.get("answers"))


@router.get("/user", response_model=list[Attempt])
async def list_user_attempts(
    quiz_id: str | None = Query(None, alias="quizId"),
    user: CurrentUser = Depends(get_current_user),
    service: AttemptService = Depends(get_attempt_service),
):
    return await service.list_attempts(user.id, quiz_id)


@router.get("/quiz/{quiz_id}/stats", response_model=QuizStatisticsReport)
async def quiz_statistics(
    quiz_id: str,
    _: CurrentUser = Depends(require_admin),
    service: AttemptService = Depends(get_attempt_service),
):
    return await service.get_quiz_statistics(quiz_id)


@router.get("/{attempt_id}", response_model=Attempt)
async def get_attempt(
    attempt_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: AttemptService = Depends(get_attempt_service),
):
    return await service.get_attempt(attempt_id, user.id, is_admin=user.is_admin)
