"""FastAPI dependencies: services and caller identity.

Authentication happens upstream; the gateway forwards the authenticated
user in ``X-User-Id`` and the role in ``X-User-Role``.
"""

from fastapi import Depends, Header, HTTPException, Request, status
from pydantic import BaseModel

from awareness_quiz.services import AttemptService, QuizService


class CurrentUser(BaseModel):
    """Caller identity forwarded by the auth layer."""

    id: str
    role: str = "employee"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def get_current_user(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> CurrentUser:
    """Build the caller identity; 401 when no user is forwarded."""
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return CurrentUser(id=x_user_id, role=(x_user_role or "employee").lower())


def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """Dependency that only lets admins through."""
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


def get_quiz_service(request: Request) -> QuizService:
    return request.app.state.quiz_service


def get_attempt_service(request: Request) -> AttemptService:
    return request.app.state.attempt_service
