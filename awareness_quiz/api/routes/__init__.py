"""API routers."""

from .attempts import router as attempts_router
from .quizzes import router as quizzes_router

__all__ = ["attempts_router", "quizzes_router"]
