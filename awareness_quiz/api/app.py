"""FastAPI application for the awareness quiz service.

Builds the stores from settings at startup (in-memory or MongoDB), wires the
quiz and attempt services onto ``app.state`` and mounts the routers.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from awareness_quiz import __version__
from awareness_quiz.api.errors import register_error_handlers, request_id_middleware
from awareness_quiz.api.routes import attempts_router, quizzes_router
from awareness_quiz.config.settings import Settings, get_settings
from awareness_quiz.core.logging_config import get_logger, setup_logging
from awareness_quiz.services import AttemptService, QuizService
from awareness_quiz.storage import AttemptStore, MemoryAttemptStore, MemoryQuizStore, QuizStore

logger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    quiz_store: QuizStore | None = None,
    attempt_store: AttemptStore | None = None,
) -> FastAPI:
    """
    Create the API application.

    Args:
        settings: Settings to use (default: cached environment settings)
        quiz_store: Store override, mainly for tests
        attempt_store: Store override, mainly for tests

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.environment, settings.log_level, settings.log_dir)
        logger.info("Starting %s (storage=%s)", settings.app_name, settings.storage_backend)
        connection = None
        quizzes, attempts = quiz_store, attempt_store
        if quizzes is None or attempts is None:
            if settings.storage_backend == "mongo":
                from awareness_quiz.storage.mongo import MongoConnection

                connection = MongoConnection(settings.mongodb_uri, settings.mongodb_database)
                await connection.connect()
                quizzes, attempts = connection.quizzes, connection.attempts
            else:
                quizzes, attempts = MemoryQuizStore(), MemoryAttemptStore()

        app.state.quiz_service = QuizService(quizzes)
        app.state.attempt_service = AttemptService(
            quizzes,
            attempts,
            manual_grading_policy=settings.manual_grading_policy,
            create_retries=settings.attempt_create_retries,
            recent_attempts_limit=settings.recent_attempts_limit,
        )
        if settings.seed_sample_quizzes:
            await app.state.quiz_service.seed_sample_quizzes()

        yield

        if connection is not None:
            await connection.close()
        logger.info("Shutting down %s", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        openapi_url=f"{settings.api_prefix}/openapi.json",
        lifespan=lifespan,
    )
    app.middleware("http")(request_id_middleware)
    register_error_handlers(app)
    app.include_router(quizzes_router, prefix=settings.api_prefix)
    app.include_router(attempts_router, prefix=settings.api_prefix)

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "version": __version__}

    return app
