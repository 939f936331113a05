"""Translate service exceptions into JSON error responses."""

import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from awareness_quiz.core.exceptions import AwarenessQuizError
from awareness_quiz.core.logging_config import get_logger, set_request_id

logger = get_logger(__name__)


async def request_id_middleware(request: Request, call_next):
    """Attach a request id to the logging context and the response."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    set_request_id(request_id)
    try:
        response = await call_next(request)
    finally:
        set_request_id(None)
    response.headers["X-Request-ID"] = request_id
    return response


async def quiz_error_handler(request: Request, exc: AwarenessQuizError) -> JSONResponse:
    body = {"error": exc.message}
    details = getattr(exc, "details", None)
    if details:
        body["details"] = details
    logger.info(
        "%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message
    )
    return JSONResponse(status_code=exc.status_code, content=body)


async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"])
        details.append(f"{location}: {err['msg']}")
    return JSONResponse(
        status_code=400, content={"error": "Validation failed", "details": details}
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AwarenessQuizError, quiz_error_handler)
    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
