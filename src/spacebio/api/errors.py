"""Exception handling for FastAPI routes.

Errors leave the API as ``{"message": ...}`` bodies. Internal detail is
logged, never returned.
"""

import logging
from functools import wraps
from typing import Any, Callable

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from spacebio.exceptions import (
    ApplicationError,
    ErrorCategory,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid request parameters"
INTERNAL_ERROR_MESSAGE = "Internal server error"


def register_exception_handlers(app: FastAPI) -> None:
    """Map ApplicationError, request validation and HTTP errors to JSON."""

    @app.exception_handler(ApplicationError)
    async def application_error_handler(
        request: Request, exc: ApplicationError
    ) -> JSONResponse:
        logger.warning("Application error on %s: %s", request.url.path, exc)
        if exc.category in (ErrorCategory.NOT_FOUND, ErrorCategory.VALIDATION):
            message = exc.message
        else:
            message = INTERNAL_ERROR_MESSAGE
        return JSONResponse(
            status_code=exc.http_status_code, content={"message": message}
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning("Rejected request to %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=400, content={"message": INVALID_REQUEST_MESSAGE}
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code, content={"message": exc.detail}
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception(
            "Unhandled exception on %s %s", request.method, request.url.path
        )
        return JSONResponse(
            status_code=500, content={"message": INTERNAL_ERROR_MESSAGE}
        )


def handle_route_errors(failure_message: str):
    """
    Route decorator turning unexpected failures into a generic message.

    - HTTPException, NotFoundError, ValidationError: re-raised unchanged
    - ExternalServiceError: logged, 502 with failure_message
    - anything else: logged with traceback, 500 with failure_message

    Usage:
        @router.get("/stats")
        @handle_route_errors("Failed to fetch statistics")
        async def get_stats(...):
            ...
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except (HTTPException, NotFoundError, ValidationError):
                raise
            except ExternalServiceError as e:
                logger.error("%s: %s", failure_message, e)
                raise HTTPException(status_code=502, detail=failure_message)
            except Exception:
                logger.exception(failure_message)
                raise HTTPException(status_code=500, detail=failure_message)

        return wrapper

    return decorator
