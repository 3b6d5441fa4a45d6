"""Domain errors and structured error helpers for API responses."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def build_error_payload(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    payload = {"error": {"code": code, "message": message}}
    if details is not None:
        payload["error"]["details"] = details
    return payload


class AppError(Exception):
    """Application-scoped error for standardized API responses."""

    def __init__(self, status_code: int, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = build_error_payload(code, message, details)


# Domain errors. Services raise these; the HTTP layer maps them onto AppError.

class TaskhubError(Exception):
    """Base class for failures reported to the immediate caller."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_app_error(self) -> AppError:
        return AppError(self.status_code, self.code, self.message, self.details)


class ValidationError(TaskhubError):
    """A required field is missing or empty."""

    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT
    code = "VALIDATION_ERROR"


class NotFoundError(TaskhubError):
    """A referenced id does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class InvalidTransitionError(TaskhubError):
    """A status value outside the lifecycle, or a transition the policy refuses."""

    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT
    code = "INVALID_TRANSITION"


class UpstreamUnavailableError(TaskhubError):
    """An external collaborator (the user directory) could not be reached or answered badly."""

    status_code = status.HTTP_502_BAD_GATEWAY
    code = "UPSTREAM_UNAVAILABLE"


class UnauthenticatedError(TaskhubError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHENTICATED"


class ForbiddenError(TaskhubError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"


async def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.payload)


async def taskhub_error_handler(request: Request, exc: TaskhubError) -> JSONResponse:
    if isinstance(exc, UpstreamUnavailableError):
        logger.warning("%s %s failed upstream: %s", request.method, request.url.path, exc.message)
    return await app_error_handler(request, exc.to_app_error())


async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    payload = build_error_payload(
        "VALIDATION_ERROR",
        "Request validation failed",
        {"errors": jsonable_encoder(exc.errors())},
    )
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_CONTENT, content=payload)


def register_error_handlers(app: FastAPI) -> None:
    """Install the structured error handlers on an application."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(TaskhubError, taskhub_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
