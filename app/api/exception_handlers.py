"""Global exception handlers that map domain exceptions to HTTP responses."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.errors import (
    CONFLICT_ON_CREATE,
    DUPLICATE_RESOURCE,
    NOT_FOUND,
    STORE_FAILURE,
    VALIDATION_ERROR,
    ConflictOnCreateError,
    DomainValidationError,
    DuplicateResourceError,
    NotFoundError,
    ValidationFailedError,
)
from app.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)


def _error_response(
    status_code: int, detail: str, code: str, errors: list[str] | None = None
) -> JSONResponse:
    """Return a standardized error response with detail and machine-readable code."""
    body = ErrorResponse(detail=detail, code=code, errors=errors)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def validation_failed_handler(
    _request: Request, exc: ValidationFailedError
) -> JSONResponse:
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        str(exc),
        VALIDATION_ERROR,
        errors=exc.messages,
    )


def domain_validation_error_handler(
    _request: Request, exc: DomainValidationError
) -> JSONResponse:
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        str(exc),
        VALIDATION_ERROR,
    )


def duplicate_resource_error_handler(
    _request: Request, exc: DuplicateResourceError
) -> JSONResponse:
    return _error_response(
        status.HTTP_409_CONFLICT,
        str(exc),
        DUPLICATE_RESOURCE,
    )


def conflict_on_create_handler(
    _request: Request, exc: ConflictOnCreateError
) -> JSONResponse:
    return _error_response(
        status.HTTP_409_CONFLICT,
        str(exc),
        CONFLICT_ON_CREATE,
    )


def not_found_error_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
    return _error_response(
        status.HTTP_404_NOT_FOUND,
        str(exc),
        NOT_FOUND,
    )


def store_failure_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Store failure: %s", exc)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "The data store could not complete the request",
        STORE_FAILURE,
    )


def register_exception_handlers(app):
    """Register domain exception handlers on the FastAPI app."""
    app.add_exception_handler(ValidationFailedError, validation_failed_handler)
    app.add_exception_handler(DomainValidationError, domain_validation_error_handler)
    app.add_exception_handler(DuplicateResourceError, duplicate_resource_error_handler)
    app.add_exception_handler(ConflictOnCreateError, conflict_on_create_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_failure_handler)
