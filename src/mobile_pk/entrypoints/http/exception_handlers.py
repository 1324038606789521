"""FastAPI exception handlers.

Translates domain errors to HTTP responses with the structured error format
defined in error_responses.py.
"""

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from mobile_pk.domain.errors import DomainError

logger = logging.getLogger(__name__)

STATUS_BY_ERROR_CODE: dict[str, int] = {
    "VALIDATION_ERROR": 422,  # HTTP_422_UNPROCESSABLE_CONTENT
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "OBSERVATION_STORE_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _request_context(request: Request) -> dict[str, Any]:
    return {"path": request.url.path, "method": request.method}


def _field_errors(raw_errors: Sequence[Any]) -> list[dict[str, str]]:
    return [
        {
            # Drop the 'query'/'path' location prefix
            "field": ".".join(str(loc) for loc in error["loc"] if loc not in ("body", "query", "path")),
            "message": error["msg"],
            "code": error["type"],
        }
        for error in raw_errors
    ]


def _validation_response(errors: list[dict[str, str]]) -> JSONResponse:
    return JSONResponse(
        status_code=422,  # HTTP_422_UNPROCESSABLE_CONTENT
        content={
            "detail": "Invalid request parameters",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        },
    )


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Handle all domain errors with automatic HTTP status code mapping.

    Status comes from STATUS_BY_ERROR_CODE; unmapped codes are 400.
    5xx responses are logged at ERROR, 4xx at INFO.

    Args:
        request: FastAPI request object
        exc: Domain error to handle

    Returns:
        JSON response with structured error format
    """
    error_dict = exc.to_dict()
    status_code = STATUS_BY_ERROR_CODE.get(exc.error_code, status.HTTP_400_BAD_REQUEST)

    if status_code >= 500:
        logger.error(
            "Domain error occurred",
            extra={
                "error_code": exc.error_code,
                "error_message": exc.message,
                "context": exc.context,
                **_request_context(request),
            },
        )
    else:
        logger.info(
            "Client error",
            extra={
                "error_code": exc.error_code,
                "error_message": exc.message,
                **_request_context(request),
            },
        )

    response_content: dict[str, Any] = {
        "detail": error_dict.get("message", str(exc)),
        "code": error_dict.get("code", exc.error_code),
    }
    if "errors" in error_dict:
        response_content["errors"] = error_dict["errors"]

    return JSONResponse(status_code=status_code, content=response_content)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI/Pydantic validation errors (bad types, constraint violations).

    Examples:
        - limit=abc
        - limit=0 on recent changes

    Returns:
        JSON response with 422 status and one entry per failing field
    """
    errors = _field_errors(exc.errors())

    logger.info(
        "Request validation error",
        extra={"errors": errors, **_request_context(request)},
    )

    return _validation_response(errors)


async def handle_query_model_error(
    request: Request, exc: PydanticValidationError
) -> JSONResponse:
    """Handle validation errors raised while building a query DTO.

    Query DTOs injected with Depends() are validated when FastAPI instantiates
    them, so their field constraints (e.g. search max_length) surface as a
    pydantic ValidationError rather than a RequestValidationError.
    """
    errors = _field_errors(exc.errors())

    logger.info(
        "Query parameter validation error",
        extra={"errors": errors, **_request_context(request)},
    )

    return _validation_response(errors)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected errors.

    Logged with the full traceback; the client only sees a generic message.
    """
    logger.error(
        "Unexpected error occurred",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "error_message": str(exc),
            **_request_context(request),
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI app.

    Call once during app initialization.
    """
    app.add_exception_handler(DomainError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(PydanticValidationError, handle_query_model_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)

    logger.info("Exception handlers registered successfully")
