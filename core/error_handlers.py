"""Error handlers for the FastAPI application.

Every error leaves the API in the same envelope:
``{"error": {"message", "status_code", "details"?, "request_id"?}}``.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from core.exceptions import AppException
from core.logger import get_logger
from typing import Optional

logger = get_logger("core.error_handlers")

REQUEST_ID_HEADER = "X-Request-ID"


def create_error_response(
    message: str,
    status_code: int = 500,
    details: dict = None,
    request_id: Optional[str] = None
) -> JSONResponse:
    """Create a standardized error response.

    Args:
        message: Error message.
        status_code: HTTP status code.
        details: Optional error details dictionary.
        request_id: Optional request ID echoed back for tracing.

    Returns:
        JSONResponse with error details.
    """
    error_body = {
        "error": {
            "message": message,
            "status_code": status_code,
        }
    }

    if details:
        error_body["error"]["details"] = details

    if request_id:
        error_body["error"]["request_id"] = request_id

    return JSONResponse(
        status_code=status_code,
        content=error_body
    )


def _request_id(request: Request) -> Optional[str]:
    return request.headers.get(REQUEST_ID_HEADER)


def _format_errors(errors) -> list:
    out = []
    for error in errors:
        out.append({
            "field": ".".join(str(loc) for loc in error.get("loc", ())),
            "message": error.get("msg"),
            "type": error.get("type"),
        })
    return out


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render an `AppException` with its own status code.

    Args:
        request: FastAPI request object.
        exc: Application exception instance.

    Returns:
        JSONResponse carrying the exception message and details.
    """
    logger.warning(
        "Application error: %s [%s %s]",
        exc.message,
        request.method,
        request.url.path
    )

    return create_error_response(
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        request_id=_request_id(request),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle request body/query validation errors raised by FastAPI.

    Args:
        request: FastAPI request object.
        exc: Request validation error.

    Returns:
        422 JSONResponse listing each failing field.
    """
    errors = _format_errors(exc.errors())

    logger.warning(
        "Validation error on %s %s: %s",
        request.method,
        request.url.path,
        errors
    )

    return create_error_response(
        message="Validation error",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        details={"validation_errors": errors},
        request_id=_request_id(request),
    )


async def model_validation_exception_handler(
    request: Request,
    exc: PydanticValidationError
) -> JSONResponse:
    """Handle pydantic errors raised while building domain objects.

    These come from the data-model boundary (e.g. a stored food entry whose
    source is malformed), not from request parsing, so they map to 400.

    Args:
        request: FastAPI request object.
        exc: Pydantic validation error.

    Returns:
        400 JSONResponse listing each failing field.
    """
    errors = _format_errors(exc.errors())
    logger.warning(
        "Model validation error on %s %s: %s",
        request.method,
        request.url.path,
        errors
    )
    return create_error_response(
        message="Invalid data",
        status_code=status.HTTP_400_BAD_REQUEST,
        details={"validation_errors": errors},
        request_id=_request_id(request),
    )


async def sqlalchemy_exception_handler(
    request: Request,
    exc: SQLAlchemyError
) -> JSONResponse:
    """Handle SQLAlchemy errors without leaking internals to clients.

    Args:
        request: FastAPI request object.
        exc: SQLAlchemy error.

    Returns:
        500 JSONResponse with a generic database error message.
    """
    logger.error(
        "Database error on %s %s: %s",
        request.method,
        request.url.path,
        str(exc),
        exc_info=True
    )

    return create_error_response(
        message="A database error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        details={"type": "database_error"},
        request_id=_request_id(request),
    )


async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle anything not caught by a more specific handler.

    Args:
        request: FastAPI request object.
        exc: Unhandled exception.

    Returns:
        500 JSONResponse with a generic error message.
    """
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        str(exc),
        exc_info=True
    )

    return create_error_response(
        message="An internal server error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        details={"type": "internal_error"},
        request_id=_request_id(request),
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance.
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PydanticValidationError, model_validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers registered")
