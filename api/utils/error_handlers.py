"""
Global Exception Handlers

Registers exception handlers producing consistent error bodies for the
analysis API, and logs every handled exception with its request context.

Design Considerations:
- Standardized error response format
- Appropriate status code mapping
- Internal details never leaked in 500 responses
"""

import json
import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse as StarletteJSONResponse
from pydantic import ValidationError

from api.models.errors import ErrorResponse, ValidationErrorResponse, ValidationErrorItem
from src.utils.date_utils import DateParsingError

# Configure logging
logger = logging.getLogger(__name__)


class DateTimeEncoder(json.JSONEncoder):
    """JSON encoder that writes datetimes as ISO strings."""
    def default(self, obj):
        if isinstance(obj, datetime):
            return obj.isoformat()
        return super().default(obj)


class JSONResponse(StarletteJSONResponse):
    """JSONResponse that handles datetime serialization."""
    def render(self, content):
        return json.dumps(content, cls=DateTimeEncoder).encode("utf-8")


def add_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, pydantic_validation_handler)
    app.add_exception_handler(DateParsingError, date_parsing_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Exception handlers registered")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _validation_items(errors: Iterable[Mapping[str, Any]]) -> List[ValidationErrorItem]:
    """Convert pydantic error dicts into response items."""
    return [
        ValidationErrorItem(
            loc=[str(loc_item) for loc_item in error["loc"]],
            msg=error["msg"],
            type=error["type"]
        )
        for error in errors
    ]


def _validation_response(message: str, exc: Exception, errors: Iterable[Mapping[str, Any]]) -> JSONResponse:
    error_response = ValidationErrorResponse(
        status="error",
        message=message,
        error_code="VALIDATION_ERROR",
        details={"errors": str(exc)},
        validation_errors=_validation_items(errors),
        timestamp=_now()
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_response.model_dump()
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Handle HTTP exceptions raised by routes and the framework."""
    log_exception(request, exc, exc.status_code)

    error_response = ErrorResponse(
        status="error",
        message=str(exc.detail),
        error_code=f"HTTP_{exc.status_code}",
        details=getattr(exc, "details", None),
        timestamp=_now()
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle request body and parameter validation errors."""
    log_exception(request, exc, status.HTTP_422_UNPROCESSABLE_ENTITY)
    return _validation_response("Request validation error", exc, exc.errors())


async def pydantic_validation_handler(
    request: Request,
    exc: ValidationError
) -> JSONResponse:
    """Handle model validation errors raised while building responses."""
    log_exception(request, exc, status.HTTP_422_UNPROCESSABLE_ENTITY)
    return _validation_response("Data validation error", exc, exc.errors())


async def date_parsing_handler(
    request: Request,
    exc: DateParsingError
) -> JSONResponse:
    """Handle mail timestamps that could not be parsed."""
    log_exception(request, exc, status.HTTP_400_BAD_REQUEST)

    error_response = ErrorResponse(
        status="error",
        message=str(exc),
        error_code="INVALID_TIMESTAMP",
        timestamp=_now()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response.model_dump()
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle all unhandled exceptions with a sanitized response.

    The full traceback is logged; the client only sees the exception type.
    """
    log_exception(request, exc, status.HTTP_500_INTERNAL_SERVER_ERROR, include_traceback=True)

    error_response = ErrorResponse(
        status="error",
        message="An unexpected error occurred",
        error_code="INTERNAL_SERVER_ERROR",
        details={"type": exc.__class__.__name__},
        timestamp=_now()
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump()
    )


def log_exception(
    request: Request,
    exc: Exception,
    status_code: int,
    include_traceback: bool = False
) -> None:
    """
    Log exception with request context at a status-dependent level.

    Args:
        request: Request that caused exception
        exc: Exception instance
        status_code: HTTP status code
        include_traceback: Whether to include full traceback
    """
    if status_code >= 500:
        log_level = logging.ERROR
    elif status_code >= 400:
        log_level = logging.WARNING
    else:
        log_level = logging.INFO

    error_details = {
        "status_code": status_code,
        "error_type": exc.__class__.__name__,
        "error_message": str(exc),
        "client_host": request.client.host if request.client else "unknown"
    }
    if include_traceback:
        error_details["traceback"] = traceback.format_exc()

    logger.log(
        log_level,
        f"Exception during request to {request.method} {request.url.path}",
        extra={"error_details": error_details}
    )
