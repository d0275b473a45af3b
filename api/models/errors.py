"""
Error Response Models

Defines standardized error response models for consistent
error handling across the analysis API.
"""

from datetime import datetime, timezone
from typing import Dict, Optional, Any, List

from pydantic import BaseModel, Field


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ErrorResponse(BaseModel):
    """
    Standardized error response model for API errors.

    Provides consistent error structure for client handling and debugging.
    """
    status: str = Field(
        default="error",
        description="Error status indicator"
    )
    message: str = Field(
        ...,
        description="Human-readable error message"
    )
    error_code: str = Field(
        ...,
        description="Machine-readable error code"
    )
    details: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Additional error details"
    )
    timestamp: datetime = Field(
        default_factory=_utc_now,
        description="Error timestamp"
    )


class ValidationErrorItem(BaseModel):
    """Specific information about one field validation failure."""
    loc: List[str] = Field(
        ...,
        description="Error location (field path)"
    )
    msg: str = Field(
        ...,
        description="Error message"
    )
    type: str = Field(
        ...,
        description="Error type"
    )


class ValidationErrorResponse(ErrorResponse):
    """Error response carrying field-specific validation details."""
    validation_errors: List[ValidationErrorItem] = Field(
        ...,
        description="List of specific validation errors"
    )
