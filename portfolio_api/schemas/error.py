"""
Pydantic schemas for error responses.
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standard error response format.

    Examples:
        400: {"error": "validation_failed", "message": "..."}
        403: {"error": "forbidden", "message": "Forbidden: invalid backend API key."}
        409: {"error": "conflict", "message": "Image 'cat.png' already exists ..."}
        500: {"error": "internal_error", "message": "An unexpected error occurred"}
    """

    error: str = Field(
        ...,
        description="Error code string",
        examples=["validation_failed", "forbidden", "conflict", "internal_error"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] | None = Field(
        default=None,
        description="Optional additional error details",
    )
