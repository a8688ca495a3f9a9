"""
Custom exceptions for the portfolio API.

One taxonomy shared by the query executor, the blob stores and the asset
coordinator. Every error knows the HTTP status it maps to; errors with a
status of 500 or above are infrastructure failures whose details are only
logged server side.
"""

from typing import Any


class PortfolioAPIException(Exception):
    """Base exception for all portfolio API errors."""

    def __init__(
        self,
        error: str,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.error = error
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    @property
    def is_client_error(self) -> bool:
        return self.status_code < 500

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to response dictionary."""
        response = {
            "error": self.error,
            "message": self.message,
        }
        if self.details:
            response["details"] = self.details
        return response


# ===================
# Client errors
# ===================

class ValidationError(PortfolioAPIException):
    """400 - Bad or missing input. No side effects have happened."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            error="validation_failed",
            message=message,
            status_code=400,
            details=details,
        )


class MissingFieldError(ValidationError):
    """400 - A required field was not supplied."""

    def __init__(self, field: str):
        super().__init__(
            message=f"Missing required field: {field}",
            details={"field": field},
        )
        self.field = field


class ForbiddenError(PortfolioAPIException):
    """403 - Missing or invalid backend API key."""

    def __init__(self, message: str = "Access denied"):
        super().__init__(
            error="forbidden",
            message=message,
            status_code=403,
        )


class NotFoundError(PortfolioAPIException):
    """404 - Referenced record does not exist."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            error="not_found",
            message=message,
            status_code=404,
            details=details,
        )


class ConflictError(PortfolioAPIException):
    """409 - Unique constraint violation (e.g. duplicate filename)."""

    def __init__(
        self,
        message: str,
        constraint: str | None = None,
        detail: str | None = None,
    ):
        details = {}
        if constraint:
            details["constraint"] = constraint
        if detail:
            details["detail"] = detail
        super().__init__(
            error="conflict",
            message=message,
            status_code=409,
            details=details,
        )
        self.constraint = constraint
        self.detail = detail


class PayloadTooLargeError(PortfolioAPIException):
    """413 - Upload size exceeds limit."""

    def __init__(self, max_size: int):
        max_size_mb = max_size / (1024 * 1024)
        super().__init__(
            error="payload_too_large",
            message=f"Maximum upload size exceeded ({max_size_mb:.0f}MB limit)",
            status_code=413,
        )


# ===================
# Relational store errors
# ===================

class InvalidQueryInput(PortfolioAPIException):
    """500 - A query batch was empty or contained malformed entries."""

    def __init__(self, message: str):
        super().__init__(
            error="invalid_query_input",
            message=message,
            status_code=500,
        )


class DBConnectionError(PortfolioAPIException):
    """503 - No connection could be acquired from the pool."""

    def __init__(self, message: str):
        super().__init__(
            error="db_connection_failure",
            message=message,
            status_code=503,
        )


class TransactionError(PortfolioAPIException):
    """500 - A statement or the rollback of a batch failed."""

    def __init__(self, message: str):
        super().__init__(
            error="db_transaction_failure",
            message=message,
            status_code=500,
        )


class ClientReleaseError(PortfolioAPIException):
    """500 - The connection could not be returned to the pool."""

    def __init__(self, message: str):
        super().__init__(
            error="db_client_release_failure",
            message=message,
            status_code=500,
        )


# ===================
# Blob store errors
# ===================

class StoreUploadError(PortfolioAPIException):
    """500 - Upload to the file bucket failed."""

    def __init__(self, key: str, reason: str):
        super().__init__(
            error="store_upload_failure",
            message=f"Failed to upload '{key}' to file bucket: {reason}",
            status_code=500,
            details={"key": key},
        )
        self.key = key


class StoreDeleteError(PortfolioAPIException):
    """500 - Delete from the file bucket failed."""

    def __init__(self, key: str, reason: str):
        super().__init__(
            error="store_delete_failure",
            message=f"Failed to delete '{key}' from file bucket: {reason}",
            status_code=500,
            details={"key": key},
        )
        self.key = key


# ===================
# Saga errors
# ===================

class CompensationFailureError(PortfolioAPIException):
    """
    500 - A compensating action failed after an earlier step failed.

    This is the one state where the database and the file bucket can stay
    out of sync, so both failures are kept on the exception.
    """

    def __init__(self, step: str, original: BaseException, compensation_error: BaseException):
        super().__init__(
            error="compensation_failure",
            message=(
                f"Step '{step}' failed: {original}. "
                f"Additional error during cleanup: {compensation_error}. "
                "Manual cleanup may be required."
            ),
            status_code=500,
            details={"step": step},
        )
        self.step = step
        self.original = original
        self.compensation_error = compensation_error
