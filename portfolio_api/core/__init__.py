"""Core utilities and exceptions for the portfolio API."""

from portfolio_api.core.exceptions import (
    PortfolioAPIException,
    ValidationError,
    MissingFieldError,
    ForbiddenError,
    NotFoundError,
    ConflictError,
    PayloadTooLargeError,
    InvalidQueryInput,
    DBConnectionError,
    TransactionError,
    ClientReleaseError,
    StoreUploadError,
    StoreDeleteError,
    CompensationFailureError,
)

__all__ = [
    "PortfolioAPIException",
    "ValidationError",
    "MissingFieldError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "PayloadTooLargeError",
    "InvalidQueryInput",
    "DBConnectionError",
    "TransactionError",
    "ClientReleaseError",
    "StoreUploadError",
    "StoreDeleteError",
    "CompensationFailureError",
]
