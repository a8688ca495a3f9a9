"""
Upload and delete endpoints.

The ingress layer validates and sanitizes the request, then hands it to the
asset coordinator which keeps the database and the file bucket in sync.
"""

import json

from fastapi import APIRouter, File, Form, UploadFile

from portfolio_api.auth import RequireApiKey
from portfolio_api.core.exceptions import (
    MissingFieldError,
    PayloadTooLargeError,
    ValidationError,
)
from portfolio_api.core.security import (
    sanitize_filename,
    sanitize_for_html,
    validate_filetype_and_extension,
)
from portfolio_api.dependencies import AppSettings, Coordinator
from portfolio_api.schemas.asset import MessageResponse
from portfolio_api.schemas.error import ErrorResponse

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid input"},
    403: {"model": ErrorResponse, "description": "Missing or invalid backend API key"},
    500: {"model": ErrorResponse, "description": "Database or file bucket failure"},
}


def parse_tags(raw: str | None) -> list[str]:
    """
    Parse the ``tags`` form field.

    Accepts a JSON array of strings or a comma-separated list.
    """
    if not raw or not raw.strip():
        return []

    raw = raw.strip()
    if raw.startswith("["):
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Tags must be a JSON array of strings: {e.msg}") from e
        if not isinstance(parsed, list) or not all(isinstance(t, str) for t in parsed):
            raise ValidationError("Tags must be a JSON array of strings")
        return [t.strip() for t in parsed if t.strip()]

    return [t.strip() for t in raw.split(",") if t.strip()]


@router.put(
    "/upload",
    response_model=MessageResponse,
    dependencies=[RequireApiKey],
    responses={**ERROR_RESPONSES, 409: {"model": ErrorResponse}, 413: {"model": ErrorResponse}},
)
async def upload_image(
    coordinator: Coordinator,
    settings: AppSettings,
    file: UploadFile = File(..., description="JPEG, PNG or GIF image"),
    description: str | None = Form(default=None),
    alt_text: str | None = Form(default=None),
    tags: str | None = Form(default=None, description="JSON array or comma-separated tag names"),
):
    """
    Upload an image with its metadata.

    Writes the metadata first, then uploads to the file bucket; if the
    upload fails the metadata is removed again.
    """
    content = await file.read()
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise PayloadTooLargeError(settings.MAX_UPLOAD_SIZE)
    if not content:
        raise MissingFieldError("file")
    if not description or not description.strip():
        raise MissingFieldError("description")
    if not alt_text or not alt_text.strip():
        raise MissingFieldError("alt_text")

    filename = sanitize_filename(file.filename or "")
    if not filename:
        raise MissingFieldError("filename")
    validate_filetype_and_extension(filename, content)

    message = await coordinator.publish(
        filename=filename,
        content=content,
        description=sanitize_for_html(description),
        alt_text=sanitize_for_html(alt_text),
        tags=parse_tags(tags),
    )
    return {"message": message}


@router.delete(
    "/delete/{filename}",
    response_model=MessageResponse,
    dependencies=[RequireApiKey],
    responses=ERROR_RESPONSES,
)
async def delete_image(filename: str, coordinator: Coordinator):
    """Remove an image's metadata, then its file in the bucket."""
    message = await coordinator.retract(filename)
    return {"message": message}
