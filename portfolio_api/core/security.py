"""
Input sanitization and file type validation for uploads.

Everything here runs at the ingress layer, before a request reaches the
asset coordinator.
"""

import hmac
import html
import re

from portfolio_api.core.exceptions import ValidationError

FILENAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+\.[A-Za-z]+$")
TAG_NAME_PATTERN = re.compile(r"^[a-z0-9-]+$")

# Magic numbers (first 4 bytes, hex) for the image types the site accepts
MAGIC_NUMBERS = {
    "ffd8ffe0": "jpg",
    "ffd8ffe1": "jpg",
    "ffd8ffe2": "jpg",
    "89504e47": "png",
    "47494638": "gif",
}

ALLOWED_EXTENSIONS = {
    "jpg": {"jpg", "jpeg"},
    "png": {"png"},
    "gif": {"gif"},
}


def sanitize_filename(filename: str) -> str:
    """
    Make a filename safe to use as a URL path segment and bucket key.

    Spaces become underscores and anything outside ``[A-Za-z0-9_.-]`` is
    removed.
    """
    filename = filename.strip().replace(" ", "_")
    return re.sub(r"[^A-Za-z0-9_.-]", "", filename)


def sanitize_for_html(value: str) -> str:
    """Escape user text so it can be rendered inside HTML."""
    return html.escape(value.strip(), quote=True)


def is_valid_filename(filename: str) -> bool:
    return bool(FILENAME_PATTERN.match(filename))


def is_valid_tag_name(tag_name: str) -> bool:
    return bool(TAG_NAME_PATTERN.match(tag_name))


def detect_file_type(content: bytes) -> str | None:
    """Detect the image type from the file's magic number."""
    return MAGIC_NUMBERS.get(content[:4].hex())


def validate_filetype_and_extension(filename: str, content: bytes) -> str:
    """
    Check the content is an allowed image type and the extension matches it.

    Returns:
        The detected file type

    Raises:
        ValidationError: If the type is not allowed or the extension lies
    """
    file_type = detect_file_type(content)
    if file_type is None:
        raise ValidationError(
            "File type not allowed. Only JPEG, PNG and GIF images are accepted.",
            details={"filename": filename},
        )

    extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    if extension not in ALLOWED_EXTENSIONS[file_type]:
        raise ValidationError(
            f"File extension '.{extension}' does not match detected type '{file_type}'",
            details={"filename": filename, "detected": file_type},
        )
    return file_type


def constant_time_compare(supplied: str, expected: str) -> bool:
    """Compare API keys in constant time to mitigate timing attacks."""
    return hmac.compare_digest(supplied.encode(), expected.encode())
