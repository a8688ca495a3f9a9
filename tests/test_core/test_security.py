"""
Tests for ingress sanitization and file type checks.
"""

import pytest

from portfolio_api.core.exceptions import ValidationError
from portfolio_api.core.security import (
    constant_time_compare,
    detect_file_type,
    is_valid_filename,
    is_valid_tag_name,
    sanitize_filename,
    sanitize_for_html,
    validate_filetype_and_extension,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("cat.png", "cat.png"),
        ("my cat.png", "my_cat.png"),
        ("../../etc/passwd.png", "....etcpasswd.png"),
        ("<script>.gif", "script.gif"),
    ],
)
def test_sanitize_filename(raw, expected):
    assert sanitize_filename(raw) == expected


def test_sanitize_for_html():
    assert sanitize_for_html(' <b>"hi"</b> ') == "&lt;b&gt;&quot;hi&quot;&lt;/b&gt;"


def test_filename_pattern():
    assert is_valid_filename("cat_01-final.png")
    assert not is_valid_filename("cat")
    assert not is_valid_filename("....etcpasswd.png")
    assert not is_valid_filename("cat.png1")


def test_tag_name_pattern():
    assert is_valid_tag_name("black-and-white")
    assert not is_valid_tag_name("Black")
    assert not is_valid_tag_name("")


def test_detect_file_type(png_bytes, jpeg_bytes, gif_bytes):
    assert detect_file_type(png_bytes) == "png"
    assert detect_file_type(jpeg_bytes) == "jpg"
    assert detect_file_type(gif_bytes) == "gif"
    assert detect_file_type(b"%PDF-1.7") is None


def test_validate_accepts_matching_extension(jpeg_bytes):
    assert validate_filetype_and_extension("cat.jpeg", jpeg_bytes) == "jpg"
    assert validate_filetype_and_extension("cat.JPG", jpeg_bytes) == "jpg"


def test_validate_rejects_mismatched_extension(gif_bytes):
    with pytest.raises(ValidationError):
        validate_filetype_and_extension("cat.png", gif_bytes)


def test_validate_rejects_unknown_type():
    with pytest.raises(ValidationError):
        validate_filetype_and_extension("cat.png", b"not an image")


def test_constant_time_compare():
    assert constant_time_compare("secret", "secret")
    assert not constant_time_compare("secret", "Secret")
