"""
Upload intake validation.

Runs before anything touches disk or the network, so a rejected request
never leaves a file behind.
"""

import re
from typing import Optional

from app.errors import (
    EmptyDocument,
    FileTooLarge,
    InvalidEmail,
    InvalidFileType,
    InvalidName,
    MissingFile,
)
from app.models.upload import UploadRequest

PDF_CONTENT_TYPE = "application/pdf"
MIN_NAME_LENGTH = 2

# local@domain.tld, nothing fancier
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email))


def format_size(num_bytes: int) -> str:
    """Human-readable limit: 10 MB, 512 KB, 100 bytes."""
    if num_bytes >= 1024 * 1024:
        return f"{round(num_bytes / (1024 * 1024), 2):g} MB"
    if num_bytes >= 1024:
        return f"{round(num_bytes / 1024, 2):g} KB"
    return f"{num_bytes} bytes"


def validate_upload(
    name: Optional[str],
    email: Optional[str],
    filename: Optional[str],
    content_type: Optional[str],
    size: int,
    max_bytes: int,
) -> UploadRequest:
    """
    Check an incoming upload and return the validated request.

    File checks come first (type, then size) so an oversized non-PDF is
    reported as the wrong type, matching what the upload filter reports.

    Raises:
        MissingFile: No file part was sent.
        InvalidFileType: Declared MIME type is not application/pdf.
        FileTooLarge: File exceeds ``max_bytes``.
        EmptyDocument: File has zero bytes.
        InvalidName: Trimmed name is shorter than two characters.
        InvalidEmail: Email does not look like local@domain.tld.
    """
    if not filename:
        raise MissingFile("No PDF file uploaded")

    if (content_type or "").lower() != PDF_CONTENT_TYPE:
        raise InvalidFileType("Only PDF files are allowed")

    if size > max_bytes:
        raise FileTooLarge(f"File too large. Maximum size is {format_size(max_bytes)}")

    if size == 0:
        raise EmptyDocument("PDF appears to be empty or contains no extractable text")

    clean_name = (name or "").strip()
    if len(clean_name) < MIN_NAME_LENGTH:
        raise InvalidName(f"Name must be at least {MIN_NAME_LENGTH} characters")

    clean_email = (email or "").strip()
    if not clean_email:
        raise InvalidEmail("Email is required")
    if not is_valid_email(clean_email):
        raise InvalidEmail("Invalid email format")

    return UploadRequest(
        name=clean_name,
        email=clean_email,
        filename=filename,
        content_type=PDF_CONTENT_TYPE,
        size=size,
    )
