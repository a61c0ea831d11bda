"""
Error taxonomy for the upload pipeline.

Every failure a request can end in is a PipelineError subclass. The HTTP
layer maps them to responses using ``status_code``; ``error_code`` is a
stable machine-readable identifier used in logs and tests.

Summarizer failures are deliberately absent: they degrade to a fallback
excerpt and never reach the caller.
"""


class PipelineError(Exception):
    """Base class for classified pipeline failures."""

    error_code = "pipeline_error"
    status_code = 500

    def __init__(self, message: str, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code


# ---------------------------------------------------------------------------
# Client input errors (400)
# ---------------------------------------------------------------------------

class MissingFile(PipelineError):
    error_code = "missing_file"
    status_code = 400


class InvalidFileType(PipelineError):
    error_code = "invalid_file_type"
    status_code = 400


class FileTooLarge(PipelineError):
    error_code = "file_too_large"
    status_code = 400


class InvalidName(PipelineError):
    error_code = "invalid_name"
    status_code = 400


class InvalidEmail(PipelineError):
    error_code = "invalid_email"
    status_code = 400


# ---------------------------------------------------------------------------
# Document errors (400)
# ---------------------------------------------------------------------------

class EmptyDocument(PipelineError):
    error_code = "empty_document"
    status_code = 400


class ExtractionFailed(PipelineError):
    error_code = "extraction_failed"
    status_code = 400


# ---------------------------------------------------------------------------
# Dependency / internal errors (500)
# ---------------------------------------------------------------------------

class EmailDeliveryFailed(PipelineError):
    """SMTP send failed. The message carries the transport error for operators."""
    error_code = "email_delivery_failed"
    status_code = 500


class InternalError(PipelineError):
    error_code = "internal_error"
    status_code = 500
