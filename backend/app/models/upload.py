"""
Pydantic models for PDF uploads and summaries.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel


class UploadRequest(BaseModel):
    """A validated upload. The file bytes travel alongside, not inside, this model."""
    name: str
    email: str
    filename: str
    content_type: str
    size: int


class SummarySource(str, Enum):
    AI = "ai"
    FALLBACK = "fallback"


class SummaryResult(BaseModel):
    """
    HTML summary plus the path that produced it.

    ``model`` is set only for AI summaries; ``failure_reason`` only for the
    fallback excerpt.
    """
    html: str
    source: SummarySource
    model: Optional[str] = None
    failure_reason: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.source == SummarySource.FALLBACK


class EmailMessage(BaseModel):
    to: str
    subject: str
    html_body: str
    sender: Optional[str] = None


class PipelineStage(str, Enum):
    RECEIVED = "received"
    VALIDATED = "validated"
    STORED = "stored"
    TEXT_EXTRACTED = "text_extracted"
    SUMMARIZED = "summarized"
    NOTIFIED = "notified"
    CLEANED_UP = "cleaned_up"

    # Terminal failure states
    REJECTED_AT_VALIDATION = "rejected_at_validation"
    EXTRACTION_FAILED = "extraction_failed"
    EMPTY_DOCUMENT = "empty_document"
    DELIVERY_FAILED = "delivery_failed"
    INTERNAL_ERROR = "internal_error"


class PipelineResult(BaseModel):
    stage: PipelineStage
    recipient: str
    summary: SummaryResult


# ---------------------------------------------------------------------------
# HTTP response bodies
# ---------------------------------------------------------------------------

class UploadResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
