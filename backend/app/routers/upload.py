"""
PDF upload endpoint.

Endpoints:
  POST /upload   multipart form: name, email, pdf
"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.config import get_settings
from app.models.upload import UploadResponse
from app.services.pipeline import SummaryPipeline

logger = logging.getLogger(__name__)

router = APIRouter()

SUCCESS_MESSAGE = "PDF processed successfully! Check your email for the summary."


@lru_cache(maxsize=1)
def _default_pipeline() -> SummaryPipeline:
    return SummaryPipeline.from_settings(get_settings())


def get_pipeline() -> SummaryPipeline:
    """FastAPI dependency. Tests replace it via ``app.dependency_overrides``."""
    return _default_pipeline()


@router.post("/upload", response_model=UploadResponse)
def upload_pdf(
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    pdf: Optional[UploadFile] = File(None),
    pipeline: SummaryPipeline = Depends(get_pipeline),
):
    """
    Summarize an uploaded PDF and email the summary to the submitter.

    Declared as a plain ``def`` so the blocking pipeline (PDF parsing, AI
    call, SMTP) runs in the threadpool instead of the event loop.

    Failures are raised as PipelineError subclasses and turned into JSON by
    the handler registered in app.main.
    """
    filename = pdf.filename if pdf is not None else None
    content_type = pdf.content_type if pdf is not None else None
    logger.info(
        f"Upload request received: filename={filename!r}, "
        f"content_type={content_type!r}"
    )

    content = b""
    if pdf is not None:
        # Read one byte past the limit: enough to detect an oversized file
        # without buffering all of it.
        content = pdf.file.read(pipeline.max_file_size_bytes + 1)

    pipeline.process(
        name=name,
        email=email,
        filename=filename,
        content_type=content_type,
        content=content,
    )

    return UploadResponse(success=True, message=SUCCESS_MESSAGE)
