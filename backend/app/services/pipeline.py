"""
Upload pipeline orchestrator.

    received -> validated -> stored -> text_extracted -> summarized
             -> notified -> cleaned_up

Each stage needs the previous one's output, so the run is strictly
sequential. The temp file is held in a scoped block: it is deleted on every
exit path, including exceptions from any stage.
"""

import logging
from typing import Callable, Optional

from app.config import Settings
from app.errors import (
    EmailDeliveryFailed,
    EmptyDocument,
    ExtractionFailed,
    InternalError,
    PipelineError,
)
from app.models.upload import PipelineResult, PipelineStage, UploadRequest
from app.services.extractor import extract_text_from_pdf
from app.services.notifier import Notifier
from app.services.storage import TempStorage
from app.services.summarizer import Summarizer
from app.services.validation import validate_upload

logger = logging.getLogger(__name__)

# Terminal state recorded for each classified failure
_FAILURE_STAGES = {
    EmptyDocument: PipelineStage.EMPTY_DOCUMENT,
    ExtractionFailed: PipelineStage.EXTRACTION_FAILED,
    EmailDeliveryFailed: PipelineStage.DELIVERY_FAILED,
    InternalError: PipelineStage.INTERNAL_ERROR,
}


def _failure_stage(error: PipelineError) -> PipelineStage:
    for error_type, stage in _FAILURE_STAGES.items():
        if isinstance(error, error_type):
            return stage
    return PipelineStage.INTERNAL_ERROR


class SummaryPipeline:
    """
    Drives one upload from intake to email.

    Collaborators are injected so tests can swap any of them for fakes.
    """

    def __init__(
        self,
        storage: TempStorage,
        summarizer: Summarizer,
        notifier: Notifier,
        max_file_size_bytes: int = 10 * 1024 * 1024,
        extract_text: Callable[[str], str] = extract_text_from_pdf,
    ):
        self.storage = storage
        self.summarizer = summarizer
        self.notifier = notifier
        self.max_file_size_bytes = max_file_size_bytes
        self.extract_text = extract_text

    @classmethod
    def from_settings(cls, settings: Settings) -> "SummaryPipeline":
        return cls(
            storage=TempStorage(settings.upload_dir),
            summarizer=Summarizer(
                models=settings.summary_models,
                api_key=settings.anthropic_api_key,
            ),
            notifier=Notifier.from_settings(settings),
            max_file_size_bytes=settings.max_file_size_bytes,
        )

    def process(
        self,
        name: Optional[str],
        email: Optional[str],
        filename: Optional[str],
        content_type: Optional[str],
        content: bytes,
    ) -> PipelineResult:
        """
        Validate raw form fields, then run the pipeline.

        Validation errors are raised before anything is written to disk.
        """
        try:
            request = validate_upload(
                name=name,
                email=email,
                filename=filename,
                content_type=content_type,
                size=len(content),
                max_bytes=self.max_file_size_bytes,
            )
        except PipelineError as e:
            logger.info(
                f"Upload rejected at validation ({e.error_code}): {e.message}",
                extra={"stage": PipelineStage.REJECTED_AT_VALIDATION.value},
            )
            raise
        return self.run(request, content)

    def run(self, request: UploadRequest, content: bytes) -> PipelineResult:
        """
        Run a validated upload through store, extract, summarize and notify.

        Raises:
            EmptyDocument: The PDF has no extractable text.
            ExtractionFailed: The PDF could not be parsed.
            EmailDeliveryFailed: The relay rejected or could not take the email.
            InternalError: Anything unexpected.
        """
        stage = PipelineStage.VALIDATED
        logger.info(f"Processing PDF for {request.name} ({request.email})")

        try:
            with self.storage.stored(content, request.filename) as pdf_path:
                stage = PipelineStage.STORED

                text = self.extract_text(str(pdf_path))
                if not text or not text.strip():
                    raise EmptyDocument(
                        "PDF appears to be empty or contains no extractable text"
                    )
                stage = PipelineStage.TEXT_EXTRACTED
                logger.info(f"Extracted {len(text)} characters from PDF")

                summary = self.summarizer.summarize(text)
                stage = PipelineStage.SUMMARIZED

                self.notifier.send_summary(
                    recipient=request.email,
                    name=request.name,
                    summary_html=summary.html,
                    filename=request.filename,
                )
                stage = PipelineStage.NOTIFIED
        except PipelineError as e:
            logger.warning(
                f"Pipeline failed after stage {stage.value}: {e.message}",
                extra={"stage": _failure_stage(e).value, "error_code": e.error_code},
            )
            raise
        except Exception as e:
            logger.error(
                f"Unexpected error after stage {stage.value}: {e}",
                exc_info=True,
                extra={"stage": PipelineStage.INTERNAL_ERROR.value},
            )
            raise InternalError(str(e)) from e

        logger.info(
            f"Pipeline completed for {request.email}",
            extra={"stage": PipelineStage.CLEANED_UP.value, "summary_source": summary.source.value},
        )
        return PipelineResult(
            stage=PipelineStage.CLEANED_UP,
            recipient=request.email,
            summary=summary,
        )
