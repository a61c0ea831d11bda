"""
PDF text extraction service.
"""

import logging

import pdfplumber

from app.errors import ExtractionFailed

logger = logging.getLogger(__name__)


def extract_text_from_pdf(pdf_path: str) -> str:
    """
    Extract text from a PDF using pdfplumber.
    Does NOT support scanned PDFs (no OCR): those come back as empty text,
    which the caller reports as an empty document.

    Raises:
        ExtractionFailed: The file could not be parsed as a PDF.
    """
    text_parts = []

    try:
        with pdfplumber.open(pdf_path) as pdf:
            for page in pdf.pages:
                page_text = page.extract_text()
                if page_text:
                    text_parts.append(page_text)
    except Exception as e:
        logger.error(f"Error extracting PDF text from {pdf_path}: {e}")
        raise ExtractionFailed(f"Failed to extract text from PDF: {e}")

    return "\n\n".join(text_parts)
