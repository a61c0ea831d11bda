"""
Tests for PDF text extraction.
Uses PDFs generated in memory, parsed by the real pdfplumber.
"""

import pytest

from app.errors import ExtractionFailed
from app.services.extractor import extract_text_from_pdf


class TestPdfExtraction:
    """Test PDF text extraction without AI."""

    def test_extracts_text_lines(self, tmp_path, make_pdf):
        pdf_path = tmp_path / "doc.pdf"
        pdf_path.write_bytes(make_pdf(["Quarterly Report", "Revenue grew strongly"]))

        text = extract_text_from_pdf(str(pdf_path))

        assert "Quarterly Report" in text
        assert "Revenue grew strongly" in text

    def test_escaped_parentheses_survive(self, tmp_path, make_pdf):
        pdf_path = tmp_path / "doc.pdf"
        pdf_path.write_bytes(make_pdf(["Net Sales (USD)"]))

        assert "Net Sales (USD)" in extract_text_from_pdf(str(pdf_path))

    def test_page_without_text_returns_empty_string(self, tmp_path, make_pdf):
        """Image-only / blank pages are not an error here; the pipeline decides."""
        pdf_path = tmp_path / "blank.pdf"
        pdf_path.write_bytes(make_pdf([]))

        assert extract_text_from_pdf(str(pdf_path)).strip() == ""

    def test_padded_pdf_still_parses(self, tmp_path, make_pdf):
        pdf_bytes = make_pdf(["Padded document"], pad_to=50 * 1024)
        assert len(pdf_bytes) >= 50 * 1024
        pdf_path = tmp_path / "big.pdf"
        pdf_path.write_bytes(pdf_bytes)

        assert "Padded document" in extract_text_from_pdf(str(pdf_path))

    def test_non_pdf_content_raises_extraction_failed(self, tmp_path):
        pdf_path = tmp_path / "fake.pdf"
        pdf_path.write_bytes(b"this is definitely not a pdf")

        with pytest.raises(ExtractionFailed) as exc_info:
            extract_text_from_pdf(str(pdf_path))

        assert exc_info.value.status_code == 400
        assert "Failed to extract text from PDF" in exc_info.value.message

    def test_missing_file_raises_extraction_failed(self, tmp_path):
        with pytest.raises(ExtractionFailed):
            extract_text_from_pdf(str(tmp_path / "missing.pdf"))

    def test_parser_errors_are_wrapped(self, mocker):
        mocker.patch(
            "app.services.extractor.pdfplumber.open",
            side_effect=ValueError("encrypted"),
        )

        with pytest.raises(ExtractionFailed, match="encrypted"):
            extract_text_from_pdf("whatever.pdf")
