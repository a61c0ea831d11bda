"""
Shared fixtures.

PDFs are generated in memory (single page, Helvetica text) so the extractor
and end-to-end tests exercise real pdfplumber parsing without sample files.
"""

import os
import pytest

# Ensure env vars are set before importing anything that triggers app imports
os.environ.setdefault("ANTHROPIC_API_KEY", "test-anthropic-key")
os.environ.setdefault("SMTP_HOST", "smtp.test.local")
os.environ.setdefault("EMAIL_FROM", "noreply@example.com")


def _escape_pdf_text(line: str) -> str:
    return line.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(lines=None, pad_to: int = 0) -> bytes:
    """
    Build a minimal valid one-page PDF.

    Args:
        lines: Text lines to draw. None or [] yields a page with no text.
        pad_to: Pad with PDF comment lines until the file is at least this
                many bytes (comments are ignored by parsers).
    """
    ops = ["BT", "/F1 12 Tf", "14 TL", "72 720 Td"]
    for line in lines or []:
        ops.append(f"({_escape_pdf_text(line)}) Tj T*")
    ops.append("ET")
    stream = "\n".join(ops).encode("latin-1")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    comment = b"% padding " + b"x" * 60 + b"\n"
    while len(out) + len(comment) < pad_to:
        out += comment

    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_pos = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_pos
    return bytes(out)


@pytest.fixture
def make_pdf():
    """Factory fixture: make_pdf(lines, pad_to=0) -> PDF bytes."""
    return build_pdf
