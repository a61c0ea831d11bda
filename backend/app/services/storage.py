"""
Temporary storage for uploaded PDFs.
Each upload is written to the upload directory for the lifetime of one
request and deleted afterwards, whatever the outcome.
"""

import logging
import os
import re
import secrets
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)


def _unique_name(filename: str | None) -> str:
    """
    Build a collision-resistant file name: pdf-<epoch-ms>-<random><ext>.

    Only the extension of the uploaded name is kept; anything but word
    chars, dash and dot becomes an underscore.
    """
    ext = os.path.splitext(filename or "")[1].lower()
    ext = re.sub(r'[^\w\-.]', '_', ext) or ".pdf"
    return f"pdf-{int(time.time() * 1000)}-{secrets.token_hex(6)}{ext}"


class TempStorage:
    """Scoped temp-file area rooted at ``upload_dir``."""

    def __init__(self, upload_dir: str | os.PathLike):
        self.upload_dir = Path(upload_dir)

    def write(self, content: bytes, filename: str | None = None) -> Path:
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        path = self.upload_dir / _unique_name(filename)
        # "xb": never clobber a file another request is using
        with open(path, "xb") as fh:
            fh.write(content)
        logger.debug(f"Stored upload at {path}")
        return path

    def delete(self, path: str | os.PathLike) -> bool:
        """
        Delete a stored upload.

        Returns:
            True if a file was removed, False if it was already gone.
        """
        try:
            os.unlink(path)
            return True
        except FileNotFoundError:
            return False

    @contextmanager
    def stored(self, content: bytes, filename: str | None = None) -> Iterator[Path]:
        """
        Write ``content`` to a fresh temp file and yield its path.

        The file is removed when the block exits, on success or on any
        exception raised inside it.
        """
        path = self.write(content, filename)
        try:
            yield path
        finally:
            try:
                self.delete(path)
            except OSError as cleanup_err:
                logger.warning(f"Failed to clean up temp file {path}: {cleanup_err}")
