"""
Document source: read the input PDF fully into memory.
"""

import logging
from pathlib import Path

from pdf_transcriber.errors import OpenFailedError

logger = logging.getLogger(__name__)


def read_document_bytes(path: str | Path) -> bytes:
    """Return the whole file at `path`. Missing or unreadable files are open failures."""
    path = Path(path)
    if not path.exists():
        raise OpenFailedError(f"PDF not found: {path}")
    if not path.is_file():
        raise OpenFailedError(f"Not a file: {path}")

    try:
        return path.read_bytes()
    except OSError as exc:
        raise OpenFailedError(f"Cannot read {path}: {exc}") from exc


def load_document(state: dict) -> dict:
    pdf_path = state["pdf_path"]
    data = read_document_bytes(pdf_path)
    logger.info("Loaded %d bytes from %s", len(data), pdf_path)
    return {"pdf_bytes": data}
