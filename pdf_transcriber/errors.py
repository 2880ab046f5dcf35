"""Error taxonomy for a transcription run.

Every error here is terminal for the run: nothing is retried or skipped and no
partial transcript is written.
"""

from enum import Enum
from pathlib import Path


class ErrorKind(Enum):
    OPEN_FAILED = "open_failed"
    PAGE_READ_FAILED = "page_read_failed"
    WRITE_FAILED = "write_failed"


class TranscriberError(RuntimeError):
    """Base class for failures surfaced to the operator."""

    kind: ErrorKind


class ExtractionError(TranscriberError):
    """The document could not be opened or one of its pages could not be read."""


class OpenFailedError(ExtractionError):
    """Input is missing, unreadable, or not a parseable document."""

    kind = ErrorKind.OPEN_FAILED


class PageReadFailedError(ExtractionError):
    """A single page could not be decoded or tokenized."""

    kind = ErrorKind.PAGE_READ_FAILED

    def __init__(self, page_index: int, reason: str = "") -> None:
        self.page_index = page_index
        msg = f"Failed to read page {page_index}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class WriteFailedError(TranscriberError):
    """The destination could not be written."""

    kind = ErrorKind.WRITE_FAILED

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = path
        msg = f"Failed to write {path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
