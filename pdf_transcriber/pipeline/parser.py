"""
Document parser boundary: protocols plus the pdfplumber-backed implementation.

The extractor only talks to these protocols, so tests can feed it fake
documents and another PDF library can be swapped in behind `DocumentParser`.
"""

import io
import logging
from typing import Protocol, Sequence, runtime_checkable

import pdfplumber

from pdf_transcriber.errors import OpenFailedError, PageReadFailedError
from pdf_transcriber.state import TextToken

logger = logging.getLogger(__name__)


@runtime_checkable
class Page(Protocol):
    def get_tokens(self) -> Sequence[TextToken]:
        """Return the page's text tokens in parser order."""
        ...


@runtime_checkable
class Document(Protocol):
    @property
    def page_count(self) -> int: ...

    def get_page(self, index: int) -> Page:
        """Return the page at 1-based `index`."""
        ...

    def close(self) -> None: ...


@runtime_checkable
class DocumentParser(Protocol):
    def open(self, data: bytes) -> Document: ...


class PdfplumberPage:
    def __init__(self, page: "pdfplumber.page.Page", index: int) -> None:
        self._page = page
        self.index = index

    def get_tokens(self) -> list[TextToken]:
        try:
            words = self._page.extract_words()
        except Exception as exc:
            raise PageReadFailedError(self.index, str(exc)) from exc
        finally:
            self._page.close()
        return [TextToken(text=w["text"]) for w in words]


class PdfplumberDocument:
    def __init__(self, pdf: "pdfplumber.PDF") -> None:
        self._pdf = pdf
        self._pages = pdf.pages

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def get_page(self, index: int) -> PdfplumberPage:
        if not 1 <= index <= len(self._pages):
            raise PageReadFailedError(index, f"out of range 1..{len(self._pages)}")
        return PdfplumberPage(self._pages[index - 1], index)

    def close(self) -> None:
        self._pdf.close()


class PdfplumberParser:
    """Opens PDF bytes with pdfplumber; words from `extract_words` are the tokens."""

    def open(self, data: bytes) -> PdfplumberDocument:
        try:
            pdf = pdfplumber.open(io.BytesIO(data))
        except Exception as exc:
            raise OpenFailedError(f"Not a readable PDF: {exc}") from exc

        # Resolve the page tree now so a broken one counts as an open failure.
        try:
            return PdfplumberDocument(pdf)
        except Exception as exc:
            pdf.close()
            raise OpenFailedError(f"Cannot read page tree: {exc}") from exc
