"""
Core extraction loop: one pass over the pages, strictly in order.

Each page's tokens are joined with single spaces into one section. A page that
cannot be read aborts the whole run; callers never see a partial transcript.
"""

import logging
from contextlib import closing
from typing import Iterable, Protocol

from pdf_transcriber.errors import ExtractionError, OpenFailedError, PageReadFailedError
from pdf_transcriber.pipeline.parser import Document, DocumentParser, PdfplumberParser
from pdf_transcriber.state import PageSection, TextToken, Transcript

logger = logging.getLogger(__name__)


class ProgressReporter(Protocol):
    def start(self, page_count: int) -> None: ...

    def page(self, section: PageSection, page_count: int) -> None: ...


def join_tokens(tokens: Iterable[TextToken]) -> str:
    """Join token text with a single space. Empty tokens still get their separator."""
    return " ".join(token["text"] for token in tokens)


def _read_page_count(document: Document) -> int:
    try:
        count = document.page_count
    except ExtractionError:
        raise
    except Exception as exc:
        raise OpenFailedError(f"Cannot determine page count: {exc}") from exc
    if count < 0:
        raise OpenFailedError(f"Invalid page count: {count}")
    return count


def _read_page(document: Document, index: int) -> str:
    try:
        page = document.get_page(index)
        tokens = page.get_tokens()
        return join_tokens(tokens)
    except PageReadFailedError as exc:
        if exc.page_index == index:
            raise
        raise PageReadFailedError(index, str(exc)) from exc
    except Exception as exc:
        raise PageReadFailedError(index, str(exc)) from exc


def extract(document: Document, report: ProgressReporter | None = None) -> Transcript:
    """Read every page of an open document into a transcript."""
    page_count = _read_page_count(document)
    logger.info("Document has %d pages", page_count)
    if report is not None:
        report.start(page_count)

    sections: list[PageSection] = []
    for index in range(1, page_count + 1):
        text = _read_page(document, index)
        section = PageSection(index=index, text=text)
        sections.append(section)
        logger.debug("Page %d/%d: %d chars", index, page_count, len(text))
        if report is not None:
            report.page(section, page_count)

    return tuple(sections)


def extract_document(
    data: bytes,
    parser: DocumentParser,
    report: ProgressReporter | None = None,
) -> Transcript:
    """Open `data` with `parser`, extract it, and release the document on every path."""
    try:
        document = parser.open(data)
    except ExtractionError:
        raise
    except Exception as exc:
        raise OpenFailedError(f"Cannot open document: {exc}") from exc

    with closing(document):
        return extract(document, report)


def extract_transcript(
    state: dict,
    parser: DocumentParser | None = None,
    report: ProgressReporter | None = None,
) -> dict:
    transcript = extract_document(state["pdf_bytes"], parser or PdfplumberParser(), report)
    logger.info("Extracted %d pages", len(transcript))
    return {"page_count": len(transcript), "transcript": transcript}
