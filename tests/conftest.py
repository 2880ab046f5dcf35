"""Fake parser collaborators and a tiny PDF builder shared by the tests."""

from __future__ import annotations

from typing import Callable

import pytest

from pdf_transcriber.state import PageSection, TextToken


class FakePage:
    def __init__(self, words: list[str] | Exception) -> None:
        self._words = words

    def get_tokens(self) -> list[TextToken]:
        if isinstance(self._words, Exception):
            raise self._words
        return [TextToken(text=w) for w in self._words]


class FakeDocument:
    """In-memory document; a page given as an exception fails on access."""

    def __init__(self, pages: list[list[str] | Exception], log: list[str] | None = None) -> None:
        self._pages = pages
        self.closed = False
        self.log = log if log is not None else []

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def get_page(self, index: int) -> FakePage:
        self.log.append(f"get_page:{index}")
        return FakePage(self._pages[index - 1])

    def close(self) -> None:
        self.closed = True


class FakeParser:
    def __init__(self, document: FakeDocument | None = None, error: Exception | None = None) -> None:
        self.document = document
        self.error = error
        self.opened: list[bytes] = []

    def open(self, data: bytes) -> FakeDocument:
        self.opened.append(data)
        if self.error is not None:
            raise self.error
        assert self.document is not None
        return self.document


class RecordingReporter:
    def __init__(self, log: list[str] | None = None) -> None:
        self.page_count: int | None = None
        self.sections: list[PageSection] = []
        self.log = log if log is not None else []

    def start(self, page_count: int) -> None:
        self.page_count = page_count

    def page(self, section: PageSection, page_count: int) -> None:
        self.log.append(f"report:{section['index']}")
        self.sections.append(section)


def build_pdf(pages: list[str]) -> bytes:
    """Build a minimal PDF with one Helvetica text line per page ("" = blank page)."""
    n_pages = len(pages)
    font_id = 3 + 2 * n_pages
    page_ids = [3 + 2 * i for i in range(n_pages)]

    objects: dict[int, bytes] = {
        1: b"<< /Type /Catalog /Pages 2 0 R >>",
        2: (
            "<< /Type /Pages /Kids [%s] /Count %d >>"
            % (" ".join(f"{pid} 0 R" for pid in page_ids), n_pages)
        ).encode(),
        font_id: b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    }
    for pid, text in zip(page_ids, pages):
        content = f"BT /F1 24 Tf 72 720 Td ({text}) Tj ET".encode() if text else b""
        objects[pid] = (
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Resources << /Font << /F1 {font_id} 0 R >> >> /Contents {pid + 1} 0 R >>"
        ).encode()
        objects[pid + 1] = (
            b"<< /Length %d >>\nstream\n" % len(content) + content + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    offsets: dict[int, int] = {}
    for obj_id in sorted(objects):
        offsets[obj_id] = len(out)
        out += b"%d 0 obj\n" % obj_id + objects[obj_id] + b"\nendobj\n"

    size = max(objects) + 1
    xref_at = len(out)
    out += b"xref\n0 %d\n" % size
    out += b"0000000000 65535 f \n"
    for obj_id in range(1, size):
        out += b"%010d 00000 n \n" % offsets[obj_id]
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (size, xref_at)
    return bytes(out)


@pytest.fixture
def make_pdf() -> Callable[[list[str]], bytes]:
    return build_pdf
