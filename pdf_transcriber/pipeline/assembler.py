"""
pipeline/assembler.py — transcript validation and page-marked rendering.

Output shape per page: marker line, page text, blank line. Sections are
rendered in ascending page order, one marker each.
"""

import logging

from pdf_transcriber.state import Transcript

logger = logging.getLogger(__name__)

DEFAULT_MARKER = "--- Page {index} ---"


def format_page_marker(index: int, template: str = DEFAULT_MARKER) -> str:
    return template.format(index=index)


def validate_transcript(transcript: Transcript) -> None:
    """Raise ValueError unless section indices are exactly 1..N in order."""
    for expected, section in enumerate(transcript, start=1):
        if section["index"] != expected:
            raise ValueError(
                f"Transcript out of order: expected page {expected}, got {section['index']}"
            )


def format_transcript(transcript: Transcript, marker: str = DEFAULT_MARKER) -> str:
    validate_transcript(transcript)
    parts = []
    for section in transcript:
        parts.append(f"{format_page_marker(section['index'], marker)}\n{section['text']}\n\n")
    return "".join(parts)


def assemble(state: dict, marker: str = DEFAULT_MARKER) -> dict:
    content = format_transcript(state["transcript"], marker)
    logger.info("Assembly complete: %d pages, %d chars", len(state["transcript"]), len(content))
    return {"content": content}
