"""
Shared TypedDicts for the transcription pipeline.
"""

from typing import TypedDict


class TextToken(TypedDict):
    text: str        # string content only, layout metadata is dropped


class PageSection(TypedDict):
    index: int       # 1-indexed
    text: str        # page tokens joined with single spaces


# Sections in ascending page order, exactly one per page.
Transcript = tuple[PageSection, ...]
