"""CLI entry point for the PDF page transcriber."""

import argparse
import logging
import os
import sys
import time
from pathlib import Path
from typing import TextIO

from dotenv import load_dotenv

load_dotenv()

from pdf_transcriber.errors import TranscriberError
from pdf_transcriber.pipeline.assembler import DEFAULT_MARKER, assemble, format_page_marker
from pdf_transcriber.pipeline.extractor import ProgressReporter, extract_transcript
from pdf_transcriber.pipeline.loader import load_document
from pdf_transcriber.pipeline.parser import DocumentParser
from pdf_transcriber.pipeline.writer import write_transcript
from pdf_transcriber.state import PageSection

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "docs/pdf_content.txt"


class ConsoleReporter:
    """Echoes page count and each finished page to the console."""

    def __init__(self, marker: str = DEFAULT_MARKER, echo_text: bool = True,
                 stream: TextIO | None = None) -> None:
        self.marker = marker
        self.echo_text = echo_text
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    def start(self, page_count: int) -> None:
        print(f"Pages: {page_count}", file=self.stream)

    def page(self, section: PageSection, page_count: int) -> None:
        print(format_page_marker(section["index"], self.marker), file=self.stream)
        if self.echo_text:
            print(section["text"], file=self.stream)


def run_pipeline(
    pdf_path: str,
    marker: str = DEFAULT_MARKER,
    parser: DocumentParser | None = None,
    report: ProgressReporter | None = None,
) -> dict:
    """Run load -> extract -> assemble, return final state. Nothing is written here."""
    state: dict = {"pdf_path": pdf_path}

    state.update(load_document(state))
    state.update(extract_transcript(state, parser=parser, report=report))
    state.update(assemble(state, marker=marker))

    return state


def _marker_template(value: str) -> str:
    if "{index}" not in value:
        raise argparse.ArgumentTypeError("marker must contain {index}")
    try:
        first, second = value.format(index=1), value.format(index=2)
    except (KeyError, IndexError, ValueError) as exc:
        raise argparse.ArgumentTypeError(f"invalid marker template: {exc}")
    if first == second:
        raise argparse.ArgumentTypeError("marker must render the page number")
    return value


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extract page-marked plain text from a PDF.")
    parser.add_argument("pdf_path", help="Path to the input PDF")
    parser.add_argument("--output", "-o",
                        default=os.environ.get("PDF_TRANSCRIBER_OUTPUT", DEFAULT_OUTPUT))
    parser.add_argument("--marker", type=_marker_template, default=DEFAULT_MARKER,
                        help="Page marker template, must contain {index}")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Only print page markers, not page text")
    parser.add_argument("--log-level",
                        default=os.environ.get("PDF_TRANSCRIBER_LOG_LEVEL", "INFO").upper(),
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level, logging.INFO), format="%(levelname)s %(name)s: %(message)s")

    output_path = Path(args.output)
    reporter = ConsoleReporter(marker=args.marker, echo_text=not args.quiet)

    start = time.time()
    logger.info("Extracting text from %s", args.pdf_path)

    try:
        state = run_pipeline(args.pdf_path, marker=args.marker, report=reporter)
        write_transcript(output_path, state["content"])
    except TranscriberError as exc:
        logger.error("%s", exc)
        return 1
    except Exception:
        logger.exception("Pipeline failed")
        return 1

    print(f"Saved to {output_path}")
    logger.info("Done: %d pages -> %s (%.1fs)",
                state["page_count"], output_path, time.time() - start)
    return 0


if __name__ == "__main__":
    sys.exit(main())
