"""PDF to plain text conversion for pdftextx."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .backends import ObjectGraph, PDFBackend, PypdfBackend
from .exceptions import OutputWriteError
from .extractor import PageExtractor
from .filters import ObjectFilter, filter_object
from .types import ExtractionReport
from .utils import PathLike, ensure_output_directory, time_block, to_path

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_REPORTED_ERRORS = 10


@dataclass(frozen=True)
class ExtractionOptions:
    """Options controlling PDF text extraction."""

    max_workers: Optional[int] = None
    password: Optional[str] = None
    max_reported_errors: int = DEFAULT_MAX_REPORTED_ERRORS
    separator: str = " "


def load_pdf(
    source: PathLike,
    *,
    backend: Optional[PDFBackend] = None,
    object_filter: ObjectFilter = filter_object,
    password: Optional[str] = None,
) -> ObjectGraph:
    """Load ``source`` with ``object_filter`` applied to every object."""
    backend = backend or PypdfBackend()
    with time_block(LOGGER, f"Loading {source}"):
        return backend.load(str(source), object_filter, password=password)


def render_text(report: ExtractionReport, separator: str = " ") -> str:
    """Join the lines of every page, and then the pages, with ``separator``.

    Pages appear in ascending page-number order. Page boundaries get the
    same separator as lines so that words on adjacent pages stay apart;
    pages without any text are skipped.
    """
    page_texts = (separator.join(lines) for _, lines in report.iter_pages())
    return separator.join(text for text in page_texts if text)


def write_text(destination: Path, text: str) -> None:
    """Write ``text`` to ``destination`` as UTF-8, replacing any existing file."""
    try:
        ensure_output_directory(destination)
        destination.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise OutputWriteError(f"Unable to write text file: {destination}. Error: {exc}") from exc


FailureReporter = Callable[[ExtractionReport, object, int], None]


def log_failures(report: ExtractionReport, source: object, limit: int = DEFAULT_MAX_REPORTED_ERRORS) -> None:
    """Log the error count and at most ``limit`` failure messages."""
    if not report.has_errors:
        return
    LOGGER.warning("%s has %d errors:", source, len(report.failures))
    for message in report.diagnostics(limit):
        LOGGER.warning("%s", message)


def extract_pdf_text(
    input_path: PathLike,
    output_path: PathLike,
    options: Optional[ExtractionOptions] = None,
    *,
    backend: Optional[PDFBackend] = None,
    report_failures: FailureReporter = log_failures,
) -> ExtractionReport:
    """Extract the text of ``input_path`` into ``output_path``.

    Pages that fail are recorded in the returned report and handed to
    ``report_failures`` (logged by default); the remaining pages are still
    written. Load, page enumeration and write errors propagate.
    """
    options = options or ExtractionOptions()
    backend = backend or PypdfBackend()
    source = to_path(input_path)
    destination = to_path(output_path)

    graph = load_pdf(source, backend=backend, password=options.password)

    with time_block(LOGGER, "Page text extraction"):
        report = PageExtractor(backend, max_workers=options.max_workers).extract_all(graph)
    if report.has_errors:
        report_failures(report, source, options.max_reported_errors)

    LOGGER.info("Writing %s", destination)
    write_text(destination, render_text(report, options.separator))
    return report


__all__ = [
    "DEFAULT_MAX_REPORTED_ERRORS",
    "ExtractionOptions",
    "FailureReporter",
    "extract_pdf_text",
    "load_pdf",
    "log_failures",
    "render_text",
    "write_text",
]
