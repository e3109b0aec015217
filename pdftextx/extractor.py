"""Parallel per-page text extraction.

Every page is extracted independently on a thread pool. Workers never touch
the report: each one returns a :class:`~pdftextx.types.PageOutcome` and the
calling thread, as the only collector, merges outcomes as they complete.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional

from .backends.base import ObjectGraph, PDFBackend
from .types import ExtractionReport, ObjectId, PageFailure, PageOutcome, PageResult

LOGGER = logging.getLogger(__name__)


def normalize_page_text(text: str) -> List[str]:
    """Split page text into lines and lower-case each of them."""
    return [line.lower() for line in text.split("\n")]


def default_worker_count() -> int:
    return os.cpu_count() or 1


class PageExtractor:
    """Extract the text of every page of an :class:`ObjectGraph`."""

    def __init__(self, backend: PDFBackend, max_workers: Optional[int] = None) -> None:
        if max_workers is not None and max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.backend = backend
        self.max_workers = max_workers or default_worker_count()

    def extract_page(self, graph: ObjectGraph, page_number: int, page_id: ObjectId) -> PageOutcome:
        """Extract a single page, turning any error into a :class:`PageFailure`."""
        try:
            text = self.backend.extract_text(graph, [page_number])
        except Exception as exc:
            LOGGER.debug("Page %d id=%s failed: %s", page_number, page_id, exc)
            return PageFailure(page_number=page_number, page_id=page_id, cause=str(exc) or type(exc).__name__)
        return PageResult(page_number=page_number, lines=normalize_page_text(text))

    def extract_all(self, graph: ObjectGraph) -> ExtractionReport:
        """Extract every page of ``graph``.

        Page enumeration errors propagate as
        :class:`~pdftextx.exceptions.PageEnumerationError`. Errors of single
        pages are recorded in the returned report and never stop the run.
        """
        pages = self.backend.get_pages(graph)
        report = ExtractionReport(page_count=len(pages), stats=graph.stats)
        if not pages:
            return report

        workers = min(self.max_workers, len(pages))
        LOGGER.debug("Extracting %d pages with %d workers", len(pages), workers)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pdftextx") as executor:
            futures = [
                executor.submit(self.extract_page, graph, page_number, page_id)
                for page_number, page_id in pages
            ]
            for future in as_completed(futures):
                report.record(future.result())

        LOGGER.info(
            "Extracted %d of %d pages (%d failed)",
            len(report.pages),
            len(pages),
            len(report.failures),
        )
        return report


def extract_all(
    graph: ObjectGraph, backend: PDFBackend, max_workers: Optional[int] = None
) -> ExtractionReport:
    """Convenience wrapper around :meth:`PageExtractor.extract_all`."""
    return PageExtractor(backend, max_workers=max_workers).extract_all(graph)


__all__ = [
    "PageExtractor",
    "default_worker_count",
    "extract_all",
    "normalize_page_text",
]
