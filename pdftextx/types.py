"""
Type definitions and dataclasses for pdftextx.

This module defines data structures shared by the loader, the page extractor
and the command line.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple, Union

ObjectId = Tuple[int, int]


@dataclass
class FilterStats:
    """
    Counters collected while the object filter runs over a document.

    Attributes:
        seen: Number of indirect objects offered to the filter
        kept: Objects that survived the filter
        stripped: Surviving objects that lost at least one key
        dropped: Objects removed from the graph
        unreadable: Objects the parser could not resolve
    """
    seen: int = 0
    kept: int = 0
    stripped: int = 0
    dropped: int = 0
    unreadable: int = 0


@dataclass(frozen=True)
class PageResult:
    """Normalized text lines of one successfully extracted page."""

    page_number: int
    lines: List[str]


@dataclass(frozen=True)
class PageFailure:
    """
    A page whose text could not be extracted.

    Attributes:
        page_number: 1-based page number
        page_id: Identifier of the page object in the graph
        cause: Description of the underlying error
    """
    page_number: int
    page_id: ObjectId
    cause: str

    @property
    def message(self) -> str:
        return (
            f"could not extract text from page {self.page_number} "
            f"id={self.page_id}: {self.cause}"
        )

    def __str__(self) -> str:
        return self.message


PageOutcome = Union[PageResult, PageFailure]


@dataclass
class ExtractionReport:
    """
    Aggregate result of a text extraction run.

    Pages are keyed by page number and always iterated in ascending order;
    failures are kept in the order they were recorded. ``page_count`` is the
    number of pages enumerated and ``stats`` the load statistics of the graph
    the pages came from.
    """
    pages: Dict[int, List[str]] = field(default_factory=dict)
    failures: List[PageFailure] = field(default_factory=list)
    page_count: int = 0
    stats: FilterStats = field(default_factory=FilterStats)

    def record(self, outcome: PageOutcome) -> None:
        """Merge a single page outcome into the report."""
        if isinstance(outcome, PageResult):
            self.pages[outcome.page_number] = outcome.lines
        else:
            self.failures.append(outcome)

    def iter_pages(self) -> Iterator[Tuple[int, List[str]]]:
        for page_number in sorted(self.pages):
            yield page_number, self.pages[page_number]

    @property
    def errors(self) -> List[str]:
        return [failure.message for failure in self.failures]

    @property
    def has_errors(self) -> bool:
        return bool(self.failures)

    def diagnostics(self, limit: int = 10) -> List[str]:
        """Return at most ``limit`` failure messages, lowest page numbers first."""
        ordered = sorted(self.failures, key=lambda failure: failure.page_number)
        return [failure.message for failure in ordered[:max(0, limit)]]

    def __str__(self) -> str:
        return "ExtractionReport(pages={pages}, errors={errors})".format(
            pages=len(self.pages),
            errors=len(self.failures),
        )
