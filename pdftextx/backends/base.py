"""Backend protocol and the loaded object graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence, Set, Tuple

from ..filters import ObjectFilter
from ..types import FilterStats, ObjectId


@dataclass
class ObjectGraph:
    """Filtered objects of a loaded PDF plus its page enumeration.

    ``pages`` lists ``(page_number, page_object_id)`` pairs with 1-based page
    numbers. ``handle`` is whatever the backend needs to extract page text
    later; the graph is treated as read-only once the loader returns it.
    """

    source: str
    objects: Dict[ObjectId, Any] = field(default_factory=dict)
    dropped: Set[ObjectId] = field(default_factory=set)
    pages: List[Tuple[int, ObjectId]] = field(default_factory=list)
    stats: FilterStats = field(default_factory=FilterStats)
    handle: Any = None

    def __contains__(self, object_id: object) -> bool:
        return object_id in self.objects

    def get(self, object_id: ObjectId) -> Optional[Any]:
        return self.objects.get(object_id)


class PDFBackend(Protocol):
    """Protocol defining the parser services the extractor relies on."""

    def load(
        self,
        pdf_path: str,
        object_filter: ObjectFilter,
        password: Optional[str] = None,
    ) -> ObjectGraph:
        """Load ``pdf_path`` applying ``object_filter`` to every object."""

    def get_pages(self, graph: ObjectGraph) -> List[Tuple[int, ObjectId]]:
        """Return the ``(page_number, page_object_id)`` pairs of ``graph``."""

    def extract_text(self, graph: ObjectGraph, page_numbers: Sequence[int]) -> str:
        """Return the text of the given 1-based pages."""
