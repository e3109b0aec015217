"""pypdf backend implementation for pdftextx."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Set, Tuple

from pypdf import PdfReader
from pypdf.errors import PdfReadError
from pypdf.generic import ArrayObject, DictionaryObject, IndirectObject, NullObject

from ..exceptions import (
    EncryptedPDFError,
    InvalidPDFError,
    PageEnumerationError,
    PageExtractionError,
)
from ..filters import ObjectFilter, filter_object
from ..types import ObjectId
from .base import ObjectGraph, PDFBackend

LOGGER = logging.getLogger(__name__)


class PypdfBackend(PDFBackend):
    """Backend implementation that uses `pypdf` under the hood.

    Loading resolves every object listed in the cross-reference data, runs it
    through the object filter and leaves only the survivors in the reader's
    object cache. Dropped objects are replaced by ``null`` and every
    reference to them is removed from the surviving objects, so page
    extraction only ever reads the filtered, already parsed graph.
    """

    def load(
        self,
        pdf_path: str,
        object_filter: ObjectFilter = filter_object,
        password: Optional[str] = None,
    ) -> ObjectGraph:
        path = Path(pdf_path)
        if not path.exists() or not path.is_file():
            raise InvalidPDFError(f"PDF file not found: {pdf_path}")

        try:
            raw_bytes = path.read_bytes()
        except OSError as exc:
            raise InvalidPDFError(f"Unable to read PDF file: {pdf_path}. Error: {exc}") from exc

        try:
            reader = PdfReader(io.BytesIO(raw_bytes))
        except PdfReadError as exc:
            raise InvalidPDFError(f"Corrupted or invalid PDF file: {pdf_path}. Error: {exc}") from exc
        except Exception as exc:
            raise InvalidPDFError(f"Unexpected error reading PDF: {pdf_path}. Error: {exc}") from exc

        if reader.is_encrypted:
            if password:
                if reader.decrypt(password) == 0:
                    raise EncryptedPDFError("Failed to decrypt PDF with supplied password.")
            else:
                raise EncryptedPDFError("PDF is encrypted. Supply a password to process this file.")

        graph = ObjectGraph(source=str(path), handle=reader)
        try:
            self._filter_objects(reader, graph, object_filter)
        except PdfReadError as exc:
            raise InvalidPDFError(f"Corrupted or invalid PDF file: {pdf_path}. Error: {exc}") from exc
        self._prune_references(reader, graph.dropped, graph.objects.values())

        LOGGER.info(
            "Loaded %s: %d objects kept (%d stripped), %d dropped, %d unreadable",
            path,
            graph.stats.kept,
            graph.stats.stripped,
            graph.stats.dropped,
            graph.stats.unreadable,
        )
        return graph

    def get_pages(self, graph: ObjectGraph) -> List[Tuple[int, ObjectId]]:
        reader = graph.handle
        if not isinstance(reader, PdfReader):
            raise PageEnumerationError(f"No parsed document attached to {graph.source}")

        pages: List[Tuple[int, ObjectId]] = []
        try:
            for page_number, page in enumerate(reader.pages, start=1):
                reference = page.indirect_reference
                page_id = (reference.idnum, reference.generation) if reference is not None else (0, 0)
                pages.append((page_number, page_id))
        except (PdfReadError, AttributeError, KeyError, TypeError, ValueError) as exc:
            raise PageEnumerationError(
                f"Unable to enumerate pages of {graph.source}. Error: {exc}"
            ) from exc

        graph.pages = pages
        return pages

    def extract_text(self, graph: ObjectGraph, page_numbers: Sequence[int]) -> str:
        reader: PdfReader = graph.handle
        page_count = len(reader.pages)
        texts = []
        for page_number in page_numbers:
            if not 1 <= page_number <= page_count:
                raise PageExtractionError(
                    f"Page {page_number} is out of bounds (document has {page_count} pages)"
                )
            texts.append(reader.pages[page_number - 1].extract_text())
        return "\n".join(texts)

    # ------------------------------------------------------------------
    # Loading helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _object_ids(reader: PdfReader) -> List[ObjectId]:
        ids: Set[ObjectId] = set()
        for generation, entries in reader.xref.items():
            free = reader.xref_free_entry.get(generation, {})
            for idnum in entries:
                if not free.get(idnum, False):
                    ids.add((idnum, generation))
        for idnum in reader.xref_objStm:
            ids.add((idnum, 0))
        return sorted(ids)

    def _filter_objects(
        self, reader: PdfReader, graph: ObjectGraph, object_filter: ObjectFilter
    ) -> None:
        stats = graph.stats
        for object_id in self._object_ids(reader):
            idnum, generation = object_id
            stats.seen += 1
            try:
                obj = reader.get_object(IndirectObject(idnum, generation, reader))
            except (PdfReadError, ValueError) as exc:
                LOGGER.debug("Skipping unreadable object %s: %s", object_id, exc)
                stats.unreadable += 1
                continue
            if obj is None or isinstance(obj, NullObject):
                stats.unreadable += 1
                continue

            key_count = len(obj) if isinstance(obj, DictionaryObject) else 0
            kept = object_filter(object_id, obj)
            if kept is None:
                graph.dropped.add(object_id)
                reader.resolved_objects[(generation, idnum)] = NullObject()
                stats.dropped += 1
                continue

            kept_id, kept_obj = kept
            if kept_obj is not obj:
                reader.resolved_objects[(kept_id[1], kept_id[0])] = kept_obj
            if isinstance(kept_obj, DictionaryObject) and len(kept_obj) < key_count:
                stats.stripped += 1
            graph.objects[kept_id] = kept_obj
            stats.kept += 1

    @staticmethod
    def _is_dropped(value: Any, dropped: Set[ObjectId]) -> bool:
        return isinstance(value, IndirectObject) and (value.idnum, value.generation) in dropped

    def _prune_references(
        self, reader: PdfReader, dropped: Set[ObjectId], objects: Iterable[Any]
    ) -> None:
        """Remove references to dropped objects from surviving containers."""
        if not dropped:
            return

        stack: List[Any] = [reader.trailer, *objects]
        while stack:
            current = stack.pop()
            if isinstance(current, DictionaryObject):
                for key in list(current.keys()):
                    value = current.raw_get(key)
                    if self._is_dropped(value, dropped):
                        del current[key]
                    elif isinstance(value, (DictionaryObject, ArrayObject)):
                        stack.append(value)
            elif isinstance(current, ArrayObject):
                current[:] = [item for item in current if not self._is_dropped(item, dropped)]
                stack.extend(
                    item for item in current if isinstance(item, (DictionaryObject, ArrayObject))
                )
