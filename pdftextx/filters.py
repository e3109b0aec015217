"""Object filter applied to every indirect object while a PDF is loaded.

The filter keeps the in-memory graph down to what text extraction needs:
objects whose ``/Type`` is in :data:`IGNORED_TYPES` are dropped outright,
keys listed in :data:`STRIPPED_KEYS` are removed from every surviving
dictionary or stream, and plain dictionaries left empty by the stripping are
dropped too. Streams are never dropped for being empty.
"""

from __future__ import annotations

from typing import Callable, Optional, Tuple

from pypdf.generic import DictionaryObject, PdfObject, StreamObject

from .types import ObjectId

ObjectFilter = Callable[[ObjectId, PdfObject], Optional[Tuple[ObjectId, PdfObject]]]

IGNORED_TYPES = frozenset(
    {
        "/Length",
        "/BBox",
        "/FormType",
        "/Matrix",
        "/Type",
        "/XObject",
        "/Subtype",
        "/Filter",
        "/ColorSpace",
        "/Width",
        "/Height",
        "/BitsPerComponent",
        "/Length1",
        "/Length2",
        "/Length3",
        "/PTEX.FileName",
        "/PTEX.PageNumber",
        "/PTEX.InfoDict",
        "/FontDescriptor",
        "/ExtGState",
        "/MediaBox",
        "/Annot",
    }
)

STRIPPED_KEYS = frozenset(
    {
        "/Producer",
        "/ModDate",
        "/Creator",
        "/ProcSet",
        "/Procset",
        "/XObject",
        "/MediaBox",
        "/Annots",
    }
)


def type_name(obj: PdfObject) -> Optional[str]:
    """Return the ``/Type`` token of a dictionary or stream, if it has one."""
    if not isinstance(obj, DictionaryObject):
        return None
    value = obj.get("/Type")
    return str(value) if value is not None else None


def strip_keys(obj: DictionaryObject) -> int:
    """Remove every key of :data:`STRIPPED_KEYS` from ``obj`` and return how many went."""
    present = [key for key in STRIPPED_KEYS if key in obj]
    for key in present:
        del obj[key]
    return len(present)


def filter_object(
    object_id: ObjectId, obj: PdfObject
) -> Optional[Tuple[ObjectId, PdfObject]]:
    """Decide whether ``obj`` enters the object graph.

    Returns ``None`` to drop the object, otherwise the id and the object
    (possibly with keys stripped in place).
    """
    if type_name(obj) in IGNORED_TYPES:
        return None

    if isinstance(obj, DictionaryObject):
        strip_keys(obj)
        # pypdf removes /Length from parsed streams, so a stream dictionary may be empty
        if len(obj) == 0 and not isinstance(obj, StreamObject):
            return None

    return object_id, obj


__all__ = [
    "IGNORED_TYPES",
    "STRIPPED_KEYS",
    "ObjectFilter",
    "filter_object",
    "strip_keys",
    "type_name",
]
