"""Backend abstractions for pdftextx."""

from .base import ObjectGraph, PDFBackend
from .pypdf_backend import PypdfBackend

__all__ = [
    "ObjectGraph",
    "PDFBackend",
    "PypdfBackend",
]
