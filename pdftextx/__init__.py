"""
pdftextx - Fast plain-text extraction from PDF files.

The document is loaded through an object filter that discards fonts,
images, annotations and metadata before they reach the object graph, then
the text of every page is extracted in parallel and written in page order.

Quick Start:
    >>> from pdftextx import extract_pdf_text
    >>> report = extract_pdf_text('input.pdf', 'output.txt')
    >>> report.errors
    []

Main Classes:
    - PageExtractor: Parallel per-page text extraction
    - PypdfBackend: Filtered loading and page extraction with pypdf

Data Classes:
    - ExtractionReport: Page texts in page order plus per-page failures
    - ExtractionOptions: Options for a conversion run

For CLI usage, use the 'pdftextx' command after installation.
"""

__version__ = "1.0.0"

# Core classes
from pdftextx.backends import ObjectGraph, PDFBackend, PypdfBackend
from pdftextx.extractor import PageExtractor, extract_all, normalize_page_text
from pdftextx.filters import IGNORED_TYPES, STRIPPED_KEYS, filter_object

# Conversion entry points
from pdftextx.converter import ExtractionOptions, extract_pdf_text, load_pdf, render_text

# Data types
from pdftextx.types import ExtractionReport, FilterStats, PageFailure, PageResult

# Exceptions
from pdftextx.exceptions import (
    PDFTextException,
    InvalidPDFError,
    EncryptedPDFError,
    PageEnumerationError,
    PageExtractionError,
    OutputWriteError,
)

__all__ = [
    # Main classes
    "PageExtractor",
    "PypdfBackend",
    "PDFBackend",
    "ObjectGraph",
    # Functions
    "extract_pdf_text",
    "load_pdf",
    "render_text",
    "extract_all",
    "normalize_page_text",
    "filter_object",
    "IGNORED_TYPES",
    "STRIPPED_KEYS",
    # Data types
    "ExtractionOptions",
    "ExtractionReport",
    "FilterStats",
    "PageFailure",
    "PageResult",
    # Exceptions
    "PDFTextException",
    "InvalidPDFError",
    "EncryptedPDFError",
    "PageEnumerationError",
    "PageExtractionError",
    "OutputWriteError",
    # Version info
    "__version__",
]
