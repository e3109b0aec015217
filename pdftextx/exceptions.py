"""
Custom exceptions for pdftextx.

This module defines all custom exceptions used throughout the library.
Fatal errors carry the process exit code the command line reports for them.
"""


class PDFTextException(Exception):
    """Base exception for all pdftextx errors."""

    exit_code = 1

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown PDF text extraction error occurred."


class InvalidPDFError(PDFTextException):
    """Raised when the source PDF cannot be read or parsed."""

    @property
    def default_message(self) -> str:
        return "Invalid or corrupted PDF file."


class EncryptedPDFError(InvalidPDFError):
    """Raised when PDF is encrypted and cannot be opened."""

    @property
    def default_message(self) -> str:
        return "PDF is encrypted and cannot be processed without a password."


class PageEnumerationError(PDFTextException):
    """Raised when the page tree of a loaded document cannot be listed."""

    @property
    def default_message(self) -> str:
        return "Unable to enumerate the pages of the PDF."


class OutputWriteError(PDFTextException):
    """Raised when the destination text file cannot be written."""

    exit_code = 3

    @property
    def default_message(self) -> str:
        return "Unable to write the extracted text."


class PageExtractionError(PDFTextException):
    """Raised by a backend when the text of a single page cannot be extracted."""

    @property
    def default_message(self) -> str:
        return "Unable to extract text from page."
