from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union
import sys

import pytest
from pypdf import PdfWriter
from pypdf.generic import (
    ArrayObject,
    DecodedStreamObject,
    DictionaryObject,
    NameObject,
    NumberObject,
    TextStringObject,
)

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdftextx.backends import ObjectGraph  # noqa: E402


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def _content_stream(lines: Sequence[str]) -> bytes:
    operations = ["BT", "/F1 12 Tf", "14 TL", "72 720 Td"]
    for index, line in enumerate(lines):
        if index:
            operations.append("T*")
        operations.append(f"({_escape(line)}) Tj")
    operations.append("ET")
    return "\n".join(operations).encode("latin-1")


def build_text_pdf(
    path: Path,
    pages: Iterable[Sequence[str]],
    *,
    with_image: bool = False,
    with_font_descriptor: bool = False,
    with_annotation: bool = False,
    metadata: Optional[Dict[str, str]] = None,
) -> Path:
    """Write a PDF whose pages draw ``pages`` (one list of lines per page) in Helvetica."""
    writer = PdfWriter()

    font = DictionaryObject(
        {
            NameObject("/Type"): NameObject("/Font"),
            NameObject("/Subtype"): NameObject("/Type1"),
            NameObject("/BaseFont"): NameObject("/Helvetica"),
            NameObject("/Encoding"): NameObject("/WinAnsiEncoding"),
        }
    )
    if with_font_descriptor:
        descriptor = DictionaryObject(
            {
                NameObject("/Type"): NameObject("/FontDescriptor"),
                NameObject("/FontName"): NameObject("/Helvetica"),
                NameObject("/Flags"): NumberObject(32),
                NameObject("/ItalicAngle"): NumberObject(0),
                NameObject("/Ascent"): NumberObject(718),
                NameObject("/Descent"): NumberObject(-207),
                NameObject("/CapHeight"): NumberObject(718),
                NameObject("/StemV"): NumberObject(88),
                NameObject("/FontBBox"): ArrayObject(
                    [NumberObject(-166), NumberObject(-225), NumberObject(1000), NumberObject(931)]
                ),
            }
        )
        font[NameObject("/FontDescriptor")] = writer._add_object(descriptor)
    font_ref = writer._add_object(font)

    image_ref = None
    if with_image:
        image = DecodedStreamObject()
        image.set_data(b"\x00\x00\x00")
        image.update(
            {
                NameObject("/Type"): NameObject("/XObject"),
                NameObject("/Subtype"): NameObject("/Image"),
                NameObject("/Width"): NumberObject(1),
                NameObject("/Height"): NumberObject(1),
                NameObject("/ColorSpace"): NameObject("/DeviceRGB"),
                NameObject("/BitsPerComponent"): NumberObject(8),
            }
        )
        image_ref = writer._add_object(image)

    for lines in pages:
        page = writer.add_blank_page(width=612, height=792)
        resources = DictionaryObject(
            {
                NameObject("/Font"): DictionaryObject({NameObject("/F1"): font_ref}),
                NameObject("/ProcSet"): ArrayObject([NameObject("/PDF"), NameObject("/Text")]),
            }
        )
        if image_ref is not None:
            resources[NameObject("/XObject")] = DictionaryObject({NameObject("/Im1"): image_ref})
        page[NameObject("/Resources")] = resources

        content = DecodedStreamObject()
        content.set_data(_content_stream(lines))
        page[NameObject("/Contents")] = writer._add_object(content)

        if with_annotation:
            annotation = DictionaryObject(
                {
                    NameObject("/Type"): NameObject("/Annot"),
                    NameObject("/Subtype"): NameObject("/Text"),
                    NameObject("/Rect"): ArrayObject(
                        [NumberObject(0), NumberObject(0), NumberObject(20), NumberObject(20)]
                    ),
                    NameObject("/Contents"): TextStringObject("sticky note"),
                }
            )
            page[NameObject("/Annots")] = ArrayObject([writer._add_object(annotation)])

    if metadata:
        writer.add_metadata(metadata)

    with path.open("wb") as handle:
        writer.write(handle)
    return path


@pytest.fixture()
def text_pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(filename: str, pages: Iterable[Sequence[str]], **kwargs) -> Path:
        return build_text_pdf(tmp_path / filename, pages, **kwargs)

    return _create


@pytest.fixture()
def sample_pdf(text_pdf_factory: Callable[..., Path]) -> Path:
    return text_pdf_factory(
        "sample.pdf",
        [["Hello", "World"], ["Foo"]],
        with_image=True,
        metadata={"/Title": "Sample", "/Creator": "pdftextx-tests"},
    )


@pytest.fixture()
def empty_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "empty.pdf"
    writer = PdfWriter()
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


class FakeBackend:
    """In-memory backend returning canned page texts or raising canned errors."""

    def __init__(
        self,
        texts: Dict[int, Union[str, Exception]],
        order: Optional[List[int]] = None,
        enumeration_error: Optional[Exception] = None,
    ) -> None:
        self.texts = texts
        self.order = order if order is not None else sorted(texts)
        self.enumeration_error = enumeration_error
        self.calls: List[List[int]] = []

    def load(self, pdf_path, object_filter, password=None) -> ObjectGraph:
        return ObjectGraph(source=str(pdf_path), handle=self)

    def get_pages(self, graph: ObjectGraph):
        if self.enumeration_error is not None:
            raise self.enumeration_error
        graph.pages = [(number, (number * 10, 0)) for number in self.order]
        return graph.pages

    def extract_text(self, graph: ObjectGraph, page_numbers: Sequence[int]) -> str:
        self.calls.append(list(page_numbers))
        value = self.texts[page_numbers[0]]
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture()
def fake_backend() -> Callable[..., FakeBackend]:
    return FakeBackend
