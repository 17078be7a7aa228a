from __future__ import annotations

import asyncio
from io import BytesIO

import pytest
from docx import Document
from openpyxl import load_workbook
from pptx import Presentation

from docmorph.core.model import TextRun
from docmorph.exceptions import ParseError, ValidationError
from docmorph.tools.converter import export_office

from ..helpers import assert_progress_well_formed


def test_export_docx_keeps_page_text_in_order(text_pdf_factory, events) -> None:
    result = asyncio.run(export_office(text_pdf_factory(3), "docx", on_progress=events.append))

    document = Document(BytesIO(result))
    texts = [paragraph.text for paragraph in document.paragraphs if paragraph.text]
    assert texts == ["Page 1", "Page 2", "Page 3"]
    page_breaks = sum('w:type="page"' in paragraph._p.xml for paragraph in document.paragraphs)
    assert page_breaks == 2
    assert_progress_well_formed(events)


def test_export_xlsx_writes_one_row_per_page(text_pdf_factory) -> None:
    result = asyncio.run(export_office(text_pdf_factory(2), "xlsx"))

    sheet = load_workbook(BytesIO(result)).active
    rows = list(sheet.iter_rows(values_only=True))
    assert rows == [("Page", "Text"), (1, "Page 1"), (2, "Page 2")]


def test_export_pptx_writes_one_slide_per_page(text_pdf_factory) -> None:
    result = asyncio.run(export_office(text_pdf_factory(2), "pptx"))

    presentation = Presentation(BytesIO(result))
    slide_texts = [
        " ".join(shape.text_frame.text for shape in slide.shapes if shape.has_text_frame)
        for slide in presentation.slides
    ]
    assert slide_texts == ["Page 1", "Page 2"]


def test_pages_without_text_become_empty_paragraphs(pdf_factory) -> None:
    result = asyncio.run(export_office(pdf_factory(2), "docx"))
    document = Document(BytesIO(result))
    assert all(not paragraph.text for paragraph in document.paragraphs)
    assert len(document.paragraphs) >= 2


def test_export_uses_injected_extractor(pdf_factory) -> None:
    class StubExtractor:
        def extract_text_runs(self, page):
            return [
                TextRun("Hello", 10, 100),
                TextRun(" world", 60, 100),
                TextRun("second line", 10, 80),
            ]

    result = asyncio.run(export_office(pdf_factory(1), "xlsx", extractor=StubExtractor()))
    sheet = load_workbook(BytesIO(result)).active
    assert sheet.cell(row=2, column=2).value == "Hello world\nsecond line"


def test_export_rejects_unknown_format(pdf_factory) -> None:
    with pytest.raises(ValidationError):
        asyncio.run(export_office(pdf_factory(1), "odt"))


def test_export_rejects_unreadable_input() -> None:
    with pytest.raises(ParseError):
        asyncio.run(export_office(b"garbage", "docx"))


def test_extractor_crash_is_reported_as_parse_error(pdf_factory, events) -> None:
    class CrashingExtractor:
        def extract_text_runs(self, page) -> list[TextRun]:
            raise KeyError("/Font")

    with pytest.raises(ParseError, match="page 1") as excinfo:
        asyncio.run(export_office(pdf_factory(2), "docx", extractor=CrashingExtractor(), on_progress=events.append))

    assert isinstance(excinfo.value.__cause__, KeyError)
    assert events[-1].error is not None
