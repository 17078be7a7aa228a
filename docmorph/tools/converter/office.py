"""Lossy text export to DOCX, XLSX and PPTX containers.

Only the linear reading order of each page's text survives. Layout,
tables and images are not reconstructed.
"""

from __future__ import annotations

from io import BytesIO
from typing import Sequence

from docx import Document
from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from pptx import Presentation
from pptx.util import Inches

from ...adapters.base import TextExtractor
from ...adapters.text import PypdfTextExtractor, join_runs
from ...core.container import DocumentContainer
from ...core.model import DocumentMetadata, OfficeFormat
from ...core.progress import ProgressCallback, ProgressReporter
from ...core.utils import checkpoint, get_logger
from ...exceptions import DocMorphError, PackagingError, ParseError, ValidationError
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("docmorph.tools.office")

# Excel rejects longer cell values.
MAX_CELL_LENGTH = 32767


def _clean(text: str) -> str:
    return ILLEGAL_CHARACTERS_RE.sub("", text)


def build_docx(pages: Sequence[str], metadata: DocumentMetadata | None = None) -> bytes:
    document = Document()
    for index, text in enumerate(pages):
        if index:
            document.add_page_break()
        lines = [line for line in _clean(text).splitlines() if line.strip()]
        if not lines:
            document.add_paragraph("")
        for line in lines:
            document.add_paragraph(line)
    if metadata is not None:
        properties = document.core_properties
        properties.title = metadata.title or ""
        properties.subject = metadata.subject or ""
        properties.keywords = metadata.keywords or ""
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def build_xlsx(pages: Sequence[str], metadata: DocumentMetadata | None = None) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Pages"
    sheet.append(["Page", "Text"])
    for number, text in enumerate(pages, start=1):
        sheet.append([number, _clean(text)[:MAX_CELL_LENGTH]])
    sheet.column_dimensions["B"].width = 100
    if metadata is not None and metadata.title:
        workbook.properties.title = metadata.title
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def build_pptx(pages: Sequence[str], metadata: DocumentMetadata | None = None) -> bytes:
    presentation = Presentation()
    blank_layout = presentation.slide_layouts[6]
    margin = Inches(0.5)
    width = presentation.slide_width - 2 * margin
    height = presentation.slide_height - 2 * margin
    for text in pages:
        slide = presentation.slides.add_slide(blank_layout)
        textbox = slide.shapes.add_textbox(margin, margin, width, height)
        frame = textbox.text_frame
        frame.word_wrap = True
        frame.text = _clean(text)
    if metadata is not None and metadata.title:
        presentation.core_properties.title = metadata.title
    buffer = BytesIO()
    presentation.save(buffer)
    return buffer.getvalue()


BUILDERS = {
    OfficeFormat.DOCX: build_docx,
    OfficeFormat.XLSX: build_xlsx,
    OfficeFormat.PPTX: build_pptx,
}


async def export_office(
    data: bytes,
    fmt: OfficeFormat | str = OfficeFormat.DOCX,
    *,
    extractor: TextExtractor | None = None,
    on_progress: ProgressCallback | None = None,
) -> bytes:
    """Extract each page's text and pack it into an office container.

    A page without text yields an empty paragraph, row or slide.
    """

    reporter = ProgressReporter(on_progress, operation="export-office")
    with reporter.track_failures():
        try:
            fmt = OfficeFormat(fmt)
        except ValueError as exc:
            raise ValidationError(f"Unsupported office format: {fmt!r}") from exc
        extractor = extractor or PypdfTextExtractor()

        reporter.emit(10, "Loading document...")
        await checkpoint()
        container = DocumentContainer.open(data)
        total = container.page_count

        pages: list[str] = []
        for index in range(total):
            try:
                runs = extractor.extract_text_runs(container.page(index))
            except DocMorphError:
                raise
            except Exception as exc:  # extractor backends vary
                raise ParseError(f"Failed to extract text from page {index + 1}: {exc}") from exc
            pages.append(join_runs(runs))
            reporter.step(index + 1, total, 20, 80, f"Extracted text from page {index + 1} of {total}")
            await checkpoint()

        reporter.emit(85, f"Building {fmt.value.upper()} file...")
        try:
            result = BUILDERS[fmt](pages, container.metadata)
        except Exception as exc:  # office writer errors vary
            LOGGER.error("Failed to build %s: %s", fmt.value, exc)
            raise PackagingError(f"Failed to build {fmt.value.upper()} file: {exc}") from exc
        LOGGER.info("Exported %d page(s) of text to %s", total, fmt.value)
        reporter.complete("Conversion complete")
    return result


@register_tool("to-office")
class OfficeExportTool(BaseTool):
    name = "to-office"

    async def run(self) -> bytes:
        context = self.context
        result = await export_office(
            context.source.data,
            context.config.get("format", OfficeFormat.DOCX),
            on_progress=context.on_progress,
        )
        context.resources["result"] = result
        return result


__all__ = ["export_office", "build_docx", "build_xlsx", "build_pptx", "OfficeExportTool"]
