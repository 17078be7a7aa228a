from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Callable

import pytest
from pypdf import PdfWriter
from reportlab.pdfgen import canvas

from docmorph.core.progress import ProgressEvent


def _blank_pdf(pages: int, width: float, height: float, metadata: dict[str, str] | None) -> bytes:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=width, height=height)
    if metadata:
        writer.add_metadata(metadata)
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture()
def pdf_factory() -> Callable[..., bytes]:
    def _create(
        pages: int = 1,
        *,
        width: float = 200,
        height: float = 200,
        metadata: dict[str, str] | None = None,
    ) -> bytes:
        return _blank_pdf(pages, width, height, metadata)

    return _create


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    return _blank_pdf(
        5,
        200,
        200,
        {
            "/Title": "Sample",
            "/Subject": "Testing",
            "/Keywords": "docmorph, tests",
            "/Producer": "docmorph-tests",
            "/Creator": "pytest",
        },
    )


@pytest.fixture()
def text_pdf_factory() -> Callable[[int], bytes]:
    """Build documents whose page N carries the text ``Page N``."""

    def _create(pages: int = 3) -> bytes:
        buffer = BytesIO()
        document = canvas.Canvas(buffer, pagesize=(300, 300))
        for number in range(1, pages + 1):
            document.setFont("Helvetica", 14)
            document.drawString(40, 250, f"Page {number}")
            document.showPage()
        document.save()
        return buffer.getvalue()

    return _create


@pytest.fixture()
def sample_pdf(tmp_path: Path, sample_pdf_bytes: bytes) -> Path:
    pdf_path = tmp_path / "sample report.pdf"
    pdf_path.write_bytes(sample_pdf_bytes)
    return pdf_path


@pytest.fixture()
def events() -> list[ProgressEvent]:
    return []
