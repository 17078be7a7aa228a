from __future__ import annotations

import pytest

from docmorph.adapters.text import PypdfTextExtractor, join_runs
from docmorph.core.container import DocumentContainer
from docmorph.core.model import TextRun


def test_join_runs_breaks_lines_on_baseline_change() -> None:
    runs = [
        TextRun("Invoice", 10, 700),
        TextRun("  #42", 80, 700.5),
        TextRun("Total:", 10, 680),
        TextRun("  12.00 ", 60, 680),
    ]
    assert join_runs(runs) == "Invoice #42\nTotal: 12.00"


def test_join_runs_of_nothing_is_empty() -> None:
    assert join_runs([]) == ""


def test_extractor_reads_positioned_runs(text_pdf_factory) -> None:
    container = DocumentContainer.open(text_pdf_factory(2))
    runs = PypdfTextExtractor().extract_text_runs(container.page(1))

    assert join_runs(runs) == "Page 2"
    assert runs[0].x == pytest.approx(40, abs=1)
    assert runs[0].y == pytest.approx(250, abs=1)


def test_extractor_on_blank_page(pdf_factory) -> None:
    container = DocumentContainer.open(pdf_factory(1))
    assert PypdfTextExtractor().extract_text_runs(container.page(0)) == []
