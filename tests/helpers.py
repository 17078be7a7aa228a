from __future__ import annotations

from io import BytesIO

from pypdf import PdfReader

from docmorph.core.progress import ProgressEvent


def assert_progress_well_formed(events: list[ProgressEvent]) -> None:
    percents = [event.percent for event in events]
    assert percents, "no progress was reported"
    assert all(0 <= value <= 100 for value in percents)
    assert percents == sorted(percents)
    assert percents[-1] == 100
    assert all(event.error is None for event in events)


def read_pdf(data: bytes) -> PdfReader:
    return PdfReader(BytesIO(data))
