from __future__ import annotations

import asyncio

import pytest

from docmorph.exceptions import ParseError, ValidationError
from docmorph.tools.merger import merge_documents

from ..helpers import assert_progress_well_formed, read_pdf


def test_merging_two_single_page_documents(pdf_factory, events) -> None:
    result = asyncio.run(merge_documents([pdf_factory(1), pdf_factory(1)], on_progress=events.append))

    assert len(read_pdf(result).pages) == 2
    assert_progress_well_formed(events)
    assert events[-2].percent == 90
    assert events[-2].status == "Finalizing merge..."


def test_merge_preserves_input_and_page_order(pdf_factory) -> None:
    inputs = [
        pdf_factory(2, width=100, height=100),
        pdf_factory(1, width=200, height=200),
        pdf_factory(3, width=300, height=300),
    ]
    reader = read_pdf(asyncio.run(merge_documents(inputs)))

    widths = [float(page.mediabox.width) for page in reader.pages]
    assert widths == [100, 100, 200, 300, 300, 300]


def test_merge_emits_one_event_per_input(pdf_factory, events) -> None:
    asyncio.run(merge_documents([pdf_factory(1)] * 4, on_progress=events.append))
    per_input = [event for event in events if event.status.startswith("Merging file")]
    assert len(per_input) == 4
    assert all(10 <= event.percent <= 80 for event in per_input)


def test_merge_fails_with_position_of_bad_input(pdf_factory, events) -> None:
    with pytest.raises(ParseError) as excinfo:
        asyncio.run(merge_documents([pdf_factory(1), b"broken"], on_progress=events.append))

    assert excinfo.value.position == 1
    assert events[-1].error is not None
    assert "Input #2" in events[-1].error


def test_merge_requires_inputs() -> None:
    with pytest.raises(ValidationError):
        asyncio.run(merge_documents([]))


def test_merge_adds_bookmarks(pdf_factory) -> None:
    result = asyncio.run(
        merge_documents([pdf_factory(2), pdf_factory(1)], bookmarks=["intro", None])
    )
    reader = read_pdf(result)
    titles = [item.title for item in reader.outline]
    assert titles == ["intro", "Document 2"]
    assert reader.get_destination_page_number(reader.outline[1]) == 2


def _page_texts(data: bytes) -> list[str]:
    return [page.extract_text() for page in read_pdf(data).pages]


def test_merged_pages_carry_their_source_content(text_pdf_factory) -> None:
    first, second = text_pdf_factory(3), text_pdf_factory(2)
    merged = asyncio.run(merge_documents([first, second]))

    assert _page_texts(merged) == _page_texts(first) + _page_texts(second)
    assert [text.strip() for text in _page_texts(merged)] == ["Page 1", "Page 2", "Page 3", "Page 1", "Page 2"]
