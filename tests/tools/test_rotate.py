from __future__ import annotations

import asyncio

import pytest

from docmorph.exceptions import ValidationError
from docmorph.tools.rotator import rotate_document, select_pages

from ..helpers import assert_progress_well_formed, read_pdf


def _rotations(data: bytes) -> list[int]:
    return [page.rotation % 360 for page in read_pdf(data).pages]


def test_rotate_all_pages_by_ninety(pdf_factory, events) -> None:
    result = asyncio.run(rotate_document(pdf_factory(3), 90, on_progress=events.append))
    assert _rotations(result) == [90, 90, 90]
    assert_progress_well_formed(events)


def test_rotation_accumulates_on_existing_rotation(pdf_factory) -> None:
    once = asyncio.run(rotate_document(pdf_factory(2), 270))
    twice = asyncio.run(rotate_document(once, 180))
    assert _rotations(twice) == [90, 90]


@pytest.mark.parametrize("delta", [90, -90, 180, 270, 450, -720])
def test_rotate_then_inverse_restores_rotation(pdf_factory, delta: int) -> None:
    original = asyncio.run(rotate_document(pdf_factory(2), 90, pages=[1]))
    rotated = asyncio.run(rotate_document(original, delta))
    restored = asyncio.run(rotate_document(rotated, -delta))
    assert _rotations(restored) == _rotations(original) == [0, 90]


def test_rotate_subset_ignores_out_of_range_indices(pdf_factory) -> None:
    result = asyncio.run(rotate_document(pdf_factory(3), 180, pages=[2, 7, -1]))
    assert _rotations(result) == [0, 0, 180]


@pytest.mark.parametrize("delta", [45, 1, 90.0, "90"])
def test_rotate_rejects_non_quarter_turns(pdf_factory, delta) -> None:
    with pytest.raises(ValidationError):
        asyncio.run(rotate_document(pdf_factory(1), delta))


def test_select_pages_deduplicates_and_sorts() -> None:
    assert select_pages(4, [3, 1, 3, 10]) == [1, 3]
    assert select_pages(2, None) == [0, 1]
