from __future__ import annotations

from io import BytesIO

import pytest
from pypdf import PdfWriter

from docmorph.core.container import DocumentContainer
from docmorph.exceptions import ParseError, ValidationError

from ..helpers import read_pdf


def _encrypted_pdf(password: str) -> bytes:
    writer = PdfWriter()
    writer.add_blank_page(width=100, height=100)
    writer.encrypt(user_password=password, owner_password=password)
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def test_open_reports_page_geometry(pdf_factory) -> None:
    container = DocumentContainer.open(pdf_factory(2, width=300, height=400))
    assert container.page_count == 2
    page = container.page(1)
    assert (page.index, page.width, page.height, page.rotation) == (1, 300, 400, 0)


@pytest.mark.parametrize("data", [b"", b"not a pdf at all"])
def test_open_rejects_malformed_input(data: bytes) -> None:
    with pytest.raises(ParseError):
        DocumentContainer.open(data)


def test_parse_error_names_input_position() -> None:
    with pytest.raises(ParseError) as excinfo:
        DocumentContainer.open(b"garbage", position=2)
    assert excinfo.value.position == 2
    assert str(excinfo.value).startswith("Input #3:")


def test_open_rejects_password_protected_input() -> None:
    with pytest.raises(ParseError, match="password"):
        DocumentContainer.open(_encrypted_pdf("secret"))


def test_open_accepts_empty_user_password() -> None:
    container = DocumentContainer.open(_encrypted_pdf(""))
    assert container.encrypted is True
    assert container.page_count == 1


def test_page_index_out_of_range(pdf_factory) -> None:
    container = DocumentContainer.open(pdf_factory(1))
    with pytest.raises(ParseError):
        container.page(3)


def test_copied_pages_do_not_alias_source(pdf_factory) -> None:
    source = DocumentContainer.open(pdf_factory(2))
    target = DocumentContainer.create()
    target.copy_pages(source, [1])

    target.set_rotation(0, 90)

    assert target.page(0).rotation == 90
    assert [page.rotation for page in source.pages] == [0, 0]


@pytest.mark.parametrize("degrees, expected", [(90, 90), (450, 90), (-90, 270), (360, 0)])
def test_set_rotation_normalises(pdf_factory, degrees: int, expected: int) -> None:
    container = DocumentContainer.open(pdf_factory(1))
    container.set_rotation(0, degrees)
    assert container.page(0).rotation == expected
    assert read_pdf(container.save()).pages[0].rotation == expected


def test_set_rotation_rejects_partial_turns(pdf_factory) -> None:
    container = DocumentContainer.open(pdf_factory(1))
    with pytest.raises(ValidationError):
        container.set_rotation(0, 45)


def test_metadata_roundtrip_and_strip(sample_pdf_bytes: bytes) -> None:
    container = DocumentContainer.open(sample_pdf_bytes)
    assert container.metadata.title == "Sample"

    container.set_metadata(title="Renamed")
    assert container.metadata.title == "Renamed"

    container.strip_metadata()
    stripped = read_pdf(container.save())
    info = stripped.metadata or {}
    for key in ("/Title", "/Subject", "/Keywords", "/Producer", "/Creator"):
        assert key not in info


def test_set_metadata_rejects_unknown_fields(pdf_factory) -> None:
    container = DocumentContainer.open(pdf_factory(1))
    with pytest.raises(ValidationError):
        container.set_metadata(author="someone")


def test_describe(sample_pdf_bytes: bytes) -> None:
    info = DocumentContainer.open(sample_pdf_bytes).describe()
    assert info.page_count == 5
    assert len(info.pages) == 5
    assert info.metadata.creator == "pytest"
    assert info.encrypted is False


def test_save_with_deduplication_keeps_every_page(text_pdf_factory) -> None:
    container = DocumentContainer.open(text_pdf_factory(2))
    container.copy_pages(DocumentContainer.open(text_pdf_factory(2)))

    reader = read_pdf(container.save(deduplicate=True))
    assert [page.extract_text().strip() for page in reader.pages] == ["Page 1", "Page 2", "Page 1", "Page 2"]
