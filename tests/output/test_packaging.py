from __future__ import annotations

import zipfile
from io import BytesIO
from pathlib import Path

import pytest

from docmorph.exceptions import PackagingError
from docmorph.output.packaging import (
    DirectorySink,
    OutputFile,
    deliver,
    pack_archive,
    package_result,
    single_filename,
)


@pytest.mark.parametrize(
    "operation, filename, extension, expected",
    [
        ("compress", "annual report.pdf", "pdf", "annual_report_compressed.pdf"),
        ("rotate", "scan.pdf", "pdf", "scan_rotated.pdf"),
        ("watermark", None, "pdf", "document_watermarked.pdf"),
        ("protect", "a.pdf", "pdf", "a_protected.pdf"),
        ("merge", "first.pdf", "pdf", "merged.pdf"),
        ("to-office", "notes.pdf", "xlsx", "notes.xlsx"),
        ("capture", "page.html", "pdf", "page.pdf"),
        ("capture", None, "pdf", "webpage.pdf"),
    ],
)
def test_single_filenames(operation: str, filename: str | None, extension: str, expected: str) -> None:
    assert single_filename(operation, filename, extension=extension) == expected


def test_capture_filename_uses_hostname() -> None:
    assert single_filename("capture", url="https://docs.example.org:8443/a/b") == "docs.example.org.pdf"


def test_single_blob_is_delivered_directly() -> None:
    output = package_result(b"%PDF", "compress", filename="in.pdf")
    assert output == OutputFile(b"%PDF", "in_compressed.pdf")


def test_split_parts_are_archived_with_numbered_names() -> None:
    output = package_result([b"one", b"two", b"three"], "split", filename="book.pdf")

    assert output.filename == "book_split.zip"
    with zipfile.ZipFile(BytesIO(output.data)) as archive:
        assert archive.namelist() == ["book_part_1.pdf", "book_part_2.pdf", "book_part_3.pdf"]
        assert archive.read("book_part_2.pdf") == b"two"
        assert all(info.compress_type == zipfile.ZIP_DEFLATED for info in archive.infolist())


def test_page_images_are_archived() -> None:
    output = package_result([b"a", b"b"], "to-image", filename="x.pdf", extension="jpg")
    assert output.filename == "pdf_to_jpg.zip"
    with zipfile.ZipFile(BytesIO(output.data)) as archive:
        assert archive.namelist() == ["page_1.jpg", "page_2.jpg"]


def test_single_element_lists_are_not_archived() -> None:
    assert package_result([b"only"], "split", filename="book.pdf").filename == "book_part_1.pdf"
    assert package_result([b"img"], "to-image", filename="scan.pdf", extension="png").filename == "scan.png"


def test_empty_result_cannot_be_delivered() -> None:
    with pytest.raises(PackagingError):
        package_result([], "split")


def test_pack_archive_rejects_duplicate_names() -> None:
    with pytest.raises(PackagingError):
        pack_archive([OutputFile(b"1", "a.pdf"), OutputFile(b"2", "a.pdf")])


def test_directory_sink_writes_file(tmp_path: Path) -> None:
    sink = DirectorySink(tmp_path / "out")
    destination = deliver(b"data", sink, "rotate", filename="doc.pdf")

    assert destination == tmp_path / "out" / "doc_rotated.pdf"
    assert destination.read_bytes() == b"data"


def test_directory_sink_can_refuse_overwrite(tmp_path: Path) -> None:
    (tmp_path / "merged.pdf").write_bytes(b"old")
    with pytest.raises(PackagingError):
        deliver(b"new", DirectorySink(tmp_path, overwrite=False), "merge")
