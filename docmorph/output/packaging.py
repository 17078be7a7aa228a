"""Delivery shape and filenames for operation results.

A single blob is delivered as-is. Several blobs get numbered member names
and are bundled into one deflated ZIP archive. No transformation happens
here.
"""

from __future__ import annotations

import zipfile
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Any, Protocol, Sequence
from urllib.parse import urlparse

from ..core.utils import file_stem, get_logger, resolve_path
from ..exceptions import PackagingError

LOGGER = get_logger("docmorph.output")

DEFAULT_STEM = "document"

SUFFIXES = {
    "compress": "_compressed",
    "rotate": "_rotated",
    "watermark": "_watermarked",
    "protect": "_protected",
}


@dataclass(frozen=True)
class OutputFile:
    data: bytes
    filename: str


class DownloadSink(Protocol):
    def deliver(self, output: OutputFile) -> Any:
        ...


class DirectorySink:
    """Writes delivered files into a directory, creating it when needed."""

    def __init__(self, directory: str | Path, *, overwrite: bool = True) -> None:
        self.directory = resolve_path(directory)
        self.overwrite = overwrite

    def deliver(self, output: OutputFile) -> Path:
        destination = self.directory / output.filename
        if destination.exists() and not self.overwrite:
            raise PackagingError(f"Refusing to overwrite existing file: {destination}")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            destination.write_bytes(output.data)
        except OSError as exc:
            LOGGER.error("Failed to write %s: %s", destination, exc)
            raise PackagingError(f"Failed to write {destination}: {exc}") from exc
        LOGGER.info("Wrote %s (%d bytes)", destination, len(output.data))
        return destination


def single_filename(
    operation: str,
    filename: str | None = None,
    *,
    extension: str = "pdf",
    url: str | None = None,
) -> str:
    stem = file_stem(filename)
    if operation == "merge":
        return "merged.pdf"
    if operation == "capture":
        host = urlparse(url).hostname if url else None
        return f"{host or stem or 'webpage'}.pdf"
    if operation in SUFFIXES:
        return f"{stem or DEFAULT_STEM}{SUFFIXES[operation]}.{extension}"
    return f"{stem or DEFAULT_STEM}.{extension}"


def member_filename(operation: str, number: int, filename: str | None = None, *, extension: str = "pdf") -> str:
    if operation == "to-image":
        return f"page_{number}.{extension}"
    stem = file_stem(filename) or DEFAULT_STEM
    if operation == "split":
        return f"{stem}_part_{number}.{extension}"
    return f"{stem}_{number}.{extension}"


def archive_filename(operation: str, filename: str | None = None, *, extension: str = "pdf") -> str:
    if operation == "to-image":
        return f"pdf_to_{extension}.zip"
    stem = file_stem(filename) or DEFAULT_STEM
    if operation == "split":
        return f"{stem}_split.zip"
    return f"{stem}_{operation}.zip"


def pack_archive(files: Sequence[OutputFile]) -> bytes:
    """Bundle *files* into a ZIP archive, preserving their order."""

    names = [item.filename for item in files]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise PackagingError(f"Duplicate archive member name(s): {', '.join(duplicates)}")
    buffer = BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for item in files:
                archive.writestr(item.filename, item.data)
    except (zipfile.BadZipFile, OSError, ValueError) as exc:
        raise PackagingError(f"Failed to build archive: {exc}") from exc
    return buffer.getvalue()


def package_result(
    result: bytes | Sequence[bytes],
    operation: str,
    *,
    filename: str | None = None,
    extension: str = "pdf",
    url: str | None = None,
) -> OutputFile:
    """Decide between single-file and archive delivery for *result*."""

    if isinstance(result, (bytes, bytearray)):
        return OutputFile(bytes(result), single_filename(operation, filename, extension=extension, url=url))

    blobs = list(result)
    if not blobs:
        raise PackagingError(f"{operation} produced no output files")
    if len(blobs) == 1:
        if operation == "to-image":
            name = single_filename(operation, filename, extension=extension)
        else:
            name = member_filename(operation, 1, filename, extension=extension)
        return OutputFile(blobs[0], name)

    members = [
        OutputFile(blob, member_filename(operation, number, filename, extension=extension))
        for number, blob in enumerate(blobs, start=1)
    ]
    LOGGER.debug("Packing %d file(s) into an archive", len(members))
    return OutputFile(pack_archive(members), archive_filename(operation, filename, extension=extension))


def deliver(
    result: bytes | Sequence[bytes],
    sink: DownloadSink,
    operation: str,
    *,
    filename: str | None = None,
    extension: str = "pdf",
    url: str | None = None,
) -> Any:
    output = package_result(result, operation, filename=filename, extension=extension, url=url)
    return sink.deliver(output)


__all__ = [
    "OutputFile",
    "DownloadSink",
    "DirectorySink",
    "single_filename",
    "member_filename",
    "archive_filename",
    "pack_archive",
    "package_result",
    "deliver",
]
