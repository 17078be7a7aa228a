"""In-memory document container backed by :mod:`pypdf`.

A :class:`DocumentContainer` owns one :class:`pypdf.PdfWriter`. Opening bytes
clones the parsed document into the writer, so every container is editable
and pages copied between containers are duplicated into the destination
rather than shared with the source.
"""

from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from typing import TYPE_CHECKING, Iterable, Sequence

from pypdf import PageObject, PdfReader, PdfWriter

from ..exceptions import DocMorphError, PackagingError, ParseError, RenderError, ValidationError
from .model import DocumentInfo, DocumentMetadata, PageInfo
from .utils import get_logger

if TYPE_CHECKING:  # pragma: no cover
    from ..adapters.base import TextDrawer

LOGGER = get_logger("docmorph.container")

METADATA_KEYS: dict[str, str] = {
    "title": "/Title",
    "subject": "/Subject",
    "keywords": "/Keywords",
    "producer": "/Producer",
    "creator": "/Creator",
}


@dataclass(slots=True)
class Page:
    """Snapshot of one page: geometry, normalised rotation and content handle."""

    index: int
    width: float
    height: float
    rotation: int
    handle: PageObject

    @property
    def origin(self) -> tuple[float, float]:
        box = self.handle.mediabox
        return float(box.left), float(box.bottom)

    def info(self) -> PageInfo:
        return PageInfo(self.index, self.width, self.height, self.rotation)


def _normalise_rotation(value: object) -> int:
    try:
        return int(value) % 360  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return 0


class DocumentContainer:
    """Editable, page-structured view over a single PDF document."""

    def __init__(self, writer: PdfWriter | None = None, *, encrypted: bool = False) -> None:
        self._writer = writer if writer is not None else PdfWriter()
        self.encrypted = encrypted

    @classmethod
    def create(cls) -> "DocumentContainer":
        return cls()

    @classmethod
    def open(cls, data: bytes, *, position: int | None = None) -> "DocumentContainer":
        """Parse *data* into a container, raising :class:`ParseError` on failure."""

        if not data:
            raise ParseError("Document is empty", position=position)
        try:
            reader = PdfReader(BytesIO(data))
            encrypted = bool(reader.is_encrypted)
            if encrypted and not reader.decrypt(""):
                raise ParseError("Document is encrypted and requires a password", position=position)
            writer = PdfWriter(clone_from=reader)
            LOGGER.debug("Opened document with %d page(s)", len(writer.pages))
        except ParseError:
            raise
        except Exception as exc:  # pypdf exceptions vary
            raise ParseError(f"Unable to parse document: {exc}", position=position) from exc
        return cls(writer, encrypted=encrypted)

    # -- pages -----------------------------------------------------------------

    @property
    def page_count(self) -> int:
        return len(self._writer.pages)

    @property
    def pages(self) -> list[Page]:
        return [self.page(index) for index in range(self.page_count)]

    def page(self, index: int) -> Page:
        if not 0 <= index < self.page_count:
            raise ParseError(f"Page index {index} is outside the document (0..{self.page_count - 1})")
        handle = self._writer.pages[index]
        box = handle.mediabox
        return Page(
            index=index,
            width=float(box.width),
            height=float(box.height),
            rotation=_normalise_rotation(handle.rotation),
            handle=handle,
        )

    def copy_pages(self, source: "DocumentContainer", indices: Iterable[int] | None = None) -> list[Page]:
        """Append copies of *source* pages (all pages by default) in the given order."""

        selected = range(source.page_count) if indices is None else list(indices)
        copied: list[Page] = []
        for index in selected:
            handle = source.page(index).handle
            self._writer.add_page(handle)
            copied.append(self.page(self.page_count - 1))
        return copied

    def set_rotation(self, index: int, degrees: int) -> None:
        if degrees % 90:
            raise ValidationError(f"Page rotation must be a multiple of 90 degrees, got {degrees}")
        self.page(index).handle.rotation = degrees % 360

    def draw_text(
        self,
        index: int,
        text: str,
        x: float,
        y: float,
        *,
        size: float,
        rotation: float,
        opacity: float,
        color: tuple[float, float, float],
        drawer: "TextDrawer | None" = None,
    ) -> None:
        """Draw *text* on page *index* with its baseline origin at ``(x, y)``."""

        if drawer is None:
            from ..adapters.drawing import ReportlabTextDrawer

            drawer = ReportlabTextDrawer()
        try:
            drawer.draw_text(self.page(index), text, x, y, size, rotation, opacity, color)
        except DocMorphError:
            raise
        except Exception as exc:  # drawer backends vary
            raise RenderError(f"Failed to draw text on page {index + 1}: {exc}") from exc

    def add_outline_item(self, title: str, index: int) -> None:
        self._writer.add_outline_item(title, index)

    def compress_content_streams(self, level: int) -> None:
        for handle in self._writer.pages:
            handle.compress_content_streams(level=level)

    # -- metadata --------------------------------------------------------------

    @property
    def metadata(self) -> DocumentMetadata:
        info = self._writer.metadata or {}
        values = {}
        for field_name, key in METADATA_KEYS.items():
            value = info.get(key)
            values[field_name] = str(value) if value is not None else None
        return DocumentMetadata(**values)

    def set_metadata(self, **fields: str | None) -> None:
        unknown = set(fields) - set(METADATA_KEYS)
        if unknown:
            raise ValidationError(f"Unknown metadata field(s): {', '.join(sorted(unknown))}")
        current = dict(self._writer.metadata or {})
        for field_name, value in fields.items():
            key = METADATA_KEYS[field_name]
            if value is None:
                current.pop(key, None)
            else:
                current[key] = value
        self._writer.metadata = current or None

    def strip_metadata(self, fields: Sequence[str] = tuple(METADATA_KEYS)) -> None:
        self.set_metadata(**{field_name: None for field_name in fields})

    # -- output ----------------------------------------------------------------

    def encrypt(self, password: str, *, owner_password: str | None = None) -> None:
        try:
            self._writer.encrypt(user_password=password, owner_password=owner_password or password)
        except Exception as exc:  # encryption errors vary
            raise PackagingError(f"Failed to encrypt document: {exc}") from exc

    def save(self, *, deduplicate: bool = False) -> bytes:
        """Serialise the container, optionally merging identical objects first."""

        buffer = BytesIO()
        try:
            if deduplicate:
                self._writer.compress_identical_objects()
            self._writer.write(buffer)
        except Exception as exc:  # IO and serialisation errors vary
            LOGGER.error("Failed to serialise document: %s", exc)
            raise PackagingError(f"Failed to serialise document: {exc}") from exc
        return buffer.getvalue()

    def describe(self) -> DocumentInfo:
        return DocumentInfo(
            page_count=self.page_count,
            pages=[page.info() for page in self.pages],
            metadata=self.metadata,
            encrypted=self.encrypted,
        )


__all__ = ["DocumentContainer", "Page", "METADATA_KEYS"]
