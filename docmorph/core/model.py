"""Shared domain models used across DocMorph tools."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from ..exceptions import ValidationError

WATERMARK_MARGIN = 50.0


class CompressionLevel(str, Enum):
    """Re-serialization aggressiveness for :func:`compress_document`."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def stream_level(self) -> int:
        """zlib level applied when content streams are re-packed."""

        return {"low": 1, "medium": 6, "high": 9}[self.value]

    @property
    def deduplicate(self) -> bool:
        """Whether identical objects are merged into shared references."""

        return self is not CompressionLevel.LOW

    @classmethod
    def parse(cls, value: "CompressionLevel | str") -> "CompressionLevel":
        try:
            return cls(value)
        except ValueError as exc:
            raise ValidationError(f"Unsupported compression level: {value!r}") from exc


class SplitMode(str, Enum):
    BY_PAGE_COUNT = "byPageCount"
    BY_RANGES = "byRanges"


class ImageFormat(str, Enum):
    PNG = "png"
    JPEG = "jpg"

    @property
    def pil_format(self) -> str:
        return "PNG" if self is ImageFormat.PNG else "JPEG"


class OfficeFormat(str, Enum):
    DOCX = "docx"
    XLSX = "xlsx"
    PPTX = "pptx"


class Anchor(str, Enum):
    CENTER = "center"
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"

    def point(self, width: float, height: float) -> tuple[float, float]:
        """Return the anchor coordinates on a ``width`` x ``height`` page."""

        margin = WATERMARK_MARGIN
        if self is Anchor.TOP_LEFT:
            return margin, height - margin
        if self is Anchor.TOP_RIGHT:
            return width - margin, height - margin
        if self is Anchor.BOTTOM_LEFT:
            return margin, margin
        if self is Anchor.BOTTOM_RIGHT:
            return width - margin, margin
        return width / 2, height / 2


@dataclass(frozen=True, slots=True)
class WatermarkSpec:
    """Validated watermark options for a single invocation.

    ``rotation`` is normalised into ``[0, 360)`` and ``anchor`` accepts either
    an :class:`Anchor` or its string value.
    """

    text: str
    opacity: float = 0.5
    font_size: float = 50.0
    rotation: float = 45.0
    anchor: Anchor = Anchor.CENTER
    color: tuple[float, float, float] = (0.7, 0.7, 0.7)

    def __post_init__(self) -> None:
        if not isinstance(self.text, str) or not self.text.strip():
            raise ValidationError("Watermark text must not be empty")
        if not 0.1 <= self.opacity <= 1.0:
            raise ValidationError(f"Watermark opacity must be within [0.1, 1.0], got {self.opacity}")
        if not self.font_size > 0:
            raise ValidationError(f"Watermark font size must be positive, got {self.font_size}")
        if not math.isfinite(self.rotation):
            raise ValidationError("Watermark rotation must be a finite number")
        if any(not 0.0 <= channel <= 1.0 for channel in self.color):
            raise ValidationError("Watermark color channels must be within [0, 1]")
        try:
            anchor = Anchor(self.anchor)
        except ValueError as exc:
            raise ValidationError(f"Unknown watermark anchor: {self.anchor!r}") from exc
        object.__setattr__(self, "anchor", anchor)
        object.__setattr__(self, "rotation", float(self.rotation) % 360.0)


@dataclass(frozen=True, slots=True)
class TextRun:
    """A piece of text drawn at a position in page space."""

    text: str
    x: float
    y: float
    font_size: float = 0.0


@dataclass(slots=True)
class DocumentMetadata:
    title: str | None = None
    subject: str | None = None
    keywords: str | None = None
    producer: str | None = None
    creator: str | None = None


@dataclass(frozen=True, slots=True)
class PageInfo:
    index: int
    width: float
    height: float
    rotation: int


@dataclass(slots=True)
class DocumentInfo:
    """Summary returned by :func:`describe_document`."""

    page_count: int
    pages: list[PageInfo]
    metadata: DocumentMetadata
    encrypted: bool = False


__all__ = [
    "WATERMARK_MARGIN",
    "CompressionLevel",
    "SplitMode",
    "ImageFormat",
    "OfficeFormat",
    "Anchor",
    "WatermarkSpec",
    "TextRun",
    "DocumentMetadata",
    "PageInfo",
    "DocumentInfo",
]
