"""Exception hierarchy shared by every :mod:`docmorph` operation."""

from __future__ import annotations


class DocMorphError(Exception):
    """Base exception for all errors raised by :mod:`docmorph`."""


class ValidationError(DocMorphError):
    """Raised when an option value is rejected before any work starts."""


class ParseError(DocMorphError):
    """Raised when input bytes are not a well-formed document."""

    def __init__(self, message: str, *, position: int | None = None) -> None:
        self.position = position
        if position is not None:
            message = f"Input #{position + 1}: {message}"
        super().__init__(message)


class RenderError(DocMorphError):
    """Raised when rasterization or markup capture fails."""


class CaptureTimeoutError(DocMorphError, TimeoutError):
    """Raised when a bounded external wait is exceeded."""


class PackagingError(DocMorphError):
    """Raised when serialization or archive assembly fails."""


__all__ = [
    "DocMorphError",
    "ValidationError",
    "ParseError",
    "RenderError",
    "CaptureTimeoutError",
    "PackagingError",
]
