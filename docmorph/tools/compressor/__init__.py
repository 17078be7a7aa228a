"""Compression utilities exposed through the DocMorph tools namespace."""

from __future__ import annotations

from .compress import CompressTool, compress_document

__all__ = ["CompressTool", "compress_document"]
