"""Split utilities exposed through the DocMorph tools namespace."""

from __future__ import annotations

from .ranges import PageRange, parse_page_ranges
from .split import SplitTool, chunk_indices, split_document

__all__ = ["PageRange", "SplitTool", "chunk_indices", "parse_page_ranges", "split_document"]
