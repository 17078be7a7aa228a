"""Merge utilities exposed through the DocMorph tools namespace."""

from __future__ import annotations

from .merge import MergeTool, merge_documents

__all__ = ["MergeTool", "merge_documents"]
