"""Rotation utilities exposed through the DocMorph tools namespace."""

from __future__ import annotations

from .rotate import RotateTool, rotate_document, select_pages

__all__ = ["RotateTool", "rotate_document", "select_pages"]
