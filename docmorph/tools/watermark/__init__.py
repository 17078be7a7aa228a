"""Watermark utilities exposed through the DocMorph tools namespace."""

from __future__ import annotations

from .watermark import WatermarkTool, watermark_document

__all__ = ["WatermarkTool", "watermark_document"]
