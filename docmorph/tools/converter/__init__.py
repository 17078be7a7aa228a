"""Format converters exposed through the DocMorph tools namespace."""

from __future__ import annotations

from .images import ImageExportTool, export_images
from .office import OfficeExportTool, export_office
from .web_capture import CaptureTool, capture_markup, capture_url

__all__ = [
    "CaptureTool",
    "ImageExportTool",
    "OfficeExportTool",
    "capture_markup",
    "capture_url",
    "export_images",
    "export_office",
]
