"""Client-side document transformation engine.

Every operation takes document bytes and options, reports progress through
an optional callback and returns new bytes. Nothing is kept between calls.
"""

from __future__ import annotations

from .config import EngineSettings, RasterSettings
from .core.model import (
    Anchor,
    CompressionLevel,
    DocumentInfo,
    DocumentMetadata,
    ImageFormat,
    OfficeFormat,
    PageInfo,
    SplitMode,
    WatermarkSpec,
)
from .core.progress import ProgressEvent, ProgressReporter
from .exceptions import (
    CaptureTimeoutError,
    DocMorphError,
    PackagingError,
    ParseError,
    RenderError,
    ValidationError,
)
from .output.packaging import DirectorySink, OutputFile, deliver, pack_archive, package_result
from .tools import load_builtin_plugins
from .tools.common.interfaces import BaseTool, Source, ToolContext
from .tools.common.pipeline import ToolRegistry, register_tool, registry
from .tools.compressor import compress_document
from .tools.converter import capture_markup, capture_url, export_images, export_office
from .tools.encryptor import protect_document
from .tools.inspector import describe_document
from .tools.merger import merge_documents
from .tools.rotator import rotate_document
from .tools.splitter import split_document
from .tools.watermark import watermark_document

__version__ = "0.3.0"

load_builtin_plugins()

__all__ = [
    "Anchor",
    "BaseTool",
    "CaptureTimeoutError",
    "CompressionLevel",
    "DirectorySink",
    "DocMorphError",
    "DocumentInfo",
    "DocumentMetadata",
    "EngineSettings",
    "ImageFormat",
    "OfficeFormat",
    "OutputFile",
    "PackagingError",
    "PageInfo",
    "ParseError",
    "ProgressEvent",
    "ProgressReporter",
    "RasterSettings",
    "RenderError",
    "Source",
    "SplitMode",
    "ToolContext",
    "ToolRegistry",
    "ValidationError",
    "WatermarkSpec",
    "capture_markup",
    "capture_url",
    "compress_document",
    "deliver",
    "describe_document",
    "export_images",
    "export_office",
    "load_builtin_plugins",
    "merge_documents",
    "pack_archive",
    "package_result",
    "protect_document",
    "register_tool",
    "registry",
    "rotate_document",
    "split_document",
    "watermark_document",
]
