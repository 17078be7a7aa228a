"""Document inspection exposed through the DocMorph tools namespace."""

from __future__ import annotations

from .describe import InfoTool, describe_document

__all__ = ["InfoTool", "describe_document"]
