"""Password protection exposed through the DocMorph tools namespace."""

from __future__ import annotations

from .protect import ProtectTool, protect_document

__all__ = ["ProtectTool", "protect_document"]
