"""Read-only document summary."""

from __future__ import annotations

from ...core.container import DocumentContainer
from ...core.model import DocumentInfo
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool


def describe_document(data: bytes) -> DocumentInfo:
    """Return page geometry, rotations and metadata of *data*."""

    return DocumentContainer.open(data).describe()


@register_tool("info")
class InfoTool(BaseTool):
    name = "info"

    async def run(self) -> DocumentInfo:
        result = describe_document(self.context.source.data)
        self.context.resources["result"] = result
        return result


__all__ = ["describe_document", "InfoTool"]
