"""Plugin registry and orchestration helpers for DocMorph tools."""

from __future__ import annotations

from typing import Any, Dict, Iterable

from ...core.utils import get_logger
from .interfaces import BaseTool, Source, ToolContext

LOGGER = get_logger("docmorph.tools.registry")


class ToolRegistry:
    """Maps tool names to :class:`BaseTool` subclasses."""

    def __init__(self) -> None:
        self._tools: Dict[str, type[BaseTool]] = {}

    def register(self, name: str, tool_class: type[BaseTool]) -> None:
        if name in self._tools:
            raise ValueError(f"Tool '{name}' is already registered")
        self._tools[name] = tool_class

    def get(self, name: str) -> type[BaseTool] | None:
        return self._tools.get(name)

    def names(self) -> Iterable[str]:
        return sorted(self._tools)

    def create(self, name: str, context: ToolContext) -> BaseTool:
        tool_class = self._tools.get(name)
        if tool_class is None:
            available = ", ".join(self.names()) or "none"
            raise KeyError(f"Tool '{name}' is not registered (available: {available})")
        return tool_class(context)

    async def run(self, name: str, context: ToolContext) -> Any:
        """Instantiate tool *name* for *context* and await its result."""

        tool = self.create(name, context)
        LOGGER.debug("Running tool %s with %d source(s)", name, len(context.sources))
        return await tool.run()


registry = ToolRegistry()


def register_tool(name: str):
    def decorator(cls: type[BaseTool]) -> type[BaseTool]:
        registry.register(name, cls)
        return cls

    return decorator


__all__ = ["ToolRegistry", "registry", "register_tool", "ToolContext", "Source", "BaseTool"]
