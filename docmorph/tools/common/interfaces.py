"""Core interfaces and context objects shared by DocMorph tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ...config import EngineSettings
from ...core.progress import ProgressCallback
from ...core.utils import resolve_path


@dataclass
class Source:
    """One input blob together with the filename it came from, if any."""

    data: bytes
    filename: str | None = None

    @classmethod
    def from_path(cls, path: str | Path) -> "Source":
        resolved = resolve_path(path)
        return cls(resolved.read_bytes(), resolved.name)


@dataclass
class ToolContext:
    """Holds shared execution state for a tool invocation."""

    sources: list[Source] = field(default_factory=list)
    config: dict[str, Any] = field(default_factory=dict)
    settings: EngineSettings = field(default_factory=EngineSettings)
    on_progress: ProgressCallback | None = None
    resources: dict[str, Any] = field(default_factory=dict)

    @property
    def source(self) -> Source:
        if not self.sources:
            raise ValueError("ToolContext requires at least one source")
        return self.sources[0]

    @property
    def filename(self) -> str | None:
        return self.sources[0].filename if self.sources else None

    def with_updates(
        self,
        *,
        sources: list[Source] | None = None,
        config: dict[str, Any] | None = None,
    ) -> "ToolContext":
        data = ToolContext(
            sources=list(sources if sources is not None else self.sources),
            config=dict(self.config),
            settings=self.settings,
            on_progress=self.on_progress,
            resources=dict(self.resources),
        )
        if config:
            data.config.update(config)
        return data


class BaseTool:
    """Base class for all pluggable DocMorph tools."""

    name: str

    def __init__(self, context: ToolContext) -> None:
        self.context = context

    async def run(self) -> Any:  # pragma: no cover - to be implemented by subclasses
        raise NotImplementedError

