"""Strip document metadata and re-serialise with tighter packing."""

from __future__ import annotations

from ...core.container import METADATA_KEYS, DocumentContainer
from ...core.model import CompressionLevel
from ...core.progress import ProgressCallback, ProgressReporter
from ...core.utils import checkpoint, get_logger
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("docmorph.tools.compress")


async def compress_document(
    data: bytes,
    level: CompressionLevel | str = CompressionLevel.MEDIUM,
    *,
    on_progress: ProgressCallback | None = None,
) -> bytes:
    """Return a re-serialised copy of *data*.

    Title, subject, keywords, producer and creator are always removed.
    *level* selects the zlib level for content streams and whether
    identical objects are merged before writing. The output is not
    guaranteed to be smaller than the input.
    """

    reporter = ProgressReporter(on_progress, operation="compress")
    with reporter.track_failures():
        level = CompressionLevel.parse(level)
        reporter.emit(10, "Loading document...")
        await checkpoint()
        container = DocumentContainer.open(data)

        reporter.emit(30, "Removing metadata...")
        container.strip_metadata(tuple(METADATA_KEYS))
        await checkpoint()

        reporter.emit(50, "Compressing content streams...")
        container.compress_content_streams(level.stream_level)
        await checkpoint()

        reporter.emit(80, "Saving document...")
        result = container.save(deduplicate=level.deduplicate)
        LOGGER.info(
            "Compressed document at level %s: %d -> %d bytes",
            level.value,
            len(data),
            len(result),
        )
        reporter.complete("Compression complete")
    return result


@register_tool("compress")
class CompressTool(BaseTool):
    name = "compress"

    async def run(self) -> bytes:
        context = self.context
        result = await compress_document(
            context.source.data,
            context.config.get("level", CompressionLevel.MEDIUM),
            on_progress=context.on_progress,
        )
        context.resources["result"] = result
        return result


__all__ = ["compress_document", "CompressTool"]
