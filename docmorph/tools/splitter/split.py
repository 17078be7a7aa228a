"""Split a document into several smaller documents."""

from __future__ import annotations

from typing import Sequence

from ...core.container import DocumentContainer
from ...core.model import SplitMode
from ...core.progress import ProgressCallback, ProgressReporter
from ...core.utils import checkpoint, get_logger
from ...exceptions import ValidationError
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool
from .ranges import parse_page_ranges

LOGGER = get_logger("docmorph.tools.split")


def chunk_indices(page_count: int, pages_per_file: int) -> list[range]:
    """Partition ``range(page_count)`` into consecutive chunks."""

    if pages_per_file < 1:
        raise ValidationError(f"pages_per_file must be at least 1, got {pages_per_file}")
    return [
        range(start, min(start + pages_per_file, page_count))
        for start in range(0, page_count, pages_per_file)
    ]


async def split_document(
    data: bytes,
    mode: SplitMode | str = SplitMode.BY_PAGE_COUNT,
    *,
    pages_per_file: int = 1,
    ranges: str | Sequence[object] | None = None,
    on_progress: ProgressCallback | None = None,
) -> list[bytes]:
    """Split *data* into ``ceil(page_count / pages_per_file)`` documents.

    In ``byRanges`` mode every entry of *ranges* (1-based, inclusive)
    becomes one output document instead.
    """

    reporter = ProgressReporter(on_progress, operation="split")
    with reporter.track_failures():
        try:
            mode = SplitMode(mode)
        except ValueError as exc:
            raise ValidationError(f"Unknown split mode: {mode!r}") from exc
        if mode is SplitMode.BY_PAGE_COUNT and (
            isinstance(pages_per_file, bool) or not isinstance(pages_per_file, int) or pages_per_file < 1
        ):
            raise ValidationError(f"pages_per_file must be an integer of at least 1, got {pages_per_file!r}")
        if mode is SplitMode.BY_RANGES and not ranges:
            raise ValidationError("ranges mode not supported without explicit page ranges")

        reporter.emit(5, "Loading document...")
        await checkpoint()
        source = DocumentContainer.open(data)

        if mode is SplitMode.BY_RANGES:
            chunks = [page_range.indices for page_range in parse_page_ranges(ranges, total_pages=source.page_count)]
        else:
            chunks = chunk_indices(source.page_count, pages_per_file)

        total = len(chunks)
        LOGGER.info("Splitting %d page(s) into %d document(s)", source.page_count, total)

        results: list[bytes] = []
        for number, indices in enumerate(chunks, start=1):
            await checkpoint()
            part = DocumentContainer.create()
            part.copy_pages(source, indices)
            results.append(part.save())
            LOGGER.debug("Part %d holds pages %d-%d", number, indices.start + 1, indices.stop)
            reporter.step(number, total, 10, 95, f"Created file {number} of {total}")

        reporter.complete("Split complete")
    return results


@register_tool("split")
class SplitTool(BaseTool):
    name = "split"

    async def run(self) -> list[bytes]:
        context = self.context
        result = await split_document(
            context.source.data,
            context.config.get("mode", SplitMode.BY_PAGE_COUNT),
            pages_per_file=context.config.get("pages_per_file", 1),
            ranges=context.config.get("ranges"),
            on_progress=context.on_progress,
        )
        context.resources["result"] = result
        return result


__all__ = ["chunk_indices", "split_document", "SplitTool"]
