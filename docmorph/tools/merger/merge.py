"""Merge several documents into one, preserving input and page order."""

from __future__ import annotations

from typing import Sequence

from ...core.container import DocumentContainer
from ...core.progress import ProgressCallback, ProgressReporter
from ...core.utils import checkpoint, file_stem, get_logger
from ...exceptions import ValidationError
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("docmorph.tools.merge")


async def merge_documents(
    inputs: Sequence[bytes],
    *,
    bookmarks: Sequence[str | None] | None = None,
    on_progress: ProgressCallback | None = None,
) -> bytes:
    """Concatenate the pages of every input into a single new document.

    Args:
        inputs: Document byte buffers, merged in the given order.
        bookmarks: Optional outline titles, one per input. A missing or
            empty title falls back to ``"Document N"``.
        on_progress: Receives one event per input between 10% and 80%,
            then the finalising and completion events.

    Raises:
        ValidationError: If *inputs* is empty.
        ParseError: If an input cannot be opened. The error carries the
            zero-based ``position`` of that input.
    """

    reporter = ProgressReporter(on_progress, operation="merge")
    with reporter.track_failures():
        if not inputs:
            raise ValidationError("No input documents provided")

        total = len(inputs)
        LOGGER.info("Merging %d document(s)", total)
        output = DocumentContainer.create()
        bookmark_targets: list[tuple[str, int]] = []

        for position, data in enumerate(inputs):
            reporter.step(position, total, 10, 80, f"Merging file {position + 1} of {total}...")
            await checkpoint()
            source = DocumentContainer.open(data, position=position)
            start_index = output.page_count
            output.copy_pages(source)
            LOGGER.debug("Copied %d page(s) from input #%d", source.page_count, position + 1)

            if bookmarks is not None and source.page_count:
                title = bookmarks[position] if position < len(bookmarks) else None
                bookmark_targets.append((title or f"Document {position + 1}", start_index))

        reporter.emit(90, "Finalizing merge...")
        await checkpoint()
        for title, page_index in bookmark_targets:
            output.add_outline_item(title, page_index)
        result = output.save()
        LOGGER.info("Merged %d document(s) into %d page(s)", total, output.page_count)
        reporter.complete("Merge complete")
    return result


@register_tool("merge")
class MergeTool(BaseTool):
    name = "merge"

    async def run(self) -> bytes:
        context = self.context
        bookmarks = None
        if context.config.get("bookmarks"):
            bookmarks = [file_stem(source.filename) for source in context.sources]
        result = await merge_documents(
            [source.data for source in context.sources],
            bookmarks=bookmarks,
            on_progress=context.on_progress,
        )
        context.resources["result"] = result
        return result


__all__ = ["merge_documents", "MergeTool"]
