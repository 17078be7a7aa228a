"""Rotate pages by a quarter-turn multiple."""

from __future__ import annotations

from typing import Iterable

from ...core.container import DocumentContainer
from ...core.progress import ProgressCallback, ProgressReporter
from ...core.utils import checkpoint, get_logger
from ...exceptions import ValidationError
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("docmorph.tools.rotate")


def select_pages(page_count: int, pages: Iterable[int] | None) -> list[int]:
    """Return the sorted, de-duplicated in-range subset of *pages*.

    Indices outside ``[0, page_count)`` are dropped rather than rejected.
    """

    if pages is None:
        return list(range(page_count))
    selected = sorted({index for index in pages if 0 <= index < page_count})
    dropped = [index for index in pages if not 0 <= index < page_count]
    if dropped:
        LOGGER.debug("Ignoring out-of-range page indices %s", dropped)
    return selected


async def rotate_document(
    data: bytes,
    delta: int,
    *,
    pages: Iterable[int] | None = None,
    on_progress: ProgressCallback | None = None,
) -> bytes:
    """Add *delta* degrees to the rotation of the targeted pages.

    The stored rotation becomes ``(current + delta) % 360``. Pages outside
    the target set are left untouched. Only quarter turns are accepted:
    a page's ``/Rotate`` entry must be a multiple of 90, so any other
    integer raises :class:`ValidationError` rather than being rounded.
    """

    reporter = ProgressReporter(on_progress, operation="rotate")
    with reporter.track_failures():
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise ValidationError(f"Rotation must be an integer number of degrees, got {delta!r}")
        if delta % 90:
            raise ValidationError(f"Rotation must be a multiple of 90 degrees, got {delta}")
        if pages is not None:
            pages = list(pages)

        reporter.emit(10, "Loading document...")
        await checkpoint()
        container = DocumentContainer.open(data)
        targets = select_pages(container.page_count, pages)
        LOGGER.info("Rotating %d of %d page(s) by %d degrees", len(targets), container.page_count, delta)

        for position, index in enumerate(targets):
            page = container.page(index)
            container.set_rotation(index, (page.rotation + delta) % 360)
            reporter.step(position + 1, len(targets), 20, 90, f"Rotated page {index + 1}")
            await checkpoint()

        reporter.emit(90, "Saving document...")
        result = container.save()
        reporter.complete("Rotation complete")
    return result


@register_tool("rotate")
class RotateTool(BaseTool):
    name = "rotate"

    async def run(self) -> bytes:
        context = self.context
        result = await rotate_document(
            context.source.data,
            context.config.get("delta", 90),
            pages=context.config.get("pages"),
            on_progress=context.on_progress,
        )
        context.resources["result"] = result
        return result


__all__ = ["rotate_document", "select_pages", "RotateTool"]
