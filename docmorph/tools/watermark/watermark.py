"""Stamp a text watermark on every page."""

from __future__ import annotations

from ...adapters.base import TextDrawer
from ...core.container import DocumentContainer
from ...core.model import WatermarkSpec
from ...core.progress import ProgressCallback, ProgressReporter
from ...core.utils import checkpoint, get_logger
from ...exceptions import ValidationError
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("docmorph.tools.watermark")


async def watermark_document(
    data: bytes,
    spec: WatermarkSpec,
    *,
    drawer: TextDrawer | None = None,
    on_progress: ProgressCallback | None = None,
) -> bytes:
    """Draw ``spec.text`` at the anchor point of every page.

    The anchor is computed from each page's own size, so mixed page sizes
    are watermarked consistently.
    """

    reporter = ProgressReporter(on_progress, operation="watermark")
    with reporter.track_failures():
        if not isinstance(spec, WatermarkSpec):
            raise ValidationError("spec must be a WatermarkSpec")
        reporter.emit(10, "Loading document...")
        await checkpoint()
        container = DocumentContainer.open(data)
        total = container.page_count
        LOGGER.info("Watermarking %d page(s) at %s", total, spec.anchor.value)

        reporter.emit(50, "Adding watermark...")
        for index in range(total):
            page = container.page(index)
            x, y = spec.anchor.point(page.width, page.height)
            container.draw_text(
                index,
                spec.text,
                x,
                y,
                size=spec.font_size,
                rotation=spec.rotation,
                opacity=spec.opacity,
                color=spec.color,
                drawer=drawer,
            )
            reporter.step(index + 1, total, 50, 90, f"Watermarked page {index + 1} of {total}")
            await checkpoint()

        reporter.emit(90, "Saving document...")
        result = container.save()
        reporter.complete("Watermark added")
    return result


@register_tool("watermark")
class WatermarkTool(BaseTool):
    name = "watermark"

    async def run(self) -> bytes:
        context = self.context
        options = {
            key: context.config[key]
            for key in ("opacity", "font_size", "rotation", "anchor", "color")
            if context.config.get(key) is not None
        }
        spec = WatermarkSpec(context.config.get("text", ""), **options)
        result = await watermark_document(context.source.data, spec, on_progress=context.on_progress)
        context.resources["result"] = result
        return result


__all__ = ["watermark_document", "WatermarkTool"]
