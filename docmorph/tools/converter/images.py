"""Rasterize every page to PNG or JPEG."""

from __future__ import annotations

from ...adapters.base import PageRasterizer
from ...adapters.rasterizer import PdfiumRasterizer, encode_image
from ...config import EngineSettings
from ...core.container import DocumentContainer
from ...core.model import ImageFormat
from ...core.progress import ProgressCallback, ProgressReporter
from ...core.utils import checkpoint, get_logger
from ...exceptions import DocMorphError, RenderError, ValidationError
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("docmorph.tools.images")

RASTER_SCALE = 2.0
JPEG_QUALITY = 0.9


def _parse_format(fmt: ImageFormat | str) -> ImageFormat:
    if fmt == "jpeg":
        return ImageFormat.JPEG
    try:
        return ImageFormat(fmt)
    except ValueError as exc:
        raise ValidationError(f"Unsupported image format: {fmt!r}") from exc


async def export_images(
    data: bytes,
    fmt: ImageFormat | str = ImageFormat.PNG,
    *,
    rasterizer: PageRasterizer | None = None,
    on_progress: ProgressCallback | None = None,
) -> list[bytes]:
    """Return one encoded image per page, in page order.

    Pages are rendered at twice their nominal size. The first page that
    fails to render aborts the export with :class:`RenderError`.
    """

    reporter = ProgressReporter(on_progress, operation="export-images")
    with reporter.track_failures():
        fmt = _parse_format(fmt)
        reporter.emit(10, "Loading document...")
        await checkpoint()
        page_count = DocumentContainer.open(data).page_count
        rasterizer = rasterizer or PdfiumRasterizer(EngineSettings().raster)

        images: list[bytes] = []
        try:
            session = rasterizer.open(data)
        except DocMorphError:
            raise
        except Exception as exc:  # rasterizer backends vary
            raise RenderError(f"Failed to open document for rendering: {exc}") from exc
        try:
            reporter.emit(30, "Rendering pages...")
            for index in range(page_count):
                await checkpoint()
                try:
                    image = session.rasterize_page(index, RASTER_SCALE)
                except DocMorphError:
                    raise
                except Exception as exc:  # rasterizer backends vary
                    raise RenderError(f"Failed to render page {index + 1}: {exc}") from exc
                images.append(encode_image(image, fmt, JPEG_QUALITY))
                LOGGER.debug("Rendered page %d at %dx%d", index + 1, image.width, image.height)
                reporter.step(index + 1, page_count, 30, 90, f"Converted page {index + 1} of {page_count}")
        finally:
            session.close()

        LOGGER.info("Exported %d page(s) as %s", len(images), fmt.value)
        reporter.complete("Conversion complete")
    return images


@register_tool("to-image")
class ImageExportTool(BaseTool):
    name = "to-image"

    async def run(self) -> list[bytes]:
        context = self.context
        result = await export_images(
            context.source.data,
            context.config.get("format", ImageFormat.PNG),
            rasterizer=PdfiumRasterizer(context.settings.raster),
            on_progress=context.on_progress,
        )
        context.resources["result"] = result
        return result


__all__ = ["export_images", "ImageExportTool", "RASTER_SCALE", "JPEG_QUALITY"]
