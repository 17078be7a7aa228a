"""Capture markup or a web page into a paginated document.

The markup is laid out once on an off-screen surface, snapshotted to a
single tall image and then cut into A4-proportioned slices, each placed as
a full-page image. Content is never reflowed across pages.
"""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from io import BytesIO
from urllib.parse import urlparse

from PIL import Image
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ...adapters.base import MarkupRenderer, PageFetcher
from ...adapters.web import PillowMarkupRenderer, RequestsPageFetcher
from ...config import EngineSettings
from ...core.progress import ProgressCallback, ProgressReporter
from ...core.utils import checkpoint, get_logger
from ...exceptions import CaptureTimeoutError, DocMorphError, PackagingError, RenderError, ValidationError
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("docmorph.tools.capture")

PAGE_WIDTH, PAGE_HEIGHT = A4


def slice_height(width: int) -> int:
    """Height in pixels of one A4-proportioned slice of a *width* pixel image."""

    return max(int(round(width * PAGE_HEIGHT / PAGE_WIDTH)), 1)


def paginate(image: Image.Image) -> list[Image.Image]:
    """Cut *image* into page slices, padding the last one with white."""

    image = image.convert("RGB")
    width, height = image.size
    step = slice_height(width)
    slices: list[Image.Image] = []
    for top in range(0, max(height, 1), step):
        piece = Image.new("RGB", (width, step), "white")
        piece.paste(image.crop((0, top, width, min(top + step, height))), (0, 0))
        slices.append(piece)
    return slices


def images_to_document(slices: list[Image.Image]) -> bytes:
    buffer = BytesIO()
    try:
        document = canvas.Canvas(buffer, pagesize=A4, pageCompression=1)
        for piece in slices:
            document.drawImage(ImageReader(piece), 0, 0, width=PAGE_WIDTH, height=PAGE_HEIGHT)
            document.showPage()
        document.save()
    except Exception as exc:  # reportlab errors vary
        raise PackagingError(f"Failed to assemble captured pages: {exc}") from exc
    return buffer.getvalue()


async def _render_markup(
    markup: str,
    renderer: MarkupRenderer,
    settings: EngineSettings,
    reporter: ProgressReporter,
) -> bytes:
    reporter.emit(40, "Rendering page...")
    await checkpoint()
    try:
        surface = renderer.render(markup, settings.capture_page_width)
        with surface:
            image = surface.snapshot(settings.capture_scale)
    except DocMorphError:
        raise
    except Exception as exc:  # surface backends vary
        raise RenderError(f"Failed to capture rendered markup: {exc}") from exc
    LOGGER.debug("Captured surface at %dx%d", image.width, image.height)

    reporter.emit(70, "Creating document...")
    await checkpoint()
    slices = paginate(image)

    reporter.emit(90, "Saving document...")
    await checkpoint()
    result = images_to_document(slices)
    LOGGER.info("Captured markup into %d page(s)", len(slices))
    reporter.complete("Capture complete")
    return result


async def _fetch_markup(fetcher: PageFetcher, url: str, timeout: float) -> str:
    # A stalled fetch thread is abandoned, never joined.
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="docmorph-fetch")
    loop = asyncio.get_running_loop()
    try:
        return await asyncio.wait_for(loop.run_in_executor(executor, fetcher.fetch, url, timeout), timeout)
    except CaptureTimeoutError:
        raise
    except asyncio.TimeoutError as exc:
        raise CaptureTimeoutError(f"Timed out after {timeout:g}s loading {url}") from exc
    except DocMorphError:
        raise
    except Exception as exc:  # fetcher errors vary
        raise RenderError(f"Failed to load {url}: {exc}") from exc
    finally:
        executor.shutdown(wait=False, cancel_futures=True)


async def capture_markup(
    markup: str,
    *,
    renderer: MarkupRenderer | None = None,
    settings: EngineSettings | None = None,
    on_progress: ProgressCallback | None = None,
) -> bytes:
    """Render raw *markup* into a document."""

    reporter = ProgressReporter(on_progress, operation="capture")
    with reporter.track_failures():
        if not isinstance(markup, str) or not markup.strip():
            raise ValidationError("Markup must not be empty")
        settings = settings or EngineSettings()
        reporter.emit(10, "Preparing markup...")
        await checkpoint()
        return await _render_markup(markup, renderer or PillowMarkupRenderer(), settings, reporter)


async def capture_url(
    url: str,
    *,
    fetcher: PageFetcher | None = None,
    renderer: MarkupRenderer | None = None,
    settings: EngineSettings | None = None,
    on_progress: ProgressCallback | None = None,
) -> bytes:
    """Fetch *url* and render it into a document.

    Only the fetch is bounded by ``settings.capture_timeout``; exceeding it
    raises :class:`CaptureTimeoutError`.
    """

    reporter = ProgressReporter(on_progress, operation="capture")
    with reporter.track_failures():
        parsed = urlparse(url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValidationError(f"Only http(s) URLs can be captured, got {url!r}")
        settings = settings or EngineSettings()
        fetcher = fetcher or RequestsPageFetcher(user_agent=settings.user_agent)
        timeout = settings.capture_timeout

        reporter.emit(10, "Loading page...")
        LOGGER.info("Capturing %s", url)
        markup = await _fetch_markup(fetcher, url, timeout)
        if not isinstance(markup, str):
            raise RenderError(f"Fetcher returned no markup for {url}")
        return await _render_markup(markup, renderer or PillowMarkupRenderer(), settings, reporter)


@register_tool("capture")
class CaptureTool(BaseTool):
    name = "capture"

    async def run(self) -> bytes:
        context = self.context
        url = context.config.get("url")
        if url:
            result = await capture_url(url, settings=context.settings, on_progress=context.on_progress)
        else:
            markup = context.source.data.decode("utf-8", errors="replace")
            result = await capture_markup(markup, settings=context.settings, on_progress=context.on_progress)
        context.resources["result"] = result
        return result


__all__ = ["capture_markup", "capture_url", "paginate", "slice_height", "CaptureTool"]
