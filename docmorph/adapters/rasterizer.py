"""Page rasterization through :mod:`pypdfium2` and image encoding through Pillow."""

from __future__ import annotations

from io import BytesIO

import pypdfium2 as pdfium
from PIL import Image

from ..config import RasterSettings
from ..core.model import ImageFormat
from ..core.utils import get_logger
from ..exceptions import RenderError

LOGGER = get_logger("docmorph.adapters.raster")


class PdfiumRasterSession:
    """Rasterization handle bound to one opened :class:`pypdfium2.PdfDocument`."""

    def __init__(self, document: pdfium.PdfDocument, settings: RasterSettings) -> None:
        self._document = document
        self._settings = settings
        self._closed = False

    def page_count(self) -> int:
        return len(self._document)

    def rasterize_page(self, index: int, scale: float) -> Image.Image:
        if self._closed:
            raise RenderError("Raster session is closed")
        page = None
        bitmap = None
        try:
            page = self._document[index]
            bitmap = page.render(
                scale=scale,
                draw_annots=self._settings.draw_annotations,
                may_draw_forms=self._settings.draw_forms,
                fill_color=self._settings.fill_color,
            )
            # The PIL view shares the bitmap buffer, so detach it before closing.
            return bitmap.to_pil().copy()
        except Exception as exc:  # pdfium errors vary
            raise RenderError(f"Failed to rasterize page {index + 1}: {exc}") from exc
        finally:
            if bitmap is not None:
                bitmap.close()
            if page is not None:
                page.close()

    def close(self) -> None:
        if not self._closed:
            self._document.close()
            self._closed = True

    def __enter__(self) -> "PdfiumRasterSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class PdfiumRasterizer:
    """Creates :class:`PdfiumRasterSession` objects with injected settings."""

    def __init__(self, settings: RasterSettings | None = None) -> None:
        self.settings = settings or RasterSettings()

    def open(self, data: bytes) -> PdfiumRasterSession:
        try:
            document = pdfium.PdfDocument(data, password=self.settings.password)
        except Exception as exc:  # pdfium errors vary
            raise RenderError(f"Rasterizer could not open document: {exc}") from exc
        if self.settings.draw_forms:
            try:
                document.init_forms()
            except Exception as exc:  # pragma: no cover - depends on pdfium build
                LOGGER.warning("Form rendering unavailable: %s", exc)
        return PdfiumRasterSession(document, self.settings)


def encode_image(image: Image.Image, fmt: ImageFormat, quality: float = 0.9) -> bytes:
    """Encode *image* as *fmt*; *quality* in ``(0, 1]`` only affects JPEG."""

    buffer = BytesIO()
    try:
        if fmt is ImageFormat.JPEG:
            image.convert("RGB").save(buffer, format="JPEG", quality=int(round(quality * 100)))
        else:
            if image.mode not in ("RGB", "RGBA", "L", "LA"):
                image = image.convert("RGBA")
            image.save(buffer, format="PNG")
    except Exception as exc:  # Pillow errors vary
        raise RenderError(f"Failed to encode {fmt.value.upper()} image: {exc}") from exc
    return buffer.getvalue()


__all__ = ["PdfiumRasterizer", "PdfiumRasterSession", "encode_image"]
