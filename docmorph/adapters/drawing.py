"""Text drawing through a :mod:`reportlab` overlay merged with :mod:`pypdf`."""

from __future__ import annotations

from io import BytesIO
from typing import TYPE_CHECKING

from pypdf import PageObject, PdfReader
from reportlab.pdfgen import canvas

from ..core.utils import get_logger
from ..exceptions import RenderError

if TYPE_CHECKING:  # pragma: no cover
    from ..core.container import Page

LOGGER = get_logger("docmorph.adapters.drawing")

STANDARD_FONT = "Helvetica"


def build_text_overlay(
    width: float,
    height: float,
    text: str,
    x: float,
    y: float,
    *,
    size: float,
    rotation: float,
    opacity: float,
    color: tuple[float, float, float],
    font: str = STANDARD_FONT,
) -> PageObject:
    """Return a one-page overlay of ``width`` x ``height`` carrying *text* at ``(x, y)``."""

    buffer = BytesIO()
    overlay = canvas.Canvas(buffer, pagesize=(width, height), pageCompression=1)
    overlay.setFont(font, size)
    overlay.setFillColorRGB(*color)
    overlay.setFillAlpha(opacity)
    overlay.saveState()
    overlay.translate(x, y)
    overlay.rotate(rotation)
    overlay.drawString(0, 0, text)
    overlay.restoreState()
    overlay.showPage()
    overlay.save()
    buffer.seek(0)
    return PdfReader(buffer).pages[0]


class ReportlabTextDrawer:
    """Draws text using an embedded standard font."""

    def __init__(self, font: str = STANDARD_FONT) -> None:
        self.font = font

    def draw_text(
        self,
        page: "Page",
        text: str,
        x: float,
        y: float,
        size: float,
        rotation: float,
        opacity: float,
        color: tuple[float, float, float],
    ) -> None:
        left, bottom = page.origin
        try:
            overlay = build_text_overlay(
                page.width,
                page.height,
                text,
                x,
                y,
                size=size,
                rotation=rotation,
                opacity=opacity,
                color=color,
                font=self.font,
            )
            if left or bottom:
                page.handle.merge_translated_page(overlay, left, bottom)
            else:
                page.handle.merge_page(overlay)
        except Exception as exc:  # reportlab and pypdf errors vary
            LOGGER.error("Failed to draw text on page %d: %s", page.index + 1, exc)
            raise RenderError(f"Failed to draw text on page {page.index + 1}: {exc}") from exc


__all__ = ["ReportlabTextDrawer", "build_text_overlay", "STANDARD_FONT"]
