"""Backend protocols consumed by DocMorph operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from PIL import Image

from ..core.model import TextRun

if TYPE_CHECKING:  # pragma: no cover
    from ..core.container import Page


class RasterSession(Protocol):
    """An open rasterization handle over one serialised document."""

    def page_count(self) -> int:
        """Return the number of pages the backend sees."""

    def rasterize_page(self, index: int, scale: float) -> Image.Image:
        """Render page *index* at *scale* times its natural size."""

    def close(self) -> None:
        """Release backend resources held by the session."""


class PageRasterizer(Protocol):
    """Factory for :class:`RasterSession` instances."""

    def open(self, data: bytes) -> RasterSession:
        """Open *data* for rendering."""


class TextExtractor(Protocol):
    def extract_text_runs(self, page: "Page") -> list[TextRun]:
        """Return the text runs of *page* in content-stream order."""


class TextDrawer(Protocol):
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
        """Draw *text* onto *page* in place."""


class Surface(Protocol):
    """Off-screen renderable surface produced from markup."""

    width: int

    def snapshot(self, scale: float) -> Image.Image:
        """Rasterize the whole surface once."""

    def release(self) -> None:
        """Free the surface; safe to call more than once."""

    def __enter__(self) -> "Surface": ...

    def __exit__(self, *exc_info: Any) -> None: ...


class MarkupRenderer(Protocol):
    def render(self, markup: str, width: int) -> Surface:
        """Materialise *markup* into a surface *width* units wide."""


class PageFetcher(Protocol):
    def fetch(self, url: str, timeout: float) -> str:
        """Return the markup served at *url*, waiting at most *timeout* seconds."""


__all__ = [
    "RasterSession",
    "PageRasterizer",
    "TextExtractor",
    "TextDrawer",
    "Surface",
    "MarkupRenderer",
    "PageFetcher",
]
