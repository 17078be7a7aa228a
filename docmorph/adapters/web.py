"""Markup materialisation and page fetching for web capture.

:class:`PillowMarkupRenderer` lays out the block-level text of a markup
document onto an off-screen Pillow canvas of a fixed width. It does not
implement CSS; headings are drawn larger and every other block becomes a
wrapped paragraph. :class:`RequestsPageFetcher` retrieves remote markup with
:mod:`requests`.
"""

from __future__ import annotations

from dataclasses import dataclass
from html.parser import HTMLParser
from time import monotonic
from typing import Any

import requests
from PIL import Image, ImageDraw, ImageFont

from ..core.utils import get_logger
from ..exceptions import CaptureTimeoutError, RenderError

LOGGER = get_logger("docmorph.adapters.web")

MAX_MARKUP_BYTES = 5 * 1024 * 1024

_BLOCK_TAGS = {
    "address", "article", "aside", "blockquote", "br", "dd", "div", "dl", "dt",
    "figcaption", "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6", "header",
    "hr", "li", "main", "nav", "ol", "p", "pre", "section", "table", "td", "th",
    "tr", "ul",
}
_SKIPPED_TAGS = {"head", "script", "style", "noscript", "template", "svg"}
_HEADING_SIZES = {"h1": 32, "h2": 26, "h3": 22, "h4": 19, "h5": 17, "h6": 16}
_BODY_SIZE = 15


@dataclass(slots=True)
class TextBlock:
    text: str
    font_size: int


class _BlockExtractor(HTMLParser):
    """Collect visible text grouped into blocks."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.blocks: list[TextBlock] = []
        self._parts: list[str] = []
        self._skip_depth = 0
        self._heading: str | None = None

    def handle_starttag(self, tag: str, attrs: Any) -> None:
        if tag in _SKIPPED_TAGS:
            self._skip_depth += 1
            return
        if tag in _BLOCK_TAGS:
            self._flush()
        if tag in _HEADING_SIZES:
            self._heading = tag

    def handle_endtag(self, tag: str) -> None:
        if tag in _SKIPPED_TAGS:
            self._skip_depth = max(self._skip_depth - 1, 0)
            return
        if tag in _BLOCK_TAGS:
            self._flush()
        if tag == self._heading:
            self._heading = None

    def handle_data(self, data: str) -> None:
        if self._skip_depth == 0:
            self._parts.append(data)

    def close(self) -> None:
        super().close()
        self._flush()

    def _flush(self) -> None:
        text = " ".join("".join(self._parts).split())
        self._parts = []
        if text:
            size = _HEADING_SIZES.get(self._heading or "", _BODY_SIZE)
            self.blocks.append(TextBlock(text, size))


def extract_blocks(markup: str) -> list[TextBlock]:
    parser = _BlockExtractor()
    parser.feed(markup)
    parser.close()
    return parser.blocks


class MarkupSurface:
    """Off-screen surface holding laid-out markup blocks."""

    margin = 40
    block_spacing = 12

    def __init__(self, blocks: list[TextBlock], width: int) -> None:
        self.width = width
        self._blocks = blocks
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def snapshot(self, scale: float = 1.0) -> Image.Image:
        if self._released:
            raise RenderError("Surface has already been released")
        width = max(int(round(self.width * scale)), 1)
        margin = int(round(self.margin * scale))
        usable = max(width - 2 * margin, 1)

        laid_out: list[tuple[ImageFont.ImageFont, list[str], int]] = []
        height = margin
        measure = ImageDraw.Draw(Image.new("RGB", (1, 1)))
        for block in self._blocks:
            font = ImageFont.load_default(size=max(int(round(block.font_size * scale)), 1))
            lines = _wrap(measure, block.text, font, usable)
            line_height = int(round(block.font_size * scale * 1.4))
            laid_out.append((font, lines, line_height))
            height += line_height * len(lines) + int(round(self.block_spacing * scale))
        height = max(height + margin, 1)

        image = Image.new("RGB", (width, height), "white")
        draw = ImageDraw.Draw(image)
        cursor = margin
        for font, lines, line_height in laid_out:
            for line in lines:
                draw.text((margin, cursor), line, fill=(20, 20, 20), font=font)
                cursor += line_height
            cursor += int(round(self.block_spacing * scale))
        return image

    def release(self) -> None:
        self._blocks = []
        self._released = True

    def __enter__(self) -> "MarkupSurface":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()


def _wrap(draw: ImageDraw.ImageDraw, text: str, font: Any, max_width: int) -> list[str]:
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if current and draw.textlength(candidate, font=font) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


class PillowMarkupRenderer:
    def render(self, markup: str, width: int) -> MarkupSurface:
        try:
            blocks = extract_blocks(markup)
        except Exception as exc:  # html.parser errors vary
            raise RenderError(f"Failed to parse markup: {exc}") from exc
        LOGGER.debug("Laid out %d markup block(s) at width %d", len(blocks), width)
        return MarkupSurface(blocks, width)


class RequestsPageFetcher:
    """Fetch remote markup over HTTP(S)."""

    def __init__(self, *, user_agent: str = "DocMorph", max_bytes: int = MAX_MARKUP_BYTES) -> None:
        self.user_agent = user_agent
        self.max_bytes = max_bytes

    def fetch(self, url: str, timeout: float) -> str:
        """Return the decoded body of *url*.

        *timeout* bounds the whole download, not just each socket read, so a
        server that trickles bytes still raises :class:`CaptureTimeoutError`.
        """

        headers = {"User-Agent": self.user_agent}
        deadline = monotonic() + timeout
        try:
            with requests.get(url, timeout=timeout, headers=headers, stream=True) as response:
                response.raise_for_status()
                body = bytearray()
                for chunk in response.iter_content(chunk_size=64 * 1024):
                    if monotonic() > deadline:
                        raise CaptureTimeoutError(f"Timed out after {timeout:g}s loading {url}")
                    body.extend(chunk)
                    if len(body) > self.max_bytes:
                        raise RenderError(f"Response from {url} exceeds {self.max_bytes} bytes")
                encoding = response.encoding or "utf-8"
        except requests.Timeout as exc:
            raise CaptureTimeoutError(f"Timed out after {timeout:g}s loading {url}") from exc
        except requests.RequestException as exc:
            raise RenderError(f"Failed to load {url}: {exc}") from exc
        return body.decode(encoding, errors="replace")


__all__ = [
    "MarkupSurface",
    "PillowMarkupRenderer",
    "RequestsPageFetcher",
    "TextBlock",
    "extract_blocks",
]
