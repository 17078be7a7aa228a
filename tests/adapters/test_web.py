from __future__ import annotations

import pytest
import requests

from docmorph.adapters import web
from docmorph.adapters.web import PillowMarkupRenderer, RequestsPageFetcher, extract_blocks
from docmorph.exceptions import CaptureTimeoutError, RenderError


class FakeResponse:
    def __init__(self, body: bytes, *, status: int = 200, encoding: str | None = "utf-8") -> None:
        self.body = body
        self.status = status
        self.encoding = encoding

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info) -> None:
        return None

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def iter_content(self, chunk_size: int):
        for start in range(0, len(self.body), chunk_size):
            yield self.body[start : start + chunk_size]


def test_extract_blocks_skips_scripts_and_marks_headings() -> None:
    markup = """
    <html><head><title>ignored</title><style>p { color: red }</style></head>
    <body><h1>Title</h1><p>First   paragraph<br>continues</p><script>alert(1)</script>
    <ul><li>one</li><li>two &amp; three</li></ul></body></html>
    """
    blocks = extract_blocks(markup)
    assert [block.text for block in blocks] == ["Title", "First paragraph", "continues", "one", "two & three"]
    assert blocks[0].font_size > blocks[1].font_size


def test_surface_snapshot_and_release() -> None:
    surface = PillowMarkupRenderer().render("<p>" + "word " * 400 + "</p>", 400)
    with surface:
        image = surface.snapshot(1.0)
        doubled = surface.snapshot(2.0)
    assert image.width == 400
    assert image.height > 100
    assert doubled.width == 800
    assert surface.released is True
    with pytest.raises(RenderError):
        surface.snapshot(1.0)


def test_fetcher_returns_decoded_markup(monkeypatch) -> None:
    captured = {}

    def fake_get(url, **kwargs):
        captured.update(kwargs, url=url)
        return FakeResponse("<p>héllo</p>".encode("utf-8"))

    monkeypatch.setattr(web.requests, "get", fake_get)
    markup = RequestsPageFetcher(user_agent="tests").fetch("https://example.com", 3.0)

    assert markup == "<p>héllo</p>"
    assert captured["timeout"] == 3.0
    assert captured["headers"]["User-Agent"] == "tests"


def test_fetcher_maps_timeouts(monkeypatch) -> None:
    def fake_get(url, **kwargs):
        raise requests.Timeout("slow")

    monkeypatch.setattr(web.requests, "get", fake_get)
    with pytest.raises(CaptureTimeoutError):
        RequestsPageFetcher().fetch("https://example.com", 1.0)


def test_fetcher_maps_http_errors(monkeypatch) -> None:
    monkeypatch.setattr(web.requests, "get", lambda url, **kwargs: FakeResponse(b"", status=404))
    with pytest.raises(RenderError):
        RequestsPageFetcher().fetch("https://example.com/missing", 1.0)


def test_fetcher_limits_response_size(monkeypatch) -> None:
    monkeypatch.setattr(web.requests, "get", lambda url, **kwargs: FakeResponse(b"x" * 2048))
    with pytest.raises(RenderError):
        RequestsPageFetcher(max_bytes=1024).fetch("https://example.com", 1.0)


def test_fetcher_enforces_total_deadline(monkeypatch) -> None:
    ticks = iter([0.0, 1.0, 2.5])
    monkeypatch.setattr(web, "monotonic", lambda: next(ticks))
    monkeypatch.setattr(web.requests, "get", lambda url, **kwargs: FakeResponse(b"x" * (200 * 1024)))

    with pytest.raises(CaptureTimeoutError, match="2s"):
        RequestsPageFetcher().fetch("https://example.com", 2.0)
