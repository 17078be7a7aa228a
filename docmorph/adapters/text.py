"""Positioned text extraction built on :meth:`pypdf.PageObject.extract_text`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

from ..core.model import TextRun
from ..core.utils import get_logger
from ..exceptions import ParseError

if TYPE_CHECKING:  # pragma: no cover
    from ..core.container import Page

LOGGER = get_logger("docmorph.adapters.text")


def _device_position(cm: Sequence[float], tm: Sequence[float]) -> tuple[float, float]:
    """Project the text matrix origin through the current transformation matrix."""

    x, y = float(tm[4]), float(tm[5])
    return (
        x * float(cm[0]) + y * float(cm[2]) + float(cm[4]),
        x * float(cm[1]) + y * float(cm[3]) + float(cm[5]),
    )


class PypdfTextExtractor:
    """Collect :class:`TextRun` values in content-stream order."""

    def extract_text_runs(self, page: "Page") -> list[TextRun]:
        runs: list[TextRun] = []

        def visitor(text: str, cm: Any, tm: Any, font_dict: Any, font_size: Any) -> None:
            if not text or not text.strip():
                return
            x, y = _device_position(cm, tm)
            runs.append(TextRun(text=text, x=x, y=y, font_size=float(font_size or 0.0)))

        try:
            page.handle.extract_text(visitor_text=visitor)
        except Exception as exc:  # pypdf exceptions vary
            raise ParseError(f"Failed to extract text from page {page.index + 1}: {exc}") from exc
        LOGGER.debug("Extracted %d text run(s) from page %d", len(runs), page.index + 1)
        return runs


def join_runs(runs: Sequence[TextRun], *, line_tolerance: float = 2.0) -> str:
    """Join *runs* into text, starting a new line whenever the baseline moves."""

    lines: list[str] = []
    current: list[str] = []
    baseline: float | None = None
    for run in runs:
        text = run.text.replace("\r", "")
        if baseline is not None and abs(run.y - baseline) > line_tolerance and current:
            lines.append("".join(current))
            current = []
        current.append(text)
        baseline = run.y
    if current:
        lines.append("".join(current))
    cleaned = (" ".join(part.split()) for chunk in lines for part in chunk.split("\n"))
    return "\n".join(line for line in cleaned if line)


__all__ = ["PypdfTextExtractor", "join_runs"]
