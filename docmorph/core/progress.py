"""Progress reporting contract shared by every operation.

An operation owns exactly one :class:`ProgressReporter` per invocation. The
reporter forwards :class:`ProgressEvent` values to the caller's callback in
emission order, keeps percentages inside ``[0, 100]`` and never lets them go
backwards, so a caller can drive a progress bar without re-validating input.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator

from ..exceptions import DocMorphError
from .utils import get_logger

LOGGER = get_logger("docmorph.progress")


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    """A single progress notification."""

    percent: int
    status: str
    error: str | None = None


ProgressCallback = Callable[[ProgressEvent], None]


class ProgressReporter:
    """Single-writer progress channel bound to one operation call."""

    def __init__(self, callback: ProgressCallback | None = None, *, operation: str = "operation") -> None:
        self._callback = callback
        self._operation = operation
        self._last = 0
        self.events: list[ProgressEvent] = []

    @property
    def last_percent(self) -> int:
        return self._last

    def emit(self, percent: float, status: str) -> ProgressEvent:
        value = min(max(int(percent), 0), 100)
        value = max(value, self._last)
        return self._publish(ProgressEvent(value, status))

    def step(self, index: int, total: int, start: int, end: int, status: str) -> ProgressEvent:
        """Emit the interpolated position of item *index* out of *total* within ``[start, end)``."""

        if total <= 0:
            return self.emit(start, status)
        return self.emit(start + (end - start) * index / total, status)

    def complete(self, status: str) -> ProgressEvent:
        return self.emit(100, status)

    def fail(self, message: str) -> ProgressEvent:
        return self._publish(ProgressEvent(self._last, "Failed", error=message))

    @contextmanager
    def track_failures(self) -> Iterator["ProgressReporter"]:
        """Report any :class:`DocMorphError` through the channel, then re-raise it."""

        try:
            yield self
        except DocMorphError as exc:
            LOGGER.error("%s failed: %s", self._operation, exc)
            self.fail(str(exc))
            raise

    def _publish(self, event: ProgressEvent) -> ProgressEvent:
        self._last = event.percent
        self.events.append(event)
        LOGGER.debug("%s: %3d%% %s", self._operation, event.percent, event.status)
        if self._callback is not None:
            self._callback(event)
        return event


__all__ = ["ProgressEvent", "ProgressCallback", "ProgressReporter"]
