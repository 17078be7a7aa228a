"""Page range parsing for range-based splitting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence

from ...exceptions import ValidationError


@dataclass(frozen=True)
class PageRange:
    """Inclusive, 1-based page range."""

    start: int
    end: int

    @property
    def indices(self) -> range:
        return range(self.start - 1, self.end)


def _invalid(value: object) -> ValidationError:
    return ValidationError(f"Invalid page range: {value!r}")


def _tokens(ranges: Iterable[object]) -> Iterator[str]:
    for item in ranges:
        if isinstance(item, str):
            yield from (token.strip() for token in item.split(",") if token.strip())
        elif isinstance(item, bool):
            raise _invalid(item)
        elif isinstance(item, int):
            yield str(item)
        elif isinstance(item, Sequence) and len(item) == 2:
            yield f"{item[0]}-{item[1]}"
        else:
            raise _invalid(item)


def parse_page_ranges(ranges: str | Sequence[object], *, total_pages: int) -> List[PageRange]:
    """Parse ``"1-3,5"`` style strings, integers or ``(start, end)`` pairs.

    Ranges are kept in the order they were supplied and may overlap.

    Raises:
        ValidationError: If a token is malformed, reversed or outside
            ``1..total_pages``, or if nothing was given.
    """

    if isinstance(ranges, str):
        tokens = [token.strip() for token in ranges.split(",") if token.strip()]
    elif isinstance(ranges, Sequence):
        tokens = list(_tokens(ranges))
    else:
        raise _invalid(ranges)

    parsed: List[PageRange] = []
    for token in tokens:
        start_str, sep, end_str = token.partition("-")
        try:
            start = int(start_str)
            end = int(end_str) if sep else start
        except ValueError as exc:
            raise _invalid(token) from exc
        if start < 1 or end > total_pages or start > end:
            raise ValidationError(f"Page range {token!r} is outside 1..{total_pages}")
        parsed.append(PageRange(start, end))

    if not parsed:
        raise _invalid(ranges)
    return parsed


__all__ = ["PageRange", "parse_page_ranges"]
