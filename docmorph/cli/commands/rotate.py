"""CLI helpers for rotating pages."""

from __future__ import annotations

from argparse import ArgumentParser, ArgumentTypeError, _SubParsersAction

from ...tools.common.interfaces import Source, ToolContext
from . import add_output_argument


def _page_numbers(value: str) -> list[int]:
    try:
        return [int(token) - 1 for token in value.split(",") if token.strip()]
    except ValueError as exc:
        raise ArgumentTypeError(f"invalid page list: {value!r}") from exc


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("rotate", help="Rotate pages of a PDF")
    parser.add_argument("input", help="Input PDF file")
    parser.add_argument(
        "--angle",
        type=int,
        default=90,
        help="Clockwise rotation in degrees, a multiple of 90 (default: 90)",
    )
    parser.add_argument(
        "--pages",
        type=_page_numbers,
        help="Comma-separated 1-based page numbers (default: all pages)",
    )
    add_output_argument(parser)
    parser.set_defaults(tool_name="rotate", build_context=_build_context)


def _build_context(args) -> ToolContext:
    return ToolContext(
        sources=[Source.from_path(args.input)],
        config={"delta": args.angle, "pages": args.pages},
    )
