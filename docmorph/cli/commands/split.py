"""CLI helpers for splitting documents."""

from __future__ import annotations

from argparse import ArgumentParser, _SubParsersAction

from ...core.model import SplitMode
from ...tools.common.interfaces import Source, ToolContext
from . import add_output_argument


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("split", help="Split a PDF into several files")
    parser.add_argument("input", help="Input PDF file")
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--pages-per-file",
        type=int,
        default=1,
        help="Number of pages in each output file (default: 1)",
    )
    group.add_argument("--ranges", help="Explicit page ranges such as '1-3,5'")
    add_output_argument(parser)
    parser.set_defaults(tool_name="split", build_context=_build_context)


def _build_context(args) -> ToolContext:
    mode = SplitMode.BY_RANGES if args.ranges else SplitMode.BY_PAGE_COUNT
    return ToolContext(
        sources=[Source.from_path(args.input)],
        config={"mode": mode, "pages_per_file": args.pages_per_file, "ranges": args.ranges},
    )
