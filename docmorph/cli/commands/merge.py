"""CLI helpers for merging documents."""

from __future__ import annotations

from argparse import ArgumentParser, _SubParsersAction

from ...tools.common.interfaces import Source, ToolContext
from . import add_output_argument


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("merge", help="Merge multiple PDFs into one")
    parser.add_argument("inputs", nargs="+", help="Input PDF files, in merge order")
    parser.add_argument(
        "--bookmarks",
        action="store_true",
        help="Add an outline entry named after each input file",
    )
    add_output_argument(parser)
    parser.set_defaults(tool_name="merge", build_context=_build_context)


def _build_context(args) -> ToolContext:
    return ToolContext(
        sources=[Source.from_path(path) for path in args.inputs],
        config={"bookmarks": args.bookmarks},
    )
