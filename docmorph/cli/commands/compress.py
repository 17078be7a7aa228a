"""CLI helpers for compressing documents."""

from __future__ import annotations

from argparse import ArgumentParser, _SubParsersAction

from ...core.model import CompressionLevel
from ...tools.common.interfaces import Source, ToolContext
from . import add_output_argument


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("compress", help="Compress a PDF file")
    parser.add_argument("input", help="Input PDF file")
    parser.add_argument(
        "--level",
        choices=[level.value for level in CompressionLevel],
        default=CompressionLevel.MEDIUM.value,
        help="Compression level",
    )
    add_output_argument(parser)
    parser.set_defaults(tool_name="compress", build_context=_build_context)


def _build_context(args) -> ToolContext:
    return ToolContext(
        sources=[Source.from_path(args.input)],
        config={"level": args.level},
    )
