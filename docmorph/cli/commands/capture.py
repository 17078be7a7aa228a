"""CLI helpers for capturing markup or web pages."""

from __future__ import annotations

from argparse import ArgumentParser, _SubParsersAction

from ...tools.common.interfaces import Source, ToolContext
from . import add_output_argument


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("capture", help="Capture HTML or a web page as a PDF")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("input", nargs="?", help="HTML file to capture")
    source.add_argument("--url", help="http(s) URL to capture")
    add_output_argument(parser)
    parser.set_defaults(tool_name="capture", build_context=_build_context)


def _build_context(args) -> ToolContext:
    if args.url:
        return ToolContext(config={"url": args.url})
    return ToolContext(sources=[Source.from_path(args.input)])
