"""CLI helpers for inspecting documents."""

from __future__ import annotations

from argparse import ArgumentParser, _SubParsersAction

from ...tools.common.interfaces import Source, ToolContext


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("info", help="Show page count, page sizes and metadata")
    parser.add_argument("input", help="Input PDF file")
    parser.set_defaults(tool_name="info", build_context=_build_context)


def _build_context(args) -> ToolContext:
    return ToolContext(sources=[Source.from_path(args.input)])
