"""CLI helpers for password protection."""

from __future__ import annotations

from argparse import ArgumentParser, _SubParsersAction

from ...tools.common.interfaces import Source, ToolContext
from . import add_output_argument


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("protect", help="Encrypt a PDF with a password")
    parser.add_argument("input", help="Input PDF file")
    parser.add_argument("--password", required=True, help="Password required to open the PDF")
    parser.add_argument("--owner-password", help="Optional owner password")
    add_output_argument(parser)
    parser.set_defaults(tool_name="protect", build_context=_build_context)


def _build_context(args) -> ToolContext:
    return ToolContext(
        sources=[Source.from_path(args.input)],
        config={"password": args.password, "owner_password": args.owner_password},
    )
