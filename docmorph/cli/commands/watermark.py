"""CLI helpers for watermarking documents."""

from __future__ import annotations

from argparse import ArgumentParser, _SubParsersAction

from ...core.model import Anchor
from ...tools.common.interfaces import Source, ToolContext
from . import add_output_argument


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("watermark", help="Stamp text on every page")
    parser.add_argument("input", help="Input PDF file")
    parser.add_argument("--text", required=True, help="Watermark text")
    parser.add_argument("--opacity", type=float, help="Opacity between 0.1 and 1.0")
    parser.add_argument("--font-size", type=float, help="Font size in points")
    parser.add_argument("--rotation", type=float, help="Rotation in degrees")
    parser.add_argument(
        "--anchor",
        choices=[anchor.value for anchor in Anchor],
        help="Where the text is placed on each page",
    )
    add_output_argument(parser)
    parser.set_defaults(tool_name="watermark", build_context=_build_context)


def _build_context(args) -> ToolContext:
    return ToolContext(
        sources=[Source.from_path(args.input)],
        config={
            "text": args.text,
            "opacity": args.opacity,
            "font_size": args.font_size,
            "rotation": args.rotation,
            "anchor": args.anchor,
        },
    )
