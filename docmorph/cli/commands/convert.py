"""CLI helpers for image and office exports."""

from __future__ import annotations

from argparse import ArgumentParser, _SubParsersAction

from ...core.model import ImageFormat, OfficeFormat
from ...tools.common.interfaces import Source, ToolContext
from . import add_output_argument


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    image_parser = subparsers.add_parser("to-image", help="Render each page to an image")
    image_parser.add_argument("input", help="Input PDF file")
    image_parser.add_argument(
        "--format",
        choices=[fmt.value for fmt in ImageFormat],
        default=ImageFormat.PNG.value,
        help="Image format",
    )
    add_output_argument(image_parser)
    image_parser.set_defaults(tool_name="to-image", build_context=_build_context)

    office_parser = subparsers.add_parser("to-office", help="Export page text to an office file")
    office_parser.add_argument("input", help="Input PDF file")
    office_parser.add_argument(
        "--format",
        choices=[fmt.value for fmt in OfficeFormat],
        default=OfficeFormat.DOCX.value,
        help="Office format",
    )
    add_output_argument(office_parser)
    office_parser.set_defaults(tool_name="to-office", build_context=_build_context)


def _build_context(args) -> ToolContext:
    return ToolContext(
        sources=[Source.from_path(args.input)],
        config={"format": args.format},
    )
