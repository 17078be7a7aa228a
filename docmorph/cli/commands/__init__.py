"""Sub-command modules for the ``docmorph`` CLI."""

from __future__ import annotations

from argparse import ArgumentParser


def add_output_argument(parser: ArgumentParser) -> None:
    parser.add_argument(
        "-o",
        "--output-dir",
        default=".",
        help="Directory receiving the result (default: current directory)",
    )
