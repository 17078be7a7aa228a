"""Command line interface for the DocMorph toolkit."""

from __future__ import annotations

import argparse
import asyncio
from typing import Any, Sequence

from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.table import Table

from ..config import EngineSettings
from ..core.model import DocumentInfo
from ..core.progress import ProgressEvent
from ..core.utils import set_log_level
from ..exceptions import DocMorphError
from ..output.packaging import DirectorySink, deliver
from ..tools import load_builtin_plugins
from ..tools.common.interfaces import ToolContext
from ..tools.common.pipeline import registry
from .commands import capture, compress, convert, info, merge, protect, rotate, split, watermark

COMMAND_MODULES = [merge, split, rotate, compress, watermark, convert, capture, protect, info]

console = Console()


def _create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="docmorph", description="DocMorph document transformation CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True
    for module in COMMAND_MODULES:
        module.configure_parser(subparsers)
    return parser


def _extension(context: ToolContext) -> str:
    fmt = context.config.get("format")
    if fmt is None:
        return "pdf"
    return getattr(fmt, "value", fmt)


def _print_info(document: DocumentInfo, filename: str | None) -> None:
    table = Table(title=f"PDF Information: {filename or 'document'}", show_header=False)
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    table.add_row("Pages", str(document.page_count))
    table.add_row("Encrypted", "Yes" if document.encrypted else "No")
    for field_name in ("title", "subject", "keywords", "producer", "creator"):
        value = getattr(document.metadata, field_name)
        if value:
            table.add_row(field_name.capitalize(), value)
    for page in document.pages:
        table.add_row(
            f"Page {page.index + 1}",
            f"{page.width:g} x {page.height:g} pt, rotated {page.rotation}",
        )
    console.print(table)


def _run_with_progress(tool_name: str, context: ToolContext) -> Any:
    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Starting...", total=100)

        def update_progress(event: ProgressEvent) -> None:
            progress.update(task, completed=event.percent, description=event.status)

        context.on_progress = update_progress
        return asyncio.run(registry.run(tool_name, context))


def main(argv: Sequence[str] | None = None) -> int:
    load_builtin_plugins()
    parser = _create_parser()
    args = parser.parse_args(argv)

    try:
        settings = EngineSettings.from_env()
        set_log_level("DEBUG" if args.verbose else settings.log_level)
        context: ToolContext = args.build_context(args)
        context.settings = settings
        if args.tool_name == "info":
            _print_info(asyncio.run(registry.run("info", context)), context.filename)
            return 0

        result = _run_with_progress(args.tool_name, context)
        destination = deliver(
            result,
            DirectorySink(args.output_dir),
            args.tool_name,
            filename=context.filename,
            extension=_extension(context),
            url=context.config.get("url"),
        )
    except DocMorphError as exc:
        console.print(f"[bold red]✗ Error:[/bold red] {exc}")
        return 1
    except OSError as exc:
        console.print(f"[bold red]✗ Error:[/bold red] {exc}")
        return 1

    console.print(f"[bold green]✓ Saved[/bold green] {destination}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
