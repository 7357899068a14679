import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from docsplice.context import annotation_context
from docsplice.core.annotate import annotate_tree
from docsplice.core.languages import detect_language_from_path
from docsplice.core.locator import locate_declaration
from docsplice.core.scanner import scan_source_files
from docsplice.models import DeclarationKind, FileAnnotation
from docsplice.settings import DocspliceSettings
from docsplice.synthesis import OpenAICommentSynthesizer

console = Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format="%(levelname)s %(name)s: %(message)s")


def _render_results(results: list[FileAnnotation]) -> None:
    table = Table(show_lines=False)
    for header in ("file", "inserted", "skipped"):
        table.add_column(header)
    for result in results:
        table.add_row(result.path, str(len(result.inserted)), str(len(result.skipped)))
    console.print(table)
    console.print(f"({len(results)} files)")


def annotate(
    path: Annotated[Path, typer.Argument(help="Root directory (or single file) to document.")],
    model: Annotated[str | None, typer.Option(help="Chat model used to write comments.")] = None,
    attempts: Annotated[int | None, typer.Option(min=1, help="Synthesis attempts per file.")] = None,
    log_level: Annotated[str, typer.Option(help="Logging level.")] = "WARNING",
) -> None:
    """Add TSDoc comments to undocumented declarations under PATH."""
    _configure_logging(log_level)
    settings = DocspliceSettings.from_env(model=model, synthesis_attempts=attempts)

    async def _run() -> list[FileAnnotation]:
        async with annotation_context(settings) as context:
            return await annotate_tree(path, context, OpenAICommentSynthesizer.from_context)

    results = asyncio.run(_run())
    _render_results(results)


def scan(
    path: Annotated[Path, typer.Argument(help="Root directory (or single file) to scan.")],
    log_level: Annotated[str, typer.Option(help="Logging level.")] = "WARNING",
) -> None:
    """List files that still contain undocumented declarations."""
    _configure_logging(log_level)
    settings = DocspliceSettings.from_env()
    paths = scan_source_files(path, settings.source_suffix, settings.excluded_suffix)
    for file_path in paths:
        console.print(str(file_path), soft_wrap=True)
    console.print(f"({len(paths)} files)")


def locate(
    file: Annotated[Path, typer.Argument(help="Source file to inspect.")],
    name: Annotated[str | None, typer.Option(help="Only match declarations with this name.")] = None,
    kind: Annotated[DeclarationKind | None, typer.Option(help="Only match declarations of this kind.")] = None,
) -> None:
    """Show the first undocumented declaration in FILE."""
    try:
        language = detect_language_from_path(file)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="FILE") from exc
    node = locate_declaration(file.read_bytes(), name, kind.value if kind else None, language)
    if node is None:
        console.print("[yellow]No undocumented declaration found[/yellow]")
        raise typer.Exit(code=1)
    console.print(f"[green]{node.kind.value}[/green] {node.name} (line {node.start_row + 1})")
