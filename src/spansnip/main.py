import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from spansnip.diagnostics import LEVEL_STYLES, DiagnosticEngine
from spansnip.errors import SnippetError
from spansnip.formatter import render_snippet
from spansnip.resolver import resolve
from spansnip.span import Span
from spansnip.styles import render_rich

app = typer.Typer(
    name="spansnip",
    help="Render source snippets for byte ranges of a file",
    add_completion=False,
)
console = Console(highlight=False)


def _setup_logging(verbose: bool):
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


def _read_source(source_file: Path) -> str:
    # Bytes on disk are what the offsets count, so no newline translation.
    return source_file.read_bytes().decode("utf-8")


@app.command()
def show(
    source_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Path to the source file"),
    start: int = typer.Argument(..., help="Start byte offset (inclusive)"),
    end: int = typer.Argument(..., help="End byte offset (exclusive)"),
    message: Optional[str] = typer.Option(None, "--message", "-m", help="Print a diagnostic header with this message"),
    level: str = typer.Option("error", "--level", "-l", help="Diagnostic level: error, warning or info"),
    hint: Optional[str] = typer.Option(None, "--hint", help="Hint printed below the snippet"),
    color: bool = typer.Option(True, "--color/--no-color", help="Style the snippet"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log resolution details"),
):
    """
    Show the snippet for the byte range START..END of SOURCE_FILE.
    """
    _setup_logging(verbose)
    if level not in LEVEL_STYLES:
        console.print(f"[bold red]Error:[/bold red] unknown level {escape(repr(level))}")
        raise typer.Exit(code=1)
    try:
        span = Span.new(_read_source(source_file), start, end)
        if message is not None:
            engine = DiagnosticEngine(console=console, color=color)
            engine.report(level, message, span, hint)
        elif color:
            console.print(render_rich(span), end="", soft_wrap=True)
        else:
            typer.echo(render_snippet(span), nl=False)
    except (SnippetError, UnicodeDecodeError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)


@app.command()
def locate(
    source_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Path to the source file"),
    offset: int = typer.Argument(..., help="Byte offset to locate"),
):
    """
    Print the 1-based line and 0-based byte column of OFFSET.
    """
    try:
        span = Span.new(_read_source(source_file), offset, offset)
        pos, _ = resolve(span)
    except (SnippetError, UnicodeDecodeError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)
    typer.echo(f"{pos.line + 1}:{pos.col}")


if __name__ == "__main__":
    app()
