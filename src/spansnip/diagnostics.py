from dataclasses import dataclass
from typing import List, Optional
from rich.console import Console
from rich.text import Text

from spansnip.formatter import FormatOption, render_snippet
from spansnip.resolver import resolve
from spansnip.span import Span
from spansnip.styles import rich_format_option, render_rich

LEVEL_STYLES = {
    "error": "bold red",
    "warning": "bold yellow",
    "info": "bold cyan",
}


def format_location(span: Span) -> str:
    start, _ = resolve(span)
    return f"{start.line + 1}:{start.col}"


@dataclass
class Diagnostic:
    message: str
    span: Span
    level: str = "error"  # error, warning, info
    hint: Optional[str] = None

    def render(self, option: Optional[FormatOption] = None) -> str:
        """Plain-text rendering: header, snippet and hint."""
        lines = [f"{self.level.upper()}: {self.message} at {format_location(self.span)}"]
        lines.append(render_snippet(self.span, option).rstrip("\n"))
        if self.hint:
            lines.append(f"  Hint: {self.hint}")
        return "\n".join(lines)


class DiagnosticEngine:
    def __init__(self, console: Optional[Console] = None, color: bool = True):
        self.diagnostics: List[Diagnostic] = []
        self.has_errors = False
        self.color = color
        self.console = console if console is not None else Console(highlight=False)

    def report(self, level: str, message: str, span: Span, hint: Optional[str] = None) -> Diagnostic:
        if level not in LEVEL_STYLES:
            raise ValueError(f"unknown diagnostic level: {level}")
        diag = Diagnostic(message, span, level, hint)
        location = format_location(span)
        self.diagnostics.append(diag)
        if level == "error":
            self.has_errors = True

        if self.color:
            style = LEVEL_STYLES[level]
            header = Text.assemble((f"{level.upper()}:", style), f" {message} at {location}")
            self.console.print(header)
            self.console.print(render_rich(span, rich_format_option(span_style=style, marker_style=style)), end="", soft_wrap=True)
            if hint:
                self.console.print(Text.assemble("  ", ("Hint:", "blue"), f" {hint}"))
        else:
            self.console.print(Text(diag.render()), soft_wrap=True)
        return diag

    def error(self, message: str, span: Span, hint: Optional[str] = None) -> Diagnostic:
        return self.report("error", message, span, hint)

    def warning(self, message: str, span: Span, hint: Optional[str] = None) -> Diagnostic:
        return self.report("warning", message, span, hint)
