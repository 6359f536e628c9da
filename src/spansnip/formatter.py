import io
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from spansnip.errors import SinkWriteFailure
from spansnip.resolver import Pos, PosSpan, gutter_width, resolve_lines
from spansnip.span import Span

logger = logging.getLogger(__name__)

# Anything with a ``write(str)`` method: io.StringIO, sys.stdout, TextSink...
Sink = Any
Hook = Callable[[str, Sink], Any]


def write_plain(text: str, sink: Sink):
    sink.write(text)


@dataclass
class FormatOption:
    """
    The three hooks the renderer calls instead of writing text itself.

    ``span_formatter`` receives the highlighted text, ``marker_formatter``
    the ``^``/``v`` markers and ``number_formatter`` the line numbers and
    ``|`` separators. Each one is called as ``hook(text, sink)``.
    """
    span_formatter: Hook = write_plain
    marker_formatter: Hook = write_plain
    number_formatter: Hook = write_plain

    @classmethod
    def default(cls) -> "FormatOption":
        return cls()


def visualize_whitespace(text: str) -> str:
    return text.replace("\n", "␊").replace("\r", "␍")


def _text(data: bytes) -> str:
    return visualize_whitespace(data.decode("utf-8", errors="replace"))


def _spacing(text: str) -> str:
    # Keep tabs so markers stay under tab-indented source.
    return "".join(c if c == "\t" else " " for c in text)


class _SnippetWriter:
    def __init__(self, sink: Sink, option: FormatOption):
        self.sink = sink
        self.option = option

    def _call(self, hook: Hook, text: str):
        try:
            hook(text, self.sink)
        except SinkWriteFailure:
            raise
        except Exception as e:
            raise SinkWriteFailure(f"failed to write snippet: {e}") from e

    def plain(self, text: str):
        self._call(write_plain, text)

    def span(self, text: str):
        self._call(self.option.span_formatter, text)

    def marker(self, text: str):
        self._call(self.option.marker_formatter, text)

    def number(self, text: str):
        self._call(self.option.number_formatter, text)

    def spacer(self, digits: int):
        self.plain(" " * digits + " ")
        self.number("|")

    def numbered(self, line: int, digits: int):
        self.number(f"{line + 1:>{digits}}")
        self.plain(" ")
        self.number("|")


def _display_single_line(out: _SnippetWriter, digits: int, line: bytes, pos: PosSpan):
    prefix = _text(line[:pos.col_start])

    out.spacer(digits)
    out.plain("\n")

    out.numbered(pos.line, digits)
    out.plain(" " + prefix)
    out.span(_text(line[pos.col_start:pos.col_end]))
    out.plain(_text(line[pos.col_end:]))
    out.plain("\n")

    out.spacer(digits)
    out.plain(" " + _spacing(prefix))
    out.marker("^" * (pos.col_end - pos.col_start))
    out.plain("\n")


def _display_multi_line(out: _SnippetWriter, digits: int,
                        start_line: bytes, start: Pos,
                        end_line: bytes, end: Pos):
    prefix = _text(start_line[:start.col])

    out.spacer(digits)
    out.plain(" " + _spacing(prefix))
    out.marker("v")
    out.plain("\n")

    out.numbered(start.line, digits)
    out.plain(" " + prefix)
    out.span(_text(start_line[start.col:]))
    out.plain("\n")

    if end.line - start.line > 1:
        out.spacer(digits)
        out.plain(" ...\n")

    highlighted = _text(end_line[:end.col])
    out.numbered(end.line, digits)
    out.plain(" ")
    out.span(highlighted)
    out.plain(_text(end_line[end.col:]))
    out.plain("\n")

    # The caret sits under the last highlighted character.
    out.spacer(digits)
    out.plain(" " + _spacing(highlighted[:-1]))
    out.marker("^")
    out.plain("\n")


def display_snippet(span: Span, sink: Sink, option: Optional[FormatOption] = None):
    """
    Write a gutter-aligned rendering of ``span`` to ``sink``.

    Raises OutOfBoundsSpan (InvalidSpan for a reversed range) before
    anything is written if the span cannot be resolved, and
    SinkWriteFailure if the sink or a hook fails part way.
    """
    if option is None:
        option = FormatOption.default()
    start, end, start_line, end_line = resolve_lines(span)
    digits = gutter_width(end.line)
    out = _SnippetWriter(sink, option)

    if start.line == end.line:
        logger.debug("single-line snippet on line %d", start.line + 1)
        _display_single_line(out, digits, start_line, PosSpan(start.line, start.col, end.col))
    else:
        logger.debug("multi-line snippet on lines %d-%d", start.line + 1, end.line + 1)
        _display_multi_line(out, digits, start_line, start, end_line, end)


def render_snippet(span: Span, option: Optional[FormatOption] = None) -> str:
    buffer = io.StringIO()
    display_snippet(span, buffer, option)
    return buffer.getvalue()
