import logging
from dataclasses import dataclass
from typing import Iterator, Tuple

from spansnip.errors import InvalidSpan, OutOfBoundsSpan
from spansnip.span import Span

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Pos:
    line: int  # 0-based line index
    col: int   # byte offset within the line

    def __repr__(self):
        return f"{self.line}:{self.col}"


@dataclass(frozen=True)
class PosSpan:
    """Both ends of a span that sits on a single line."""
    line: int
    col_start: int
    col_end: int


def _input_lines(span: Span) -> Iterator[bytes]:
    empty = True
    for line in span.lines():
        empty = False
        yield line
    # An empty input still has one (empty) line to point at.
    if empty:
        yield b""


def _out_of_bounds(span: Span, offset: int) -> OutOfBoundsSpan:
    return OutOfBoundsSpan(offset, len(span.input.encode("utf-8")))


def resolve_lines(span: Span) -> Tuple[Pos, Pos, bytes, bytes]:
    """
    Map the span's byte offsets to (line, column) positions.

    Lines are walked in order while accumulating their byte lengths. The
    start is the first line whose end reaches ``span.start``; the end is
    searched from that same line on, so a span on one line resolves to one
    line. Lines past the end position are never read.

    Returns both positions and the physical lines they sit on.
    """
    if span.start < 0:
        raise _out_of_bounds(span, span.start)
    if span.end < span.start:
        raise InvalidSpan(f"span start {span.start} is after end {span.end}", span.start, span.end)

    pos = 0
    start = end = None
    start_line = end_line = b""
    for index, line in enumerate(_input_lines(span)):
        if start is None and pos + len(line) >= span.start:
            start = Pos(index, span.start - pos)
            start_line = line
        if start is not None and pos + len(line) >= span.end:
            end = Pos(index, span.end - pos)
            end_line = line
            break
        pos += len(line)
    if start is None:
        raise _out_of_bounds(span, span.start)
    if end is None:
        raise _out_of_bounds(span, span.end)

    logger.debug("resolved %r to %r..%r", span, start, end)
    return start, end, start_line, end_line


def resolve(span: Span) -> Tuple[Pos, Pos]:
    start, end, _, _ = resolve_lines(span)
    return start, end


def gutter_width(line_index: int) -> int:
    """Number of decimal digits needed to print the 1-based line number."""
    digits = 1
    number = line_index + 1
    while number >= 10:
        digits += 1
        number //= 10
    return digits
