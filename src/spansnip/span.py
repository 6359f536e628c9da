from dataclasses import dataclass
from typing import Iterator, Optional, TYPE_CHECKING

from spansnip.errors import InvalidSpan

if TYPE_CHECKING:
    from spansnip.formatter import FormatOption, Sink


@dataclass(frozen=True)
class Span:
    """Half-open byte range [start, end) over an input string.

    Offsets count UTF-8 bytes, not characters.
    """
    input: str
    start: int
    end: int

    def __repr__(self):
        return f"Span({self.start}..{self.end})"

    @classmethod
    def new(cls, input: str, start: int, end: int) -> "Span":
        data = input.encode("utf-8")
        if start < 0 or end < 0:
            raise InvalidSpan("span offsets must not be negative", start, end)
        if start > end:
            raise InvalidSpan(f"span start {start} is after end {end}", start, end)
        if end > len(data):
            raise InvalidSpan(
                f"span end {end} is beyond input of length {len(data)}", start, end
            )
        for offset in (start, end):
            if not _is_char_boundary(data, offset):
                raise InvalidSpan(
                    f"offset {offset} is not on a character boundary", start, end
                )
        return cls(input, start, end)

    @classmethod
    def from_chars(cls, input: str, start: int, end: int) -> "Span":
        """Build a span from code point offsets, e.g. from ``re.Match.span()``."""
        if start < 0 or start > end or end > len(input):
            raise InvalidSpan(
                f"character range {start}..{end} is not within the input", start, end
            )
        byte_start = len(input[:start].encode("utf-8"))
        byte_end = byte_start + len(input[start:end].encode("utf-8"))
        return cls(input, byte_start, byte_end)

    @classmethod
    def whole(cls, input: str) -> "Span":
        return cls(input, 0, len(input.encode("utf-8")))

    def get_input(self) -> str:
        return self.input

    def as_bytes(self) -> bytes:
        return self.input.encode("utf-8")[self.start:self.end]

    def as_str(self) -> str:
        return self.as_bytes().decode("utf-8", errors="replace")

    def __len__(self):
        return self.end - self.start

    def lines(self) -> Iterator[bytes]:
        """
        Lazily yield the lines of the whole input, each keeping its ``\\n``.
        """
        data = self.input.encode("utf-8")
        pos = 0
        while pos < len(data):
            newline = data.find(b"\n", pos)
            if newline == -1:
                yield data[pos:]
                return
            yield data[pos:newline + 1]
            pos = newline + 1

    def display_snippet(self, option: Optional["FormatOption"] = None) -> str:
        from spansnip.formatter import render_snippet
        return render_snippet(self, option)

    def write_snippet(self, sink: "Sink", option: Optional["FormatOption"] = None):
        from spansnip.formatter import display_snippet
        display_snippet(self, sink, option)


def _is_char_boundary(data: bytes, offset: int) -> bool:
    if offset == 0 or offset == len(data):
        return True
    # UTF-8 continuation bytes look like 0b10xxxxxx
    return (data[offset] & 0xC0) != 0x80
