from typing import Optional

from rich.style import Style
from rich.text import Text

from spansnip.formatter import FormatOption, Hook, Sink, display_snippet
from spansnip.span import Span


class TextSink:
    """Collects snippet output into a ``rich.text.Text``."""

    def __init__(self, text: Optional[Text] = None):
        self.text = text if text is not None else Text()

    def write(self, text: str):
        self.text.append(text)

    def write_styled(self, text: str, style):
        self.text.append(text, style=style)


def styled(style) -> Hook:
    """Build a hook that writes through ``style`` when the sink supports it."""
    if isinstance(style, str):
        style = Style.parse(style)

    def hook(text: str, sink: Sink):
        if hasattr(sink, "write_styled"):
            sink.write_styled(text, style)
        else:
            sink.write(text)

    return hook


def rich_format_option(span_style="bold red", marker_style="bold red",
                       number_style="bold blue") -> FormatOption:
    return FormatOption(
        span_formatter=styled(span_style),
        marker_formatter=styled(marker_style),
        number_formatter=styled(number_style),
    )


def render_rich(span: Span, option: Optional[FormatOption] = None) -> Text:
    if option is None:
        option = rich_format_option()
    sink = TextSink()
    display_snippet(span, sink, option)
    return sink.text
