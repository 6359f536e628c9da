import io

from rich.style import Style
from rich.text import Text

from spansnip.formatter import render_snippet
from spansnip.span import Span
from spansnip.styles import TextSink, render_rich, rich_format_option, styled


def _styled_parts(text, style):
    style = Style.parse(style)
    return [text.plain[s.start:s.end] for s in text.spans if s.style == style]


def test_render_rich_matches_plain_rendering():
    span = Span.new("a\nb\nc\nd\n", 0, 7)
    assert render_rich(span).plain == render_snippet(span)


def test_render_rich_styles_span_and_markers():
    text = render_rich(Span.new("hello\n", 1, 4))
    assert _styled_parts(text, "bold red") == ["ell", "^^^"]
    assert _styled_parts(text, "bold blue") == ["|", "1", "|", "|"]


def test_custom_styles():
    option = rich_format_option(span_style="underline", marker_style="green", number_style="dim")
    text = render_rich(Span.new("x = y\n", 4, 5), option)
    assert _styled_parts(text, "underline") == ["y"]
    assert _styled_parts(text, "green") == ["^"]


def test_styled_hook_falls_back_to_plain_write():
    sink = io.StringIO()
    styled("bold")("text", sink)
    assert sink.getvalue() == "text"


def test_text_sink_appends_to_existing_text():
    sink = TextSink(Text("header\n"))
    sink.write("plain")
    sink.write_styled("!", "bold")
    assert sink.text.plain == "header\nplain!"
