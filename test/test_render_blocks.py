"""Render block routing tests."""
from tafsir_markup.render.quote_blocks import MARKUP, QUOTE, RenderBlock, render, split_render_blocks
from tafsir_markup.segmenter.sanitizer import sanitize


class RecordingRenderer:
    """Renderer stub that records what it was asked to draw."""

    def __init__(self):
        self.calls = []

    def render_markup(self, markup, styles):
        self.calls.append(("markup", markup, styles))
        return f"HTML({markup})"

    def render_quote(self, text):
        self.calls.append(("quote", text))
        return f"CARD({text})"


def test_split_interleaves_markup_and_quotes():
    blocks = split_render_blocks("<p>Before</p><arabic>نص</arabic><p>after.</p>")
    assert blocks == [
        RenderBlock(MARKUP, "<p>Before</p>"),
        RenderBlock(QUOTE, "نص"),
        RenderBlock(MARKUP, "<p>after.</p>"),
    ]


def test_quote_text_is_entity_decoded():
    blocks = split_render_blocks("<arabic>a &amp; b &lt;c&gt; &quot;d&quot; &#39;e&#39;</arabic>")
    assert blocks == [RenderBlock(QUOTE, "a & b <c> \"d\" 'e'")]


def test_blank_pieces_skipped():
    assert split_render_blocks("  <arabic>  </arabic>  ") == []
    assert split_render_blocks("") == []
    assert split_render_blocks(None) == []


def test_no_quotes_is_one_markup_block():
    assert split_render_blocks("<p>Only prose.</p>") == [
        RenderBlock(MARKUP, "<p>Only prose.</p>")
    ]


def test_render_routes_blocks():
    """Quote blocks go to the quote hook, everything else to the markup hook."""
    renderer = RecordingRenderer()
    styles = {"p": {"display": "block"}, "arabic": {"display": "block"}}
    out = render(sanitize("Before «نص» after."), renderer, styles)
    assert out == ["HTML(<p>Before</p>)", "CARD(نص)", "HTML(<p>after.</p>)"]
    assert renderer.calls[0][2] is styles


def test_render_empty():
    assert render("", RecordingRenderer(), {}) == []
