"""Route canonical markup to an external renderer, quote blocks separately."""
from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Protocol

from tafsir_markup.segmenter.segments import QUOTE_TAG

MARKUP = "markup"
QUOTE = "quote"

_QUOTE_BLOCK = re.compile(rf"<{QUOTE_TAG}>(.*?)</{QUOTE_TAG}>", re.DOTALL)

StyleMap = Mapping[str, Mapping[str, Any]]


class MarkupRenderer(Protocol):
    """
    What a renderer must provide.

    ``render_markup`` lays out generic tagged markup using a tag-name to style
    mapping; ``render_quote`` draws one decoded Arabic quote block.
    """

    def render_markup(self, markup: str, styles: StyleMap) -> Any:
        ...

    def render_quote(self, text: str) -> Any:
        ...


@dataclass(frozen=True)
class RenderBlock:
    kind: str  # MARKUP or QUOTE
    content: str


def split_render_blocks(markup: Optional[str]) -> List[RenderBlock]:
    """
    Split markup into generic chunks and quote blocks, in order.

    Quote text is entity-decoded for the quote component; blank pieces are
    skipped.
    """
    if not markup or not markup.strip():
        return []

    blocks: List[RenderBlock] = []
    last_index = 0
    for match in _QUOTE_BLOCK.finditer(markup):
        before = markup[last_index : match.start()]
        if before.strip():
            blocks.append(RenderBlock(MARKUP, before))

        text = html.unescape(match.group(1)).strip()
        if text:
            blocks.append(RenderBlock(QUOTE, text))
        last_index = match.end()

    rest = markup[last_index:]
    if rest.strip():
        blocks.append(RenderBlock(MARKUP, rest))
    return blocks


def render(markup: Optional[str], renderer: MarkupRenderer, styles: StyleMap) -> List[Any]:
    """Render each block with the matching renderer hook."""
    rendered: List[Any] = []
    for block in split_render_blocks(markup):
        if block.kind == QUOTE:
            rendered.append(renderer.render_quote(block.content))
        else:
            rendered.append(renderer.render_markup(block.content, styles))
    return rendered


__all__ = [
    "MARKUP",
    "QUOTE",
    "MarkupRenderer",
    "RenderBlock",
    "render",
    "split_render_blocks",
]
