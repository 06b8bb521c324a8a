"""Shared text normalizations for tafsir markup input."""
from __future__ import annotations

import html
import re

# Windows and old-Mac line breaks both collapse to "\n".
_LINE_BREAK = re.compile(r"\r\n?")
# Opening, closing or comment/doctype tags; a bare "a < b" comparison is not a tag.
_TAG = re.compile(r"</?[A-Za-z!][^>]*>")
_WHITESPACE_RUN = re.compile(r"\s+")
_NBSP_ENTITY = "&nbsp;"
_NBSP = "\u00a0"


def normalize_line_endings(text: str) -> str:
    """Collapse every line break form to a single newline."""
    if not text:
        return text or ""
    return _LINE_BREAK.sub("\n", text)


def normalize_nbsp(text: str) -> str:
    """Turn the non-breaking-space entity and character into plain spaces."""
    if not text:
        return text or ""
    return text.replace(_NBSP_ENTITY, " ").replace(_NBSP, " ")


def has_markup(text: str) -> bool:
    """Return True when the text carries at least one tag-like substring."""
    return bool(text) and _TAG.search(text) is not None


def decode_entities(text: str) -> str:
    """
    Decode HTML entities. Non-breaking spaces come back as ordinary spaces so
    downstream whitespace handling sees them.
    """
    if not text:
        return text or ""
    return html.unescape(normalize_nbsp(text)).replace(_NBSP, " ")


def strip_tags(text: str) -> str:
    """Drop every tag, keeping the text between them."""
    if not text:
        return text or ""
    return _TAG.sub("", text)


def extract_plain_text(markup: str) -> str:
    """
    Decode entities, then strip tags.

    Decoding first means escaped tags such as ``&lt;b&gt;`` are removed as
    well, matching how the upstream HTML is usually double-encoded.
    """
    return strip_tags(decode_entities(markup))


def escape_markup(text: str) -> str:
    """Escape ``&``, ``<`` and ``>``; quotes are left alone."""
    return html.escape(text or "", quote=False)


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to one space and trim."""
    return _WHITESPACE_RUN.sub(" ", text or "").strip()


__all__ = [
    "collapse_whitespace",
    "decode_entities",
    "escape_markup",
    "extract_plain_text",
    "has_markup",
    "normalize_line_endings",
    "normalize_nbsp",
    "strip_tags",
]
