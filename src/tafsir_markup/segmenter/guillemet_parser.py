"""Split text into prose and Arabic-quote segments on «…» pairs."""
from __future__ import annotations

import re
from typing import Iterable, List

from tafsir_markup.util.normalization import collapse_whitespace, escape_markup

from .segments import Segment, SegmentType

OPEN_MARK = "«"
CLOSE_MARK = "»"

# Shortest run between an opening and the nearest closing mark, newlines included.
_GUILLEMET_PAIR = re.compile(r"«(.*?)»", re.DOTALL)
_STRAY_MARKS = re.compile(r"[«»]")
_QUOTE_ARTIFACTS = re.compile(r"«|»|<<|>>")
# Hanging punctuation left behind when a quotation was lifted out of the text.
_TRAILING_HANGING = re.compile(r"[\s,;–—\-:]+\Z")
_TRAILING_OPENERS = re.compile(r"[(\[{\"“”]+\Z")
_TRAILING_COLON = re.compile(r"\s*:\s*\Z")
_LEADING_PAREN = re.compile(r"\A\(")


class GuillemetParser:
    """
    Parser for guillemet-quoted Arabic text.

    ``parse`` returns an ordered list ``[prose, quote, prose, ...]``; empty
    pieces are never emitted and no segment ever contains a « or » mark.
    """

    def parse(self, text: str) -> List[Segment]:
        """Parse ``text`` into ordered prose and quote segments."""
        if not text or not text.strip():
            return []

        segments: List[Segment] = []
        last_index = 0
        matched = False

        for match in _GUILLEMET_PAIR.finditer(text):
            matched = True
            self._append_prose(segments, text[last_index : match.start()])

            quote = _STRAY_MARKS.sub("", match.group(1)).strip()
            if quote:
                segments.append(Segment(SegmentType.SCRIPT_QUOTE, quote))
            last_index = match.end()

        if not matched:
            # Orphan markers only: the whole input is one prose segment.
            self._append_prose(segments, text)
            return segments

        self._append_prose(segments, text[last_index:])
        return self._clean_segment_boundaries(segments)

    @staticmethod
    def _append_prose(segments: List[Segment], raw: str) -> None:
        cleaned = collapse_whitespace(_STRAY_MARKS.sub("", raw))
        if cleaned:
            segments.append(Segment(SegmentType.PROSE, cleaned))

    def _clean_segment_boundaries(self, segments: List[Segment]) -> List[Segment]:
        """Tidy prose punctuation next to quote blocks."""
        if len(segments) <= 1:
            return segments

        cleaned: List[Segment] = []
        for i, current in enumerate(segments):
            if current.is_quote:
                cleaned.append(current)
                continue

            text = current.text
            if i + 1 < len(segments) and segments[i + 1].is_quote:
                text = self.clean_before_quote_block(text)
            text = text.strip()
            if i > 0 and segments[i - 1].is_quote:
                text = _LEADING_PAREN.sub(" (", text)

            if text.strip():
                cleaned.append(current.copy_with(text=text))
        return cleaned

    @staticmethod
    def clean_before_quote_block(text: str) -> str:
        """
        Trim prose that directly introduces a quote block.

        Drops quote artifacts and hanging punctuation such as ``said,`` or
        ``Companion (``. A single trailing colon is kept since it introduces
        the quotation.
        """
        t = _QUOTE_ARTIFACTS.sub("", (text or "").rstrip()).rstrip()

        def _hanging(match: "re.Match[str]") -> str:
            return ":" if match.group(0).strip() == ":" else ""

        t = _TRAILING_HANGING.sub(_hanging, t)
        t = _TRAILING_OPENERS.sub("", t)
        t = _TRAILING_COLON.sub(":", t)
        return t.rstrip()

    @staticmethod
    def to_markup(segments: Iterable[Segment]) -> str:
        """Serialize segments to ``<p>`` / ``<arabic>`` markup."""
        parts: List[str] = []
        for segment in segments:
            if not segment.text.strip():
                continue
            tag = segment.type.tag
            parts.append(f"<{tag}>{escape_markup(segment.text)}</{tag}>")
        return "".join(parts)

    @staticmethod
    def to_text(segments: Iterable[Segment]) -> str:
        """Serialize segments back to plain text with quotes in « »."""
        parts: List[str] = []
        for segment in segments:
            if not segment.text.strip():
                continue
            if segment.is_quote:
                parts.append(f"{OPEN_MARK}{segment.text}{CLOSE_MARK}")
            else:
                parts.append(segment.text.strip())
        return " ".join(parts)


_DEFAULT_PARSER = GuillemetParser()


def parse_guillemet_quotes(text: str) -> List[Segment]:
    """Parse with a shared default parser."""
    return _DEFAULT_PARSER.parse(text)


def segments_to_markup(segments: Iterable[Segment]) -> str:
    return GuillemetParser.to_markup(segments)


__all__ = [
    "CLOSE_MARK",
    "GuillemetParser",
    "OPEN_MARK",
    "parse_guillemet_quotes",
    "segments_to_markup",
]
