"""Sentence splitting that never breaks abbreviations, decimals or verse refs."""
from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from .segments import PROSE_TAG

Span = Tuple[int, int]

ABBREVIATIONS: Tuple[str, ...] = (
    "e.g.",
    "i.e.",
    "etc.",
    "Dr.",
    "Mr.",
    "Mrs.",
    "Ms.",
    "No.",
    "vs.",
    "al.",
    "St.",
)

_ABBREVIATION = re.compile(
    r"\b(?:" + "|".join(re.escape(a) for a in ABBREVIATIONS) + r")\s*",
    re.IGNORECASE,
)
_DECIMAL = re.compile(r"\b\d+\.\d+\b")
# Chapter:verse references, optionally a verse range: (18:50), (26:23-24)
_VERSE_REF = re.compile(r"\(\d+:\d+(?:-\d+)?\)")
# A whole inline element, or a lone tag such as <br>.
_INLINE_MARKUP = re.compile(r"<(\w+)\b[^>]*>.*?</\1\s*>|<[^>]+>", re.DOTALL)
_BOUNDARY = re.compile(r"[.!?]\s+")

# Earlier patterns win when two protected spans overlap.
_PROTECTED_PATTERNS: Tuple["re.Pattern[str]", ...] = (
    _INLINE_MARKUP,
    _ABBREVIATION,
    _DECIMAL,
    _VERSE_REF,
)


class SentenceSplitter:
    """Split prose at ``.``/``!``/``?`` followed by whitespace."""

    def __init__(self, protected_patterns: Optional[Sequence["re.Pattern[str]"]] = None):
        self.protected_patterns = tuple(
            _PROTECTED_PATTERNS if protected_patterns is None else protected_patterns
        )

    def protected_spans(self, text: str) -> List[Span]:
        """Locate every protected range, non-overlapping, sorted by start."""
        spans: List[Span] = []
        for pattern in self.protected_patterns:
            for match in pattern.finditer(text):
                start, end = match.span()
                if start == end:
                    continue
                if any(start < s_end and s_start < end for s_start, s_end in spans):
                    continue
                spans.append((start, end))
        return sorted(spans)

    @staticmethod
    def _is_protected(index: int, spans: List[Span]) -> bool:
        return any(start <= index < end for start, end in spans)

    def split(self, text: str) -> List[str]:
        """Return the trimmed sentences of ``text``, terminal punctuation kept."""
        if not text or not text.strip():
            return []

        spans = self.protected_spans(text)
        sentences: List[str] = []
        last_index = 0

        for match in _BOUNDARY.finditer(text):
            if self._is_protected(match.start(), spans):
                continue
            sentence = text[last_index : match.start() + 1].strip()
            if sentence:
                sentences.append(sentence)
            last_index = match.end()

        remaining = text[last_index:].strip()
        if remaining:
            sentences.append(remaining)
        return sentences

    def split_to_markup(self, text: str) -> Optional[str]:
        """
        Wrap each sentence in its own prose tag.

        Returns None when there is at most one sentence, so the caller keeps
        the block unchanged.
        """
        sentences = self.split(text)
        if len(sentences) <= 1:
            return None
        return "".join(f"<{PROSE_TAG}>{s}</{PROSE_TAG}>" for s in sentences)


__all__ = ["ABBREVIATIONS", "SentenceSplitter"]
