"""Arabic script runs: classification, splitting, merging and significance."""
# pylint: disable=too-few-public-methods
from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Tuple

import numpy as np

# Arabic, Arabic Supplement, Arabic Extended-A.
ARABIC_RANGES: Tuple[Tuple[int, int], ...] = (
    (0x0600, 0x06FF),
    (0x0750, 0x077F),
    (0x08A0, 0x08FF),
)
# Small high ligatures and the end-of-ayah ornament: ۖ ۗ ۘ ۙ ۚ ۛ ۜ ۝
QURAN_VERSE_MARKERS: FrozenSet[str] = frozenset("ۖۗۘۙۚۛۜ۝")
MIN_QUOTE_CHARS = 24
MIN_QUOTE_WORDS = 3
# Non-Arabic runs this short (after stripping) are absorbed by the next Arabic run.
SMALL_RUN_MERGE_LEN = 3


@dataclass(frozen=True)
class ScriptRun:
    """A maximal substring of uniform script classification."""

    text: str
    is_target: bool

    def __repr__(self) -> str:
        kind = "AR" if self.is_target else "LAT"
        return f"ScriptRun({kind}, {self.text!r})"


def arabic_mask(text: str) -> np.ndarray:
    """Boolean mask, one entry per code point, True for Arabic-script characters."""
    codes = np.fromiter((ord(ch) for ch in text), dtype=np.int64, count=len(text))
    mask = np.zeros(codes.shape, dtype=bool)
    for low, high in ARABIC_RANGES:
        mask |= (codes >= low) & (codes <= high)
    return mask


def count_arabic_chars(text: str) -> int:
    """Number of Arabic-script characters, diacritics and marks included."""
    if not text:
        return 0
    return int(np.count_nonzero(arabic_mask(text)))


def has_arabic(text: str) -> bool:
    return bool(text) and bool(arabic_mask(text).any())


def is_space_or_punct(text: str) -> bool:
    """True when every character is whitespace or Unicode punctuation."""
    return all(
        ch.isspace() or unicodedata.category(ch).startswith("P") for ch in text
    )


class ScriptRunSplitter:
    """Split mixed Latin/Arabic text into runs and judge Arabic runs."""

    def __init__(
        self,
        min_quote_chars: int = MIN_QUOTE_CHARS,
        min_quote_words: int = MIN_QUOTE_WORDS,
        verse_markers: Optional[Iterable[str]] = None,
        small_run_merge_len: int = SMALL_RUN_MERGE_LEN,
    ):
        if min_quote_chars <= 0:
            raise ValueError("min_quote_chars must be a positive integer")
        if min_quote_words <= 0:
            raise ValueError("min_quote_words must be a positive integer")
        if small_run_merge_len < 0:
            raise ValueError("small_run_merge_len must not be negative")

        self.min_quote_chars = min_quote_chars
        self.min_quote_words = min_quote_words
        self.verse_markers: FrozenSet[str] = (
            QURAN_VERSE_MARKERS if verse_markers is None else frozenset(verse_markers)
        )
        self.small_run_merge_len = small_run_merge_len

    # ------------------------------------------------------------------
    # SPLITTING
    # ------------------------------------------------------------------
    def split(self, text: str) -> List[ScriptRun]:
        """
        Split ``text`` into runs of uniform classification.

        A run ends exactly where the classification changes. Afterwards, one
        forward pass folds each short non-Arabic run (stray connectives, a
        lone digit, a bracket) into the Arabic run right after it.
        """
        if not text:
            return []

        mask = arabic_mask(text)
        # Indices where classification flips start a new run.
        starts = np.concatenate(([0], np.flatnonzero(mask[1:] != mask[:-1]) + 1))
        ends = np.append(starts[1:], len(text))
        runs = [
            ScriptRun(text[start:end], bool(mask[start]))
            for start, end in zip(starts.tolist(), ends.tolist())
        ]
        return self._absorb_small_runs(runs)

    def _absorb_small_runs(self, runs: List[ScriptRun]) -> List[ScriptRun]:
        processed: List[ScriptRun] = []
        i = 0
        while i < len(runs):
            run = runs[i]
            nxt = runs[i + 1] if i + 1 < len(runs) else None
            if (
                not run.is_target
                and nxt is not None
                and nxt.is_target
                and len(run.text.strip()) <= self.small_run_merge_len
            ):
                processed.append(ScriptRun(f"{run.text} {nxt.text}", True))
                i += 2
                continue
            processed.append(run)
            i += 1
        return processed

    # ------------------------------------------------------------------
    # MERGING
    # ------------------------------------------------------------------
    def merge_adjacent(self, runs: List[ScriptRun]) -> List[ScriptRun]:
        """
        Merge Arabic runs separated only by whitespace or punctuation.

        The result strictly alternates between Arabic and non-Arabic runs.
        """
        merged: List[ScriptRun] = []
        arabic_parts: List[str] = []
        pending_gap: Optional[ScriptRun] = None

        def emit(run: ScriptRun) -> None:
            if merged and merged[-1].is_target == run.is_target:
                joiner = " " if run.is_target else ""
                merged[-1] = ScriptRun(merged[-1].text + joiner + run.text, run.is_target)
            else:
                merged.append(run)

        def flush() -> None:
            if arabic_parts:
                emit(ScriptRun(" ".join(arabic_parts), True))
                arabic_parts.clear()

        for run in runs:
            if run.is_target:
                # A whitespace/punctuation gap between two Arabic runs is dropped.
                pending_gap = None
                arabic_parts.append(run.text.strip())
                continue

            if arabic_parts and pending_gap is None and is_space_or_punct(run.text):
                pending_gap = run
                continue

            flush()
            if pending_gap is not None:
                emit(pending_gap)
                pending_gap = None
            emit(run)

        flush()
        if pending_gap is not None:
            emit(pending_gap)
        return merged

    # ------------------------------------------------------------------
    # SIGNIFICANCE
    # ------------------------------------------------------------------
    def is_significant(self, text: str) -> bool:
        """
        Return True when an Arabic run deserves its own quote block.

        Any one of: a Quranic verse marker, at least ``min_quote_chars``
        Arabic characters, or at least ``min_quote_words`` Arabic words.
        """
        if not text:
            return False
        if any(ch in self.verse_markers for ch in text):
            return True
        if count_arabic_chars(text) >= self.min_quote_chars:
            return True
        arabic_words = sum(1 for word in text.split() if has_arabic(word))
        return arabic_words >= self.min_quote_words


__all__ = [
    "ARABIC_RANGES",
    "MIN_QUOTE_CHARS",
    "MIN_QUOTE_WORDS",
    "QURAN_VERSE_MARKERS",
    "SMALL_RUN_MERGE_LEN",
    "ScriptRun",
    "ScriptRunSplitter",
    "arabic_mask",
    "count_arabic_chars",
    "has_arabic",
    "is_space_or_punct",
]
