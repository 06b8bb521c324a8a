"""Sanitize raw tafsir text or HTML into canonical ``<p>``/``<arabic>`` markup."""
from __future__ import annotations

import logging
import re
from typing import List, Optional

from tafsir_markup.util.normalization import (
    escape_markup,
    extract_plain_text,
    has_markup,
    normalize_line_endings,
    normalize_nbsp,
)

from .guillemet_parser import CLOSE_MARK, OPEN_MARK, GuillemetParser
from .script_runs import ScriptRun, ScriptRunSplitter, has_arabic, is_space_or_punct
from .segments import PROSE_TAG, QUOTE_TAG
from .sentence_splitter import SentenceSplitter

logger = logging.getLogger(__name__)

_PARAGRAPH_BREAK = re.compile(r"\n[ \t]*\n\s*")
# Numbered placeholders ($1, $12) left over from upstream extraction.
_ARTIFACT = re.compile(r"\$\d+")
_ARABIC_CLASS_BLOCK = re.compile(
    r"<(div|p|blockquote|section)\b[^>]*\bclass\s*=\s*[\"'][^\"']*\barabic\b[^\"']*[\"'][^>]*>"
    r"(.*?)</\1\s*>",
    re.IGNORECASE | re.DOTALL,
)
_PARAGRAPH_BLOCK = re.compile(r"<p(?:\s[^>]*)?>(.*?)</p>", re.IGNORECASE | re.DOTALL)
_INTER_TAG_TEXT = re.compile(r"(?<=>)[^<]+(?=<)")
# "scholars.In" -> "scholars. In"
_RUN_TOGETHER_SENTENCE = re.compile(r"(?<=[a-z])\.(?=[A-Z])")
# "said,he" -> "said, he"
_RUN_TOGETHER_PUNCT = re.compile(r"(?<=[A-Za-z])([,;:!?])(?=[A-Za-z])")
# "FatihahWhich" -> "Fatihah Which"
_RUN_TOGETHER_CASE = re.compile(r"(?<=[a-z])(?=[A-Z])")
_HEADING_SPACING = re.compile(r"(</h[1-3]>)(\s*)(?=<(?:p|h[1-3])\b)", re.IGNORECASE)
_HORIZONTAL_SPACE = re.compile(r"[ \t]{2,}")
_EMPTY_PROSE = re.compile(r"<p>\s*</p>", re.IGNORECASE)
_NO_SPACE_BEFORE = re.compile(r"^[,.;:!?)\]}،؛]")

_QUOTE_OPEN = f"<{QUOTE_TAG}>"


def _wrap(tag: str, text: str) -> str:
    return f"<{tag}>{escape_markup(text)}</{tag}>"


def _has_words(text: str) -> bool:
    # A bare "." left after a quote is not a paragraph.
    return bool(text.strip()) and not is_space_or_punct(text)


def _join_inline(parts: List[str]) -> str:
    """Join inline fragments with single spaces, none before closing punctuation."""
    out = ""
    for part in parts:
        if out and not _NO_SPACE_BEFORE.match(part):
            out += " "
        out += part
    return out


class TafsirSanitizer:
    """
    Multi-pass rewriter from raw tafsir content to canonical markup.

    Stage order is fixed; each stage reads the previous stage's output:

      1. line endings            8. inline Arabic extraction
      2. plain text -> <p>       9. sentence splitting
      3. $N artifacts           10. heading spacing
      4. non-breaking spaces    11. whitespace collapse
      5. class="arabic" blocks  12. empty <p> removal
      6. «…» quotes             13. trim
      7. inter-tag punctuation
    """

    def __init__(
        self,
        run_splitter: Optional[ScriptRunSplitter] = None,
        sentence_splitter: Optional[SentenceSplitter] = None,
        parser: Optional[GuillemetParser] = None,
    ):
        self.runs = run_splitter or ScriptRunSplitter()
        self.sentences = sentence_splitter or SentenceSplitter()
        self.parser = parser or GuillemetParser()

    # ------------------------------------------------------------------
    # MAIN: RAW -> MARKUP
    # ------------------------------------------------------------------
    def to_clean_markup(self, raw: Optional[str]) -> str:
        """Return canonical markup for ``raw``; empty input gives ``""``."""
        if raw is None or not raw.strip():
            return ""

        s = normalize_line_endings(raw)

        if not has_markup(s):
            logger.debug("No tags found; wrapping %d chars of plain text", len(s))
            s = self._plain_text_to_markup(s)

        s = _ARTIFACT.sub("", s)
        s = normalize_nbsp(s)
        s = _ARABIC_CLASS_BLOCK.sub(rf"<{QUOTE_TAG}>\2</{QUOTE_TAG}>", s)
        s = self._process_guillemet_quotes(s)
        s = _INTER_TAG_TEXT.sub(self._fix_punctuation_spacing, s)
        s = self._extract_inline_arabic(s)
        s = self._split_sentences_in_paragraphs(s)
        s = _HEADING_SPACING.sub(rf"\1<{PROSE_TAG}></{PROSE_TAG}>\2", s)
        s = _HORIZONTAL_SPACE.sub(" ", s)
        s = _EMPTY_PROSE.sub("", s)
        return s.strip()

    # ------------------------------------------------------------------
    # PLAIN TEXT PATH
    # ------------------------------------------------------------------
    def _plain_text_to_markup(self, text: str) -> str:
        """Wrap blank-line separated paragraphs; never infers headings."""
        blocks = []
        for paragraph in _PARAGRAPH_BREAK.split(text):
            paragraph = paragraph.strip()
            if paragraph:
                blocks.append(self._process_line_for_arabic(paragraph))
        return "".join(blocks)

    def _process_line_for_arabic(self, line: str) -> str:
        """
        Emit prose and quote blocks for one paragraph.

        Adjacent Arabic runs accumulate before the significance test, so two
        short runs split by a stray character still form one candidate.
        """
        output: List[str] = []
        inline: List[str] = []
        arabic: List[str] = []

        def close_prose(before_quote: bool) -> None:
            if not inline:
                return
            text = _join_inline(inline)
            inline.clear()
            if before_quote:
                text = self.parser.clean_before_quote_block(text)
            if _has_words(text):
                output.append(_wrap(PROSE_TAG, text))

        def flush_arabic() -> None:
            if not arabic:
                return
            accumulated = " ".join(arabic)
            arabic.clear()
            if self.runs.is_significant(accumulated):
                close_prose(before_quote=True)
                output.append(_wrap(QUOTE_TAG, accumulated))
            else:
                inline.append(accumulated)

        for run in self.runs.split(line):
            trimmed = run.text.strip()
            if not trimmed:
                continue
            if run.is_target:
                arabic.append(trimmed)
            else:
                flush_arabic()
                inline.append(trimmed)

        flush_arabic()
        close_prose(before_quote=False)
        return "".join(output)

    # ------------------------------------------------------------------
    # BLOCK STAGES
    # ------------------------------------------------------------------
    def _process_guillemet_quotes(self, markup: str) -> str:
        """Replace each <p> holding «…» with the parser's segment markup."""
        rewritten = 0

        def _replace(match: "re.Match[str]") -> str:
            nonlocal rewritten
            content = match.group(1)
            if not content.strip():
                return match.group(0)
            if OPEN_MARK not in content and CLOSE_MARK not in content:
                return match.group(0)

            segments = self.parser.parse(extract_plain_text(content))
            if not segments:
                return match.group(0)
            rewritten += 1
            return self.parser.to_markup(segments)

        result = _PARAGRAPH_BLOCK.sub(_replace, markup)
        if rewritten:
            logger.debug("Split %d paragraph(s) on guillemet quotes", rewritten)
        return result

    @staticmethod
    def _fix_punctuation_spacing(match: "re.Match[str]") -> str:
        text = match.group(0)
        if not text.strip():
            return text
        text = _RUN_TOGETHER_SENTENCE.sub(". ", text)
        text = _RUN_TOGETHER_PUNCT.sub(r"\1 ", text)
        return _RUN_TOGETHER_CASE.sub(" ", text)

    def _extract_inline_arabic(self, markup: str) -> str:
        """Lift significant Arabic runs out of <p> blocks into <arabic> blocks."""
        rewritten = 0

        def _replace(match: "re.Match[str]") -> str:
            nonlocal rewritten
            content = match.group(1)
            if not content.strip() or _QUOTE_OPEN in content:
                return match.group(0)

            plain = extract_plain_text(content)
            if not has_arabic(plain):
                return match.group(0)

            runs = self.runs.merge_adjacent(self.runs.split(plain))
            rebuilt = self._rebuild_block(runs)
            if not rebuilt:
                return match.group(0)
            rewritten += 1
            return rebuilt

        result = _PARAGRAPH_BLOCK.sub(_replace, markup)
        if rewritten:
            logger.debug("Rebuilt %d paragraph(s) with inline Arabic", rewritten)
        return result

    def _rebuild_block(self, runs: List[ScriptRun]) -> str:
        """Interleave <p> and <arabic> fragments from merged runs."""
        output: List[str] = []
        prose: List[str] = []

        def close_prose(before_quote: bool) -> None:
            if not prose:
                return
            text = _join_inline(prose)
            prose.clear()
            if before_quote:
                text = self.parser.clean_before_quote_block(text)
            if _has_words(text):
                output.append(_wrap(PROSE_TAG, text))

        for run in runs:
            trimmed = run.text.strip()
            if not trimmed:
                continue
            if run.is_target and self.runs.is_significant(trimmed):
                close_prose(before_quote=True)
                output.append(_wrap(QUOTE_TAG, trimmed))
            else:
                # Short Arabic stays inline with the surrounding prose.
                prose.append(trimmed)

        close_prose(before_quote=False)
        return "".join(output)

    def _split_sentences_in_paragraphs(self, markup: str) -> str:
        """One <p> per sentence; headings, lists and quote blocks are untouched."""

        def _replace(match: "re.Match[str]") -> str:
            content = match.group(1)
            if not content.strip() or _QUOTE_OPEN in content:
                return match.group(0)
            split = self.sentences.split_to_markup(content)
            if split is None:
                return f"<{PROSE_TAG}>{content}</{PROSE_TAG}>"
            return split

        return _PARAGRAPH_BLOCK.sub(_replace, markup)


_DEFAULT_SANITIZER = TafsirSanitizer()


def sanitize(raw: Optional[str]) -> str:
    """Sanitize with a shared default :class:`TafsirSanitizer`."""
    return _DEFAULT_SANITIZER.to_clean_markup(raw)


__all__ = ["TafsirSanitizer", "sanitize"]
