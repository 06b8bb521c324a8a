"""Script run splitting, merging and significance tests."""
import numpy as np
import pytest

from tafsir_markup.segmenter.script_runs import (
    MIN_QUOTE_CHARS,
    ScriptRun,
    ScriptRunSplitter,
    arabic_mask,
    count_arabic_chars,
    has_arabic,
    is_space_or_punct,
)

LONG_ARABIC = "هذا نص عربي طويل يحتوي على أكثر من عشرين حرفا"


def test_arabic_mask_marks_each_code_point():
    """Mask has one boolean per character."""
    mask = arabic_mask("ab سلام")
    assert mask.dtype == np.bool_
    assert mask.tolist() == [False, False, False, True, True, True, True]


@pytest.mark.parametrize("ch", ["ا", "َ", "ݐ", "ࢠ", "۝"])
def test_arabic_ranges(ch):
    """Arabic, Supplement and Extended-A characters are all target script."""
    assert has_arabic(ch)


@pytest.mark.parametrize("ch", ["a", " ", "«", "1", "ﭐ"])
def test_non_arabic_characters(ch):
    """Latin, spaces, marks and presentation forms are not target script."""
    assert not has_arabic(ch)


def test_count_includes_diacritics():
    """Harakat count as Arabic characters."""
    assert count_arabic_chars("بِسْمِ") == 6
    assert count_arabic_chars("") == 0


def test_split_alternating_runs(runs):
    """Runs end exactly where classification changes."""
    result = runs.split("Hello عربي world")
    assert result == [
        ScriptRun("Hello ", False),
        ScriptRun("عربي", True),
        ScriptRun(" world", False),
    ]


def test_split_empty(runs):
    assert runs.split("") == []


def test_short_non_arabic_run_joins_following_arabic(runs):
    """A run of at most three characters is absorbed by the next Arabic run."""
    result = runs.split("ab عربي")
    assert len(result) == 1
    assert result[0].is_target
    assert result[0].text.startswith("ab")
    assert result[0].text.endswith("عربي")


def test_spaces_between_arabic_words_are_absorbed(runs):
    """Single spaces between Arabic words do not end the Arabic run sequence."""
    result = runs.split("سلام عليكم")
    assert all(run.is_target for run in result)


def test_longer_non_arabic_run_is_kept(runs):
    """Only short runs are absorbed."""
    result = runs.split("word عربي")
    assert [run.is_target for run in result] == [False, True]


def test_trailing_short_run_is_not_absorbed(runs):
    """Absorption only looks forward."""
    result = runs.split("عربي .")
    assert [run.is_target for run in result] == [True, False]


def test_merge_drops_punctuation_gap(runs):
    """Whitespace/punctuation between Arabic runs does not break accumulation."""
    merged = runs.merge_adjacent(
        [
            ScriptRun("سلام", True),
            ScriptRun(" ...., ", False),
            ScriptRun("عليكم", True),
        ]
    )
    assert merged == [ScriptRun("سلام عليكم", True)]


def test_merge_flushes_on_words(runs):
    """A real Latin run separates two Arabic runs."""
    merged = runs.merge_adjacent(
        [
            ScriptRun("سلام", True),
            ScriptRun(" and then ", False),
            ScriptRun("عليكم", True),
        ]
    )
    assert [run.text for run in merged] == ["سلام", " and then ", "عليكم"]


def test_merge_keeps_trailing_punctuation(runs):
    """Punctuation after the last Arabic run is not lost."""
    merged = runs.merge_adjacent(
        [ScriptRun("He said ", False), ScriptRun("سلام", True), ScriptRun(".", False)]
    )
    assert merged == [
        ScriptRun("He said ", False),
        ScriptRun("سلام", True),
        ScriptRun(".", False),
    ]


@pytest.mark.parametrize(
    "text",
    [
        "Hello عربي world",
        "a ب c د e ف",
        "سلام، عليكم . وبعد ؟ then English text ثم عربي",
        "x" + "ب" * 5 + "y" * 5 + "ت",
        "ا b ت d ث f ج",
    ],
)
def test_merged_runs_strictly_alternate(runs, text):
    """No two neighbouring runs share a classification after merging."""
    merged = runs.merge_adjacent(runs.split(text))
    kinds = [run.is_target for run in merged]
    assert all(a != b for a, b in zip(kinds, kinds[1:]))


def test_is_space_or_punct():
    assert is_space_or_punct(" ,.;! ")
    assert is_space_or_punct("«»")
    assert not is_space_or_punct(" and ")


def test_two_short_words_not_significant(runs):
    """Two Arabic words under the character threshold stay inline."""
    assert not runs.is_significant("سلام، عليكم")


def test_three_words_significant(runs):
    """Three Arabic words are enough."""
    assert runs.is_significant("ا ب ت")


def test_long_run_significant_regardless_of_words(runs):
    """24 Arabic characters is enough even with two words."""
    text = "ا" * 12 + " " + "ب" * 12
    assert count_arabic_chars(text) == MIN_QUOTE_CHARS
    assert runs.is_significant(text)


def test_just_under_char_threshold_two_words(runs):
    """23 characters over two words is not enough."""
    assert not runs.is_significant("ا" * 12 + " " + "ب" * 11)


def test_long_sentence_significant(runs):
    assert runs.is_significant(LONG_ARABIC)


@pytest.mark.parametrize("marker", list("ۖۗۘۙۚۛۜ۝"))
def test_verse_marker_significant(runs, marker):
    """A Quranic marker alone makes a short run significant."""
    assert runs.is_significant(f"ب{marker}")


def test_empty_not_significant(runs):
    assert not runs.is_significant("")


def test_custom_thresholds():
    """Thresholds are constructor-configurable."""
    lenient = ScriptRunSplitter(min_quote_words=2)
    assert lenient.is_significant("سلام، عليكم")
    no_markers = ScriptRunSplitter(verse_markers=())
    assert not no_markers.is_significant("ب۝")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"min_quote_chars": 0},
        {"min_quote_words": 0},
        {"small_run_merge_len": -1},
    ],
)
def test_invalid_thresholds_rejected(kwargs):
    with pytest.raises(ValueError):
        ScriptRunSplitter(**kwargs)
