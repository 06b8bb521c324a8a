"""Shared pytest fixtures for tafsir markup tests."""

import pytest

from tafsir_markup.segmenter.guillemet_parser import GuillemetParser
from tafsir_markup.segmenter.sanitizer import TafsirSanitizer
from tafsir_markup.segmenter.script_runs import ScriptRunSplitter


@pytest.fixture
def sanitizer():
    """Return a fresh TafsirSanitizer instance."""
    return TafsirSanitizer()


@pytest.fixture
def parser():
    """Return a fresh GuillemetParser instance."""
    return GuillemetParser()


@pytest.fixture
def runs():
    """Return a ScriptRunSplitter with default thresholds."""
    return ScriptRunSplitter()
