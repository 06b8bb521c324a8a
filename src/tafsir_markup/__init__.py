"""Segment and sanitize mixed Latin/Arabic tafsir text."""

__version__ = "0.1.0"
