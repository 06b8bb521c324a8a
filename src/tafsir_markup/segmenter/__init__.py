"""Guillemet parsing, script runs, sentence splitting and the sanitizer."""
