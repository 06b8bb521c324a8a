"""Command-line entrypoint for inspecting sanitized tafsir markup."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .guillemet_parser import GuillemetParser
from .sanitizer import TafsirSanitizer


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments for tafsir markup."""
    parser = argparse.ArgumentParser(
        description="Sanitize tafsir text/HTML into <p>/<arabic> markup."
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--text", type=str, default=None, help="Raw text or HTML to sanitize."
    )
    source.add_argument(
        "--file",
        type=Path,
        default=None,
        help="Read raw input from this file (UTF-8). Default: stdin.",
    )
    parser.add_argument(
        "--segments",
        action="store_true",
        help="Print guillemet segments (one per line) instead of markup.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log pipeline stages to stderr.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Quiet mode: skip banner.",
    )
    args = parser.parse_args(argv)
    if args.file is not None and not args.file.is_file():
        parser.error(f"file not found: {args.file}")
    return args


def read_input(args: argparse.Namespace) -> str:
    """Return the raw input selected by ``args``."""
    if args.text is not None:
        return args.text
    if args.file is not None:
        return args.file.read_text(encoding="utf-8")
    return sys.stdin.read()


def format_segments(raw: str) -> str:
    """One ``[i] TYPE: text`` line per parsed segment."""
    segments = GuillemetParser().parse(raw)
    return "\n".join(
        f"[{i}] {seg.type.name}: {seg.text}" for i, seg in enumerate(segments)
    )


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for CLI execution."""
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    raw = read_input(args)

    if not args.quiet:
        banner = (
            "╔══════════════════════════════════════════════╗\n"
            "║ Tafsir Markup CLI                            ║\n"
            "║   For inspection only; use the library API.  ║\n"
            "║   <p> = prose block, <arabic> = quote block. ║\n"
            "╚══════════════════════════════════════════════╝"
        )
        print(banner)

    if args.segments:
        print(format_segments(raw))
    else:
        print(TafsirSanitizer().to_clean_markup(raw))


if __name__ == "__main__":  # pragma: no cover
    main()
