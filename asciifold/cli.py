#!/usr/bin/env python3
"""
asciifold CLI

Command-line interface for last-resort ASCII transliteration.

Usage:
    asciifold <source> [options]
    asciifold notes.txt                 # writes ./asciifold_output/notes.ascii.txt
    asciifold ./documents/              # every file in a directory
    asciifold a.txt b.md --stdout       # print instead of saving
    asciifold -c "北亰"                  # transliterate an argument
    cat input.txt | asciifold           # standard input to standard output

Options:
    -o, --output DIR     Output directory (default: ./asciifold_output)
    --stdout             Print to stdout instead of saving files
    -c, --text TEXT      Transliterate TEXT and print it
    --length             Print the transliterated length instead of the text
"""

import argparse
import sys
from typing import Optional

from .core import FileTransliterator
from .engine import default_engine
from .scanner import MalformedInputError


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="asciifold",
        description=(
            "Last-resort ASCII transliteration\n\n"
            "Replaces every non-ASCII character of UTF-8 text with an\n"
            "approximate ASCII spelling. ASCII input passes through unchanged."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  asciifold notes.txt\n"
            "  asciifold ./documents/ -o ./ascii_out\n"
            "  asciifold report.md --stdout\n"
            "  asciifold -c \"Ταΰγετος\"\n"
            "  cat input.txt | asciifold --length\n"
        ),
    )

    parser.add_argument(
        "sources",
        nargs="*",
        help="Files or directories to transliterate (default: standard input)",
    )
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Output directory (default: ./asciifold_output)",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print output to stdout instead of saving to files",
    )
    parser.add_argument(
        "-c", "--text",
        default=None,
        help="Transliterate TEXT instead of reading files",
    )
    parser.add_argument(
        "--length",
        action="store_true",
        help="Print the exact output length in bytes instead of the output",
    )

    args = parser.parse_args(argv)

    if args.text is not None or not args.sources:
        data = args.text if args.text is not None else sys.stdin.buffer.read()
        return _transliterate_stream(data, args.length)

    engine = FileTransliterator(output_dir=args.output)
    save = not args.stdout

    success_count = 0
    error_count = 0

    for source in args.sources:
        try:
            output = engine.convert(source, save=save)
            if args.stdout:
                _write(output)
            success_count += 1
        except (ValueError, OSError) as e:
            print(f"[ERROR] {source}: {e}", file=sys.stderr)
            error_count += 1

    print("-" * 60)
    print(f"  Done: {success_count} transliterated, {error_count} errors")
    if save:
        print(f"  Output: {engine.output_dir}")
    print("-" * 60)

    return 1 if error_count else 0


def _transliterate_stream(data, length_only: bool) -> int:
    """Transliterate one in-memory input to stdout."""
    engine = default_engine()
    try:
        if length_only:
            print(engine.transliterated_length(data))
        else:
            _write(engine.transliterate_alloc(data))
    except MalformedInputError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    return 0


def _write(output: bytes) -> None:
    sys.stdout.flush()
    sys.stdout.buffer.write(output)
    sys.stdout.buffer.flush()


if __name__ == "__main__":
    sys.exit(main())
