#!/usr/bin/env python3
"""
Build-time generation of transliterated constants.

Reads a JSON object of ``NAME: "literal"`` pairs and writes a Python
module binding each name to its ASCII transliteration, so the work is
done once before the program ships instead of at runtime.

Usage:
    asciifold-codegen literals.json -o myapp/_ascii_constants.py
    asciifold-codegen literals.json --text      # str constants instead of bytes
"""

import argparse
import json
import keyword
import sys
from pathlib import Path
from typing import Mapping, Optional

from .engine import LengthMismatchError, TransliterationEngine, default_engine
from .scanner import MalformedInputError

HEADER = (
    "# Generated by asciifold-codegen. Do not edit.\n"
    "# Source: {source}\n"
)


class CodegenError(Exception):
    """Raised when constants cannot be generated from the input."""
    pass


def is_constant_name(name: str) -> bool:
    """Return True if ``name`` can be bound in the ASCII-only generated module."""
    return name.isascii() and name.isidentifier() and not keyword.iskeyword(name)


def load_literals(path: Path) -> dict[str, str]:
    """
    Load constant definitions from a JSON file.

    Args:
        path: JSON file holding an object of name to string literal.

    Returns:
        Mapping of constant name to literal.

    Raises:
        CodegenError: If the document is not an object of strings, or a
            name is not an ASCII Python identifier.
    """
    try:
        document = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise CodegenError(f"{path}: invalid JSON: {e}") from e

    if not isinstance(document, dict):
        raise CodegenError(f"{path}: expected a JSON object of name: literal pairs")

    for name, literal in document.items():
        if not is_constant_name(name):
            raise CodegenError(f"{path}: {name!r} is not a valid constant name")
        if not isinstance(literal, str):
            raise CodegenError(f"{path}: value of {name} must be a string")

    return document


def generate_module(
    literals: Mapping[str, str],
    engine: Optional[TransliterationEngine] = None,
    as_text: bool = False,
    source: str = "<literals>",
) -> str:
    """
    Render a module of transliterated constants.

    Args:
        literals: Constant name to UTF-8 literal.
        engine: Engine to use. Defaults to the shared engine.
        as_text: Emit ``str`` constants instead of ``bytes``.
        source: Description of the input, recorded in the header.

    Returns:
        Python source text.

    Raises:
        CodegenError: If a name is not an ASCII identifier, a literal is
            malformed, or the engine reports an internal length mismatch.
    """
    engine = engine or default_engine()
    source = source.encode("ascii", "backslashreplace").decode("ascii")
    lines = [HEADER.format(source=source)]

    names = sorted(literals)
    for name in names:
        if not is_constant_name(name):
            raise CodegenError(f"{name!r} is not a valid constant name")
        try:
            value = engine.transliterate_const(literals[name])
        except MalformedInputError as e:
            raise CodegenError(f"{name}: {e}") from e
        except LengthMismatchError as e:
            raise CodegenError(f"{name}: internal error: {e}") from e

        rendered = repr(value.decode("ascii")) if as_text else repr(value)
        lines.append(f"{name} = {rendered}")

    lines.append("")
    lines.append("__all__ = [")
    lines.extend(f"    {name!r}," for name in names)
    lines.append("]")
    return "\n".join(lines) + "\n"


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="asciifold-codegen",
        description="Generate a Python module of ASCII-transliterated constants.",
    )
    parser.add_argument("input", help="JSON file of NAME: \"literal\" pairs")
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Write the module here instead of stdout",
    )
    parser.add_argument(
        "--text",
        action="store_true",
        help="Emit str constants instead of bytes",
    )

    args = parser.parse_args(argv)

    try:
        literals = load_literals(Path(args.input))
        module = generate_module(literals, as_text=args.text, source=Path(args.input).name)
    except (CodegenError, OSError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    if args.output:
        Path(args.output).write_text(module, encoding="ascii")
        print(f"[SAVED] {args.output} ({len(literals)} constants)")
    else:
        sys.stdout.write(module)
    return 0


if __name__ == "__main__":
    sys.exit(main())
