"""
asciifold - Last-resort ASCII transliteration

Converts UTF-8 text into an approximate, lossy, ASCII-only spelling in
the manner of Text::Unidecode. ASCII passes through unchanged, every
other character of the Basic Multilingual Plane is replaced from a
fixed table, and characters above it are dropped.

    >>> transliterate("北亰")
    'Bei Jing '
"""

from .engine import (
    CodepointClass,
    DestinationTooSmallError,
    LengthMismatchError,
    TransliterationEngine,
    classify,
    transliterate,
    transliterate_alloc,
    transliterate_const,
    transliterate_into,
    transliterated_length,
)
from .scanner import CodepointScanner, MalformedInputError
from .table import TableError, TransliterationTable, default_table

__version__ = "1.0.0"

__all__ = [
    "CodepointClass",
    "CodepointScanner",
    "DestinationTooSmallError",
    "LengthMismatchError",
    "MalformedInputError",
    "TableError",
    "TransliterationEngine",
    "TransliterationTable",
    "classify",
    "default_table",
    "transliterate",
    "transliterate_alloc",
    "transliterate_const",
    "transliterate_into",
    "transliterated_length",
]
