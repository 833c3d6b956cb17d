"""
Transliteration table for the Basic Multilingual Plane.

The table is organised as 256 pages of 256 entries. The high byte of a
codepoint selects the page and the low byte selects the entry, so a
lookup is two tuple indexes. Every entry is an immutable, possibly empty
``bytes`` object whose bytes are all below 0x80. Entries for codepoints
above 0x7F hold no control characters other than newline.
"""

from functools import lru_cache
from typing import Callable, Mapping, Optional, Union

from unidecode import unidecode

PAGE_COUNT = 256
PAGE_SIZE = 256
BMP_MAX = 0xFFFF
ASCII_MAX = 0x7F

# Replacements for non-ASCII codepoints never contain these; newline is allowed.
CONTROL_BYTES = frozenset(range(0x20)) - {0x0A} | {0x7F}

# Surrogate codepoints are never scalar values.
SURROGATE_PAGES = range(0xD8, 0xE0)

_EMPTY_PAGE = (b"",) * PAGE_SIZE

Page = tuple[bytes, ...]
Replacement = Union[str, bytes]


class TableError(Exception):
    """Raised when table data violates the ASCII-only contract."""
    pass


def _to_ascii(codepoint: int, replacement: Optional[Replacement]) -> bytes:
    """Convert a raw table value to a validated ASCII byte string."""
    if replacement is None:
        return b""
    if isinstance(replacement, str):
        try:
            value = replacement.encode("ascii")
        except UnicodeEncodeError as e:
            raise TableError(
                f"Non-ASCII replacement {replacement!r} for U+{codepoint:04X}"
            ) from e
    else:
        value = bytes(replacement)
        if not value.isascii():
            raise TableError(
                f"Non-ASCII replacement {value!r} for U+{codepoint:04X}"
            )

    if codepoint > ASCII_MAX:
        for byte in value:
            if byte in CONTROL_BYTES:
                raise TableError(
                    f"Control byte {byte:#04x} in replacement for U+{codepoint:04X}"
                )
    return value


def _unidecode_page(page: int) -> Page:
    """Build one page from the Unidecode data, one codepoint at a time."""
    if page in SURROGATE_PAGES:
        return _EMPTY_PAGE
    base = page << 8
    return tuple(
        _to_ascii(base + entry, unidecode(chr(base + entry)))
        for entry in range(PAGE_SIZE)
    )


class TransliterationTable:
    """
    Read-only mapping from BMP codepoint to ASCII replacement bytes.

    Pages are produced by a loader on first access and cached. A built
    page is never modified, so tables can be shared between threads.
    """

    def __init__(self, page_loader: Callable[[int], Page]):
        """
        Initialize the table.

        Args:
            page_loader: Callable returning the 256-entry tuple for a page
                index. It must return validated ASCII ``bytes`` entries.
        """
        self._page_loader = page_loader
        self._pages: dict[int, Page] = {}

    @classmethod
    def from_unidecode(cls) -> "TransliterationTable":
        """Create a table backed by the Unidecode transliteration data."""
        return cls(_unidecode_page)

    @classmethod
    def from_mapping(cls, mapping: Mapping[int, Replacement]) -> "TransliterationTable":
        """
        Create a table from a sparse codepoint mapping.

        Codepoints absent from the mapping get an empty replacement, and
        codepoints below 0x80 that are absent map to themselves.

        Args:
            mapping: Codepoint to replacement (``str`` or ``bytes``).

        Returns:
            A fully built table.

        Raises:
            TableError: If a key is outside the BMP, a value is not ASCII, or
                a value for a non-ASCII codepoint holds a control character.
        """
        pages = [list(_EMPTY_PAGE) for _ in range(PAGE_COUNT)]
        for codepoint in range(0x80):
            pages[0][codepoint] = bytes((codepoint,))

        for codepoint, replacement in mapping.items():
            if not 0 <= codepoint <= BMP_MAX:
                raise TableError(f"Codepoint {codepoint:#x} is outside the BMP")
            pages[codepoint >> 8][codepoint & 0xFF] = _to_ascii(codepoint, replacement)

        frozen = [tuple(page) for page in pages]
        table = cls(frozen.__getitem__)
        table._pages = dict(enumerate(frozen))
        return table

    def page(self, index: int) -> Page:
        """Return the full tuple of entries for a page, loading it if needed."""
        try:
            return self._pages[index]
        except KeyError:
            pass

        if not 0 <= index < PAGE_COUNT:
            raise IndexError(f"Page index {index} out of range")

        entries = tuple(self._page_loader(index))
        if len(entries) != PAGE_SIZE:
            raise TableError(
                f"Page {index:#04x} has {len(entries)} entries, expected {PAGE_SIZE}"
            )
        self._pages[index] = entries
        return entries

    def lookup(self, codepoint: int) -> bytes:
        """
        Return the replacement for a BMP codepoint.

        The caller guarantees ``0 <= codepoint <= 0xFFFF``.
        """
        return self.page(codepoint >> 8)[codepoint & 0xFF]

    def __len__(self) -> int:
        return PAGE_COUNT * PAGE_SIZE


@lru_cache(maxsize=None)
def default_table() -> TransliterationTable:
    """Return the process-wide Unidecode-backed table."""
    return TransliterationTable.from_unidecode()
