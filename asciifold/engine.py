"""
Transliteration engine.

Every scalar value of the input is classified and emitted in order:

- U+0000..U+007F pass through as the same single byte, control
  characters included.
- U+0080..U+FFFF are replaced by the table entry, which may be empty.
- Anything above U+FFFF is dropped.

The output is therefore always ASCII. Three ways of delivering it share
that one routine: a freshly allocated result (``transliterate_alloc``),
a caller-owned buffer (``transliterate_into``) and a memoized constant
(``transliterate_const``). ``transliterated_length`` walks the input the
same way and only counts bytes.
"""

from enum import Enum
from functools import lru_cache
from typing import Iterator, Optional, Union

from .scanner import CodepointScanner, InputData
from .table import ASCII_MAX, BMP_MAX, TransliterationTable, default_table

_ASCII_BYTES = tuple(bytes((codepoint,)) for codepoint in range(ASCII_MAX + 1))


class DestinationTooSmallError(Exception):
    """Raised when a destination buffer cannot hold the output."""

    def __init__(self, capacity: int, required: int):
        self.capacity = capacity
        self.required = required
        super().__init__(
            f"Destination holds {capacity} bytes but {required} are required"
        )


class LengthMismatchError(Exception):
    """Raised when a constant's length pass disagrees with its fill pass."""

    def __init__(self, expected: int, written: int):
        self.expected = expected
        self.written = written
        super().__init__(
            f"Length pass computed {expected} bytes but {written} were written"
        )


class CodepointClass(Enum):
    """How the engine treats a scalar value."""
    ASCII = "ascii"
    MAPPED = "mapped"
    DROPPED = "dropped"


def classify(codepoint: int) -> CodepointClass:
    """Classify a scalar value as passthrough, table-mapped or dropped."""
    if codepoint <= ASCII_MAX:
        return CodepointClass.ASCII
    if codepoint <= BMP_MAX:
        return CodepointClass.MAPPED
    return CodepointClass.DROPPED


class TransliterationEngine:
    """
    Converts UTF-8 text to an ASCII-only approximation.

    An engine only reads its table, so one instance may serve any number
    of callers. Each call works on its own input and output.
    """

    # Results of transliterate_const kept per engine; oldest are evicted first.
    CONSTANT_CACHE_SIZE = 1024

    def __init__(
        self,
        table: Optional[TransliterationTable] = None,
        constant_cache_size: int = CONSTANT_CACHE_SIZE,
    ):
        """
        Initialize the engine.

        Args:
            table: Replacement table. Defaults to the shared
                Unidecode-backed table.
            constant_cache_size: Most literals whose constant form is kept.
        """
        self.table = table if table is not None else default_table()
        self.constant_cache_size = constant_cache_size
        self._constants: dict[Union[str, bytes], bytes] = {}

    def _emit(self, scanner: CodepointScanner) -> Iterator[bytes]:
        """Yield the output bytes of each scalar value, in input order."""
        lookup = self.table.lookup
        for codepoint in scanner:
            kind = classify(codepoint)
            if kind is CodepointClass.ASCII:
                yield _ASCII_BYTES[codepoint]
            elif kind is CodepointClass.MAPPED:
                yield lookup(codepoint)

    def transliterate_alloc(self, data: InputData) -> bytes:
        """
        Transliterate into a newly allocated result.

        Args:
            data: UTF-8 bytes or a decoded string.

        Returns:
            The ASCII output, sized exactly.

        Raises:
            MalformedInputError: If the input is not valid UTF-8.
        """
        scanner = CodepointScanner(data)

        # Most conversions keep or shrink the size, so start from the input length.
        buf = bytearray(len(data))
        end = 0
        for chunk in self._emit(scanner):
            size = len(chunk)
            buf[end:end + size] = chunk
            end += size

        del buf[end:]
        return bytes(buf)

    def transliterate_into(self, data: InputData, dest) -> int:
        """
        Transliterate into a caller-owned buffer.

        Output is written from offset 0. Use ``transliterated_length`` to
        size ``dest`` exactly.

        Args:
            data: UTF-8 bytes or a decoded string.
            dest: Writable buffer (``bytearray``, writable ``memoryview``,
                ``array('B')``).

        Returns:
            Number of bytes written.

        Raises:
            MalformedInputError: If the input is not valid UTF-8. Nothing
                is written in that case.
            DestinationTooSmallError: If ``dest`` is too short. Bytes
                written before the overflow are left in place.
            TypeError: If ``dest`` is read-only.
        """
        scanner = CodepointScanner(data)

        with memoryview(dest) as raw:
            if raw.readonly:
                raise TypeError("Destination buffer is read-only")
            with raw.cast("B") as view:
                capacity = len(view)
                end = 0
                for chunk in self._emit(scanner):
                    size = len(chunk)
                    if end + size > capacity:
                        raise DestinationTooSmallError(
                            capacity, self.transliterated_length(data)
                        )
                    view[end:end + size] = chunk
                    end += size

        return end

    def transliterated_length(self, data: InputData) -> int:
        """
        Return the exact number of bytes the input transliterates to.

        Raises:
            MalformedInputError: If the input is not valid UTF-8.
        """
        return sum(map(len, self._emit(CodepointScanner(data))))

    def transliterate_const(self, literal: Union[str, bytes]) -> bytes:
        """
        Transliterate a constant literal once and reuse the result.

        The output length is computed first, an exactly sized buffer is
        filled, and the two counts must agree. Meant for a fixed set of
        literals: at most ``constant_cache_size`` results are kept.

        Args:
            literal: Immutable ``str`` or ``bytes`` literal.

        Returns:
            The ASCII output.

        Raises:
            TypeError: If ``literal`` is a mutable buffer or another type.
            MalformedInputError: If the literal is not valid UTF-8.
            LengthMismatchError: If the length and fill passes disagree.
        """
        if not isinstance(literal, (str, bytes)):
            raise TypeError(
                f"Constant input must be str or bytes, got {type(literal).__name__}"
            )

        try:
            return self._constants[literal]
        except KeyError:
            pass

        length = self.transliterated_length(literal)
        buf = bytearray(length)
        try:
            written = self.transliterate_into(literal, buf)
        except DestinationTooSmallError as e:
            raise LengthMismatchError(length, e.required) from e
        if written != length:
            raise LengthMismatchError(length, written)

        result = bytes(buf)
        if self.constant_cache_size <= 0:
            return result
        if len(self._constants) >= self.constant_cache_size:
            self._constants.pop(next(iter(self._constants)), None)
        self._constants[literal] = result
        return result

    def transliterate(self, text: InputData) -> str:
        """Transliterate and return the result as a ``str``."""
        return self.transliterate_alloc(text).decode("ascii")


@lru_cache(maxsize=None)
def default_engine() -> TransliterationEngine:
    """Return the shared engine bound to the default table."""
    return TransliterationEngine()


def transliterate_alloc(data: InputData) -> bytes:
    """Transliterate ``data`` with the default engine into a new ``bytes``."""
    return default_engine().transliterate_alloc(data)


def transliterate_into(data: InputData, dest) -> int:
    """Transliterate ``data`` with the default engine into ``dest``."""
    return default_engine().transliterate_into(data, dest)


def transliterated_length(data: InputData) -> int:
    """Return the output length of ``data`` under the default engine."""
    return default_engine().transliterated_length(data)


def transliterate_const(literal: Union[str, bytes]) -> bytes:
    """Transliterate a constant literal with the default engine."""
    return default_engine().transliterate_const(literal)


def transliterate(text: InputData) -> str:
    """Transliterate ``text`` with the default engine and return a ``str``."""
    return default_engine().transliterate(text)
