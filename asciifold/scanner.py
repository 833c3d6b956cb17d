"""
Codepoint scanner: validates UTF-8 input and yields Unicode scalar values.
"""

from typing import Iterator, Union

InputData = Union[bytes, bytearray, memoryview, str]


class MalformedInputError(ValueError):
    """Raised when input is not well-formed UTF-8."""

    def __init__(self, position: int, reason: str):
        self.position = position
        self.reason = reason
        super().__init__(f"Malformed UTF-8 at offset {position}: {reason}")


class CodepointScanner:
    """
    Forward-only view of an input as a sequence of scalar values.

    The whole input is validated when the scanner is built, so iterating
    it can never fail halfway through. Each call to ``iter()`` starts a
    new pass from the beginning.
    """

    def __init__(self, data: InputData):
        """
        Validate the input.

        Args:
            data: UTF-8 encoded bytes (or a bytes-like object), or an
                already-decoded string.

        Raises:
            MalformedInputError: If the bytes are not valid UTF-8, or the
                string holds lone surrogates.
            TypeError: If ``data`` is neither bytes-like nor ``str``.
        """
        if isinstance(data, str):
            try:
                data.encode("utf-8")
            except UnicodeEncodeError as e:
                # Report the offset the string would have as UTF-8 bytes.
                position = len(data[:e.start].encode("utf-8"))
                raise MalformedInputError(position, e.reason) from e
            self._text = data
        elif isinstance(data, (bytes, bytearray, memoryview)):
            try:
                self._text = bytes(data).decode("utf-8")
            except UnicodeDecodeError as e:
                raise MalformedInputError(e.start, e.reason) from e
        else:
            raise TypeError(
                f"Expected bytes-like object or str, got {type(data).__name__}"
            )

    def __iter__(self) -> Iterator[int]:
        return map(ord, self._text)

    def __len__(self) -> int:
        return len(self._text)
