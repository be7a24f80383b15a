"""
Incomplete-sequence tracking for UTF-8 byte buffers.

When a byte stream is chunked, a multi-byte UTF-8 character may be split
across chunks. ``split`` separates a buffer into the text that can be decoded
now and the trailing bytes that may still be completed by later data, or
reports the position of a sequence that can never become valid.

Example:
    >>> split(b"Hello \\xe4\\xb8")
    Decoded(text='Hello ', remainder=b'\\xe4\\xb8')
    >>> split(b"\\xe4\\xb8\\x96")
    Decoded(text='世', remainder=b'')
"""

import codecs
from dataclasses import dataclass
from typing import Union

# Longest proper prefix of a 4-byte sequence.
MAX_PENDING_BYTES = 3

# Lead bytes whose second byte is narrower than 80..BF (overlong, surrogate,
# above U+10FFFF).
_SECOND_BYTE_RANGES = {
    0xE0: (0xA0, 0xBF),
    0xED: (0x80, 0x9F),
    0xF0: (0x90, 0xBF),
    0xF4: (0x80, 0x8F),
}


@dataclass(frozen=True)
class Decoded:
    """Successful split: ``text`` is ready, ``remainder`` awaits more bytes."""

    text: str
    remainder: bytes = b""


@dataclass(frozen=True)
class Malformed:
    """The buffer holds a sequence that no future bytes can fix.

    Attributes:
        offset: Index of the first byte of the offending sequence in the buffer.
        reason: Codec description such as ``"invalid continuation byte"``.
        sequence: The offending bytes.
    """

    offset: int
    reason: str
    sequence: bytes = b""


DecodeResult = Union[Decoded, Malformed]


def split(buffer: Union[bytes, bytearray, memoryview]) -> DecodeResult:
    """
    Split a buffer into decodable text and an incomplete trailing sequence.

    The strict UTF-8 codec rejects invalid lead bytes, stray continuation
    bytes, overlong forms, encoded surrogates and code points above U+10FFFF.
    With ``final=False`` it stops before a truncated sequence at the end of the
    buffer instead of failing. That tail is kept only if it can still start a
    valid character; a surrogate prefix such as ``ED A0`` is malformed.

    Args:
        buffer: Bytes to decode.

    Returns:
        ``Decoded`` with the text and the undecoded tail (at most
        ``MAX_PENDING_BYTES`` long), or ``Malformed`` describing the first
        invalid sequence. Text preceding an invalid sequence is not returned.
    """
    try:
        text, consumed = codecs.utf_8_decode(buffer, "strict", False)
    except UnicodeDecodeError as exc:
        return Malformed(
            offset=exc.start,
            reason=exc.reason,
            sequence=bytes(exc.object[exc.start : exc.end]),
        )
    remainder = bytes(buffer[consumed:])
    if not _is_valid_prefix(remainder):
        return Malformed(
            offset=consumed,
            reason="invalid continuation byte",
            sequence=remainder[:1],
        )
    return Decoded(text=text, remainder=remainder)


def _is_valid_prefix(remainder: bytes) -> bool:
    """Check that a held-back tail can still become a valid character.

    The codec does not always reject a truncated ``ED A0..BF`` (surrogate)
    prefix, so the second byte is checked against the lead byte's range here.
    """
    if len(remainder) < 2:
        return True
    low, high = _SECOND_BYTE_RANGES.get(remainder[0], (0x80, 0xBF))
    return low <= remainder[1] <= high


class PendingBuffer:
    """
    Fixed-capacity store for the unterminated prefix between decode cycles.

    Holds at most ``MAX_PENDING_BYTES`` bytes; storing more is a bug in the
    caller and raises ``OverflowError``.
    """

    __slots__ = ("_data", "_size")

    def __init__(self) -> None:
        self._data = bytearray(MAX_PENDING_BYTES)
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def __bytes__(self) -> bytes:
        return bytes(self._data[: self._size])

    def __repr__(self) -> str:
        return f"PendingBuffer({bytes(self)!r})"

    def join(self, chunk: Union[bytes, bytearray, memoryview]) -> bytes:
        """Return the pending bytes followed by ``chunk``."""
        if not self._size:
            return bytes(chunk)
        return bytes(self._data[: self._size]) + bytes(chunk)

    def store(self, remainder: bytes) -> None:
        """Replace the pending bytes with ``remainder``.

        Raises:
            OverflowError: If ``remainder`` exceeds the capacity.
        """
        size = len(remainder)
        if size > MAX_PENDING_BYTES:
            raise OverflowError(
                f"pending buffer holds at most {MAX_PENDING_BYTES} bytes, got {size}"
            )
        self._data[:size] = remainder
        self._size = size

    def clear(self) -> None:
        """Drop all pending bytes."""
        self._size = 0
