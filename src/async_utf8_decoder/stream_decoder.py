"""
UTF-8 safe push decoder for handling incomplete multi-byte sequences.

This module provides a synchronous decoder for callers that already receive
byte chunks (for example from a callback) and need whole characters out of
them, without any I/O of its own.
"""

from typing import Union

from .errors import InvalidSequenceError, UnexpectedEofError
from .tracker import Malformed, PendingBuffer, split


class StreamDecoder:
    """
    A stateful UTF-8 stream decoder that handles incomplete multi-byte sequences.

    When network data is chunked, UTF-8 multi-byte characters may be split across
    chunks. This decoder keeps the incomplete tail (at most 3 bytes) and combines
    it with the next chunk. Invalid input raises instead of being replaced.

    Example:
        >>> decoder = StreamDecoder()
        >>> decoder.decode(b"Hello \\xe4\\xb8")  # Incomplete Chinese char
        'Hello '
        >>> decoder.decode(b"\\x96\\xe7\\x95\\x8c")  # Rest of "世界"
        '世界'
        >>> decoder.flush()
    """

    def __init__(self) -> None:
        """Initialize the decoder with an empty pending buffer."""
        self._pending = PendingBuffer()
        self._position = 0

    def decode(self, chunk_bytes: Union[bytes, bytearray, memoryview]) -> str:
        """
        Decode a chunk of bytes, keeping any incomplete trailing sequence.

        Args:
            chunk_bytes: The bytes to decode.

        Returns:
            The text completed by this chunk. Empty when the chunk only
            extends a pending sequence.

        Raises:
            InvalidSequenceError: If the combined bytes contain an invalid
                sequence. Pending bytes are dropped.
        """
        candidate = self._pending.join(chunk_bytes)
        result = split(candidate)

        if isinstance(result, Malformed):
            self._pending.clear()
            raise InvalidSequenceError(
                offset=self._position + result.offset,
                reason=result.reason,
                sequence=result.sequence,
            )

        self._pending.store(result.remainder)
        self._position += len(candidate) - len(result.remainder)
        return result.text

    def flush(self) -> None:
        """
        Signal end of stream.

        Raises:
            UnexpectedEofError: If an incomplete sequence is still pending.
        """
        if not self._pending:
            return
        pending = bytes(self._pending)
        self._pending.clear()
        raise UnexpectedEofError(pending, offset=self._position)

    def reset(self) -> None:
        """Forget pending bytes and restart offsets at zero."""
        self._pending.clear()
        self._position = 0

    @property
    def has_pending(self) -> bool:
        """Check if there are pending bytes waiting to be decoded."""
        return bool(self._pending)

    @property
    def pending_bytes(self) -> bytes:
        """The incomplete sequence carried over to the next chunk."""
        return bytes(self._pending)

    @property
    def position(self) -> int:
        """Number of stream bytes decoded into text so far."""
        return self._position
