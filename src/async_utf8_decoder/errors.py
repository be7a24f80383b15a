"""Errors surfaced by the UTF-8 decoders."""

from typing import Optional

from .utils.logging import format_bytes


class DecodeError(Exception):
    """Base class for every error a decoder surfaces to its consumer."""


class InvalidSequenceError(DecodeError, ValueError):
    """The byte stream contains a sequence that can never be valid UTF-8.

    Attributes:
        offset: Absolute stream offset of the first byte of the offending
            sequence.
        reason: Short description from the UTF-8 codec, e.g.
            ``"invalid start byte"``.
        sequence: The offending bytes.
    """

    def __init__(self, offset: int, reason: str, sequence: bytes = b""):
        self.offset = offset
        self.reason = reason
        self.sequence = bytes(sequence)
        detail = f" `{format_bytes(self.sequence)}`" if self.sequence else ""
        super().__init__(f"invalid utf-8 sequence{detail} at byte {offset}: {reason}")


class UnexpectedEofError(DecodeError, EOFError):
    """The stream ended in the middle of a multi-byte sequence.

    Attributes:
        pending: The incomplete bytes left over at end of stream.
        offset: Absolute stream offset where ``pending`` starts.
    """

    def __init__(self, pending: bytes, offset: int = 0):
        self.pending = bytes(pending)
        self.offset = offset
        super().__init__(f"incomplete utf-8 sequence `{format_bytes(self.pending)}`")


class SourceError(DecodeError):
    """The underlying byte source failed while being read.

    The original exception is available as ``error`` and as ``__cause__``.
    """

    def __init__(self, error: BaseException, message: Optional[str] = None):
        self.error = error
        super().__init__(message or f"byte source failed: {error!r}")


class DecoderBusyError(RuntimeError):
    """A second read was started while another one is still in flight."""
