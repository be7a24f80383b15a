"""
Asynchronous and incremental UTF-8 decoder.

``Utf8Decoder`` turns any asynchronous byte source into an async iterator of
text chunks. Characters split across reads are held back (at most 3 bytes)
until the rest of their bytes arrive, so joining every chunk gives the same
text as decoding the whole stream at once.

Example:
    >>> async with aiohttp.ClientSession() as session:
    ...     async with session.get(url) as response:
    ...         async for text in Utf8Decoder(response.content):
    ...             print(text, end="")
"""

import asyncio
from enum import Enum
from typing import Any, AsyncIterable, AsyncIterator, NoReturn, Optional

from .config import DecoderConfig, get_decoder_config
from .errors import (
    DecoderBusyError,
    InvalidSequenceError,
    SourceError,
    UnexpectedEofError,
)
from .sources import ByteSource, as_byte_source
from .stream_decoder import StreamDecoder
from .utils.logging import format_bytes, log_debug, log_error, log_warning


class DecoderState(Enum):
    """Lifecycle of a ``Utf8Decoder``."""

    IDLE = "idle"
    AWAITING_BYTES = "awaiting_bytes"
    DECODING = "decoding"
    ERRORED = "errored"
    COMPLETED = "completed"

    @property
    def terminal(self) -> bool:
        """Whether the decoder can produce no further items."""
        return self in (DecoderState.ERRORED, DecoderState.COMPLETED)


class Utf8Decoder:
    """
    Incremental UTF-8 decoder over an asynchronous byte source.

    Each ``__anext__`` reads from the source until at least one whole
    character is available and returns the decoded text. Empty strings are
    never produced: reads that only extend a pending sequence are retried
    transparently. Decoding errors and source failures are raised from
    ``__anext__``; after one the iterator is exhausted.

    Only one ``__anext__`` may be in flight at a time. Cancelling it while it
    waits on the source keeps every byte already read; the decoder can be
    advanced again afterwards if the source's own read is cancellation safe.

    Args:
        source: An object with ``async read(n)`` (``asyncio.StreamReader``,
            ``aiohttp.StreamReader``, ``ByteChannel``) or an async iterable
            of byte chunks.
        chunk_size: Maximum bytes requested per read. Defaults to the
            configured chunk size (8 KiB).
        config: Explicit configuration instead of the environment-derived one.
    """

    def __init__(
        self,
        source: Any,
        chunk_size: Optional[int] = None,
        *,
        config: Optional[DecoderConfig] = None,
    ):
        if chunk_size is not None:
            config = DecoderConfig(chunk_size=chunk_size)
        elif config is None:
            config = get_decoder_config()

        self._inner = source
        self._source: ByteSource = as_byte_source(source)
        self._chunk_size = config.chunk_size
        self._decoder = StreamDecoder()
        self._state = DecoderState.IDLE
        self._busy = False

    def __repr__(self) -> str:
        return (
            f"<Utf8Decoder state={self._state.value} "
            f"pending={self._decoder.pending_bytes!r} "
            f"source={type(self._inner).__name__}>"
        )

    @property
    def state(self) -> DecoderState:
        """Current lifecycle state."""
        return self._state

    @property
    def chunk_size(self) -> int:
        """Maximum number of bytes requested from the source per read."""
        return self._chunk_size

    @property
    def source(self) -> Any:
        """The object this decoder is pulling bytes from."""
        return self._inner

    @property
    def pending_bytes(self) -> bytes:
        """Bytes of an incomplete character waiting for the next read."""
        return self._decoder.pending_bytes

    def into_inner(self) -> Any:
        """Stop decoding and return the underlying source.

        Pending bytes are discarded.
        """
        self._finish(DecoderState.COMPLETED)
        return self._inner

    def __aiter__(self) -> "Utf8Decoder":
        return self

    async def __anext__(self) -> str:
        if self._busy:
            raise DecoderBusyError(
                "another read is already in progress on this decoder"
            )
        if self._state.terminal:
            raise StopAsyncIteration

        self._busy = True
        try:
            return await self._next_text()
        finally:
            self._busy = False

    async def _next_text(self) -> str:
        while True:
            self._state = DecoderState.AWAITING_BYTES
            chunk = await self._read_chunk()

            if self._state.terminal:
                # Closed by aclose() or into_inner() while the read was pending.
                raise StopAsyncIteration
            if not chunk:
                self._end_of_stream()

            self._state = DecoderState.DECODING
            try:
                text = self._decoder.decode(chunk)
            except InvalidSequenceError as e:
                log_warning(
                    f"Invalid UTF-8 at byte {e.offset}: {e.reason} "
                    f"({format_bytes(e.sequence)})",
                    context="decoder",
                )
                self._finish(DecoderState.ERRORED)
                raise

            if text:
                self._state = DecoderState.IDLE
                return text

    async def _read_chunk(self) -> bytes:
        try:
            return await self._source.read(self._chunk_size)
        except asyncio.CancelledError:
            log_debug(
                f"Read cancelled with {len(self._decoder.pending_bytes)} pending bytes",
                context="decoder",
            )
            if not self._state.terminal:
                self._state = DecoderState.IDLE
            raise
        except Exception as e:
            log_error(f"Byte source failed: {e!r}", context="decoder")
            self._finish(DecoderState.ERRORED)
            raise SourceError(e) from e

    def _end_of_stream(self) -> NoReturn:
        try:
            self._decoder.flush()
        except UnexpectedEofError as e:
            log_warning(
                f"Stream ended inside a character: {format_bytes(e.pending)}",
                context="decoder",
            )
            self._finish(DecoderState.ERRORED)
            raise
        log_debug(
            f"End of stream after {self._decoder.position} bytes", context="decoder"
        )
        self._finish(DecoderState.COMPLETED)
        raise StopAsyncIteration

    def _finish(self, state: DecoderState) -> None:
        self._decoder.reset()
        self._state = state

    async def read_all(self) -> str:
        """Decode the rest of the stream and return it as one string."""
        return "".join([text async for text in self])

    async def aclose(self) -> None:
        """Stop decoding. Later reads end the iteration immediately.

        A read already waiting on the source ends the iteration as well, and
        whatever bytes it receives are dropped.
        """
        self._finish(DecoderState.COMPLETED)


async def decode_stream_chunks(
    chunk_iterator: AsyncIterable[bytes],
    chunk_size: Optional[int] = None,
) -> AsyncIterator[str]:
    """
    Async generator that safely decodes UTF-8 byte chunks.

    This is a convenience wrapper around ``Utf8Decoder`` for use with
    async iterators.

    Args:
        chunk_iterator: An async iterator yielding byte chunks.
        chunk_size: Maximum bytes decoded per step.

    Yields:
        Decoded text strings.

    Raises:
        DecodeError: On invalid or truncated input, or when the iterator fails.

    Example:
        >>> async for text in decode_stream_chunks(response.content.iter_any()):
        ...     print(text)
    """
    async for text in Utf8Decoder(chunk_iterator, chunk_size):
        yield text
