"""
Byte sources the streaming decoder can read from.

A source is anything with an ``async read(n)`` coroutine following the
``asyncio.StreamReader`` convention: it returns between 1 and ``n`` bytes,
``b""`` once the stream has ended, or raises when the source fails.
``asyncio.StreamReader`` and ``aiohttp.StreamReader`` (``response.content``)
qualify as they are.
"""

import asyncio
from collections import deque
from typing import Any, AsyncIterable, AsyncIterator, Deque, Protocol, Union

from .utils.logging import log_debug


class ByteSource(Protocol):
    """Asynchronous byte source contract."""

    async def read(self, n: int = -1) -> bytes:
        """Read up to ``n`` bytes; ``b""`` signals end of stream."""
        ...


class _ChunkedReader:
    """Serves a held chunk in slices of at most ``n`` bytes."""

    def __init__(self) -> None:
        self._leftover = b""

    def _take(self, n: int) -> bytes:
        data = self._leftover
        if n < 0 or n >= len(data):
            self._leftover = b""
            return data
        self._leftover = data[n:]
        return data[:n]


class IteratorSource(_ChunkedReader):
    """
    Adapts an async iterable of byte chunks to ``ByteSource``.

    Empty chunks are skipped, so ``b""`` keeps its end-of-stream meaning.
    Chunks longer than the requested size are split across reads.

    Cancelling a pending ``read`` closes an async generator being iterated,
    after which this source reports end of stream. Use a cancellation-safe
    source such as ``ByteChannel`` when reads may be cancelled.
    """

    def __init__(self, chunks: AsyncIterable[bytes]):
        super().__init__()
        self._iterator: AsyncIterator[bytes] = chunks.__aiter__()
        self._exhausted = False

    async def read(self, n: int = -1) -> bytes:
        while not self._leftover:
            if self._exhausted:
                return b""
            try:
                self._leftover = bytes(await self._iterator.__anext__())
            except StopAsyncIteration:
                self._exhausted = True
                return b""
        return self._take(n)


class ByteChannel(_ChunkedReader):
    """
    In-memory channel feeding bytes to a decoder.

    The producer side calls ``send``, ``send_error`` and ``close``; the decoder
    side awaits ``read``. Reads are cancellation safe: a cancelled read leaves
    every queued chunk in place.

    Example:
        >>> channel = ByteChannel()
        >>> channel.send(b"\\xf0\\x9f")
        >>> channel.send(b"\\x92\\x96")
        >>> channel.close()
        >>> await Utf8Decoder(channel).read_all()
        '💖'
    """

    def __init__(self) -> None:
        super().__init__()
        self._chunks: Deque[Union[bytes, BaseException]] = deque()
        self._closed = False
        self._readable = asyncio.Event()

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, chunk: bytes) -> None:
        """Queue a chunk of bytes. Empty chunks are ignored.

        Raises:
            RuntimeError: If the channel is already closed.
        """
        self._check_open()
        if chunk:
            self._push(bytes(chunk))

    def send_error(self, error: BaseException) -> None:
        """Queue an error that the reader raises once it reaches it."""
        self._check_open()
        self._push(error)

    def close(self) -> None:
        """Mark end of stream after the queued chunks."""
        if not self._closed:
            self._closed = True
            self._readable.set()
            log_debug("Channel closed", context="source")

    async def read(self, n: int = -1) -> bytes:
        while not self._leftover:
            if self._chunks:
                item = self._chunks.popleft()
                if isinstance(item, BaseException):
                    raise item
                self._leftover = item
            elif self._closed:
                return b""
            else:
                self._readable.clear()
                await self._readable.wait()
        return self._take(n)

    def _push(self, item: Union[bytes, BaseException]) -> None:
        self._chunks.append(item)
        self._readable.set()

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("cannot send on a closed channel")


def as_byte_source(source: Any) -> ByteSource:
    """
    Return ``source`` as a ``ByteSource``.

    Objects with a ``read`` method are used directly; async iterables of
    bytes are wrapped in ``IteratorSource``.

    Raises:
        TypeError: If ``source`` is neither.
    """
    if callable(getattr(source, "read", None)):
        return source
    if hasattr(source, "__aiter__"):
        return IteratorSource(source)
    raise TypeError(
        "expected an object with async read() or an async iterable of bytes, "
        f"got {type(source).__name__}"
    )
