import asyncio
from typing import AsyncGenerator, Optional

import aiohttp

from ..decoder import Utf8Decoder
from .logging import log_debug


async def byte_chunk_generator(
    data: Optional[bytes],
    chunk_size: int = 1,
    sleep_time: float = 0.0,
) -> AsyncGenerator[bytes, None]:
    """Generate byte chunks asynchronously to simulate a chunked transport.

    Args:
        data: The complete payload to be chunked.
        chunk_size: Size of each chunk in bytes. Defaults to 1, which splits
            every multi-byte character.
        sleep_time: Time to sleep between chunks in seconds. Defaults to 0.

    Yields:
        bytes: Chunks of the specified size.

    Example:
        >>> async for chunk in byte_chunk_generator("💖".encode(), 2):
        ...     print(chunk)
        b'\\xf0\\x9f'
        b'\\x92\\x96'
    """
    if data is None:
        return

    for i in range(0, len(data), chunk_size):
        chunk = data[i : i + chunk_size]
        await asyncio.sleep(sleep_time)
        yield chunk


async def iter_response_text(
    response: aiohttp.ClientResponse,
    chunk_size: Optional[int] = None,
) -> AsyncGenerator[str, None]:
    """Decode an aiohttp response body as a stream of UTF-8 text chunks.

    Unlike ``response.text()`` this does not wait for the whole body, and
    unlike iterating ``response.content`` it never splits a character.

    Args:
        response: An open response whose body has not been consumed.
        chunk_size: Maximum bytes read from the connection per step.

    Yields:
        str: Decoded text as it arrives.

    Raises:
        DecodeError: If the body is not valid UTF-8 or the connection fails.
            Transport failures surface as ``SourceError`` wrapping the
            ``aiohttp.ClientError``.
    """
    log_debug(
        f"Decoding response body from {response.url} (status {response.status})",
        context="transport",
    )
    async for text in Utf8Decoder(response.content, chunk_size):
        yield text
