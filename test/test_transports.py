"""
Tests for the aiohttp transport helpers.
"""

import aiohttp
import pytest

from async_utf8_decoder import ByteChannel, SourceError
from async_utf8_decoder.utils.transports import byte_chunk_generator, iter_response_text

from helpers import HEART, HEART_BYTES


class FakeResponse:
    """The parts of aiohttp.ClientResponse the helper touches."""

    def __init__(self, content, status: int = 200):
        self.content = content
        self.status = status
        self.url = "http://localhost:44497/v1/stream"


@pytest.mark.asyncio()
async def test_byte_chunk_generator_splits_payload() -> None:
    chunks = [chunk async for chunk in byte_chunk_generator(b"abcde", 2)]
    assert chunks == [b"ab", b"cd", b"e"]


@pytest.mark.asyncio()
async def test_byte_chunk_generator_none() -> None:
    assert [chunk async for chunk in byte_chunk_generator(None)] == []


@pytest.mark.asyncio()
async def test_iter_response_text() -> None:
    channel = ByteChannel()
    for byte in b"data: " + HEART_BYTES:
        channel.send(bytes([byte]))
    channel.close()

    pieces = [text async for text in iter_response_text(FakeResponse(channel))]
    assert "".join(pieces) == "data: " + HEART
    assert pieces[-1] == HEART


@pytest.mark.asyncio()
async def test_iter_response_text_payload_error() -> None:
    """A broken connection surfaces as SourceError wrapping the aiohttp error."""
    channel = ByteChannel()
    channel.send(b"partial")
    channel.send_error(aiohttp.ClientPayloadError("Response payload is not completed"))

    stream = iter_response_text(FakeResponse(channel))
    assert await stream.__anext__() == "partial"
    with pytest.raises(SourceError) as exc_info:
        await stream.__anext__()
    assert isinstance(exc_info.value.error, aiohttp.ClientPayloadError)
