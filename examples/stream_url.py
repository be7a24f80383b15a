"""Stream a URL's body as UTF-8 text as it arrives.

This example fetches a streaming HTTP response with aiohttp and prints the
decoded text chunk by chunk, without ever splitting a multi-byte character.

Usage:
    python stream_url.py [URL]

Environment variables:
    URL: URL to fetch when none is given (default: http://localhost:44497/v1/stream)
    ASYNC_UTF8_DECODER_CHUNK_SIZE: Bytes read per step (default: 8192)
"""

import asyncio
import os
import sys

import aiohttp
from loguru import logger

from async_utf8_decoder import DecodeError
from async_utf8_decoder.utils.transports import iter_response_text

URL = os.getenv("URL", "http://localhost:44497/v1/stream")


async def main(url: str) -> int:
    logger.enable("async_utf8_decoder")

    async with aiohttp.ClientSession() as session:
        async with session.get(url) as response:
            print("Status Code:", response.status)
            print("Streaming Response:")
            try:
                async for text in iter_response_text(response):
                    print(text, end="", flush=True)
            except DecodeError as e:
                print()
                logger.error(f"Stopped decoding: {e}")
                return 1

    print()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else URL)))
