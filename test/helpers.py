import asyncio

from async_utf8_decoder import Utf8Decoder

HEART = "💖"
HEART_BYTES = b"\xf0\x9f\x92\x96"

# One character of each encoded width: 1, 2, 3 and 4 bytes.
MIXED = "$¢ह\U00010348"
MIXED_BYTES = b"\x24\xc2\xa2\xe0\xa4\xb9\xf0\x90\x8d\x88"


async def next_within(decoder: Utf8Decoder, timeout: float = 0.1) -> str:
    """Advance the decoder, raising ``asyncio.TimeoutError`` if nothing arrives."""
    return await asyncio.wait_for(decoder.__anext__(), timeout)
