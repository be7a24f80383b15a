"""Feed a decoder one byte at a time and watch characters come out whole.

Usage:
    python split_characters.py
"""

import asyncio

from async_utf8_decoder import ByteChannel, Utf8Decoder

TEXT = "héllo, 世界 💖"


async def main() -> None:
    channel = ByteChannel()
    decoder = Utf8Decoder(channel)

    for byte in TEXT.encode("utf-8"):
        channel.send(bytes([byte]))
        try:
            text = await asyncio.wait_for(decoder.__anext__(), 0.01)
        except asyncio.TimeoutError:
            print(f"{byte:#04x} -> (waiting, pending {decoder.pending_bytes!r})")
        else:
            print(f"{byte:#04x} -> {text!r}")

    channel.close()
    assert await decoder.read_all() == ""


if __name__ == "__main__":
    asyncio.run(main())
