"""
Asynchronous and incremental UTF-8 decoder.

Converts any asynchronous byte source into a stream of whole, valid text
chunks, even when reads split multi-byte characters.

Example:
    >>> channel = ByteChannel()
    >>> decoder = Utf8Decoder(channel)
    >>> channel.send(b"\\xf0\\x9f\\x92")
    >>> channel.send(b"\\x96")
    >>> await decoder.__anext__()
    '💖'
"""

from loguru import logger

from .config import DecoderConfig, get_decoder_config
from .decoder import DecoderState, Utf8Decoder, decode_stream_chunks
from .errors import (
    DecodeError,
    DecoderBusyError,
    InvalidSequenceError,
    SourceError,
    UnexpectedEofError,
)
from .sources import ByteChannel, ByteSource, IteratorSource, as_byte_source
from .stream_decoder import StreamDecoder
from .tracker import (
    MAX_PENDING_BYTES,
    Decoded,
    DecodeResult,
    Malformed,
    PendingBuffer,
    split,
)

__version__ = "0.3.0"

# Silent until the application calls logger.enable("async_utf8_decoder").
logger.disable(__name__)

__all__ = [
    "ByteChannel",
    "ByteSource",
    "DecodeError",
    "DecodeResult",
    "Decoded",
    "DecoderBusyError",
    "DecoderConfig",
    "DecoderState",
    "InvalidSequenceError",
    "IteratorSource",
    "MAX_PENDING_BYTES",
    "Malformed",
    "PendingBuffer",
    "SourceError",
    "StreamDecoder",
    "UnexpectedEofError",
    "Utf8Decoder",
    "as_byte_source",
    "decode_stream_chunks",
    "get_decoder_config",
    "split",
]
