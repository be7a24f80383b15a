"""
Runtime configuration for async-utf8-decoder.
"""

import os
from dataclasses import dataclass

DEFAULT_CHUNK_SIZE = 8 * 1024

CHUNK_SIZE_ENV = "ASYNC_UTF8_DECODER_CHUNK_SIZE"


@dataclass(frozen=True)
class DecoderConfig:
    """Settings shared by decoders that do not receive explicit values.

    Attributes:
        chunk_size: Maximum number of bytes requested from the source per read.
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")


def get_decoder_config() -> DecoderConfig:
    """Get decoder configuration, applying environment overrides.

    Raises:
        ValueError: If an override is not a positive integer.
    """
    chunk_size = int(os.getenv(CHUNK_SIZE_ENV, DEFAULT_CHUNK_SIZE))
    return DecoderConfig(chunk_size=chunk_size)
