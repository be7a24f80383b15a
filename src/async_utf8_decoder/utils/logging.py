"""
Logging utilities for async-utf8-decoder.

Thin wrappers around loguru that tag every message with the component that
emitted it, plus helpers to render raw byte runs compactly in log lines and
error messages.
"""

from typing import Optional, Union

from loguru import logger

BytesLike = Union[bytes, bytearray, memoryview]


def _tag(message: str, context: Optional[str]) -> str:
    if context:
        return f"[{context}] {message}"
    return message


def log_debug(message: str, *, context: Optional[str] = None) -> None:
    """Log a debug message tagged with ``context``."""
    logger.opt(depth=1).debug(_tag(message, context))


def log_info(message: str, *, context: Optional[str] = None) -> None:
    """Log an info message tagged with ``context``."""
    logger.opt(depth=1).info(_tag(message, context))


def log_warning(message: str, *, context: Optional[str] = None) -> None:
    """Log a warning message tagged with ``context``."""
    logger.opt(depth=1).warning(_tag(message, context))


def log_error(message: str, *, context: Optional[str] = None) -> None:
    """Log an error message tagged with ``context``."""
    logger.opt(depth=1).error(_tag(message, context))


def format_bytes(data: BytesLike, max_length: int = 16) -> str:
    """
    Render bytes as space-separated hex pairs for logging.

    Args:
        data: The bytes to render.
        max_length: Maximum number of bytes shown before truncation.

    Returns:
        Hex string such as ``"f0 9f 92"``, with a ``...[N more bytes]`` suffix
        when truncated.

    Example:
        >>> format_bytes(b"\\xf0\\x9f")
        'f0 9f'
    """
    data = bytes(data)
    shown = " ".join(f"{b:02x}" for b in data[:max_length])
    if len(data) <= max_length:
        return shown
    remaining = len(data) - max_length
    return f"{shown}...[{remaining} more bytes]"
