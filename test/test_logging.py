from async_utf8_decoder.errors import InvalidSequenceError, UnexpectedEofError
from async_utf8_decoder.utils.logging import format_bytes, log_debug, log_warning


def test_format_bytes() -> None:
    assert format_bytes(b"\xf0\x9f\x92") == "f0 9f 92"
    assert format_bytes(b"") == ""


def test_format_bytes_truncates() -> None:
    assert format_bytes(bytes(range(20)), max_length=4) == "00 01 02 03...[16 more bytes]"


def test_log_helpers_tag_context(log_messages) -> None:
    log_debug("plain")
    log_warning("tagged", context="decoder")
    assert log_messages[-2:] == ["plain", "[decoder] tagged"]


def test_error_messages_render_bytes() -> None:
    assert str(UnexpectedEofError(b"\xf0\x9f")) == "incomplete utf-8 sequence `f0 9f`"
    error = InvalidSequenceError(5, "invalid start byte", b"\xff")
    assert str(error) == "invalid utf-8 sequence `ff` at byte 5: invalid start byte"
