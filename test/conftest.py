from typing import List

import pytest
from loguru import logger


@pytest.fixture
def log_messages() -> List[str]:
    """Capture messages logged by the package while the test runs."""
    messages: List[str] = []
    logger.enable("async_utf8_decoder")
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]), level="DEBUG"
    )
    yield messages
    logger.remove(handler_id)
    logger.disable("async_utf8_decoder")
