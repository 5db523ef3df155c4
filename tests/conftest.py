"""
pytest configuration and fixtures.
"""

import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from httpmessage import HeaderBag, Message, MessageConfig, Stream


@pytest.fixture
def sample_headers() -> dict:
    """Headers as a client would typically send them."""
    return {
        "Host": "localhost:8080",
        "User-Agent": "pytest",
        "Accept": ["application/json", "text/html"],
        "Connection": "keep-alive",
    }


@pytest.fixture
def bag(sample_headers: dict) -> HeaderBag:
    """HeaderBag built from sample_headers."""
    return HeaderBag(sample_headers)


@pytest.fixture
def empty_message() -> Message:
    """Message with version 1.1, no headers, empty body."""
    return Message()


@pytest.fixture
def message(sample_headers: dict) -> Message:
    """Message with sample headers and a small JSON body."""
    return Message(
        headers=sample_headers,
        body=Stream.from_bytes(b'{"name": "John"}'),
    )


@pytest.fixture
def strict_config() -> MessageConfig:
    """Configuration rejecting folded values and numeric coercion."""
    return MessageConfig(allow_obs_fold=False, coerce_numeric_values=False)
