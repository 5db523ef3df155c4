"""
=============================================================================
HTTPMESSAGE - Immutable HTTP Message Model
=============================================================================

Value objects for the parts of HTTP/1.x messages that requests and
responses share: protocol version, headers and body.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    httpmessage/
    ├── __init__.py          # This file - package exports
    ├── config.py            # MessageConfig dataclass
    ├── errors.py            # InvalidHeader, InvalidBody, StreamError
    └── http/
        ├── headers.py       # HeaderBag
        ├── message.py       # Message
        └── stream.py        # StreamInterface, Stream

=============================================================================
QUICK START
=============================================================================

    from httpmessage import Message, Stream

    message = Message()                                  # version "1.1"
    message = message.with_header("Content-Type", "text/plain")
    message = message.with_added_header("content-type", "charset=utf-8")
    message = message.with_body(Stream.from_string("hello"))

    message.get_header_line("CONTENT-TYPE")  # "text/plain, charset=utf-8"
    message.get_headers()                    # {"Content-Type": [...]}
    bytes(message.get_body())                # b"hello"

=============================================================================
"""

from .config import DEFAULT_CONFIG, MessageConfig
from .errors import InvalidBody, InvalidHeader, MessageError, StreamError
from .http import HeaderBag, Message, Stream, StreamInterface, fold_name

__version__ = "1.0.0"

__all__ = [
    "Message",
    "HeaderBag",
    "fold_name",
    "StreamInterface",
    "Stream",
    "MessageConfig",
    "DEFAULT_CONFIG",
    "MessageError",
    "InvalidHeader",
    "InvalidBody",
    "StreamError",
    "__version__",
]
