"""
Exceptions raised by the message model.

    MessageError (ValueError)
    ├── InvalidHeader   - illegal header name/value, or no values given
    ├── InvalidBody     - body handle is not a usable stream
    └── StreamError     - operation not possible on a body stream

All of them are raised synchronously by the call that received the bad
input, before any new instance is built.
"""

from typing import Optional


class MessageError(ValueError):
    """Base class for every error raised by httpmessage."""


class InvalidHeader(MessageError):
    """
    Raised when a header name or value is not legal.

    The offending header name is kept on the exception so callers that
    build messages from untrusted input can report which field failed.
    """

    def __init__(self, message: str, name: Optional[str] = None):
        super().__init__(message)
        self.name = name


class InvalidBody(MessageError):
    """Raised when a message body is not an open StreamInterface."""


class StreamError(MessageError):
    """Raised when a stream operation is not possible (detached, closed, read-only...)."""
