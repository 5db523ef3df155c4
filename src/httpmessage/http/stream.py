"""
=============================================================================
MESSAGE BODY STREAMS
=============================================================================

A Message never holds body bytes directly. It holds a handle implementing
StreamInterface, and several messages may share the same handle:

    ┌──────────────┐      with_header(...)      ┌──────────────┐
    │  Message A   │ ─────────────────────────► │  Message B   │
    │  body ───────┼──┐                      ┌──┼──── body     │
    └──────────────┘  │   ┌──────────────┐   │  └──────────────┘
                      └──►│    Stream    │◄──┘
                          │ (one cursor) │
                          └──────────────┘

Because the cursor is shared, reading through one message moves it for the
others. Call rewind() (or bytes(stream)) when the full content is needed.

Stream is the in-memory / file adapter: it wraps any binary file object
(io.BytesIO by default, or an open file, a socket makefile(), ...).
=============================================================================
"""

import io
from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Dict, Optional

from ..errors import StreamError


class StreamInterface(ABC):
    """
    The body capability a Message depends on.

    Implementations decide where the bytes live; Message only checks that
    a handle is a StreamInterface and is not closed.
    """

    @property
    @abstractmethod
    def closed(self) -> bool:
        """True once the stream is closed or detached."""

    @property
    @abstractmethod
    def size(self) -> Optional[int]:
        """Size in bytes, or None if unknown."""

    @abstractmethod
    def close(self) -> None:
        """Close the stream and the underlying resource."""

    @abstractmethod
    def detach(self) -> Optional[BinaryIO]:
        """Separate the underlying resource from the stream and return it."""

    @abstractmethod
    def tell(self) -> int:
        """Current position of the cursor."""

    @abstractmethod
    def eof(self) -> bool:
        """True if the cursor is at the end of the stream."""

    @abstractmethod
    def seekable(self) -> bool:
        """True if seek() can move the cursor."""

    @abstractmethod
    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """Move the cursor; returns the new absolute position."""

    @abstractmethod
    def writable(self) -> bool:
        """True if write() is allowed."""

    @abstractmethod
    def write(self, data: bytes) -> int:
        """Write data at the cursor; returns the number of bytes written."""

    @abstractmethod
    def readable(self) -> bool:
        """True if read() is allowed."""

    @abstractmethod
    def read(self, length: int = -1) -> bytes:
        """Read up to length bytes (everything remaining if length < 0)."""

    @abstractmethod
    def get_contents(self) -> bytes:
        """Read everything from the cursor to the end."""

    @abstractmethod
    def get_metadata(self, key: Optional[str] = None) -> Any:
        """Metadata dict, or a single entry (None if missing)."""

    def rewind(self) -> None:
        """Seek to the beginning of the stream."""
        self.seek(0)

    def __bytes__(self) -> bytes:
        """
        Whole content of the stream.

        Rewinds first when the stream is seekable; otherwise returns what is
        left from the current position.
        """
        if self.seekable():
            self.rewind()
        return self.get_contents()


class Stream(StreamInterface):
    """
    StreamInterface over a binary file object.

    Example:
        body = Stream.from_string('{"id": 1}')
        body.read(4)       # b'{"id'
        bytes(body)        # b'{"id": 1}'

        with open("payload.bin", "rb") as fh:
            message = message.with_body(Stream(fh))
    """

    def __init__(self, resource: Optional[BinaryIO] = None):
        self._resource: Optional[BinaryIO] = io.BytesIO() if resource is None else resource
        self._at_eof = False

    @classmethod
    def from_bytes(cls, data: bytes) -> "Stream":
        """Writable in-memory stream holding data, positioned at 0."""
        return cls(io.BytesIO(data))

    @classmethod
    def from_string(cls, text: str, encoding: str = "utf-8") -> "Stream":
        return cls.from_bytes(text.encode(encoding))

    # =========================================================================
    # STATE
    # =========================================================================

    @property
    def closed(self) -> bool:
        return self._resource is None or self._resource.closed

    @property
    def size(self) -> Optional[int]:
        if self.closed or not self._resource.seekable():
            return None
        resource = self._resource
        position = resource.tell()
        end = resource.seek(0, io.SEEK_END)
        resource.seek(position)
        return end

    def close(self) -> None:
        resource = self.detach()
        if resource is not None:
            resource.close()

    def detach(self) -> Optional[BinaryIO]:
        resource = self._resource
        self._resource = None
        return resource

    # =========================================================================
    # CURSOR
    # =========================================================================

    def tell(self) -> int:
        return self._open_resource().tell()

    def eof(self) -> bool:
        size = self.size
        if size is None:
            return self._at_eof
        return self._open_resource().tell() >= size

    def seekable(self) -> bool:
        return not self.closed and self._resource.seekable()

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        resource = self._open_resource()
        if not resource.seekable():
            raise StreamError("Stream is not seekable")
        self._at_eof = False
        return resource.seek(offset, whence)

    # =========================================================================
    # READ / WRITE
    # =========================================================================

    def writable(self) -> bool:
        return not self.closed and self._resource.writable()

    def write(self, data: bytes) -> int:
        resource = self._open_resource()
        if not resource.writable():
            raise StreamError("Cannot write to a non-writable stream")
        written = resource.write(data)
        # Non-blocking raw objects return None when nothing could be written
        return 0 if written is None else written

    def readable(self) -> bool:
        return not self.closed and self._resource.readable()

    def read(self, length: int = -1) -> bytes:
        resource = self._open_resource()
        if not resource.readable():
            raise StreamError("Cannot read from a non-readable stream")
        data = resource.read(length)
        if data is None:
            data = b""
        if length < 0 or len(data) < length:
            self._at_eof = True
        return data

    def get_contents(self) -> bytes:
        return self.read(-1)

    def get_metadata(self, key: Optional[str] = None) -> Any:
        if self.closed:
            return None if key is not None else {}

        resource = self._resource
        metadata: Dict[str, Any] = {
            "mode": getattr(resource, "mode", None),
            "name": getattr(resource, "name", None),
            "seekable": resource.seekable(),
            "readable": resource.readable(),
            "writable": resource.writable(),
        }
        if key is None:
            return metadata
        return metadata.get(key)

    def _open_resource(self) -> BinaryIO:
        if self._resource is None:
            raise StreamError("Stream is detached")
        if self._resource.closed:
            raise StreamError("Stream is closed")
        return self._resource

    def __repr__(self) -> str:
        if self._resource is None:
            return "Stream(detached)"
        return f"Stream({self._resource!r})"
