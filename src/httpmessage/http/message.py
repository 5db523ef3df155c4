"""
=============================================================================
IMMUTABLE HTTP MESSAGE
=============================================================================

The part every HTTP request and response has in common (RFC 7230 section 3):

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        MESSAGE STRUCTURE                            │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   protocol_version   "1.1"          free-form version token        │
    │   headers            HeaderBag      case-insensitive, multi-valued │
    │   body               StreamInterface  shared handle, not a copy    │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Request and response types add their own start-line data (method and
target, or status code) by subclassing Message; the with_* methods keep
returning the subclass.

=============================================================================
COPY-ON-WRITE
=============================================================================

    m1 = Message()
    m2 = m1.with_header("Content-Type", "text/plain")
    m3 = m2.with_protocol_version("1.0")

        m1 ──headers──► HeaderBag {}
        m2 ──headers──► HeaderBag {"Content-Type": [...]} ◄──headers── m3
         │                                                              │
         └──────────────────────── body ──► Stream ◄──── body ──────────┘

Nothing reachable from m1 changes when m2 or m3 are created. Unchanged
parts (the HeaderBag when only the version changes, the body always) are
shared rather than copied.

=============================================================================
"""

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Union

from ..config import DEFAULT_CONFIG, MessageConfig
from ..errors import InvalidBody
from .headers import HeaderBag, HeaderValues
from .stream import Stream, StreamInterface


logger = logging.getLogger(__name__)


def _check_body(body: Any) -> StreamInterface:
    if not isinstance(body, StreamInterface):
        logger.debug(f"Rejected body of type {type(body).__name__}")
        raise InvalidBody(
            f"Body must be a StreamInterface, got {type(body).__name__}"
        )
    if body.closed:
        logger.debug("Rejected closed or detached body stream")
        raise InvalidBody("Body stream is closed or detached")
    return body


@dataclass(frozen=True)
class Message:
    """
    An HTTP message value.

    Example:
        message = Message(headers={"Host": "example.com"})
        message = (message
            .with_header("Content-Type", "text/plain")
            .with_added_header("Content-Type", "charset=utf-8")
            .with_body(Stream.from_string("hello")))

        message.get_header("content-type")
        # ["text/plain", "charset=utf-8"]

    Arguments are normalized on construction:
        protocol_version  None → config.default_protocol_version
        headers           mapping → HeaderBag (validated)
        body              None → empty in-memory Stream

    Raises:
        InvalidHeader: If an initial header is illegal.
        InvalidBody:   If body is not an open StreamInterface.
    """

    protocol_version: Optional[str] = None
    headers: Union[HeaderBag, Mapping[str, HeaderValues], None] = None
    body: Optional[StreamInterface] = None
    config: MessageConfig = field(default=DEFAULT_CONFIG, compare=False, repr=False)

    def __post_init__(self):
        # frozen=True blocks normal assignment, even in __post_init__
        if self.protocol_version is None:
            object.__setattr__(self, "protocol_version", self.config.default_protocol_version)

        # A bag built under another config is re-validated under this one
        headers = self.headers
        if isinstance(headers, HeaderBag) and headers.config != self.config:
            headers = dict(headers.items())
        if not isinstance(headers, HeaderBag):
            object.__setattr__(self, "headers", HeaderBag(headers, config=self.config))

        body = Stream() if self.body is None else self.body
        object.__setattr__(self, "body", _check_body(body))

    # =========================================================================
    # PROTOCOL VERSION
    # =========================================================================

    def get_protocol_version(self) -> str:
        """The version number only, e.g. "1.1"."""
        return self.protocol_version

    def with_protocol_version(self, version: str) -> "Message":
        """Return a copy with a different protocol version. The value is not parsed."""
        return self._evolve(protocol_version=version)

    # =========================================================================
    # HEADERS
    # =========================================================================

    def get_headers(self) -> Dict[str, List[str]]:
        """
        All headers as {name: [values]}.

        Names keep the case they were set with:

            for name, values in message.get_headers().items():
                print(f"{name}: {', '.join(values)}")
        """
        return self.headers.all()

    def has_header(self, name: str) -> bool:
        return self.headers.has(name)

    def get_header(self, name: str) -> List[str]:
        """Values of a header (case-insensitive), [] if absent."""
        return self.headers.get(name)

    def get_header_line(self, name: str) -> str:
        """
        Values of a header joined with ", ", "" if absent.

        Not every header survives comma joining (Set-Cookie is the usual
        example); use get_header() for those.
        """
        return self.headers.get_line(name)

    def with_header(self, name: str, value: HeaderValues) -> "Message":
        """
        Return a copy where the header holds exactly value(s).

        Raises:
            InvalidHeader: For an illegal name or value, or an empty list.
        """
        return self._evolve(headers=self.headers.with_set(name, value))

    def with_added_header(self, name: str, value: HeaderValues) -> "Message":
        """
        Return a copy with value(s) appended to the header.

        Raises:
            InvalidHeader: For an illegal name or value, or an empty list.
        """
        return self._evolve(headers=self.headers.with_added(name, value))

    def without_header(self, name: str) -> "Message":
        """Return a copy without the header (case-insensitive match)."""
        return self._evolve(headers=self.headers.without(name))

    # =========================================================================
    # BODY
    # =========================================================================

    def get_body(self) -> StreamInterface:
        return self.body

    def with_body(self, body: StreamInterface) -> "Message":
        """
        Return a copy referencing body.

        The stream is shared, not copied: both messages read through the
        same cursor.

        Raises:
            InvalidBody: If body is not a StreamInterface, or is closed or
                         detached.
        """
        return self._evolve(body=_check_body(body))

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _evolve(self, **changes: Any) -> "Message":
        """
        Copy of this message with some fields replaced.

        Unlike dataclasses.replace() this skips __post_init__, so a header
        change on a message whose body was closed since construction still
        succeeds.
        """
        message = object.__new__(type(self))
        for f in fields(self):
            object.__setattr__(message, f.name, changes.get(f.name, getattr(self, f.name)))
        return message
