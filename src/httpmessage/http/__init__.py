"""
=============================================================================
HTTP MESSAGE MODEL
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │ MESSAGE (message.py)                                                │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Frozen value: protocol version + HeaderBag + body stream            │
    │ Every with_*() call returns a new Message                           │
    └─────────────────────────────────────────────────────────────────────┘
                     │                              │
                     ▼                              ▼
    ┌──────────────────────────────┐  ┌──────────────────────────────────┐
    │ HEADERS (headers.py)         │  │ STREAMS (stream.py)              │
    │ ──────────────────────────── │  │ ──────────────────────────────── │
    │ Case-insensitive lookup      │  │ StreamInterface capability       │
    │ Case-preserving enumeration  │  │ Stream adapter over file objects │
    │ Multi-valued, ordered        │  │ Shared between messages          │
    └──────────────────────────────┘  └──────────────────────────────────┘

=============================================================================
"""

from .headers import HeaderBag, fold_name
from .message import Message
from .stream import Stream, StreamInterface

__all__ = [
    # Message value
    "Message",

    # Headers
    "HeaderBag",
    "fold_name",

    # Body capability
    "StreamInterface",
    "Stream",
]
