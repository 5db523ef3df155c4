"""
=============================================================================
HTTP HEADER COLLECTION
=============================================================================

An immutable, case-insensitive, multi-valued collection of HTTP header
fields, following RFC 7230 section 3.2 (Header Fields).

=============================================================================
HEADER SEMANTICS
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                   ONE ENTRY PER LOGICAL HEADER                      │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   lookup key      display name      values (ordered, never empty)  │
    │   ────────────    ──────────────    ──────────────────────────────  │
    │   "accept"        "Accept"          ("text/html", "text/json")      │
    │   "x-trace-id"    "X-Trace-ID"      ("a1b2",)                       │
    │                                                                      │
    │   has("ACCEPT") / get("accept") / get_line("Accept")                │
    │       └── all resolved through fold_name() → "accept"               │
    │                                                                      │
    │   all() → {"Accept": ["text/html", "text/json"],                    │
    │            "X-Trace-ID": ["a1b2"]}                                  │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

1. CASE: names match ASCII case-insensitively, but enumerate with the case
   of the write that created the entry. with_set() replaces the display
   case as well as the values; with_added() keeps the existing one.

2. ORDER: values keep insertion order and may repeat. An entry replaced by
   with_set() keeps its position; a new entry is enumerated last.

3. IMMUTABILITY: every write returns a new HeaderBag. Value tuples are
   shared between bags; only the small entry dict is copied.

=============================================================================
LEGALITY RULES
=============================================================================

    field-name  = token                  ; RFC 7230 3.2.6
    tchar       = "!" / "#" / "$" / "%" / "&" / "'" / "*" / "+" / "-"
                / "." / "^" / "_" / "`" / "|" / "~" / DIGIT / ALPHA

    field-value : any text except control characters (HTAB allowed);
                  a line break (CRLF, CR or LF) only as obs-fold, i.e.
                  immediately followed by SP or HTAB.

Violations raise InvalidHeader before anything is built. So does a write
with zero values (an empty list or tuple).

=============================================================================
"""

import logging
import re
import string
from typing import Dict, Iterable, Iterator, List, Mapping, NoReturn, Optional, Tuple, Union

from ..config import DEFAULT_CONFIG, MessageConfig
from ..errors import InvalidHeader


logger = logging.getLogger(__name__)


HeaderValue = Union[str, int, float]
HeaderValues = Union[HeaderValue, List[HeaderValue], Tuple[HeaderValue, ...]]

# (display name, values) keyed by folded name
_Entry = Tuple[str, Tuple[str, ...]]


# =============================================================================
# COMPILED PATTERNS
# =============================================================================

TOKEN_PATTERN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")

# Control characters other than HTAB, CR and LF (those are checked separately)
CONTROL_CHAR_PATTERN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

# A line break not followed by SP/HTAB. "\r\n " is one fold, "\r\nX" is not.
# A CR before LF only counts as part of CRLF, so "\r\n" is never split.
UNFOLDED_BREAK_PATTERN = re.compile(r"(?:\r\n|\r(?!\n)|\n)(?![ \t])")

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def fold_name(name: str) -> str:
    """
    Return the lookup key for a header name.

    Only A-Z are lowered; any other character compares as-is, so
    "X-Café" and "X-CAFÉ" stay different names.
    """
    return name.translate(_ASCII_LOWER)


def _lookup_key(name: object) -> Optional[str]:
    if not isinstance(name, str):
        return None
    return fold_name(name)


class HeaderBag:
    """
    Immutable mapping of header name → ordered list of string values.

    Example:
        bag = HeaderBag({"Content-Type": "text/plain"})
        bag = bag.with_added("content-type", "charset=utf-8")

        bag.get("CONTENT-TYPE")      # ["text/plain", "charset=utf-8"]
        bag.get_line("Content-Type") # "text/plain, charset=utf-8"
        bag.all()                    # {"Content-Type": [...]}

    Names in the initial mapping that differ only in case are merged as if
    added one after another with with_added().
    """

    __slots__ = ("_entries", "_config")

    def __init__(
        self,
        headers: Optional[Mapping[str, HeaderValues]] = None,
        *,
        config: Optional[MessageConfig] = None,
    ):
        self._config = config or DEFAULT_CONFIG
        self._entries: Dict[str, _Entry] = {}

        if headers:
            for name, value in headers.items():
                self._append(name, self._normalize(name, value))

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[Tuple[str, HeaderValue]],
        *,
        config: Optional[MessageConfig] = None,
    ) -> "HeaderBag":
        """
        Build a bag from (name, value) pairs in wire order.

        Repeated names accumulate, the way a parser sees them:

            HeaderBag.from_lines([
                ("Accept-Encoding", "gzip"),
                ("accept-encoding", "deflate"),
            ]).get("Accept-Encoding")   # ["gzip", "deflate"]
        """
        bag = cls(config=config)
        for name, value in lines:
            bag._append(name, bag._normalize(name, value))
        return bag

    @property
    def config(self) -> MessageConfig:
        return self._config

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    def has(self, name: str) -> bool:
        """True if an entry matches name case-insensitively."""
        return _lookup_key(name) in self._entries

    def get(self, name: str) -> List[str]:
        """
        All values of the header, in order.

        Returns an empty list if the header is absent. The list is a fresh
        copy; changing it does not affect the bag.
        """
        entry = self._entries.get(_lookup_key(name))
        if entry is None:
            return []
        return list(entry[1])

    def get_line(self, name: str) -> str:
        """Values joined with ", ", or "" if the header is absent."""
        entry = self._entries.get(_lookup_key(name))
        if entry is None:
            return ""
        return ", ".join(entry[1])

    def all(self) -> Dict[str, List[str]]:
        """Snapshot of every entry: display name → list of values."""
        return {display: list(values) for display, values in self._entries.values()}

    def items(self) -> Iterator[Tuple[str, Tuple[str, ...]]]:
        """Iterate (display name, values) pairs in enumeration order."""
        return iter(self._entries.values())

    # =========================================================================
    # WRITE OPERATIONS - each returns a new HeaderBag
    # =========================================================================

    def with_set(self, name: str, value: HeaderValues) -> "HeaderBag":
        """
        Return a bag where name holds exactly the given value(s).

        An existing entry matching case-insensitively is replaced, display
        case included:

            HeaderBag({"x-id": "1"}).with_set("X-ID", "2").all()
            # {"X-ID": ["2"]}

        Raises:
            InvalidHeader: If the name or a value is illegal, or no values
                           are given.
        """
        values = self._normalize(name, value)

        entries = dict(self._entries)
        entries[fold_name(name)] = (name, values)
        return self._derive(entries)

    def with_added(self, name: str, value: HeaderValues) -> "HeaderBag":
        """
        Return a bag with value(s) appended to the header.

        The display case of an existing entry is kept; otherwise a new entry
        is created with name as given.

        Raises:
            InvalidHeader: If the name or a value is illegal, or no values
                           are given.
        """
        values = self._normalize(name, value)

        entries = dict(self._entries)
        key = fold_name(name)
        existing = entries.get(key)
        if existing is None:
            entries[key] = (name, values)
        else:
            entries[key] = (existing[0], existing[1] + values)
        return self._derive(entries)

    def without(self, name: str) -> "HeaderBag":
        """Return a bag without the header; the same bag if it is absent."""
        key = _lookup_key(name)
        if key not in self._entries:
            return self

        entries = dict(self._entries)
        del entries[key]
        return self._derive(entries)

    # =========================================================================
    # PYTHON PROTOCOLS
    # =========================================================================

    def __contains__(self, name: object) -> bool:
        return _lookup_key(name) in self._entries

    def __iter__(self) -> Iterator[str]:
        return (display for display, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderBag):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(frozenset(self._entries.items()))

    def __repr__(self) -> str:
        return f"HeaderBag({self.all()!r})"

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _derive(self, entries: Dict[str, _Entry]) -> "HeaderBag":
        bag = HeaderBag.__new__(HeaderBag)
        bag._entries = entries
        bag._config = self._config
        return bag

    def _append(self, name: str, values: Tuple[str, ...]) -> None:
        # Construction only; a bag is never modified after it is returned.
        key = fold_name(name)
        existing = self._entries.get(key)
        if existing is None:
            self._entries[key] = (name, values)
        else:
            self._entries[key] = (existing[0], existing[1] + values)

    def _normalize(self, name: object, value: object) -> Tuple[str, ...]:
        """Validate name and value(s), returning the values as a tuple of str."""
        if not isinstance(name, str):
            _reject(f"Header name must be a string, got {type(name).__name__}", None)
        if not TOKEN_PATTERN.fullmatch(name):
            _reject(f"Invalid header name: {name!r}", name)

        raw_values = value if isinstance(value, (list, tuple)) else (value,)
        if not raw_values:
            _reject(f"Header {name!r} requires at least one value", name)

        return tuple(self._normalize_value(name, raw) for raw in raw_values)

    def _normalize_value(self, name: str, value: object) -> str:
        if isinstance(value, bool):
            _reject(f"Invalid value type for header {name!r}: bool", name)

        if isinstance(value, (int, float)) and self._config.coerce_numeric_values:
            value = str(value)

        if not isinstance(value, str):
            _reject(
                f"Invalid value type for header {name!r}: {type(value).__name__}",
                name,
            )

        if CONTROL_CHAR_PATTERN.search(value):
            _reject(f"Header {name!r} value contains control characters", name)

        if self._config.allow_obs_fold:
            if UNFOLDED_BREAK_PATTERN.search(value):
                _reject(f"Header {name!r} value contains an unfolded line break", name)
        elif "\r" in value or "\n" in value:
            _reject(f"Header {name!r} value contains a line break", name)

        return value


def _reject(message: str, name: Optional[str]) -> NoReturn:
    logger.debug(f"Rejected header: {message}")
    raise InvalidHeader(message, name=name)
