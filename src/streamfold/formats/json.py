"""JSON pull deserializer backed by ijson events.

The reader is consumed lazily, ``buf_size`` bytes at a time, so a fold that
stops early leaves the rest of the document unread.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import IO, Any

import ijson
from ijson.common import ObjectBuilder

from streamfold.formats.base import BaseDeserializer
from streamfold.structured.errors import FormatError, StructuralMismatch
from streamfold.structured.schema import kind_of

logger = logging.getLogger(__name__)

Event = tuple[str, Any]

_FOUND = {
    "start_map": "a map",
    "start_array": "a sequence",
    "null": "null",
    "boolean": "boolean",
    "string": "string",
}
_OPEN = ("start_map", "start_array")
_CLOSE = ("end_map", "end_array")


@dataclass(frozen=True)
class JsonOptions:
    """Configuration for reading JSON.

    Attributes:
        buf_size: Bytes read from the underlying reader per refill
        use_float: Decode non-integral numbers as float instead of Decimal
        backend: ijson backend name (e.g. "python", "yajl2_c"), None for
            ijson's default choice
    """

    buf_size: int = 64 * 1024
    use_float: bool = True
    backend: str | None = None


class EventCursor:
    """Forward-only cursor over ijson ``basic_parse`` events.

    Tracks the container depth of the events consumed so far, so cursors
    over enclosing containers can catch up after a nested early exit.
    """

    def __init__(self, events: Iterator[Event]) -> None:
        self._events = events
        self._peeked: Event | None = None
        self.depth = 0

    def peek(self) -> Event:
        if self._peeked is None:
            self._peeked = self._pull()
        return self._peeked

    def next(self) -> Event:
        event = self.peek()
        self._peeked = None
        if event[0] in _OPEN:
            self.depth += 1
        elif event[0] in _CLOSE:
            self.depth -= 1
        return event

    def unwind(self, depth: int) -> None:
        """Consume events until the cursor is back at ``depth``."""
        while self.depth > depth:
            self.next()

    def _pull(self) -> Event:
        try:
            return next(self._events)
        except StopIteration:
            raise FormatError("unexpected end of input") from None
        except ijson.JSONError as e:
            raise FormatError(f"malformed JSON: {e}") from e


class JsonDeserializer(BaseDeserializer):
    """Handle on the JSON value starting at the cursor's next event."""

    def __init__(self, cursor: EventCursor) -> None:
        super().__init__()
        self._cursor = cursor
        self._mismatched = False

    def _expect(self, event: str, expected: str) -> None:
        found, value = self._cursor.peek()
        if found != event:
            # the value stays unread; an enclosing access skips it
            self._mismatched = True
            label = kind_of(value) if found == "number" else _FOUND.get(found, found)
            raise StructuralMismatch(expected, label)
        self._cursor.next()

    def _discard(self) -> None:
        """Move past this value unless it was already read."""
        if not self.consumed:
            self.skip()
        elif self._mismatched:
            self._mismatched = False
            self._skip()

    def _deserialize_seq(self) -> JsonSeqAccess:
        self._expect("start_array", "a sequence")
        return JsonSeqAccess(self._cursor)

    def _deserialize_map(self) -> JsonMapAccess:
        self._expect("start_map", "a map")
        return JsonMapAccess(self._cursor)

    def _deserialize_any(self) -> Any:
        builder = ObjectBuilder()
        depth = self._cursor.depth
        while True:
            event, value = self._cursor.next()
            builder.event(event, value)
            if self._cursor.depth == depth:
                return builder.value

    def _skip(self) -> None:
        depth = self._cursor.depth
        self._cursor.next()
        self._cursor.unwind(depth)


class JsonSeqAccess:
    def __init__(self, cursor: EventCursor) -> None:
        self._cursor = cursor
        self._depth = cursor.depth
        self._pending: JsonDeserializer | None = None
        self._done = False

    def next_element(self) -> JsonDeserializer | None:
        if self._done:
            return None
        if self._pending is not None:
            self._pending._discard()
        self._cursor.unwind(self._depth)

        event, _ = self._cursor.peek()
        if event == "end_array":
            self._cursor.next()
            self._done = True
            self._pending = None
            return None
        self._pending = JsonDeserializer(self._cursor)
        return self._pending


class JsonMapAccess:
    def __init__(self, cursor: EventCursor) -> None:
        self._cursor = cursor
        self._depth = cursor.depth
        self._pending: JsonDeserializer | None = None
        self._has_key = False
        self._done = False

    def next_key(self) -> str | None:
        if self._done:
            return None
        if self._has_key:
            self.next_value()
        if self._pending is not None:
            self._pending._discard()
        self._cursor.unwind(self._depth)

        event, key = self._cursor.next()
        if event == "end_map":
            self._done = True
            self._pending = None
            return None
        if event != "map_key":
            raise FormatError(f"expected a map key, found {event}")
        self._has_key = True
        return key

    def next_value(self) -> JsonDeserializer:
        if not self._has_key:
            raise RuntimeError("next_value called without a pending key")
        self._has_key = False
        self._pending = JsonDeserializer(self._cursor)
        return self._pending


def from_reader(fp: IO[bytes], options: JsonOptions | None = None) -> JsonDeserializer:
    """Return a deserializer over the JSON document read from ``fp``."""
    options = options or JsonOptions()
    backend = ijson if options.backend is None else ijson.get_backend(options.backend)
    logger.debug("reading JSON with backend %s", options.backend or "default")
    events = backend.basic_parse(fp, buf_size=options.buf_size, use_float=options.use_float)
    return JsonDeserializer(EventCursor(iter(events)))


def from_bytes(data: bytes, options: JsonOptions | None = None) -> JsonDeserializer:
    return from_reader(io.BytesIO(data), options)


def from_str(text: str, options: JsonOptions | None = None) -> JsonDeserializer:
    return from_reader(io.BytesIO(text.encode("utf-8")), options)
