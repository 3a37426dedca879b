"""Port protocols for the pull-based deserialization boundary."""

from __future__ import annotations

from typing import Any, Protocol, TypeVar

T_co = TypeVar("T_co", covariant=True)


class SeqAccess(Protocol):
    """Cursor over an in-progress sequence."""

    def next_element(self) -> Deserializer | None:
        """Return a handle on the next element, or None once exhausted."""
        ...


class MapAccess(Protocol):
    """Cursor over the entries of an in-progress map or struct."""

    def next_key(self) -> str | None:
        """Return the next key, or None once exhausted."""
        ...

    def next_value(self) -> Deserializer:
        """Return a handle on the value of the last key."""
        ...


class Deserializer(Protocol):
    """
    Single-use handle on one unconsumed serialized value.

    Every entry point consumes the handle; the underlying cursor only
    ever moves forward.
    """

    def deserialize_seq(self) -> SeqAccess: ...
    def deserialize_map(self) -> MapAccess: ...
    def deserialize_any(self) -> Any: ...
    def skip(self) -> None: ...


class Schema(Protocol[T_co]):
    """Protocol for decoding one value out of a deserializer handle."""

    def decode(self, deserializer: Deserializer) -> T_co:
        """Reconstruct a value from the handle, consuming it.

        Raises:
            DeserializeError: If the value cannot be decoded
        """
        ...

    def describe(self) -> str:
        """Return a human-readable description of this schema."""
        ...
