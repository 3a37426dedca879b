"""Deserializer over already-materialized Python values."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from streamfold.formats.base import BaseDeserializer
from streamfold.structured.errors import StructuralMismatch
from streamfold.structured.schema import kind_of

_END = object()


class ValueDeserializer(BaseDeserializer):
    """Expose plain Python data through the pull protocol.

    Lists and tuples are sequences, mappings are maps, everything else is
    a scalar.
    """

    def __init__(self, value: Any) -> None:
        super().__init__()
        self.value = value

    def _deserialize_seq(self) -> ValueSeqAccess:
        if isinstance(self.value, (list, tuple)):
            return ValueSeqAccess(iter(self.value))
        raise StructuralMismatch("a sequence", kind_of(self.value))

    def _deserialize_map(self) -> ValueMapAccess:
        if isinstance(self.value, Mapping):
            return ValueMapAccess(iter(self.value.items()))
        raise StructuralMismatch("a map", kind_of(self.value))

    def _deserialize_any(self) -> Any:
        return self.value

    def _skip(self) -> None:
        pass


class ValueSeqAccess:
    def __init__(self, elements: Iterator[Any]) -> None:
        self._elements = elements

    def next_element(self) -> ValueDeserializer | None:
        element = next(self._elements, _END)
        if element is _END:
            return None
        return ValueDeserializer(element)


class ValueMapAccess:
    def __init__(self, entries: Iterator[tuple[Any, Any]]) -> None:
        self._entries = entries
        self._pending: Any = _END

    def next_key(self) -> str | None:
        entry = next(self._entries, _END)
        if entry is _END:
            self._pending = _END
            return None
        key, self._pending = entry
        return key

    def next_value(self) -> ValueDeserializer:
        if self._pending is _END:
            raise RuntimeError("next_value called without a pending key")
        value, self._pending = self._pending, _END
        return ValueDeserializer(value)
