"""Shared base for concrete deserializer handles."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from streamfold.combinators.ext import DeserializerExt
from streamfold.kernel.ports import MapAccess, SeqAccess
from streamfold.structured.errors import HandleConsumedError


class BaseDeserializer(DeserializerExt, ABC):
    """
    Single-use handle on one serialized value.
    Every public entry point claims the handle first; a second claim fails.
    """

    def __init__(self) -> None:
        self._consumed = False

    @property
    def consumed(self) -> bool:
        return self._consumed

    def _claim(self) -> None:
        if self._consumed:
            raise HandleConsumedError(f"{type(self).__name__} handle already consumed")
        self._consumed = True

    def deserialize_seq(self) -> SeqAccess:
        self._claim()
        return self._deserialize_seq()

    def deserialize_map(self) -> MapAccess:
        self._claim()
        return self._deserialize_map()

    def deserialize_any(self) -> Any:
        self._claim()
        return self._deserialize_any()

    def skip(self) -> None:
        self._claim()
        self._skip()

    @abstractmethod
    def _deserialize_seq(self) -> SeqAccess:
        pass

    @abstractmethod
    def _deserialize_map(self) -> MapAccess:
        pass

    @abstractmethod
    def _deserialize_any(self) -> Any:
        pass

    @abstractmethod
    def _skip(self) -> None:
        pass
