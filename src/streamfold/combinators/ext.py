"""Deserializer extensions - the combinators as methods."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from streamfold.combinators import top_level
from streamfold.combinators.aggregate import Aggregator, aggregate
from streamfold.kernel import ControlFlow, Deserializer

Acc = TypeVar("Acc")
Item = TypeVar("Item")
V = TypeVar("V")


class DeserializerExt:
    """Mixin giving a deserializer the top-level combinators as methods.

    Example:
        >>> channels = set()
        >>> from_reader(fp).for_each(lambda entry: channels.update(entry["subscribed_to"]))
    """

    def try_fold(
        self: Deserializer,
        init: Acc,
        f: Callable[[Acc, Item], ControlFlow[Any, Acc]],
        item: Any = None,
    ) -> ControlFlow[Any, Acc]:
        return top_level.try_fold(self, init, f, item)

    def fold(self: Deserializer, init: Acc, f: Callable[[Acc, Item], Acc], item: Any = None) -> Acc:
        return top_level.fold(self, init, f, item)

    def for_each(self: Deserializer, f: Callable[[Item], Any], item: Any = None) -> None:
        top_level.for_each(self, f, item)

    def find(self: Deserializer, predicate: Callable[[Item], bool], item: Any = None) -> Item | None:
        return top_level.find(self, predicate, item)

    def aggregate(self: Deserializer, aggregator: Aggregator[V]) -> V:
        return aggregate(self, aggregator)
