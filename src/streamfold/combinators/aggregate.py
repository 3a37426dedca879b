"""Aggregators - sequence reductions declared as values.

An aggregator bundles everything needed to reduce one sequence: the item
spec, a factory for the initial accumulator, the step function and a
finalizer. Wrapped in ``AggregateSchema`` it can be used wherever a schema
is expected, e.g. as one field of a ``RecordSchema``, so a sequence nested
inside a record is reduced while the record is being decoded.

Prefer the wrappers (TryFold, Fold, ForEach, Find) over implementing the
protocol directly.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar

from streamfold.kernel import ControlFlow, Deserializer, Schema, visit_seq
from streamfold.structured.schema import as_schema

Acc = TypeVar("Acc")
Item = TypeVar("Item")
V = TypeVar("V")
V_co = TypeVar("V_co", covariant=True)


class Aggregator(Protocol[V_co]):
    """Protocol on which all aggregation is based."""

    @property
    def item(self) -> Any:
        """Item spec for the elements of the sequence."""
        ...

    def init(self) -> Any:
        """Build the initial accumulator."""
        ...

    def step(self, acc: Any, item: Any) -> ControlFlow[Any, Any]:
        """The core folding function."""
        ...

    def finalize(self, flow: ControlFlow[Any, Any]) -> V_co:
        """Turn the outcome of the fold into the aggregated value."""
        ...


@dataclass(frozen=True)
class TryFold(Generic[Acc, Item]):
    """Fold that may stop early; the aggregated value is the ControlFlow."""

    init: Callable[[], Acc]
    f: Callable[[Acc, Item], ControlFlow[Any, Acc]]
    item: Any = None

    def step(self, acc: Acc, item: Item) -> ControlFlow[Any, Acc]:
        return self.f(acc, item)

    def finalize(self, flow: ControlFlow[Any, Acc]) -> ControlFlow[Any, Acc]:
        return flow


@dataclass(frozen=True)
class Fold(Generic[Acc, Item]):
    """Fold over every item; the aggregated value is the accumulator."""

    init: Callable[[], Acc]
    f: Callable[[Acc, Item], Acc]
    item: Any = None

    def step(self, acc: Acc, item: Item) -> ControlFlow[Any, Acc]:
        return ControlFlow.Continue(self.f(acc, item))

    def finalize(self, flow: ControlFlow[Any, Acc]) -> Acc:
        return flow.value


@dataclass(frozen=True)
class ForEach(Generic[Item]):
    """Apply a function to every item; the aggregated value is None."""

    f: Callable[[Item], Any]
    item: Any = None

    def init(self) -> None:
        return None

    def step(self, acc: None, item: Item) -> ControlFlow[Any, None]:
        self.f(item)
        return ControlFlow.Continue()

    def finalize(self, flow: ControlFlow[Any, None]) -> None:
        return None


@dataclass(frozen=True)
class Find(Generic[Item]):
    """Search for the first matching item; the aggregated value is it or None."""

    predicate: Callable[[Item], bool]
    item: Any = None

    def init(self) -> None:
        return None

    def step(self, acc: None, item: Item) -> ControlFlow[Item, None]:
        if self.predicate(item):
            return ControlFlow.Break(item)
        return ControlFlow.Continue()

    def finalize(self, flow: ControlFlow[Item, None]) -> Item | None:
        if flow.is_break:
            return flow.value
        return None


def aggregate(deserializer: Deserializer, aggregator: Aggregator[V]) -> V:
    """Run one aggregator over the sequence denoted by ``deserializer``."""
    return AggregateSchema(aggregator).decode(deserializer)


@dataclass(frozen=True)
class AggregateSchema(Generic[V]):
    """Schema whose decoded value is the aggregate of a sequence.

    Example:
        >>> schema = RecordSchema({"txIndexes": AggregateSchema(Fold(int, max, item=int))})
    """

    aggregator: Aggregator[V]
    _item_schema: Schema[Any] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_item_schema", as_schema(self.aggregator.item))

    def decode(self, deserializer: Deserializer) -> V:
        flow = visit_seq(
            deserializer, self._item_schema, self.aggregator.init(), self.aggregator.step
        )
        return self.aggregator.finalize(flow)

    def describe(self) -> str:
        return f"{type(self.aggregator).__name__}[{self._item_schema.describe()}]"
