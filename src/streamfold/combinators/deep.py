"""Deep combinators - sequences nested anywhere inside a larger value.

A Locator names one fixed route from the outer value to the target
sequence. ``locate`` walks it one container at a time: sibling map entries
and preceding sequence elements are skipped by the deserializer's own skip
mechanism and are never decoded. The handle it ends on is then given to the
top-level combinators.

Callbacks may be any callable, closures included: the traversal is a
plain loop over the locator steps and never re-enters the callback outside
of the element visit.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar, Union

from streamfold.combinators import top_level
from streamfold.combinators.aggregate import Aggregator, aggregate as aggregate_seq
from streamfold.kernel import ControlFlow, Deserializer
from streamfold.structured.errors import PathPart, StructuralMismatch

logger = logging.getLogger(__name__)

Acc = TypeVar("Acc")
Item = TypeVar("Item")
V = TypeVar("V")


@dataclass(frozen=True)
class Field:
    """Enter the entry named ``name`` of a map."""

    name: str


@dataclass(frozen=True)
class Index:
    """Enter the element at ``position`` of a sequence."""

    position: int

    def __post_init__(self) -> None:
        if self.position < 0:
            raise ValueError("position must be non-negative")


Step = Union[Field, Index]


@dataclass(frozen=True)
class Locator:
    """Ordered route from an outer value to a nested sequence.

    Attributes:
        steps: Tuple of Field and Index steps, applied in order
    """

    steps: tuple[Step, ...] = ()

    @staticmethod
    def of(*parts: PathPart | Step) -> Locator:
        """Build a locator; strings become Field steps and ints Index steps."""
        steps: list[Step] = []
        for part in parts:
            if isinstance(part, (Field, Index)):
                steps.append(part)
            elif isinstance(part, bool):
                raise TypeError("locator parts must be str, int, Field or Index")
            elif isinstance(part, str):
                steps.append(Field(part))
            elif isinstance(part, int):
                steps.append(Index(part))
            else:
                raise TypeError("locator parts must be str, int, Field or Index")
        return Locator(tuple(steps))

    @property
    def path(self) -> tuple[PathPart, ...]:
        return tuple(s.name if isinstance(s, Field) else s.position for s in self.steps)


def as_locator(locator: Locator | Sequence[PathPart | Step]) -> Locator:
    if isinstance(locator, Locator):
        return locator
    if isinstance(locator, str):
        # a bare string would otherwise be split into characters
        return Locator.of(locator)
    return Locator.of(*locator)


def locate(deserializer: Deserializer, locator: Locator | Sequence[PathPart | Step]) -> Deserializer:
    """Narrow ``deserializer`` down to the value the locator points at.

    Raises:
        StructuralMismatch: If a field is missing, a sequence is too short,
            or a container on the route has the wrong shape
    """
    route = as_locator(locator)
    current = deserializer
    walked: list[PathPart] = []

    for step in route.steps:
        if isinstance(step, Field):
            try:
                entries = current.deserialize_map()
            except StructuralMismatch as e:
                raise StructuralMismatch(e.expected, e.found, walked) from e
            while True:
                key = entries.next_key()
                if key is None:
                    raise StructuralMismatch(
                        f"field {step.name!r}",
                        "end of map",
                        walked,
                        message=f"missing field {step.name!r}",
                    )
                if key == step.name:
                    current = entries.next_value()
                    break
                entries.next_value().skip()
            walked.append(step.name)
        else:
            try:
                seq = current.deserialize_seq()
            except StructuralMismatch as e:
                raise StructuralMismatch(e.expected, e.found, walked) from e
            for position in range(step.position + 1):
                element = seq.next_element()
                if element is None:
                    raise StructuralMismatch(
                        f"at least {step.position + 1} element(s)",
                        f"{position} element(s)",
                        walked,
                        message=f"invalid length {position}, expected at least {step.position + 1}",
                    )
                if position < step.position:
                    element.skip()
            current = element
            walked.append(step.position)
        logger.debug("located step %r", step)

    return current


def try_fold(
    deserializer: Deserializer,
    locator: Locator | Sequence[PathPart | Step],
    init: Acc,
    f: Callable[[Acc, Item], ControlFlow[Any, Acc]],
    item: Any = None,
) -> ControlFlow[Any, Acc]:
    """``top_level.try_fold`` on the sequence at ``locator``."""
    return top_level.try_fold(locate(deserializer, locator), init, f, item)


def fold(
    deserializer: Deserializer,
    locator: Locator | Sequence[PathPart | Step],
    init: Acc,
    f: Callable[[Acc, Item], Acc],
    item: Any = None,
) -> Acc:
    """``top_level.fold`` on the sequence at ``locator``."""
    return top_level.fold(locate(deserializer, locator), init, f, item)


def for_each(
    deserializer: Deserializer,
    locator: Locator | Sequence[PathPart | Step],
    f: Callable[[Item], Any],
    item: Any = None,
) -> None:
    """``top_level.for_each`` on the sequence at ``locator``."""
    top_level.for_each(locate(deserializer, locator), f, item)


def find(
    deserializer: Deserializer,
    locator: Locator | Sequence[PathPart | Step],
    predicate: Callable[[Item], bool],
    item: Any = None,
) -> Item | None:
    """``top_level.find`` on the sequence at ``locator``."""
    return top_level.find(locate(deserializer, locator), predicate, item)


def aggregate(
    deserializer: Deserializer,
    locator: Locator | Sequence[PathPart | Step],
    aggregator: Aggregator[V],
) -> V:
    """Run ``aggregator`` on the sequence at ``locator``."""
    return aggregate_seq(locate(deserializer, locator), aggregator)
