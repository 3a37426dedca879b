"""Combinators over a deserializer that denotes a sequence.

Each function consumes the handle it is given. Elements are decoded and
visited strictly in serialized order, one at a time; the sequence itself is
never collected.

Caution: ``try_fold`` and ``find`` may stop early. The elements after the
stopping point are left unconsumed, so the underlying stream is not at a
known position afterwards.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from streamfold.kernel import ControlFlow, Deserializer, visit_seq
from streamfold.structured.schema import as_schema

Acc = TypeVar("Acc")
Item = TypeVar("Item")


def try_fold(
    deserializer: Deserializer,
    init: Acc,
    f: Callable[[Acc, Item], ControlFlow[Any, Acc]],
    item: Any = None,
) -> ControlFlow[Any, Acc]:
    """Aggregate the sequence with a step function that may stop early.

    Args:
        deserializer: Handle on the sequence (consumed)
        init: Initial accumulator
        f: Returns ControlFlow.Continue(acc) or ControlFlow.Break(payload)
        item: Item spec, see ``as_schema``

    Returns:
        Continue(final accumulator) if the sequence ran out, or the Break

    Raises:
        DeserializeError: On malformed input, a non-sequence value, or an
            item that fails to decode
    """
    return visit_seq(deserializer, as_schema(item), init, f)


def fold(
    deserializer: Deserializer,
    init: Acc,
    f: Callable[[Acc, Item], Acc],
    item: Any = None,
) -> Acc:
    """Aggregate every item of the sequence.

    If the function needs to stop early, use ``try_fold``.
    """
    flow = try_fold(deserializer, init, lambda acc, value: ControlFlow.Continue(f(acc, value)), item)
    return flow.value


def for_each(
    deserializer: Deserializer,
    f: Callable[[Item], Any],
    item: Any = None,
) -> None:
    """Call ``f`` once per item, in order, for its side effects."""

    def step(acc: None, value: Item) -> None:
        f(value)

    fold(deserializer, None, step, item)


def find(
    deserializer: Deserializer,
    predicate: Callable[[Item], bool],
    item: Any = None,
) -> Item | None:
    """Return the first item matching ``predicate``, or None.

    The predicate is never called on items after the first match. An item
    that decodes to None and matches is indistinguishable from no match;
    use ``try_fold`` when that matters.
    """

    def step(acc: None, value: Item) -> ControlFlow[Item, None]:
        if predicate(value):
            return ControlFlow.Break(value)
        return ControlFlow.Continue()

    flow = try_fold(deserializer, None, step, item)
    if flow.is_break:
        return flow.value
    return None
