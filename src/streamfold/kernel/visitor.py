"""Sequence visitor - the single place sequence iteration lives."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from streamfold.kernel.control import ControlFlow
from streamfold.kernel.ports import Deserializer, Schema

logger = logging.getLogger(__name__)

Acc = TypeVar("Acc")
Item = TypeVar("Item")


def visit_seq(
    deserializer: Deserializer,
    schema: Schema[Item],
    init: Acc,
    f: Callable[[Acc, Item], ControlFlow[Any, Acc]],
) -> ControlFlow[Any, Acc]:
    """Drive one sequence through ``f``, one element at a time.

    Semantics:
        - Pull the next element; stop with Continue(acc) once exhausted
        - Decode it with ``schema`` and hand it to ``f``
        - Continue threads the new accumulator forward
        - Break returns immediately, without pulling another element

    The remaining elements are left unconsumed after a break. Errors raised
    by the deserializer or the schema propagate as-is and discard the
    accumulator.

    Args:
        deserializer: Handle on a value expected to be a sequence (consumed)
        schema: Decoder for each element
        init: Initial accumulator
        f: Step function returning a ControlFlow

    Returns:
        Continue(final accumulator) or the Break produced by ``f``
    """
    seq = deserializer.deserialize_seq()
    acc = init
    visited = 0

    while True:
        element = seq.next_element()
        if element is None:
            logger.debug("sequence exhausted after %d element(s)", visited)
            return ControlFlow.Continue(acc)

        item = schema.decode(element)
        flow = f(acc, item)
        visited += 1

        if not isinstance(flow, ControlFlow):
            raise TypeError(
                f"step function must return ControlFlow, got {type(flow).__name__}"
            )
        if flow.is_break:
            logger.debug("sequence visit stopped early after %d element(s)", visited)
            return flow

        acc = flow.value
