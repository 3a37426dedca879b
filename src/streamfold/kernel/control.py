"""Core kernel abstractions - pure and dependency-free."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

B = TypeVar("B")
C = TypeVar("C")


@dataclass(frozen=True)
class ControlFlow(Generic[B, C]):
    """
    Outcome of one fold step.

    Kinds:
    - continue: Proceed to the next element with the provided accumulator
    - break: Stop consuming the sequence and return the provided payload

    Once a step returns break, no further element is pulled, decoded or visited.
    """

    kind: Literal["continue", "break"]
    value: Any = None

    @staticmethod
    def Continue(value: Any = None) -> ControlFlow[Any, Any]:
        return ControlFlow(kind="continue", value=value)

    @staticmethod
    def Break(value: Any = None) -> ControlFlow[Any, Any]:
        return ControlFlow(kind="break", value=value)

    @property
    def is_continue(self) -> bool:
        return self.kind == "continue"

    @property
    def is_break(self) -> bool:
        return self.kind == "break"
