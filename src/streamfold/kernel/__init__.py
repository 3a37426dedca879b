"""Kernel layer - pure abstractions for streamfold."""

from streamfold.kernel.control import ControlFlow
from streamfold.kernel.ports import Deserializer, MapAccess, Schema, SeqAccess
from streamfold.kernel.visitor import visit_seq

__all__ = [
    "ControlFlow",
    "visit_seq",
    # Ports
    "Deserializer",
    "SeqAccess",
    "MapAccess",
    "Schema",
]
