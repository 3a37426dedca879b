"""Structured decoding of sequence items.

This module provides the schemas that turn one deserializer handle into a
typed value, and the error taxonomy shared by every traversal.
"""

from .errors import (
    DecodeError,
    DeserializeError,
    FormatError,
    HandleConsumedError,
    StructuralMismatch,
    format_path,
)
from .schema import (
    AnySchema,
    CallableSchema,
    ListSchema,
    PydanticSchema,
    RecordSchema,
    TypeSchema,
    as_schema,
    kind_of,
)

__all__ = [
    "DeserializeError",
    "StructuralMismatch",
    "DecodeError",
    "FormatError",
    "HandleConsumedError",
    "format_path",
    "AnySchema",
    "TypeSchema",
    "CallableSchema",
    "ListSchema",
    "RecordSchema",
    "PydanticSchema",
    "as_schema",
    "kind_of",
]
