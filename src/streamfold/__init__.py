from .combinators import (
    AggregateSchema,
    Field,
    Find,
    Fold,
    ForEach,
    Index,
    Locator,
    TryFold,
    aggregate,
    deep,
    find,
    fold,
    for_each,
    locate,
    try_fold,
)
from .formats import JsonOptions, ValueDeserializer, from_bytes, from_reader, from_str
from .kernel import ControlFlow, Deserializer
from .structured import (
    DecodeError,
    DeserializeError,
    FormatError,
    RecordSchema,
    StructuralMismatch,
    as_schema,
)

__all__ = [
    # Core
    "ControlFlow",
    "Deserializer",
    # Combinators
    "try_fold",
    "fold",
    "for_each",
    "find",
    "aggregate",
    "deep",
    "Locator",
    "Field",
    "Index",
    "locate",
    "TryFold",
    "Fold",
    "ForEach",
    "Find",
    "AggregateSchema",
    # Decoding
    "RecordSchema",
    "as_schema",
    # Formats
    "from_reader",
    "from_bytes",
    "from_str",
    "JsonOptions",
    "ValueDeserializer",
    # Errors
    "DeserializeError",
    "StructuralMismatch",
    "DecodeError",
    "FormatError",
]
