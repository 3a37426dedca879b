"""Concrete pull deserializers."""

from .base import BaseDeserializer
from .json import JsonDeserializer, JsonOptions, from_bytes, from_reader, from_str
from .python import ValueDeserializer

__all__ = [
    "BaseDeserializer",
    "JsonDeserializer",
    "JsonOptions",
    "from_reader",
    "from_bytes",
    "from_str",
    "ValueDeserializer",
]
