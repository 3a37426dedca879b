"""Schema implementations for decoding sequence items."""

from __future__ import annotations

import typing
from collections.abc import Callable, Collection, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

from streamfold.kernel.control import ControlFlow
from streamfold.kernel.ports import Deserializer, Schema
from streamfold.kernel.visitor import visit_seq
from streamfold.structured.errors import DecodeError

T = TypeVar("T")

_TYPE_NAMES: dict[type, str] = {
    bool: "boolean",
    int: "integer",
    float: "float",
    str: "string",
    list: "a sequence",
    dict: "a map",
}


def kind_of(value: Any) -> str:
    """Name the shape of a materialized value, as used in error messages."""
    if value is None:
        return "null"
    for tp, name in _TYPE_NAMES.items():
        if isinstance(value, tp):
            return name
    if isinstance(value, Decimal):
        return "float"
    if isinstance(value, tuple):
        return "a sequence"
    return type(value).__name__


@dataclass(frozen=True)
class AnySchema:
    """Schema that materializes the value as plain Python data."""

    def decode(self, deserializer: Deserializer) -> Any:
        return deserializer.deserialize_any()

    def describe(self) -> str:
        return "any value"


@dataclass(frozen=True)
class TypeSchema(Generic[T]):
    """Schema checking a materialized value against a plain type.

    ``bool`` never passes for ``int`` and ``int`` is widened for ``float``.
    """

    tp: type[T]

    def decode(self, deserializer: Deserializer) -> T:
        value = deserializer.deserialize_any()
        if isinstance(value, bool) and self.tp is not bool:
            raise DecodeError(f"invalid type: boolean, expected {self.describe()}", value)
        if self.tp is float and isinstance(value, int):
            return float(value)  # type: ignore[return-value]
        if not isinstance(value, self.tp):
            raise DecodeError(
                f"invalid type: {kind_of(value)}, expected {self.describe()}", value
            )
        return value

    def describe(self) -> str:
        return _TYPE_NAMES.get(self.tp, self.tp.__name__)


@dataclass(frozen=True)
class CallableSchema(Generic[T]):
    """Schema that uses a callable on the materialized value.

    The callable should raise ValueError or TypeError if the value is
    unacceptable; both are reported as DecodeError.
    """

    fn: Callable[[Any], T]
    _description: str | None = None

    def decode(self, deserializer: Deserializer) -> T:
        value = deserializer.deserialize_any()
        try:
            return self.fn(value)
        except (ValueError, TypeError) as e:
            raise DecodeError(f"{self.describe()} rejected value: {e}", value) from e

    def describe(self) -> str:
        if self._description:
            return self._description
        return getattr(self.fn, "__name__", repr(self.fn))


@dataclass(frozen=True)
class ListSchema(Generic[T]):
    """Schema decoding a nested sequence into a list, element by element."""

    item: Any = None
    _item_schema: Schema[T] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_item_schema", as_schema(self.item))

    def decode(self, deserializer: Deserializer) -> list[T]:
        def push(items: list[T], item: T) -> ControlFlow[Any, list[T]]:
            items.append(item)
            return ControlFlow.Continue(items)

        return visit_seq(deserializer, self._item_schema, [], push).value

    def describe(self) -> str:
        return f"list[{self._item_schema.describe()}]"


@dataclass(frozen=True)
class RecordSchema(Generic[T]):
    """Schema decoding a map field by field.

    Only the declared fields are decoded; every other entry is skipped
    without being built. Without a factory the result is a dict.

    Attributes:
        fields: Mapping of field names to schema specs (see ``as_schema``)
        optional: Names that may be absent from the input
        factory: Called with the decoded fields as keyword arguments
    """

    fields: Mapping[str, Any]
    optional: Collection[str] = ()
    factory: Callable[..., T] | None = None
    _schemas: dict[str, Schema[Any]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        schemas = {name: as_schema(spec) for name, spec in self.fields.items()}
        object.__setattr__(self, "_schemas", schemas)

    def decode(self, deserializer: Deserializer) -> T | dict[str, Any]:
        entries = deserializer.deserialize_map()
        values: dict[str, Any] = {}

        while True:
            key = entries.next_key()
            if key is None:
                break
            schema = self._schemas.get(key)
            if schema is None:
                entries.next_value().skip()
                continue
            if key in values:
                raise DecodeError(f"duplicate field {key!r}", key)
            values[key] = schema.decode(entries.next_value())

        for name in self._schemas:
            if name not in values and name not in self.optional:
                raise DecodeError(f"missing field {name!r}", values)

        if self.factory is None:
            return values
        try:
            return self.factory(**values)
        except (ValueError, TypeError) as e:
            raise DecodeError(f"{self.describe()} rejected fields: {e}", values) from e

    def describe(self) -> str:
        fields = ", ".join(f"{k}: {v.describe()}" for k, v in self._schemas.items())
        name = getattr(self.factory, "__name__", "RecordSchema")
        return f"{name}({fields})"


@dataclass(frozen=True)
class PydanticSchema(Generic[T]):
    """Schema that validates the materialized value with pydantic.

    Accepts anything a pydantic TypeAdapter accepts: models, dataclasses,
    TypedDicts and generic aliases such as ``list[int]``.
    """

    model: Any
    _adapter: TypeAdapter[T] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_adapter", TypeAdapter(self.model))

    def decode(self, deserializer: Deserializer) -> T:
        value = deserializer.deserialize_any()
        try:
            return self._adapter.validate_python(value)
        except ValidationError as e:
            raise DecodeError(f"{self.describe()} validation failed: {e}", value) from e

    def describe(self) -> str:
        return f"PydanticSchema({getattr(self.model, '__name__', repr(self.model))})"


def as_schema(spec: Any) -> Schema[Any]:
    """Coerce an item spec into a Schema.

    - None decodes any value
    - objects with a ``decode`` method are used as-is
    - bool, int, float, str, list and dict are checked by TypeSchema
    - other classes and generic aliases are validated by pydantic
    - any other callable is applied to the materialized value

    Raises:
        TypeError: If the spec matches none of the above
    """
    if spec is None:
        return AnySchema()
    if not isinstance(spec, type) and callable(getattr(spec, "decode", None)):
        return spec
    if spec in _TYPE_NAMES:
        return TypeSchema(spec)
    if isinstance(spec, type) or typing.get_origin(spec) is not None:
        return PydanticSchema(spec)
    if callable(spec):
        return CallableSchema(spec)
    raise TypeError(f"cannot build a schema from {spec!r}")
