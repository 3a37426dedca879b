"""Tests for item schemas."""

from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from streamfold import DecodeError, ValueDeserializer, from_str
from streamfold.structured import (
    AnySchema,
    CallableSchema,
    ListSchema,
    PydanticSchema,
    RecordSchema,
    TypeSchema,
    as_schema,
    kind_of,
)
from fakes import ExplodingSchema


class User(BaseModel):
    name: str
    email: str


@dataclass(frozen=True)
class Point:
    x: int
    y: int


def parse_positive(value: int) -> int:
    if value <= 0:
        raise ValueError("must be positive")
    return value


def test_any_schema_materializes_value() -> None:
    assert AnySchema().decode(from_str('{"a": [1, {"b": null}]}')) == {"a": [1, {"b": None}]}


def test_type_schema_accepts_matching_value() -> None:
    assert TypeSchema(str).decode(from_str('"hello"')) == "hello"
    assert TypeSchema(dict).decode(from_str('{"k": 1}')) == {"k": 1}


def test_type_schema_widens_int_to_float() -> None:
    value = TypeSchema(float).decode(from_str("3"))
    assert value == 3.0
    assert isinstance(value, float)


def test_type_schema_rejects_bool_for_int() -> None:
    with pytest.raises(DecodeError, match="boolean, expected integer"):
        TypeSchema(int).decode(from_str("true"))


def test_type_schema_rejects_wrong_type() -> None:
    with pytest.raises(DecodeError) as excinfo:
        TypeSchema(int).decode(from_str('"12"'))
    assert excinfo.value.raw_value == "12"
    assert "invalid type: string, expected integer" in str(excinfo.value)


def test_callable_schema_wraps_value_errors() -> None:
    schema = CallableSchema(parse_positive)
    assert schema.decode(from_str("5")) == 5
    with pytest.raises(DecodeError, match="parse_positive rejected value"):
        schema.decode(from_str("-1"))


def test_callable_schema_description() -> None:
    assert CallableSchema(parse_positive, "positive int").describe() == "positive int"


def test_list_schema_decodes_nested_sequence() -> None:
    assert ListSchema(int).decode(from_str("[1, 2, 3]")) == [1, 2, 3]
    assert ListSchema(int).describe() == "list[integer]"


def test_record_schema_decodes_declared_fields_only() -> None:
    schema = RecordSchema({"x": int, "y": int}, factory=Point)
    data = '{"x": 1, "ignored": {"deep": ["garbage"]}, "y": 2}'
    assert schema.decode(from_str(data)) == Point(1, 2)


def test_record_schema_never_decodes_unknown_fields() -> None:
    schema = RecordSchema({"keep": int})
    assert schema.decode(ValueDeserializer({"keep": 1, "drop": object()})) == {"keep": 1}


def test_record_schema_missing_field() -> None:
    with pytest.raises(DecodeError, match="missing field 'y'"):
        RecordSchema({"x": int, "y": int}).decode(from_str('{"x": 1}'))


def test_record_schema_optional_field() -> None:
    schema = RecordSchema({"x": int, "y": int}, optional={"y"})
    assert schema.decode(from_str('{"x": 1}')) == {"x": 1}


def test_record_schema_duplicate_field() -> None:
    with pytest.raises(DecodeError, match="duplicate field 'x'"):
        RecordSchema({"x": int}).decode(from_str('{"x": 1, "x": 2}'))


def test_record_schema_absent_optional_field_is_not_decoded() -> None:
    schema = RecordSchema({"x": ExplodingSchema()}, optional={"x"})
    assert schema.decode(from_str('{"y": 1}')) == {}


def test_pydantic_schema_validates_model() -> None:
    user = PydanticSchema(User).decode(from_str('{"name": "Alice", "email": "alice@example.com"}'))
    assert user == User(name="Alice", email="alice@example.com")


def test_pydantic_schema_reports_decode_error() -> None:
    with pytest.raises(DecodeError) as excinfo:
        PydanticSchema(User).decode(from_str('{"name": "Bob"}'))
    assert excinfo.value.raw_value == {"name": "Bob"}


def test_as_schema_coercions() -> None:
    assert isinstance(as_schema(None), AnySchema)
    assert isinstance(as_schema(int), TypeSchema)
    assert isinstance(as_schema(User), PydanticSchema)
    assert isinstance(as_schema(Point), PydanticSchema)
    assert isinstance(as_schema(list[int]), PydanticSchema)
    assert isinstance(as_schema(parse_positive), CallableSchema)

    schema = ListSchema(str)
    assert as_schema(schema) is schema


def test_as_schema_rejects_non_callables() -> None:
    with pytest.raises(TypeError):
        as_schema(42)


def test_kind_of() -> None:
    assert kind_of(None) == "null"
    assert kind_of(True) == "boolean"
    assert kind_of(1) == "integer"
    assert kind_of((1, 2)) == "a sequence"
