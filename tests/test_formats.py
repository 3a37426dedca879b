"""Tests for the JSON and Python value deserializers."""

import io

import pytest

from streamfold import ControlFlow, FormatError, JsonOptions, StructuralMismatch, find, from_bytes, from_reader, from_str
from streamfold.formats import ValueDeserializer
from streamfold.structured import HandleConsumedError


class CountingReader(io.BytesIO):
    """BytesIO recording how many bytes were handed out."""

    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.served = 0

    def read(self, size: int = -1) -> bytes:
        chunk = super().read(size)
        self.served += len(chunk)
        return chunk


def test_json_handle_is_single_use() -> None:
    de = from_str("[1]")
    de.deserialize_seq()
    with pytest.raises(HandleConsumedError):
        de.deserialize_seq()


def test_json_mismatch_reports_shapes() -> None:
    with pytest.raises(StructuralMismatch, match="invalid type: a map, expected a sequence") as excinfo:
        from_str('{"a": 1}').deserialize_seq()
    assert excinfo.value.found == "a map"


@pytest.mark.parametrize(
    ("text", "value"),
    [("42", 42), ("1.5", 1.5), ("true", True), ("null", None), ('"s"', "s"), ("{}", {})],
)
def test_json_and_value_mismatches_name_the_same_kind(text: str, value: object) -> None:
    with pytest.raises(StructuralMismatch) as from_json:
        from_str(text).deserialize_seq()
    with pytest.raises(StructuralMismatch) as from_value:
        ValueDeserializer(value).deserialize_seq()
    assert from_json.value.found == from_value.value.found


def test_json_decimal_mismatch_is_named_float() -> None:
    with pytest.raises(StructuralMismatch) as excinfo:
        from_str("1.5", JsonOptions(use_float=False)).deserialize_map()
    assert excinfo.value.found == "float"


def test_json_sequence_continues_after_element_shape_mismatch() -> None:
    seq = from_str('[{"a": [1, 2]}, 2]').deserialize_seq()
    first = seq.next_element()
    assert first is not None
    with pytest.raises(StructuralMismatch):
        first.deserialize_seq()
    second = seq.next_element()
    assert second is not None
    assert second.deserialize_any() == 2
    assert seq.next_element() is None


def test_json_map_continues_after_value_shape_mismatch() -> None:
    entries = from_str('{"a": "text", "b": [3]}').deserialize_map()
    assert entries.next_key() == "a"
    with pytest.raises(StructuralMismatch):
        entries.next_value().deserialize_map()
    assert entries.next_key() == "b"
    assert entries.next_value().deserialize_any() == [3]
    assert entries.next_key() is None


def test_json_malformed_input_is_format_error() -> None:
    with pytest.raises(FormatError):
        from_str("[1, 2,, 3]").fold(0, lambda acc, item: acc + item)


def test_json_truncated_input_is_format_error() -> None:
    with pytest.raises(FormatError):
        from_str("[1, 2").fold(0, lambda acc, item: acc + item)


def test_json_empty_input_is_format_error() -> None:
    with pytest.raises(FormatError):
        from_str("").for_each(print)


def test_json_unused_element_handles_are_skipped() -> None:
    seq = from_str('[{"a": [1, 2]}, "second", 3]').deserialize_seq()
    first = seq.next_element()
    assert first is not None
    second = seq.next_element()
    assert second is not None
    assert second.deserialize_any() == "second"
    third = seq.next_element()
    assert third is not None
    assert third.deserialize_any() == 3
    assert seq.next_element() is None
    assert seq.next_element() is None


def test_json_map_access_skips_unread_values() -> None:
    entries = from_str('{"a": {"x": [1]}, "b": 2}').deserialize_map()
    assert entries.next_key() == "a"
    assert entries.next_key() == "b"
    assert entries.next_value().deserialize_any() == 2
    assert entries.next_key() is None


def test_json_next_value_requires_key() -> None:
    entries = from_str("{}").deserialize_map()
    with pytest.raises(RuntimeError):
        entries.next_value()


def test_json_decimal_numbers_without_use_float() -> None:
    total = from_str("[1.5, 2.25]", JsonOptions(use_float=False)).fold(0, lambda acc, item: acc + item)
    assert str(total) == "3.75"


def test_json_early_break_leaves_rest_unread() -> None:
    body = b"[" + b", ".join(b"%d" % i for i in range(10_000)) + b"]"
    reader = CountingReader(body)
    options = JsonOptions(buf_size=64, backend="python")

    assert find(from_reader(reader, options), lambda item: item == 3) == 3
    assert reader.served < len(body)


def test_json_early_break_does_not_drain_malformed_tail() -> None:
    options = JsonOptions(buf_size=16, backend="python")
    data = b"[1, 2, 3, 4, 5, 6, 7, 8, 9, " + b"!" * 64

    flow = from_bytes(data, options).try_fold(0, lambda acc, item: ControlFlow.Break(item))

    assert flow == ControlFlow.Break(1)


def test_value_deserializer_shapes() -> None:
    with pytest.raises(StructuralMismatch, match="expected a sequence"):
        ValueDeserializer("abc").deserialize_seq()
    with pytest.raises(StructuralMismatch, match="expected a map"):
        ValueDeserializer([1]).deserialize_map()


def test_value_deserializer_map_access() -> None:
    entries = ValueDeserializer({"a": 1, "b": 2}).deserialize_map()
    assert entries.next_key() == "a"
    assert entries.next_value().deserialize_any() == 1
    assert entries.next_key() == "b"
    assert entries.next_key() is None
    with pytest.raises(RuntimeError):
        entries.next_value()


def test_value_deserializer_is_single_use() -> None:
    de = ValueDeserializer([1])
    de.skip()
    with pytest.raises(HandleConsumedError):
        de.deserialize_any()
