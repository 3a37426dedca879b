#!/usr/bin/env python3
"""
Aggregate a sequence nested inside a record.

Two equivalent ways:
- deep.fold with a Locator pointing at "result"
- a RecordSchema whose "result" field is an AggregateSchema, reduced while
  the record is decoded
"""

from __future__ import annotations

from pathlib import Path

from streamfold import AggregateSchema, Fold, Locator, RecordSchema, deep, from_reader

DATA = Path(__file__).parent / "data" / "deep_data.json"


def extend(channels: set[str], entry: dict) -> set[str]:
    channels.update(entry["subscribed_to"])
    return channels


def with_locator() -> set[str]:
    with DATA.open("rb") as fp:
        return deep.fold(from_reader(fp), Locator.of("result"), set(), extend)


def with_record_schema() -> set[str]:
    schema = RecordSchema({"result": AggregateSchema(Fold(set, extend))})
    with DATA.open("rb") as fp:
        return schema.decode(from_reader(fp))["result"]


if __name__ == "__main__":
    channels = with_locator()
    assert channels == with_record_schema()
    print("All existing channels:")
    for channel in sorted(channels):
        print(f"  - {channel}")
