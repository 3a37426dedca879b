#!/usr/bin/env python3
"""Largest transaction index of an address, without building the index list."""

from __future__ import annotations

from pathlib import Path

from streamfold import AggregateSchema, Fold, RecordSchema, from_reader

DATA = Path(__file__).parent / "data" / "deep_bitcoin.json"

BitCoin = RecordSchema({"txIndexes": AggregateSchema(Fold(int, max, item=int))})


if __name__ == "__main__":
    with DATA.open("rb") as fp:
        content = BitCoin.decode(from_reader(fp))
    print(f"Max transaction: {content['txIndexes']}")
