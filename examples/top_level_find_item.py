#!/usr/bin/env python3
"""Find the first user who is not subscribed to "rust", stopping right there."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from streamfold import from_reader

DATA = Path(__file__).parent / "data" / "top_level_data.json"


@dataclass
class DataEntry:
    id: int
    name: str
    subscribed_to: list[str]


def main() -> None:
    with DATA.open("rb") as fp:
        entry = from_reader(fp).find(lambda e: "rust" not in e.subscribed_to, item=DataEntry)

    if entry is None:
        print("Everybody likes Rust. How cool!")
    else:
        print(f"Looks like {entry.name} (id: {entry.id}) doesn't like Rust... Good boy status revoked.")


if __name__ == "__main__":
    main()
