#!/usr/bin/env python3
"""
Collect every channel anyone is subscribed to, one entry at a time.

The top-level array is never loaded as a list: each entry is decoded,
handed to the callback and dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from streamfold import from_reader

DATA = Path(__file__).parent / "data" / "top_level_data.json"


@dataclass
class DataEntry:
    # Not all fields are needed, "id" and "name" are skipped
    subscribed_to: list[str]


def main() -> None:
    all_channels: set[str] = set()
    with DATA.open("rb") as fp:
        from_reader(fp).for_each(lambda entry: all_channels.update(entry.subscribed_to), item=DataEntry)

    print("All existing channels:")
    for channel in sorted(all_channels):
        print(f"  - {channel}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    main()
