#!/usr/bin/env python3
"""
Count how many movies came out each year since 1900.

Only the "year" field of each movie is decoded; titles and genres are
skipped while reading.
"""

from __future__ import annotations

import logging
from pathlib import Path

from streamfold import RecordSchema, from_reader

DATA = Path(__file__).parent / "data" / "top_level_movies.json"
FIRST_YEAR = 1900
YEARS = 130


def main() -> None:
    counts = [0] * YEARS

    def count(entry: dict[str, int]) -> None:
        counts[entry["year"] - FIRST_YEAR] += 1

    with DATA.open("rb") as fp:
        from_reader(fp).for_each(count, item=RecordSchema({"year": int}))

    for idx, v in enumerate(counts):
        print(f"{FIRST_YEAR + idx}: {v}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    main()
