"""Combinators - reductions over streamed sequences."""

from streamfold.combinators import deep
from streamfold.combinators.aggregate import (
    AggregateSchema,
    Aggregator,
    Find,
    Fold,
    ForEach,
    TryFold,
    aggregate,
)
from streamfold.combinators.deep import Field, Index, Locator, locate
from streamfold.combinators.ext import DeserializerExt
from streamfold.combinators.top_level import find, fold, for_each, try_fold

__all__ = [
    "try_fold",
    "fold",
    "for_each",
    "find",
    "aggregate",
    "deep",
    # Deep routing
    "Locator",
    "Field",
    "Index",
    "locate",
    # Aggregators
    "Aggregator",
    "AggregateSchema",
    "TryFold",
    "Fold",
    "ForEach",
    "Find",
    "DeserializerExt",
]
