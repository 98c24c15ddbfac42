"""Compare module exports."""

from sigsearch.compare.context import UnificationContext
from sigsearch.compare.decl import (
    compare,
    compare_argument,
    compare_decl,
    compare_function,
    compare_kind,
    compare_return,
)
from sigsearch.compare.similarity import (
    DIFFERENT,
    EQUIVALENT,
    SUBEQUAL,
    Continuous,
    Discrete,
    DiscreteSimilarity,
    Similarities,
    Similarity,
)
from sigsearch.compare.symbol import compare_symbol, levenshtein, symbol_distance
from sigsearch.compare.types import compare_type

__all__ = [
    "UnificationContext",
    # Comparators
    "compare",
    "compare_argument",
    "compare_decl",
    "compare_function",
    "compare_kind",
    "compare_return",
    "compare_symbol",
    "compare_type",
    "levenshtein",
    "symbol_distance",
    # Similarity model
    "DIFFERENT",
    "EQUIVALENT",
    "SUBEQUAL",
    "Continuous",
    "Discrete",
    "DiscreteSimilarity",
    "Similarities",
    "Similarity",
]
