"""Fuzzy name comparison via normalized edit distance."""

from __future__ import annotations

from rapidfuzz.distance import Levenshtein

from sigsearch.compare.similarity import Continuous, Similarities


def levenshtein(a: str, b: str) -> int:
    """Edit distance with unit insert/delete/substitute costs."""
    return Levenshtein.distance(a, b)


def symbol_distance(a: str, b: str) -> float:
    """``levenshtein(a, b) / max(len(a), len(b))``; two empty names are identical."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 0.0
    return levenshtein(a, b) / longest


def compare_symbol(query: str, symbol: str) -> Similarities:
    return Similarities.of(Continuous(symbol_distance(query, symbol)))
