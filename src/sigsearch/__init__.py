"""sigsearch: type-signature matching core.

``compare(query, item)`` grades one candidate declaration against a search
pattern; ``rank(query, items)`` scores a whole candidate set best-first.
"""

from sigsearch.compare import Similarities, UnificationContext, compare
from sigsearch.core.errors import SigSearchError, UnresolvedSelfTypeError
from sigsearch.search import Hit, rank

__all__ = [
    "Hit",
    "SigSearchError",
    "Similarities",
    "UnificationContext",
    "UnresolvedSelfTypeError",
    "compare",
    "rank",
]
