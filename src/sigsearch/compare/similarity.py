"""Similarity judgments and their aggregation into a sortable score.

A comparison yields an ordered list of judgments. Each judgment maps to a
cost in [0.0, 1.0] and the mean cost is the candidate's score: lower is a
better match.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import IntEnum

from sigsearch.config.constants import EMPTY_SCORE, SUBEQUAL_COST


class DiscreteSimilarity(IntEnum):
    """Three-level match quality, ordered best to worst."""

    EQUIVALENT = 0
    """Same type, e.g. ``i32`` and ``i32``."""

    SUBEQUAL = 1
    """Partially equal, e.g. an unbound generic ``T`` and ``i32``."""

    DIFFERENT = 2
    """Not similar at all, e.g. ``i32`` and ``Option<bool>``."""

    @property
    def cost(self) -> float:
        return _DISCRETE_COSTS[self]


_DISCRETE_COSTS = {
    DiscreteSimilarity.EQUIVALENT: 0.0,
    DiscreteSimilarity.SUBEQUAL: SUBEQUAL_COST,
    DiscreteSimilarity.DIFFERENT: 1.0,
}

EQUIVALENT = DiscreteSimilarity.EQUIVALENT
SUBEQUAL = DiscreteSimilarity.SUBEQUAL
DIFFERENT = DiscreteSimilarity.DIFFERENT


@dataclass(frozen=True, slots=True)
class Discrete:
    value: DiscreteSimilarity

    @property
    def cost(self) -> float:
        return self.value.cost


@dataclass(frozen=True, slots=True)
class Continuous:
    """Analog similarity in [0.0, 1.0]; 0.0 is identical."""

    value: float

    def __post_init__(self) -> None:
        if not (0.0 <= self.value <= 1.0):
            raise ValueError(f"Continuous similarity must be within 0.0-1.0, got {self.value}")

    @property
    def cost(self) -> float:
        return self.value


Similarity = Discrete | Continuous


class Similarities:
    """Ordered judgments from one query-vs-item comparison.

    ``==`` compares content; ``<`` and friends compare :meth:`score` only,
    so two different sequences with the same mean sort as ties.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Similarity] = ()) -> None:
        self._items: list[Similarity] = list(items)

    @classmethod
    def of(cls, *items: Similarity) -> Similarities:
        return cls(items)

    @classmethod
    def discrete(cls, value: DiscreteSimilarity, count: int = 1) -> Similarities:
        return cls([Discrete(value)] * count)

    def append(self, sim: Similarity) -> None:
        self._items.append(sim)

    def append_discrete(self, value: DiscreteSimilarity) -> None:
        self._items.append(Discrete(value))

    def extend(self, sims: Iterable[Similarity]) -> None:
        self._items.extend(sims)

    def score(self) -> float:
        """Mean judgment cost. An empty sequence scores ``EMPTY_SCORE`` (worst)."""
        if not self._items:
            return EMPTY_SCORE
        return sum(sim.cost for sim in self._items) / len(self._items)

    def count(self, value: DiscreteSimilarity) -> int:
        return sum(1 for sim in self._items if sim == Discrete(value))

    def __iter__(self) -> Iterator[Similarity]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Similarity:
        return self._items[index]

    def __add__(self, other: Similarities) -> Similarities:
        if not isinstance(other, Similarities):
            return NotImplemented
        return Similarities([*self._items, *other._items])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Similarities):
            return NotImplemented
        return self._items == other._items

    def __lt__(self, other: Similarities) -> bool:
        if not isinstance(other, Similarities):
            return NotImplemented
        return self.score() < other.score()

    def __le__(self, other: Similarities) -> bool:
        if not isinstance(other, Similarities):
            return NotImplemented
        return self.score() <= other.score()

    def __gt__(self, other: Similarities) -> bool:
        if not isinstance(other, Similarities):
            return NotImplemented
        return self.score() > other.score()

    def __ge__(self, other: Similarities) -> bool:
        if not isinstance(other, Similarities):
            return NotImplemented
        return self.score() >= other.score()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Similarities({self._items!r})"
