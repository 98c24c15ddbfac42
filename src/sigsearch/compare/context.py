"""Per-comparison unification state.

One ``UnificationContext`` belongs to exactly one query-vs-item comparison.
Reusing it for a second item would leak generic bindings from the first,
so drivers create a fresh one per candidate.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from sigsearch.config.constants import MAX_TYPE_DEPTH_CEILING
from sigsearch.items import models as im
from sigsearch.query import models as qm

DEFAULT_MAX_TYPE_DEPTH = 64


@dataclass(slots=True)
class UnificationContext:
    """Accumulated generics plus the generic-variable substitution map.

    Attributes:
        params: Type-parameter declarations merged from every visited function.
        where_predicates: Where-predicates merged the same way; only the
            ``Self = T`` equality predicates are ever read back.
        substitutions: Candidate generic name -> query pattern first bound to it.
        query_bindings: Query type variable -> candidate type first bound to it.
        max_depth: Deepest type nesting the comparator will walk.
        item_name: Name of the candidate, for error reporting.
    """

    params: list[im.GenericParamDef] = field(default_factory=list)
    where_predicates: list[im.WherePredicate] = field(default_factory=list)
    substitutions: dict[str, qm.Type] = field(default_factory=dict)
    query_bindings: dict[str, im.Type] = field(default_factory=dict)
    max_depth: int = DEFAULT_MAX_TYPE_DEPTH
    item_name: str | None = None
    depth: int = 0

    def __post_init__(self) -> None:
        if not (1 <= self.max_depth <= MAX_TYPE_DEPTH_CEILING):
            raise ValueError(f"max_depth must be 1-{MAX_TYPE_DEPTH_CEILING}, got {self.max_depth}")

    def merge_generics(self, generics: im.Generics) -> None:
        """Append (never replace) a declaration's generics to the pool."""
        self.params.extend(generics.params)
        self.where_predicates.extend(generics.where_predicates)

    def resolve_self(self) -> im.Type | None:
        """Concrete type bound to ``Self`` by the first ``Self = T`` predicate, if any."""
        for predicate in self.where_predicates:
            if (
                isinstance(predicate, im.EqPredicate)
                and isinstance(predicate.lhs, im.Generic)
                and predicate.lhs.is_self
            ):
                return predicate.rhs
        return None

    def lookup(self, name: str) -> qm.Type | None:
        return self.substitutions.get(name)

    def bind(self, name: str, pattern: qm.Type) -> None:
        self.substitutions[name] = pattern

    def lookup_query_var(self, name: str) -> im.Type | None:
        return self.query_bindings.get(name)

    def bind_query_var(self, name: str, cand: im.Type) -> None:
        self.query_bindings[name] = cand

    @property
    def exhausted(self) -> bool:
        return self.depth >= self.max_depth

    @contextmanager
    def descend(self) -> Iterator[None]:
        """Track one level of type nesting for the duration of the block."""
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1
