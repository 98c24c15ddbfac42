"""Reference driver: score every candidate and return them best-first.

Each candidate gets its own ``UnificationContext``. A candidate whose
comparison fails (unresolved ``Self``) is logged and left out; the rest of
the set is still ranked.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from sigsearch.compare.context import DEFAULT_MAX_TYPE_DEPTH, UnificationContext
from sigsearch.compare.decl import compare
from sigsearch.compare.similarity import Similarities
from sigsearch.config.constants import SEARCH_MAX_LIMIT
from sigsearch.config.models import SigSearchConfig
from sigsearch.core.errors import UnresolvedSelfTypeError
from sigsearch.core.logging import search_scope
from sigsearch.items.models import Item
from sigsearch.query.models import Query

log = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Hit:
    """One ranked candidate."""

    item: Item
    similarities: Similarities
    score: float


def score_item(query: Query, item: Item, *, max_depth: int | None = None) -> Hit:
    """Compare one candidate with a fresh context.

    Raises:
        UnresolvedSelfTypeError: Propagated from the comparison.
    """
    ctx = UnificationContext(
        item_name=item.display_name,
        max_depth=max_depth if max_depth is not None else DEFAULT_MAX_TYPE_DEPTH,
    )
    sims = compare(query, item, ctx)
    return Hit(item=item, similarities=sims, score=sims.score())


def rank(
    query: Query,
    items: Iterable[Item],
    *,
    limit: int | None = None,
    threshold: float | None = None,
    config: SigSearchConfig | None = None,
) -> list[Hit]:
    """Rank ``items`` against ``query``, best (lowest score) first.

    Args:
        query: The search pattern.
        items: Candidates, in index order. Ties keep this order.
        limit: Max hits to return. Defaults to ``config.search.limit``.
        threshold: Drop hits scoring above this. Defaults to ``config.search.threshold``.
        config: Matching and search defaults.

    Returns:
        Up to ``limit`` hits sorted by ascending score.

    Raises:
        ValueError: ``limit`` is below 1.
    """
    config = config or SigSearchConfig()
    if limit is not None and limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")
    limit = min(limit if limit is not None else config.search.limit, SEARCH_MAX_LIMIT)
    threshold = threshold if threshold is not None else config.search.threshold
    max_depth = config.match.max_type_depth

    with search_scope():
        hits: list[Hit] = []
        candidates = 0
        excluded = 0
        for item in items:
            candidates += 1
            try:
                hit = score_item(query, item, max_depth=max_depth)
            except UnresolvedSelfTypeError as e:
                excluded += 1
                log.warning("candidate_excluded", item=item.display_name, error=e.error_name)
                continue
            if threshold is not None and hit.score > threshold:
                continue
            hits.append(hit)

        # list.sort is stable: equal scores keep index order
        hits.sort(key=lambda h: h.score)
        log.debug(
            "rank_complete",
            candidates=candidates,
            matched=len(hits),
            excluded=excluded,
            returned=min(len(hits), limit),
        )
        return hits[:limit]
