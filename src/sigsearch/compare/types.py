"""Recursive structural matcher between a type pattern and a candidate type.

Rules are tried in order:

1. Candidate ``Self`` must be bound by a ``Self = T`` where-predicate. A
   query ``Self`` then matches it outright; anything else is compared to ``T``.
2. Candidate generic ``T``: first sighting binds ``T`` to the query pattern
   (Subequal); later sightings must equal that pattern. A query type
   variable against a concrete candidate type binds the same way, mirrored.
3. Tuple vs tuple, 4. slice vs slice.
5. Pointer vs pointer / reference vs reference, 6. auto-(de)ref on one side.
7. Named paths: fuzzy name plus positional generic arguments.
8. Primitives by exact name.
9. Anything else is Different.
"""

from __future__ import annotations

import structlog

from sigsearch.compare.context import UnificationContext
from sigsearch.compare.similarity import DIFFERENT, EQUIVALENT, SUBEQUAL, Similarities
from sigsearch.compare.symbol import compare_symbol
from sigsearch.core.errors import UnresolvedSelfTypeError
from sigsearch.items import models as im
from sigsearch.query import models as qm

log = structlog.get_logger(__name__)


def compare_type(query: qm.Type, cand: im.Type, ctx: UnificationContext) -> Similarities:
    """Judge how well ``cand`` matches the pattern ``query``.

    Raises:
        UnresolvedSelfTypeError: ``cand`` mentions ``Self`` and nothing binds it.
    """
    if ctx.exhausted:
        log.warning("type_depth_exceeded", item=ctx.item_name, max_depth=ctx.max_depth)
        return Similarities.discrete(DIFFERENT)
    with ctx.descend():
        return _dispatch(query, cand, ctx)


def _dispatch(query: qm.Type, cand: im.Type, ctx: UnificationContext) -> Similarities:
    if isinstance(cand, im.Generic):
        if cand.is_self:
            return _compare_self(query, ctx)
        return _unify(query, cand.name, ctx)

    if isinstance(query, qm.Generic) and query.name != qm.SELF_MARKER:
        return _unify_query_var(query.name, cand, ctx)

    if isinstance(query, qm.Tuple) and isinstance(cand, im.Tuple):
        return _compare_tuple(query, cand, ctx)

    if isinstance(query, qm.Slice) and isinstance(cand, im.Slice):
        sims = Similarities.discrete(EQUIVALENT)
        if query.element is not None:
            sims.extend(compare_type(query.element, cand.element, ctx))
        return sims

    if (isinstance(query, qm.RawPointer) and isinstance(cand, im.RawPointer)) or (
        isinstance(query, qm.BorrowedRef) and isinstance(cand, im.BorrowedRef)
    ):
        sims = compare_type(query.inner, cand.inner, ctx)
        if query.mutable != cand.mutable:
            sims.append_discrete(SUBEQUAL)
        return sims

    # Auto-ref / auto-deref: shape differs, referent may still match
    if isinstance(cand, im.RawPointer | im.BorrowedRef):
        sims = compare_type(query, cand.inner, ctx)
        sims.append_discrete(SUBEQUAL)
        return sims
    if isinstance(query, qm.RawPointer | qm.BorrowedRef):
        sims = compare_type(query.inner, cand, ctx)
        sims.append_discrete(SUBEQUAL)
        return sims

    if isinstance(query, qm.UnresolvedPath) and isinstance(cand, im.ResolvedPath):
        return _compare_path(query, cand, ctx)

    if isinstance(query, qm.Primitive) and isinstance(cand, im.Primitive):
        return Similarities.discrete(EQUIVALENT if query.name == cand.name else DIFFERENT)

    return Similarities.discrete(DIFFERENT)


def _compare_self(query: qm.Type, ctx: UnificationContext) -> Similarities:
    resolved = ctx.resolve_self()
    if resolved is None:
        raise UnresolvedSelfTypeError.for_item(ctx.item_name)

    if isinstance(query, qm.Generic) and query.name == qm.SELF_MARKER:
        return Similarities.discrete(EQUIVALENT)
    return compare_type(query, resolved, ctx)


def _unify(query: qm.Type, name: str, ctx: UnificationContext) -> Similarities:
    bound = ctx.lookup(name)
    if bound is None:
        ctx.bind(name, query)
        return Similarities.discrete(SUBEQUAL)
    # Structural equality, not a similarity walk
    return Similarities.discrete(EQUIVALENT if bound == query else DIFFERENT)


def _unify_query_var(name: str, cand: im.Type, ctx: UnificationContext) -> Similarities:
    bound = ctx.lookup_query_var(name)
    if bound is None:
        ctx.bind_query_var(name, cand)
        return Similarities.discrete(SUBEQUAL)
    return Similarities.discrete(EQUIVALENT if bound == cand else DIFFERENT)


def _compare_tuple(query: qm.Tuple, cand: im.Tuple, ctx: UnificationContext) -> Similarities:
    sims = Similarities()
    for q, c in zip(query.elements, cand.elements):
        if q is not None:
            sims.extend(compare_type(q, c, ctx))

    # They are both tuples.
    sims.append_discrete(EQUIVALENT)

    excess = abs(len(query.elements) - len(cand.elements))
    sims.extend(Similarities.discrete(DIFFERENT, excess))
    return sims


def _compare_path(
    query: qm.UnresolvedPath, cand: im.ResolvedPath, ctx: UnificationContext
) -> Similarities:
    sims = compare_symbol(query.name, cand.name)

    if query.args is None:
        return sims

    if cand.args is None:
        sims.extend(Similarities.discrete(DIFFERENT, len(query.args.args)))
        return sims

    # TODO: Support ParenthesizedArgs (`Fn(A) -> B`) once queries can express them.
    if isinstance(cand.args, im.AngleBracketedArgs):
        for q, c in zip(query.args.args, cand.args.args):
            if q is None:
                continue
            if isinstance(c, im.TypeArg):
                sims.extend(compare_type(q, c.type, ctx))
            else:
                sims.append_discrete(DIFFERENT)
    return sims
