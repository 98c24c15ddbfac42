"""Declaration-level comparators: item, kind, function, signature, argument, return.

These only pick sub-fields apart and delegate to ``compare_type``; the
judgments of every step are concatenated in order.
"""

from __future__ import annotations

import structlog

from sigsearch.compare.context import UnificationContext
from sigsearch.compare.similarity import DIFFERENT, EQUIVALENT, Similarities
from sigsearch.compare.symbol import compare_symbol
from sigsearch.compare.types import compare_type
from sigsearch.items import models as im
from sigsearch.query import models as qm

log = structlog.get_logger(__name__)


def compare(
    query: qm.Query, item: im.Item, context: UnificationContext | None = None
) -> Similarities:
    """Compare a query against one candidate item.

    Pass a fresh ``context`` per item, or none to get one created. Sharing a
    context between items leaks generic bindings across them; ``item_name``
    is always reset to this item.

    Raises:
        UnresolvedSelfTypeError: The item uses ``Self`` without a binding predicate.
    """
    ctx = context if context is not None else UnificationContext()
    ctx.item_name = item.display_name

    sims = Similarities()

    if query.name is not None:
        if item.name is not None:
            sims.extend(compare_symbol(query.name, item.name))
        else:
            sims.append_discrete(DIFFERENT)
    log.debug("name_compared", item=ctx.item_name, sims=sims)

    if query.kind is not None:
        sims.extend(compare_kind(query.kind, item.kind, ctx))
    log.debug("kind_compared", item=ctx.item_name, sims=sims)

    return sims


def compare_kind(
    kind: qm.QueryKind, item_kind: im.ItemKind, ctx: UnificationContext
) -> Similarities:
    # Free functions and methods are matched identically: only the shape counts.
    if isinstance(kind, qm.FunctionQuery) and isinstance(
        item_kind, im.FunctionItem | im.MethodItem
    ):
        return compare_function(kind.function, item_kind, ctx)
    return Similarities.discrete(DIFFERENT)


def compare_function(
    function: qm.Function,
    item_kind: im.FunctionItem | im.MethodItem,
    ctx: UnificationContext,
) -> Similarities:
    ctx.merge_generics(item_kind.generics)
    return compare_decl(function.decl, item_kind.decl, ctx)


def compare_decl(decl: qm.FnDecl, item_decl: im.FnDecl, ctx: UnificationContext) -> Similarities:
    sims = Similarities()

    if decl.inputs is not None:
        for q, arg in zip(decl.inputs, item_decl.inputs):
            sims.extend(compare_argument(q, arg, ctx))

        if len(decl.inputs) != len(item_decl.inputs):
            diff = abs(len(decl.inputs) - len(item_decl.inputs))
            sims.extend(Similarities.discrete(DIFFERENT, diff))
        elif not decl.inputs:
            # Zero vs zero is a positive signal, not silence
            sims.append_discrete(EQUIVALENT)
    log.debug("inputs_compared", item=ctx.item_name, sims=sims)

    if decl.output is not None:
        sims.extend(compare_return(decl.output, item_decl.output, ctx))
    log.debug("output_compared", item=ctx.item_name, sims=sims)

    return sims


def compare_argument(
    arg: qm.Argument, item_arg: tuple[str, im.Type], ctx: UnificationContext
) -> Similarities:
    name, type_ = item_arg
    sims = Similarities()
    if arg.name is not None:
        sims.extend(compare_symbol(arg.name, name))
    if arg.type is not None:
        sims.extend(compare_type(arg.type, type_, ctx))
    return sims


def compare_return(
    output: qm.FnRetTy, item_output: im.Type | None, ctx: UnificationContext
) -> Similarities:
    if isinstance(output, qm.Return) and item_output is not None:
        return compare_type(output.type, item_output, ctx)
    if isinstance(output, qm.DefaultReturn) and item_output is None:
        return Similarities.discrete(EQUIVALENT)
    return Similarities.discrete(DIFFERENT)
