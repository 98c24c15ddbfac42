"""Tests for the recursive type comparator."""

from __future__ import annotations

import pytest

from sigsearch.compare.context import UnificationContext
from sigsearch.compare.similarity import (
    DIFFERENT,
    EQUIVALENT,
    SUBEQUAL,
    Continuous,
    Discrete,
)
from sigsearch.compare.types import compare_type
from sigsearch.core.errors import UnresolvedSelfTypeError
from sigsearch.items import models as im
from sigsearch.query import models as qm

EQ = Discrete(EQUIVALENT)
SUB = Discrete(SUBEQUAL)
DIFF = Discrete(DIFFERENT)

I32 = qm.Primitive("i32")
BOOL = qm.Primitive("bool")
C_I32 = im.Primitive("i32")
C_BOOL = im.Primitive("bool")


def _vec(*args: im.GenericArg) -> im.ResolvedPath:
    return im.ResolvedPath(name="Vec", args=im.AngleBracketedArgs(args=args))


def _self_is(target: im.Type) -> UnificationContext:
    ctx = UnificationContext()
    ctx.merge_generics(
        im.Generics(where_predicates=(im.EqPredicate(lhs=im.Generic("Self"), rhs=target),))
    )
    return ctx


@pytest.fixture
def ctx() -> UnificationContext:
    return UnificationContext()


class TestPrimitives:
    def test_given_same_primitive_when_compared_then_equivalent(
        self, ctx: UnificationContext
    ) -> None:
        assert list(compare_type(I32, C_I32, ctx)) == [EQ]

    def test_given_other_primitive_when_compared_then_different(
        self, ctx: UnificationContext
    ) -> None:
        assert list(compare_type(I32, C_BOOL, ctx)) == [DIFF]


class TestGenericUnification:
    """Candidate type parameters bind to the first query pattern they meet."""

    def test_given_unbound_generic_when_compared_then_subequal_and_bound(
        self, ctx: UnificationContext
    ) -> None:
        # When
        sims = compare_type(I32, im.Generic("T"), ctx)

        # Then
        assert list(sims) == [SUB]
        assert ctx.substitutions == {"T": I32}

    def test_given_bound_generic_when_same_pattern_then_equivalent(
        self, ctx: UnificationContext
    ) -> None:
        # Given
        compare_type(I32, im.Generic("T"), ctx)

        # When
        sims = compare_type(qm.Primitive("i32"), im.Generic("T"), ctx)

        # Then
        assert list(sims) == [EQ]

    def test_given_bound_generic_when_other_pattern_then_different(
        self, ctx: UnificationContext
    ) -> None:
        # Given
        compare_type(I32, im.Generic("T"), ctx)

        # When
        sims = compare_type(BOOL, im.Generic("T"), ctx)

        # Then
        assert list(sims) == [DIFF]
        assert ctx.substitutions == {"T": I32}

    def test_given_structured_pattern_when_rebound_then_structural_equality(
        self, ctx: UnificationContext
    ) -> None:
        """Bound patterns compare with ==, not with a similarity walk."""
        # Given
        vec_i32 = qm.UnresolvedPath("Vec", qm.AngleBracketed((I32,)))
        compare_type(vec_i32, im.Generic("T"), ctx)

        # Then
        assert list(compare_type(vec_i32, im.Generic("T"), ctx)) == [EQ]
        vec_bool = qm.UnresolvedPath("Vec", qm.AngleBracketed((BOOL,)))
        assert list(compare_type(vec_bool, im.Generic("T"), ctx)) == [DIFF]

    def test_given_query_generic_when_candidate_generic_then_binds_pattern(
        self, ctx: UnificationContext
    ) -> None:
        sims = compare_type(qm.Generic("U"), im.Generic("T"), ctx)

        assert list(sims) == [SUB]
        assert ctx.substitutions == {"T": qm.Generic("U")}

    def test_given_query_variable_when_concrete_candidate_then_binds_candidate(
        self, ctx: UnificationContext
    ) -> None:
        """Query-side type variables bind to the candidate type they first meet."""
        # When
        first = compare_type(qm.Generic("T"), C_I32, ctx)
        again = compare_type(qm.Generic("T"), C_I32, ctx)
        clash = compare_type(qm.Generic("T"), C_BOOL, ctx)

        # Then
        assert list(first) == [SUB]
        assert list(again) == [EQ]
        assert list(clash) == [DIFF]
        assert ctx.query_bindings == {"T": C_I32}

    def test_given_query_variable_when_reference_candidate_then_binds_whole_type(
        self, ctx: UnificationContext
    ) -> None:
        cand = im.BorrowedRef(mutable=False, inner=C_I32)

        assert list(compare_type(qm.Generic("T"), cand, ctx)) == [SUB]
        assert ctx.query_bindings == {"T": cand}

    def test_given_query_self_when_concrete_candidate_then_different(
        self, ctx: UnificationContext
    ) -> None:
        """``Self`` in a query is never a bindable variable."""
        assert list(compare_type(qm.Generic("Self"), C_I32, ctx)) == [DIFF]


class TestSelfResolution:
    def test_given_eq_predicate_when_self_then_compared_against_target(self) -> None:
        # Given
        ctx = _self_is(_vec(im.TypeArg(im.Generic("T"))))
        query = qm.UnresolvedPath("Vec", qm.AngleBracketed((I32,)))

        # When
        sims = compare_type(query, im.Generic("Self"), ctx)

        # Then
        assert list(sims) == [Continuous(0.0), SUB]
        assert ctx.substitutions == {"T": I32}

    def test_given_query_self_when_candidate_self_bound_then_equivalent(self) -> None:
        """Both sides name the enclosing type; the binding itself is not walked."""
        ctx = _self_is(_vec(im.TypeArg(im.Generic("T"))))

        assert list(compare_type(qm.Generic("Self"), im.Generic("Self"), ctx)) == [EQ]
        assert ctx.substitutions == {}

    def test_given_query_self_when_candidate_self_unbound_then_raises(
        self, ctx: UnificationContext
    ) -> None:
        """A candidate without ``Self = T`` is malformed even against a query ``Self``."""
        ctx.item_name = "Thing::frob"

        with pytest.raises(UnresolvedSelfTypeError) as exc_info:
            compare_type(qm.Generic("Self"), im.Generic("Self"), ctx)
        assert exc_info.value.details == {"item": "Thing::frob"}

    def test_given_no_predicate_when_self_then_raises(self, ctx: UnificationContext) -> None:
        # Given
        ctx.item_name = "Thing::frob"

        # When / Then
        with pytest.raises(UnresolvedSelfTypeError) as exc_info:
            compare_type(I32, im.Generic("Self"), ctx)
        assert exc_info.value.details == {"item": "Thing::frob"}

    def test_given_only_bound_predicates_when_self_then_raises(self) -> None:
        # Given
        ctx = UnificationContext()
        ctx.merge_generics(
            im.Generics(
                where_predicates=(im.BoundPredicate(type=im.Generic("Self"), bounds=("Clone",)),)
            )
        )

        # When / Then
        with pytest.raises(UnresolvedSelfTypeError):
            compare_type(I32, im.Generic("Self"), ctx)

    def test_given_several_predicates_when_self_then_first_wins(self) -> None:
        # Given
        ctx = _self_is(C_I32)
        ctx.merge_generics(
            im.Generics(where_predicates=(im.EqPredicate(im.Generic("Self"), C_BOOL),))
        )

        # Then
        assert list(compare_type(I32, im.Generic("Self"), ctx)) == [EQ]


class TestTuples:
    def test_given_same_arity_when_compared_then_elements_plus_base(
        self, ctx: UnificationContext
    ) -> None:
        query = qm.Tuple((I32, BOOL))
        cand = im.Tuple((C_I32, C_BOOL))

        assert list(compare_type(query, cand, ctx)) == [EQ, EQ, EQ]

    def test_given_shorter_query_when_compared_then_one_extra_different(
        self, ctx: UnificationContext
    ) -> None:
        # Given
        query = qm.Tuple((I32,))
        cand = im.Tuple((C_I32, C_I32))

        # When
        sims = compare_type(query, cand, ctx)

        # Then: element judgment, base Equivalent, one Different for the excess
        assert list(sims) == [EQ, EQ, DIFF]
        assert sims.count(DIFFERENT) == 1

    def test_given_wildcard_element_when_compared_then_slot_skipped(
        self, ctx: UnificationContext
    ) -> None:
        query = qm.Tuple((None, I32))
        cand = im.Tuple((C_BOOL, C_I32))

        assert list(compare_type(query, cand, ctx)) == [EQ, EQ]

    def test_given_unit_tuples_when_compared_then_equivalent(
        self, ctx: UnificationContext
    ) -> None:
        assert list(compare_type(qm.Tuple(), im.Tuple(), ctx)) == [EQ]


class TestSlices:
    def test_given_wildcard_element_when_compared_then_base_only(
        self, ctx: UnificationContext
    ) -> None:
        assert list(compare_type(qm.Slice(), im.Slice(C_BOOL), ctx)) == [EQ]

    def test_given_element_when_compared_then_recursed(self, ctx: UnificationContext) -> None:
        assert list(compare_type(qm.Slice(I32), im.Slice(C_BOOL), ctx)) == [EQ, DIFF]


class TestPointers:
    def test_given_same_mutability_when_compared_then_no_extra(
        self, ctx: UnificationContext
    ) -> None:
        query = qm.BorrowedRef(mutable=True, inner=I32)
        cand = im.BorrowedRef(mutable=True, inner=C_I32)

        assert list(compare_type(query, cand, ctx)) == [EQ]

    def test_given_mutability_mismatch_when_compared_then_one_subequal(
        self, ctx: UnificationContext
    ) -> None:
        query = qm.BorrowedRef(mutable=True, inner=I32)
        cand = im.BorrowedRef(mutable=False, inner=C_I32)

        assert list(compare_type(query, cand, ctx)) == [EQ, SUB]

    def test_given_raw_pointers_when_compared_then_same_rule(
        self, ctx: UnificationContext
    ) -> None:
        query = qm.RawPointer(mutable=False, inner=I32)
        cand = im.RawPointer(mutable=True, inner=C_BOOL)

        assert list(compare_type(query, cand, ctx)) == [DIFF, SUB]

    def test_given_reference_candidate_when_bare_query_then_auto_ref(
        self, ctx: UnificationContext
    ) -> None:
        cand = im.BorrowedRef(mutable=False, inner=C_I32)
        assert list(compare_type(I32, cand, ctx)) == [EQ, SUB]

    def test_given_reference_query_when_bare_candidate_then_auto_deref(
        self, ctx: UnificationContext
    ) -> None:
        query = qm.BorrowedRef(mutable=False, inner=I32)
        assert list(compare_type(query, C_I32, ctx)) == [EQ, SUB]

    def test_given_pointer_query_when_reference_candidate_then_two_subequal(
        self, ctx: UnificationContext
    ) -> None:
        query = qm.RawPointer(mutable=False, inner=I32)
        cand = im.BorrowedRef(mutable=False, inner=C_I32)
        assert list(compare_type(query, cand, ctx)) == [EQ, SUB, SUB]


class TestPaths:
    def test_given_same_path_and_args_when_compared_then_exact(
        self, ctx: UnificationContext
    ) -> None:
        query = qm.UnresolvedPath("Vec", qm.AngleBracketed((I32,)))
        cand = _vec(im.TypeArg(C_I32))

        assert list(compare_type(query, cand, ctx)) == [Continuous(0.0), EQ]

    def test_given_query_without_args_when_compared_then_name_only(
        self, ctx: UnificationContext
    ) -> None:
        query = qm.UnresolvedPath("Vec")
        cand = _vec(im.TypeArg(C_I32))

        assert list(compare_type(query, cand, ctx)) == [Continuous(0.0)]

    def test_given_candidate_without_args_when_compared_then_different_per_query_arg(
        self, ctx: UnificationContext
    ) -> None:
        query = qm.UnresolvedPath("HashMap", qm.AngleBracketed((I32, None)))
        cand = im.ResolvedPath("HashMap")

        assert list(compare_type(query, cand, ctx)) == [Continuous(0.0), DIFF, DIFF]

    def test_given_wildcard_arg_when_compared_then_slot_skipped(
        self, ctx: UnificationContext
    ) -> None:
        query = qm.UnresolvedPath("Result", qm.AngleBracketed((None, BOOL)))
        cand = im.ResolvedPath(
            "Result", args=im.AngleBracketedArgs((im.TypeArg(C_I32), im.TypeArg(C_BOOL)))
        )

        assert list(compare_type(query, cand, ctx)) == [Continuous(0.0), EQ]

    def test_given_lifetime_arg_when_type_pattern_then_different(
        self, ctx: UnificationContext
    ) -> None:
        query = qm.UnresolvedPath("Cow", qm.AngleBracketed((qm.Primitive("str"),)))
        cand = im.ResolvedPath(
            "Cow",
            args=im.AngleBracketedArgs((im.LifetimeArg("'a"), im.TypeArg(im.Primitive("str")))),
        )

        assert list(compare_type(query, cand, ctx)) == [Continuous(0.0), DIFF]

    def test_given_parenthesized_args_when_compared_then_no_arg_judgment(
        self, ctx: UnificationContext
    ) -> None:
        query = qm.UnresolvedPath("Fn", qm.AngleBracketed((I32,)))
        cand = im.ResolvedPath("Fn", args=im.ParenthesizedArgs(inputs=(C_I32,)))

        assert list(compare_type(query, cand, ctx)) == [Continuous(0.0)]

    def test_given_fuzzy_name_when_compared_then_continuous(
        self, ctx: UnificationContext
    ) -> None:
        sims = compare_type(qm.UnresolvedPath("Vc"), im.ResolvedPath("Vec"), ctx)
        assert list(sims) == [Continuous(1 / 3)]

    def test_given_nested_generic_when_compared_then_binds_inside(
        self, ctx: UnificationContext
    ) -> None:
        query = qm.UnresolvedPath("Option", qm.AngleBracketed((I32,)))
        cand = im.ResolvedPath(
            "Option", args=im.AngleBracketedArgs((im.TypeArg(im.Generic("T")),))
        )

        assert list(compare_type(query, cand, ctx)) == [Continuous(0.0), SUB]
        assert ctx.substitutions == {"T": I32}


class TestMismatchedShapes:
    @pytest.mark.parametrize(
        ("query", "cand"),
        [
            (I32, im.ResolvedPath("Vec")),
            (qm.UnresolvedPath("Vec"), C_I32),
            (qm.Tuple((I32,)), im.Slice(C_I32)),
            (qm.Slice(I32), im.Tuple((C_I32,))),
            (I32, im.OtherType("function_pointer")),
        ],
    )
    def test_given_different_grammar_variants_when_compared_then_single_different(
        self, ctx: UnificationContext, query: qm.Type, cand: im.Type
    ) -> None:
        assert list(compare_type(query, cand, ctx)) == [DIFF]


class TestDepthBound:
    def test_given_deep_types_when_limit_reached_then_subtree_different(self) -> None:
        # Given
        ctx = UnificationContext(max_depth=2)
        query = qm.Slice(qm.Slice(qm.Slice(I32)))
        cand = im.Slice(im.Slice(im.Slice(C_I32)))

        # When
        sims = compare_type(query, cand, ctx)

        # Then
        assert list(sims) == [EQ, EQ, DIFF]
        assert ctx.depth == 0

    def test_given_depth_out_of_range_when_context_created_then_rejected(self) -> None:
        with pytest.raises(ValueError):
            UnificationContext(max_depth=0)

    def test_given_depth_within_limit_when_compared_then_full_walk(self) -> None:
        ctx = UnificationContext(max_depth=4)
        query = qm.Slice(qm.Slice(qm.Slice(I32)))
        cand = im.Slice(im.Slice(im.Slice(C_I32)))

        assert list(compare_type(query, cand, ctx)) == [EQ, EQ, EQ, EQ]
