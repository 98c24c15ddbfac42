"""Candidate-side data model: one declaration from an indexed API surface.

Shapes follow rustdoc's JSON output closely enough that an extractor can
map records one-to-one (see ``sigsearch.items.loader``). Only the parts the
matcher reads are modelled; other type-expression forms collapse into
``OtherType``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, TypeAlias

SELF_MARKER = "Self"

# ===================================================================
# Type expressions
# ===================================================================


@dataclass(frozen=True, slots=True)
class TypeArg:
    type: Type


@dataclass(frozen=True, slots=True)
class LifetimeArg:
    name: str


@dataclass(frozen=True, slots=True)
class ConstArg:
    expr: str


GenericArg: TypeAlias = TypeArg | LifetimeArg | ConstArg


@dataclass(frozen=True, slots=True)
class AngleBracketedArgs:
    """``Vec<T>``, ``HashMap<K, V>``, ``Cow<'a, str>``."""

    args: tuple[GenericArg, ...] = ()


@dataclass(frozen=True, slots=True)
class ParenthesizedArgs:
    """``Fn(A, B) -> C`` style argument list."""

    inputs: tuple[Type, ...] = ()
    output: Type | None = None


GenericArgs: TypeAlias = AngleBracketedArgs | ParenthesizedArgs


@dataclass(frozen=True, slots=True)
class ResolvedPath:
    name: str
    id: str | None = None
    args: GenericArgs | None = None


@dataclass(frozen=True, slots=True)
class Generic:
    """A type parameter, or the ``Self`` marker."""

    name: str

    @property
    def is_self(self) -> bool:
        return self.name == SELF_MARKER


@dataclass(frozen=True, slots=True)
class Tuple:
    elements: tuple[Type, ...] = ()


@dataclass(frozen=True, slots=True)
class Slice:
    element: Type


@dataclass(frozen=True, slots=True)
class RawPointer:
    mutable: bool
    inner: Type


@dataclass(frozen=True, slots=True)
class BorrowedRef:
    mutable: bool
    inner: Type
    lifetime: str | None = None


@dataclass(frozen=True, slots=True)
class Primitive:
    name: str


@dataclass(frozen=True, slots=True)
class OtherType:
    """Any type form the matcher has no rule for (fn pointers, arrays, impl Trait, ...)."""

    kind: str


Type: TypeAlias = (
    ResolvedPath | Generic | Tuple | Slice | RawPointer | BorrowedRef | Primitive | OtherType
)

# ===================================================================
# Generics
# ===================================================================


@dataclass(frozen=True, slots=True)
class GenericParamDef:
    name: str
    kind: Literal["type", "lifetime", "const"] = "type"


@dataclass(frozen=True, slots=True)
class BoundPredicate:
    """``where T: Clone + Send``"""

    type: Type
    bounds: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RegionPredicate:
    """``where 'a: 'b``"""

    lifetime: str
    bounds: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class EqPredicate:
    """``where Self = Vec<T>``"""

    lhs: Type
    rhs: Type


WherePredicate: TypeAlias = BoundPredicate | RegionPredicate | EqPredicate


@dataclass(frozen=True, slots=True)
class Generics:
    params: tuple[GenericParamDef, ...] = ()
    where_predicates: tuple[WherePredicate, ...] = ()


# ===================================================================
# Items
# ===================================================================


@dataclass(frozen=True, slots=True)
class FnDecl:
    inputs: tuple[tuple[str, Type], ...] = ()
    output: Type | None = None


@dataclass(frozen=True, slots=True)
class FunctionItem:
    decl: FnDecl
    generics: Generics = field(default_factory=Generics)


@dataclass(frozen=True, slots=True)
class MethodItem:
    """An associated function; ``self`` receivers appear as ``Self`` inputs."""

    decl: FnDecl
    generics: Generics = field(default_factory=Generics)


@dataclass(frozen=True, slots=True)
class OtherItem:
    """Structs, traits, modules, constants... never match a function query."""

    tag: str


ItemKind: TypeAlias = FunctionItem | MethodItem | OtherItem


@dataclass(frozen=True, slots=True)
class Item:
    name: str | None
    kind: ItemKind
    id: str | None = None
    path: tuple[str, ...] = ()

    @property
    def display_name(self) -> str:
        if self.path:
            return "::".join(self.path)
        return self.name or "<anonymous>"
