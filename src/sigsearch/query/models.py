"""Query-side data model.

A query is a partial pattern over a function signature. Every optional
field is a wildcard: ``None`` matches anything and contributes no judgment.

All values are frozen so that two patterns can be compared with ``==``,
which the generic-variable unification relies on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

SELF_MARKER = "Self"

# ===================================================================
# Type patterns
# ===================================================================


@dataclass(frozen=True, slots=True)
class AngleBracketed:
    """``<A, B, _>`` argument list. ``None`` elements are per-slot wildcards."""

    args: tuple[Type | None, ...] = ()


GenericArgs: TypeAlias = AngleBracketed


@dataclass(frozen=True, slots=True)
class UnresolvedPath:
    """A named type such as ``Vec<T>`` or ``Option``."""

    name: str
    args: GenericArgs | None = None


@dataclass(frozen=True, slots=True)
class Generic:
    """A bindable type variable (``T``). ``Self`` is reserved."""

    name: str


@dataclass(frozen=True, slots=True)
class Tuple:
    elements: tuple[Type | None, ...] = ()


@dataclass(frozen=True, slots=True)
class Slice:
    element: Type | None = None


@dataclass(frozen=True, slots=True)
class RawPointer:
    mutable: bool
    inner: Type


@dataclass(frozen=True, slots=True)
class BorrowedRef:
    mutable: bool
    inner: Type


@dataclass(frozen=True, slots=True)
class Primitive:
    name: str


Type: TypeAlias = UnresolvedPath | Generic | Tuple | Slice | RawPointer | BorrowedRef | Primitive

# ===================================================================
# Declaration patterns
# ===================================================================


@dataclass(frozen=True, slots=True)
class Argument:
    name: str | None = None
    type: Type | None = None


@dataclass(frozen=True, slots=True)
class Return:
    type: Type


@dataclass(frozen=True, slots=True)
class DefaultReturn:
    """The function returns nothing meaningful (``()``)."""


FnRetTy: TypeAlias = Return | DefaultReturn


@dataclass(frozen=True, slots=True)
class FnDecl:
    """Signature pattern.

    ``inputs=None`` leaves arity and argument types unjudged; ``output=None``
    leaves the return type unjudged.
    """

    inputs: tuple[Argument, ...] | None = None
    output: FnRetTy | None = None


@dataclass(frozen=True, slots=True)
class Function:
    decl: FnDecl


@dataclass(frozen=True, slots=True)
class FunctionQuery:
    function: Function


QueryKind: TypeAlias = FunctionQuery


@dataclass(frozen=True, slots=True)
class Query:
    """Search pattern: optional fuzzy name plus optional kind filter."""

    name: str | None = None
    kind: QueryKind | None = None
