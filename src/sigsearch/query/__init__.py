"""Query module exports."""

from sigsearch.query.builders import query_from_dict, type_from_dict
from sigsearch.query.models import (
    SELF_MARKER,
    AngleBracketed,
    Argument,
    BorrowedRef,
    DefaultReturn,
    FnDecl,
    FnRetTy,
    Function,
    FunctionQuery,
    Generic,
    GenericArgs,
    Primitive,
    Query,
    QueryKind,
    RawPointer,
    Return,
    Slice,
    Tuple,
    Type,
    UnresolvedPath,
)

__all__ = [
    "query_from_dict",
    "type_from_dict",
    "SELF_MARKER",
    "AngleBracketed",
    "Argument",
    "BorrowedRef",
    "DefaultReturn",
    "FnDecl",
    "FnRetTy",
    "Function",
    "FunctionQuery",
    "Generic",
    "GenericArgs",
    "Primitive",
    "Query",
    "QueryKind",
    "RawPointer",
    "Return",
    "Slice",
    "Tuple",
    "Type",
    "UnresolvedPath",
]
