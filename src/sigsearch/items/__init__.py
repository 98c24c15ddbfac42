"""Items module exports."""

from sigsearch.items.loader import generics_from_dict, item_from_dict, type_from_dict
from sigsearch.items.models import (
    SELF_MARKER,
    AngleBracketedArgs,
    BorrowedRef,
    BoundPredicate,
    ConstArg,
    EqPredicate,
    FnDecl,
    FunctionItem,
    Generic,
    GenericArg,
    GenericArgs,
    GenericParamDef,
    Generics,
    Item,
    ItemKind,
    LifetimeArg,
    MethodItem,
    OtherItem,
    OtherType,
    ParenthesizedArgs,
    Primitive,
    RawPointer,
    RegionPredicate,
    ResolvedPath,
    Slice,
    Tuple,
    Type,
    TypeArg,
    WherePredicate,
)

__all__ = [
    "generics_from_dict",
    "item_from_dict",
    "type_from_dict",
    "SELF_MARKER",
    "AngleBracketedArgs",
    "BorrowedRef",
    "BoundPredicate",
    "ConstArg",
    "EqPredicate",
    "FnDecl",
    "FunctionItem",
    "Generic",
    "GenericArg",
    "GenericArgs",
    "GenericParamDef",
    "Generics",
    "Item",
    "ItemKind",
    "LifetimeArg",
    "MethodItem",
    "OtherItem",
    "OtherType",
    "ParenthesizedArgs",
    "Primitive",
    "RawPointer",
    "RegionPredicate",
    "ResolvedPath",
    "Slice",
    "Tuple",
    "Type",
    "TypeArg",
    "WherePredicate",
]
