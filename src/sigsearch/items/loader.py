"""Deserialize one rustdoc-JSON-like item record into an ``Item``.

Building the index (walking crates, running rustdoc) is the extractor's
job; this module only converts a single already-decoded record. Unknown
item kinds become ``OtherItem`` and unknown type forms become
``OtherType`` so that newer extractor output degrades to "Different"
verdicts rather than load failures. Structurally broken records raise
``ItemFormatError``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sigsearch.config.constants import MAX_TYPE_DEPTH_CEILING
from sigsearch.core.errors import ItemFormatError
from sigsearch.items.models import (
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

_PARAM_KINDS = frozenset({"type", "lifetime", "const"})


def _single_key(data: Any, path: str) -> tuple[str, Any]:
    if not isinstance(data, Mapping) or len(data) != 1:
        raise ItemFormatError.malformed(path, "expected a mapping with exactly one key")
    ((tag, value),) = data.items()
    return tag, value


def _mapping(data: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ItemFormatError.malformed(path, f"expected a mapping, got {type(data).__name__}")
    return data


def _list(data: Any, path: str) -> list[Any]:
    if data is None:
        return []
    if not isinstance(data, list | tuple):
        raise ItemFormatError.malformed(path, f"expected a list, got {type(data).__name__}")
    return list(data)


def _str(data: Any, path: str) -> str:
    if not isinstance(data, str):
        raise ItemFormatError.malformed(path, f"expected a string, got {type(data).__name__}")
    return data


# ===================================================================
# Types
# ===================================================================


def _generic_arg(data: Any, path: str, depth: int) -> GenericArg:
    if data == "infer":
        return ConstArg(expr="_")
    tag, value = _single_key(data, path)
    if tag == "type":
        return TypeArg(type=type_from_dict(value, f"{path}.type", depth))
    if tag == "lifetime":
        return LifetimeArg(name=_str(value, f"{path}.lifetime"))
    if tag == "const":
        expr = value.get("expr", "") if isinstance(value, Mapping) else str(value)
        return ConstArg(expr=str(expr))
    raise ItemFormatError.malformed(path, f"unknown generic argument '{tag}'")


def _generic_args(data: Any, path: str, depth: int) -> GenericArgs:
    tag, value = _single_key(data, path)
    value = _mapping(value, f"{path}.{tag}")
    if tag == "angle_bracketed":
        args = [
            _generic_arg(arg, f"{path}.args[{idx}]", depth)
            for idx, arg in enumerate(_list(value.get("args"), f"{path}.args"))
        ]
        return AngleBracketedArgs(args=tuple(args))
    if tag == "parenthesized":
        inputs = [
            type_from_dict(t, f"{path}.inputs[{idx}]", depth)
            for idx, t in enumerate(_list(value.get("inputs"), f"{path}.inputs"))
        ]
        output = value.get("output")
        return ParenthesizedArgs(
            inputs=tuple(inputs),
            output=None if output is None else type_from_dict(output, f"{path}.output", depth),
        )
    raise ItemFormatError.malformed(path, f"unknown generic args form '{tag}'")


def _resolved_path(value: Any, path: str, depth: int) -> Type:
    value = _mapping(value, path)
    name = _str(value.get("name", value.get("path")), f"{path}.name")
    raw_args = value.get("args")
    raw_id = value.get("id")
    return ResolvedPath(
        name=name,
        id=None if raw_id is None else str(raw_id),
        args=None if raw_args is None else _generic_args(raw_args, f"{path}.args", depth),
    )


def _pointer_parts(value: Any, path: str, depth: int) -> tuple[bool, Type]:
    value = _mapping(value, path)
    if "type" not in value:
        raise ItemFormatError.malformed(path, "missing 'type'")
    inner = type_from_dict(value["type"], f"{path}.type", depth)
    return bool(value.get("mutable", False)), inner


def type_from_dict(data: Any, path: str = "type", depth: int = 0) -> Type:
    """Convert one tagged type expression.

    ``depth`` counts the enclosing type expressions; nesting past
    ``MAX_TYPE_DEPTH_CEILING`` is rejected rather than recursed into.
    """
    if depth > MAX_TYPE_DEPTH_CEILING:
        raise ItemFormatError.malformed(
            path, f"type nesting exceeds {MAX_TYPE_DEPTH_CEILING} levels"
        )
    tag, value = _single_key(data, path)
    sub = f"{path}.{tag}"
    child = depth + 1
    if tag == "resolved_path":
        return _resolved_path(value, sub, child)
    if tag == "generic":
        return Generic(name=_str(value, sub))
    if tag == "primitive":
        return Primitive(name=_str(value, sub))
    if tag == "tuple":
        elements = [
            type_from_dict(elem, f"{sub}[{idx}]", child)
            for idx, elem in enumerate(_list(value, sub))
        ]
        return Tuple(elements=tuple(elements))
    if tag == "slice":
        return Slice(element=type_from_dict(value, sub, child))
    if tag == "raw_pointer":
        return RawPointer(*_pointer_parts(value, sub, child))
    if tag == "borrowed_ref":
        mutable, inner = _pointer_parts(value, sub, child)
        lifetime = value.get("lifetime")
        return BorrowedRef(
            mutable=mutable,
            inner=inner,
            lifetime=None if lifetime is None else _str(lifetime, f"{sub}.lifetime"),
        )
    return OtherType(kind=tag)


# ===================================================================
# Generics
# ===================================================================


def _bound_name(data: Any) -> str:
    if isinstance(data, str):
        return data
    if isinstance(data, Mapping) and len(data) == 1:
        ((tag, value),) = data.items()
        if tag == "trait_bound" and isinstance(value, Mapping):
            trait = value.get("trait")
            if isinstance(trait, Mapping):
                return str(trait.get("name", trait.get("path", tag)))
        if tag == "outlives":
            return str(value)
        return tag
    return str(data)


def _param(data: Any, path: str) -> GenericParamDef:
    data = _mapping(data, path)
    name = _str(data.get("name"), f"{path}.name")
    kind = data.get("kind", "type")
    if isinstance(kind, Mapping) and len(kind) == 1:
        kind = next(iter(kind))
    if kind not in _PARAM_KINDS:
        raise ItemFormatError.malformed(f"{path}.kind", f"unknown generic param kind '{kind}'")
    return GenericParamDef(name=name, kind=kind)


def _where_predicate(data: Any, path: str) -> WherePredicate:
    tag, value = _single_key(data, path)
    sub = f"{path}.{tag}"
    value = _mapping(value, sub)
    if tag == "bound_predicate":
        return BoundPredicate(
            type=type_from_dict(value.get("type"), f"{sub}.type"),
            bounds=tuple(_bound_name(b) for b in _list(value.get("bounds"), f"{sub}.bounds")),
        )
    if tag == "region_predicate":
        return RegionPredicate(
            lifetime=_str(value.get("lifetime"), f"{sub}.lifetime"),
            bounds=tuple(_bound_name(b) for b in _list(value.get("bounds"), f"{sub}.bounds")),
        )
    if tag == "eq_predicate":
        rhs = value.get("rhs")
        # Newer rustdoc wraps the right-hand side as {"type": ...}
        if isinstance(rhs, Mapping) and set(rhs) == {"type"}:
            rhs = rhs["type"]
        return EqPredicate(
            lhs=type_from_dict(value.get("lhs"), f"{sub}.lhs"),
            rhs=type_from_dict(rhs, f"{sub}.rhs"),
        )
    raise ItemFormatError.malformed(path, f"unknown where predicate '{tag}'")


def generics_from_dict(data: Any, path: str = "generics") -> Generics:
    if data is None:
        return Generics()
    data = _mapping(data, path)
    return Generics(
        params=tuple(
            _param(p, f"{path}.params[{idx}]")
            for idx, p in enumerate(_list(data.get("params"), f"{path}.params"))
        ),
        where_predicates=tuple(
            _where_predicate(w, f"{path}.where_predicates[{idx}]")
            for idx, w in enumerate(
                _list(data.get("where_predicates"), f"{path}.where_predicates")
            )
        ),
    )


# ===================================================================
# Items
# ===================================================================


def _input(data: Any, path: str) -> tuple[str, Type]:
    pair = _list(data, path)
    if len(pair) != 2:
        raise ItemFormatError.malformed(path, "expected a [name, type] pair")
    return _str(pair[0], f"{path}[0]"), type_from_dict(pair[1], f"{path}[1]")


def _decl(data: Any, path: str) -> FnDecl:
    data = _mapping(data, path)
    output = data.get("output")
    return FnDecl(
        inputs=tuple(
            _input(arg, f"{path}.inputs[{idx}]")
            for idx, arg in enumerate(_list(data.get("inputs"), f"{path}.inputs"))
        ),
        output=None if output is None else type_from_dict(output, f"{path}.output"),
    )


def item_from_dict(data: Mapping[str, Any]) -> Item:
    """Convert one item record.

    Raises:
        ItemFormatError: If the record is structurally broken.
    """
    data = _mapping(data, "item")
    name = data.get("name")
    if name is not None:
        name = _str(name, "item.name")

    tag, inner = _single_key(data.get("inner"), "item.inner")
    sub = f"item.inner.{tag}"
    kind: FunctionItem | MethodItem | OtherItem
    if tag in ("function", "method"):
        inner = _mapping(inner, sub)
        raw_decl = inner.get("decl", inner.get("sig"))
        if raw_decl is None:
            raise ItemFormatError.malformed(sub, "missing 'decl'")
        decl = _decl(raw_decl, f"{sub}.decl")
        generics = generics_from_dict(inner.get("generics"), f"{sub}.generics")
        if tag == "function":
            kind = FunctionItem(decl=decl, generics=generics)
        else:
            kind = MethodItem(decl=decl, generics=generics)
    else:
        kind = OtherItem(tag=tag)

    raw_id = data.get("id")
    return Item(
        name=name,
        kind=kind,
        id=None if raw_id is None else str(raw_id),
        path=tuple(str(p) for p in _list(data.get("path"), "item.path")),
    )
