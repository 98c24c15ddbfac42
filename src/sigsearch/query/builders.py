"""Build a Query from an already-structured mapping.

This is deserialization only; turning query *text* into this shape is the
job of an external parser. Expected shape::

    {
        "name": "push",
        "kind": {"function": {"decl": {
            "inputs": [{"name": null, "type": {"borrowed_ref": {...}}}],
            "output": "default" | {"return": <type>},
        }}},
    }

Type patterns are single-key mappings::

    {"path": {"name": "Vec", "args": [<type> | null, ...]}}
    {"generic": "T"}
    {"primitive": "i32"}
    {"tuple": [<type> | null, ...]}
    {"slice": <type> | null}
    {"raw_pointer": {"mutable": true, "type": <type>}}
    {"borrowed_ref": {"mutable": false, "type": <type>}}
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from sigsearch.config.constants import MAX_TYPE_DEPTH_CEILING
from sigsearch.core.errors import QueryFormatError
from sigsearch.query.models import (
    AngleBracketed,
    Argument,
    BorrowedRef,
    DefaultReturn,
    FnDecl,
    FnRetTy,
    Function,
    FunctionQuery,
    Generic,
    Primitive,
    Query,
    RawPointer,
    Return,
    Slice,
    Tuple,
    Type,
    UnresolvedPath,
)


def _single_key(data: Any, path: str) -> tuple[str, Any]:
    if not isinstance(data, Mapping) or len(data) != 1:
        raise QueryFormatError.malformed(path, "expected a mapping with exactly one key")
    ((tag, value),) = data.items()
    return tag, value


def _expect_str(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise QueryFormatError.malformed(path, f"expected a string, got {type(value).__name__}")
    return value


def _expect_list(value: Any, path: str) -> list[Any]:
    if not isinstance(value, list | tuple):
        raise QueryFormatError.malformed(path, f"expected a list, got {type(value).__name__}")
    return list(value)


def _optional_type(value: Any, path: str, depth: int = 0) -> Type | None:
    return None if value is None else type_from_dict(value, path, depth)


def _pointer_parts(value: Any, path: str, depth: int) -> tuple[bool, Type]:
    if not isinstance(value, Mapping) or "type" not in value:
        raise QueryFormatError.malformed(path, "expected {'mutable': bool, 'type': ...}")
    inner = type_from_dict(value["type"], f"{path}.type", depth)
    return bool(value.get("mutable", False)), inner


def _path(value: Any, path: str, depth: int) -> Type:
    if isinstance(value, str):
        return UnresolvedPath(name=value)
    if not isinstance(value, Mapping) or "name" not in value:
        raise QueryFormatError.malformed(path, "expected {'name': str, 'args': [...]}")
    name = _expect_str(value["name"], f"{path}.name")
    raw_args = value.get("args")
    if raw_args is None:
        return UnresolvedPath(name=name)
    args = [
        _optional_type(arg, f"{path}.args[{idx}]", depth)
        for idx, arg in enumerate(_expect_list(raw_args, f"{path}.args"))
    ]
    return UnresolvedPath(name=name, args=AngleBracketed(args=tuple(args)))


def _tuple(value: Any, path: str, depth: int) -> Type:
    elements = [
        _optional_type(elem, f"{path}[{idx}]", depth)
        for idx, elem in enumerate(_expect_list(value, path))
    ]
    return Tuple(elements=tuple(elements))


# Builders take the raw value, its dotted path and the depth of any nested type
_TYPE_BUILDERS: dict[str, Callable[[Any, str, int], Type]] = {
    "path": _path,
    "generic": lambda v, p, _d: Generic(name=_expect_str(v, p)),
    "primitive": lambda v, p, _d: Primitive(name=_expect_str(v, p)),
    "tuple": _tuple,
    "slice": lambda v, p, d: Slice(element=_optional_type(v, p, d)),
    "raw_pointer": lambda v, p, d: RawPointer(*_pointer_parts(v, p, d)),
    "borrowed_ref": lambda v, p, d: BorrowedRef(*_pointer_parts(v, p, d)),
}


def type_from_dict(data: Any, path: str = "type", depth: int = 0) -> Type:
    """Build a type pattern from its single-key mapping form.

    Raises:
        QueryFormatError: Unknown pattern, or nesting deeper than
            ``MAX_TYPE_DEPTH_CEILING``.
    """
    if depth > MAX_TYPE_DEPTH_CEILING:
        raise QueryFormatError.malformed(
            path, f"type nesting exceeds {MAX_TYPE_DEPTH_CEILING} levels"
        )
    tag, value = _single_key(data, path)
    builder = _TYPE_BUILDERS.get(tag)
    if builder is None:
        raise QueryFormatError.malformed(path, f"unknown type pattern '{tag}'")
    return builder(value, f"{path}.{tag}", depth + 1)


def _argument(data: Any, path: str) -> Argument:
    if not isinstance(data, Mapping):
        raise QueryFormatError.malformed(path, "expected an argument mapping")
    name = data.get("name")
    return Argument(
        name=None if name is None else _expect_str(name, f"{path}.name"),
        type=_optional_type(data.get("type"), f"{path}.type"),
    )


def _output(data: Any, path: str) -> FnRetTy:
    if data == "default":
        return DefaultReturn()
    tag, value = _single_key(data, path)
    if tag != "return":
        raise QueryFormatError.malformed(path, f"unknown return pattern '{tag}'")
    return Return(type=type_from_dict(value, f"{path}.return"))


def _decl(data: Any, path: str) -> FnDecl:
    if not isinstance(data, Mapping):
        raise QueryFormatError.malformed(path, "expected a declaration mapping")
    raw_inputs = data.get("inputs")
    inputs = None
    if raw_inputs is not None:
        inputs = tuple(
            _argument(arg, f"{path}.inputs[{idx}]")
            for idx, arg in enumerate(_expect_list(raw_inputs, f"{path}.inputs"))
        )
    raw_output = data.get("output")
    output = None if raw_output is None else _output(raw_output, f"{path}.output")
    return FnDecl(inputs=inputs, output=output)


def query_from_dict(data: Mapping[str, Any]) -> Query:
    """Build a Query from its mapping form.

    Raises:
        QueryFormatError: If any part of the mapping has the wrong shape.
    """
    if not isinstance(data, Mapping):
        raise QueryFormatError.malformed("query", "expected a mapping")

    name = data.get("name")
    if name is not None:
        name = _expect_str(name, "query.name")

    kind = None
    raw_kind = data.get("kind")
    if raw_kind is not None:
        tag, value = _single_key(raw_kind, "query.kind")
        if tag != "function":
            raise QueryFormatError.malformed("query.kind", f"unknown query kind '{tag}'")
        if not isinstance(value, Mapping) or "decl" not in value:
            raise QueryFormatError.malformed("query.kind.function", "missing 'decl'")
        kind = FunctionQuery(Function(decl=_decl(value["decl"], "query.kind.function.decl")))

    return Query(name=name, kind=kind)
