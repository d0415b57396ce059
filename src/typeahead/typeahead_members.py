"""
Member reflection over Python types.

Answers the two questions type-ahead completion asks of a type: which members
it exposes, and what type each member yields. Members come from class
annotations (dataclass fields included), properties, methods' return
annotations, enum members, static/class methods, class constants, and from
tables in `typeahead_builtins` for builtin types that carry no annotations.

Functions:
    list_members(t, static=False): Completion entries, fields then properties
        then methods, each group sorted by name.
    find_member(t, name, static=False, case_sensitive=False): Look up one member.
    indexer_type(t): Result type of `t[...]`, or None if `t` cannot be indexed.
    unwrap_optional(t): `X | None` -> `X`.
    type_name(t): Readable name for messages and CLI output.
"""

import collections.abc
import inspect
import types
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Union

from typeahead.typeahead_builtins import BUILTIN_MEMBERS, BUILTIN_STATIC_MEMBERS

_SEQUENCE_ORIGINS = {
    list,
    tuple,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
}
_MAPPING_ORIGINS = {
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
}
_KIND_ORDER = {"field": 0, "property": 1, "method": 2}


@dataclass(frozen=True)
class Member:
    """A completion entry.

    Attributes:
        name: Member name as written in expressions.
        kind: One of "field", "property" or "method"; "parameter" for `it`.
        type: Type of the member's value (return type for methods).
    """

    name: str
    kind: str
    type: Any


def type_name(t: Any) -> str:
    if t is None:
        return "None"
    if typing.get_origin(t) is None and isinstance(t, type):
        return t.__name__
    return repr(t).replace("typing.", "")


def unwrap_optional(t: Any) -> Any:
    if typing.get_origin(t) in (Union, types.UnionType):
        args = [a for a in typing.get_args(t) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return t


def _normalize(hint: Any) -> Any:
    if hint is Any or isinstance(hint, (str, typing.ForwardRef)):
        return object
    if hint is None:
        return type(None)
    return hint


def _class_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError, AttributeError):
        hints: dict[str, Any] = {}
        for base in reversed(inspect.getmro(cls)):
            hints.update(getattr(base, "__annotations__", {}))
        return hints


def _return_hint(func: Any) -> Any:
    try:
        hints = typing.get_type_hints(func)
    except (NameError, TypeError, AttributeError):
        hints = getattr(func, "__annotations__", {})
    return _normalize(hints.get("return", object))


def _is_class_var(hint: Any) -> bool:
    return hint is ClassVar or typing.get_origin(hint) is ClassVar


def _class_var_type(hint: Any) -> Any:
    args = typing.get_args(hint)
    return _normalize(args[0]) if args else object


def _container_members(
    origin: type, args: tuple[Any, ...], t: Any
) -> dict[str, Member]:
    table: dict[str, tuple[str, Any]] = {}
    if origin is list:
        table = {
            "copy": ("method", t),
            "count": ("method", int),
            "index": ("method", int),
        }
    elif origin is tuple:
        table = {"count": ("method", int), "index": ("method", int)}
    elif origin in (set, frozenset):
        table = {
            "copy": ("method", t),
            "issubset": ("method", bool),
            "issuperset": ("method", bool),
            "union": ("method", t),
        }
    elif origin is dict:
        key, value = args if len(args) == 2 else (object, object)
        table = {
            "copy": ("method", t),
            "get": ("method", value),
            "items": ("method", list[tuple[key, value]]),  # type: ignore[valid-type]
            "keys": ("method", list[key]),  # type: ignore[valid-type]
            "values": ("method", list[value]),  # type: ignore[valid-type]
        }
    return {name: Member(name, kind, mt) for name, (kind, mt) in table.items()}


def _instance_members(t: Any) -> dict[str, Member]:
    origin = typing.get_origin(t) or t
    args = typing.get_args(t)

    if origin in BUILTIN_MEMBERS:
        return {
            name: Member(name, kind, mt)
            for name, (kind, mt) in BUILTIN_MEMBERS[origin].items()
        }
    if origin in (list, tuple, set, frozenset, dict):
        return _container_members(origin, args, t)
    if not isinstance(origin, type):
        return {}

    members: dict[str, Member] = {}
    is_enum = issubclass(origin, Enum)

    if is_enum:
        values = [m.value for m in origin]
        members["name"] = Member("name", "property", str)
        members["value"] = Member(
            "value", "property", type(values[0]) if values else object
        )
    else:
        for name, hint in _class_hints(origin).items():
            if name.startswith("_") or _is_class_var(hint):
                continue
            members[name] = Member(name, "field", _normalize(hint))

    for name in dir(origin):
        if name.startswith("_") or name in members:
            continue
        attr = inspect.getattr_static(origin, name)
        if isinstance(attr, property):
            members[name] = Member(name, "property", _return_hint(attr.fget))
        elif isinstance(attr, (staticmethod, classmethod)):
            members[name] = Member(name, "method", _return_hint(attr.__func__))
        elif inspect.isfunction(attr):
            members[name] = Member(name, "method", _return_hint(attr))
    return members


def _static_members(t: Any) -> dict[str, Member]:
    origin = typing.get_origin(t) or t
    if origin in BUILTIN_STATIC_MEMBERS:
        return {
            name: Member(name, kind, mt)
            for name, (kind, mt) in BUILTIN_STATIC_MEMBERS[origin].items()
        }
    if not isinstance(origin, type) or origin in BUILTIN_MEMBERS:
        return {}

    members: dict[str, Member] = {}
    if issubclass(origin, Enum):
        for name in origin.__members__:
            members[name] = Member(name, "field", origin)

    hints = _class_hints(origin)
    for name, hint in hints.items():
        if not name.startswith("_") and _is_class_var(hint):
            members[name] = Member(name, "field", _class_var_type(hint))

    for name in dir(origin):
        if name.startswith("_") or name in members:
            continue
        attr = inspect.getattr_static(origin, name)
        if isinstance(attr, (staticmethod, classmethod)):
            members[name] = Member(name, "method", _return_hint(attr.__func__))
        elif (
            name not in hints
            and not callable(attr)
            and not isinstance(attr, property)
        ):
            members[name] = Member(name, "field", type(attr))
    return members


def list_members(t: Any, static: bool = False) -> list[Member]:
    """Returns the completion entries of `t`, grouped by kind and sorted by name."""
    t = unwrap_optional(t)
    found = _static_members(t) if static else _instance_members(t)
    return sorted(found.values(), key=lambda m: (_KIND_ORDER[m.kind], m.name))


def find_member(
    t: Any, name: str, static: bool = False, case_sensitive: bool = False
) -> Member | None:
    """Looks up a member by name, falling back to a case-insensitive match."""
    t = unwrap_optional(t)
    found = _static_members(t) if static else _instance_members(t)
    if name in found:
        return found[name]
    if not case_sensitive:
        lowered = name.lower()
        for key in sorted(found):
            if key.lower() == lowered:
                return found[key]
    return None


def indexer_type(t: Any) -> Any | None:
    """Returns the type produced by indexing `t`, or None if it is not indexable."""
    t = unwrap_optional(t)
    origin = typing.get_origin(t) or t
    args = typing.get_args(t)

    if origin is str:
        return str
    if origin in _SEQUENCE_ORIGINS:
        return _normalize(args[0]) if args else object
    if origin in _MAPPING_ORIGINS:
        return _normalize(args[1]) if len(args) == 2 else object
    if isinstance(origin, type):
        getitem = inspect.getattr_static(origin, "__getitem__", None)
        if inspect.isfunction(getitem):
            return _return_hint(getitem)
    return None


__all__ = [
    "Member",
    "find_member",
    "indexer_type",
    "list_members",
    "type_name",
    "unwrap_optional",
]
