from decimal import Decimal
from typing import Any, Optional

import pytest
from sample_types import Address, Catalog, Order, Status, Untyped

from typeahead.typeahead_builtins import Math
from typeahead.typeahead_members import (
    Member,
    find_member,
    indexer_type,
    list_members,
    type_name,
    unwrap_optional,
)


def names(members: list[Member]) -> list[str]:
    return [m.name for m in members]


def test_instance_members_are_grouped_and_sorted() -> None:
    assert names(list_members(Order)) == [
        "address",
        "catalog",
        "created",
        "history",
        "id",
        "lines",
        "name",
        "note",
        "payload",
        "price",
        "status",
        "tags",
        "total",
        "label",
        "parse",
        "scale",
    ]


def test_member_kinds_and_types() -> None:
    members = {m.name: m for m in list_members(Order)}
    assert members["total"] == Member("total", "field", Decimal)
    assert members["payload"].type is object
    assert members["label"] == Member("label", "property", str)
    assert members["scale"] == Member("scale", "method", float)
    assert members["parse"].type is Order
    assert unwrap_optional(members["note"].type) is str


def test_static_members() -> None:
    assert list_members(Order, static=True) == [
        Member("MAX_ITEMS", "field", int),
        Member("parse", "method", Order),
    ]


def test_enum_members() -> None:
    assert list_members(Status) == [
        Member("name", "property", str),
        Member("value", "property", str),
    ]
    assert list_members(Status, static=True) == [
        Member("CLOSED", "field", Status),
        Member("OPEN", "field", Status),
    ]


def test_math_constants_come_first() -> None:
    members = list_members(Math, static=True)
    assert members[:2] == [Member("E", "field", float), Member("PI", "field", float)]
    assert Member("Sqrt", "method", float) in members


def test_untyped_members_are_objects() -> None:
    assert list_members(Untyped) == [Member("compute", "method", object)]


def test_unresolvable_annotation_is_object() -> None:
    class Broken:
        part: "Missing"  # type: ignore[name-defined]  # noqa: F821

    assert list_members(Broken) == [Member("part", "field", object)]


@pytest.mark.parametrize(  # type: ignore[misc]
    "t, expected",
    [
        (list[str], ["copy", "count", "index"]),
        (tuple[int, ...], ["count", "index"]),
        (dict[str, Address], ["copy", "get", "items", "keys", "values"]),
        (str, None),
    ],
)
def test_builtin_members(t: Any, expected: list[str] | None) -> None:
    found = names(list_members(t))
    if expected is None:
        assert "upper" in found and "split" in found
    else:
        assert found == expected


def test_container_member_types() -> None:
    assert find_member(dict[str, Address], "get") == Member("get", "method", Address)
    assert find_member(list[str], "copy") == Member("copy", "method", list[str])


def test_find_member_ignores_case_by_default() -> None:
    assert find_member(Order, "ID") == Member("id", "field", int)
    assert find_member(Order, "ID", case_sensitive=True) is None
    assert find_member(Order, "max_items", static=True) == Member(
        "MAX_ITEMS", "field", int
    )


def test_find_member_missing() -> None:
    assert find_member(Order, "missing") is None
    assert find_member(Order, "label", static=True) is None


def test_find_member_unwraps_optional() -> None:
    assert find_member(Optional[Address], "city") == Member("city", "field", str)


@pytest.mark.parametrize(  # type: ignore[misc]
    "t, expected",
    [
        (list[str], str),
        (list[Address], Address),
        (dict[str, Address], Address),
        (str, str),
        (Catalog, Order),
        (Optional[list[int]], int),
        (list, object),
        (int, None),
        (Address, None),
    ],
)
def test_indexer_type(t: Any, expected: Any) -> None:
    assert indexer_type(t) is expected


@pytest.mark.parametrize(  # type: ignore[misc]
    "t, expected",
    [
        (None, "None"),
        (int, "int"),
        (Order, "Order"),
        (list[str], "list[str]"),
        (Any, "Any"),
        (Optional[int], "Optional[int]"),
    ],
)
def test_type_name(t: Any, expected: str) -> None:
    assert type_name(t) == expected


def test_unwrap_optional() -> None:
    assert unwrap_optional(Optional[int]) is int
    assert unwrap_optional(int | None) is int
    assert unwrap_optional(int | str) == int | str
    assert unwrap_optional(Address) is Address
