from typing import Any

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from sample_types import Address, Order, Status

from typeahead.typeahead_analyzer import (
    CaretExpressionAnalyzer,
    analyze,
    completion_members,
)
from typeahead.typeahead_builtins import Math
from typeahead.typeahead_compat import CompatibleExpressionCompiler
from typeahead.typeahead_config import ParsingConfig
from typeahead.typeahead_errors import ParseError, TypeaheadError
from typeahead.typeahead_members import Member, list_members
from typeahead.typeahead_resolver import Resolution


@pytest.mark.parametrize(  # type: ignore[misc]
    "text, caret, expected",
    [
        ("it.address.", 11, Address),
        ("it.", 3, Order),
        ("it.address.city", 10, Address),
        ("it.address.city + it.id", 11, Address),
        ("it.scale(it.price, it.address.", 30, Address),
        ("iif(it.id > 0, it.address, null).", 33, Address),
        ("it.history[0].", 14, Address),
        ("it.lines[\"a\"].", 14, Address),
        ("it.catalog[\"sku\"].", 18, Order),
        ("it.id > 0 && it.status.", 23, Status),
        ("(it.address).", 13, Address),
        ("it.id", 5, int),
    ],
)
def test_instance_completion(text: str, caret: int, expected: Any) -> None:
    assert analyze(Order, text, caret) == Resolution(expected, False)


@pytest.mark.parametrize(  # type: ignore[misc]
    "text, caret, expected",
    [
        ("Math.", 5, Math),
        ("it.price * Math.", 16, Math),
        ("Order.", 6, Order),
        ("string.", 7, str),
    ],
)
def test_static_completion(text: str, caret: int, expected: Any) -> None:
    assert analyze(Order, text, caret) == Resolution(expected, True)


@pytest.mark.parametrize("text", ["", "."])  # type: ignore[misc]
def test_nothing_to_complete(text: str) -> None:
    assert analyze(Order, text, len(text)) == Resolution(None, False)


@pytest.mark.parametrize("caret", [-1, 5])  # type: ignore[misc]
def test_caret_out_of_range(caret: int) -> None:
    with pytest.raises(ValueError):
        CaretExpressionAnalyzer("it.x", caret)


@pytest.mark.parametrize("caret", [0, 4])  # type: ignore[misc]
def test_caret_at_either_end(caret: int) -> None:
    assert CaretExpressionAnalyzer("it.x", caret).text == "it.x"[:caret]


def test_trailing_dot_is_dropped() -> None:
    analyzer = CaretExpressionAnalyzer("it.address.city", 11)
    assert analyzer.text == "it.address"
    assert analyzer.locate().fragment == "it.address"


def test_text_is_truncated_at_caret() -> None:
    assert CaretExpressionAnalyzer("it.id + it.name", 5).text == "it.id"


def test_unknown_member_raises() -> None:
    with pytest.raises(ParseError) as exc:
        analyze(Order, "it.missing.", 11)
    assert exc.value.message_key == "UnknownPropertyOrField"


@pytest.mark.parametrize(  # type: ignore[misc]
    "config", [None, ParsingConfig(is_case_sensitive=True)]
)
def test_context_type_is_addressable(config: ParsingConfig | None) -> None:
    text = 'Order.parse("x").'
    assert analyze(Order, text, len(text), config) == Resolution(Order, False)
    assert analyze(Order, "Order.MAX_ITEMS", 15, config) == Resolution(int, False)


def test_context_type_does_not_leak_into_config() -> None:
    config = ParsingConfig()
    analyze(Order, "Order.", 6, config)
    assert config.custom_types == ()


@pytest.mark.parametrize(  # type: ignore[misc]
    "text, expected",
    [("-1", int), ("- 1", int), ("-2.5", float), ("it.price * -2.5", float)],
)
def test_negative_literals(text: str, expected: Any) -> None:
    assert analyze(Order, text, len(text)) == Resolution(expected, False)


@pytest.mark.parametrize(  # type: ignore[misc]
    "text",
    [
        "it.address.",
        "Math.",
        "it.id + it.",
        "it.price * - 1",
        "iif(it.id > 0, it.address, null).",
        "it.scale(it.price, it.history[0].",
    ],
)
def test_analysis_is_idempotent(text: str) -> None:
    first = analyze(Order, text, len(text))
    assert analyze(Order, text, len(text)) == first

    fragment = CaretExpressionAnalyzer(text, len(text)).locate().fragment
    assert analyze(Order, fragment, len(fragment)) == first


def test_completion_members_without_resolution() -> None:
    members = completion_members(Order, Resolution(None, False))
    assert members[0] == Member("it", "parameter", Order)
    assert members[1:] == list_members(Order)


def test_completion_members_of_resolved_type() -> None:
    assert completion_members(Order, Resolution(Address, False)) == list_members(
        Address
    )
    assert completion_members(Order, Resolution(Math, True)) == list_members(
        Math, static=True
    )


def test_legacy_compiler() -> None:
    resolution = CaretExpressionAnalyzer("math.Sqrt(2.0).", 15).parse_expression_type(
        Order, CompatibleExpressionCompiler()
    )
    assert resolution == Resolution(float, False)


@settings(max_examples=200, deadline=None)  # type: ignore[misc]
@given(st.text(alphabet="it.adrespc0( )+-,\"[]?:", max_size=25))  # type: ignore[misc]
def test_only_typeahead_errors_escape(text: str) -> None:
    try:
        analyze(Order, text, len(text))
    except TypeaheadError:
        pass
