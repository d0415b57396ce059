from typing import Any

import pytest
from sample_types import Order

from typeahead.typeahead_builtins import Math
from typeahead.typeahead_compat import (
    LEGACY_KEYWORDS,
    CompatibleExpressionCompiler,
    replace_legacy_keywords,
)
from typeahead.typeahead_compiler import DynamicExpressionCompiler
from typeahead.typeahead_errors import ParseError


@pytest.mark.parametrize(  # type: ignore[misc]
    "text, expected",
    [
        ("int32(it.price)", "int(it.price)"),
        ("math.Abs(-1)", "Math.Abs(-1)"),
        ("it.math + math.PI", "it.math + Math.PI"),
        ("datetime.now() - timespan.max", "DateTime.now() - TimeSpan.max"),
        ("boolean(1) && single(2) > uint64(3)", "bool(1) && float(2) > ulong(3)"),
        ("convert.ToInt32(guid)", "Convert.ToInt32(Guid)"),
    ],
)
def test_replace_legacy_keywords(text: str, expected: str) -> None:
    assert replace_legacy_keywords(text) == expected


@pytest.mark.parametrize(  # type: ignore[misc]
    "text", ["", "it.id", "Int32(1)", '"int32"', "it.int32", "int32x"]
)
def test_nothing_to_replace(text: str) -> None:
    assert replace_legacy_keywords(text) is None


def test_unterminated_string_raises() -> None:
    with pytest.raises(ParseError):
        replace_legacy_keywords('int32("abc')


def test_legacy_table_keys_are_lower_case() -> None:
    assert all(key == key.lower() for key in LEGACY_KEYWORDS)


@pytest.mark.parametrize(  # type: ignore[misc]
    "text, expected",
    [
        ("int32(it.price)", int),
        ("math.Sqrt(2.0)", float),
        ("math.PI", float),
        ("datetime.now().year", int),
        ("it.id", int),
    ],
)
def test_compatible_compiler(text: str, expected: Any) -> None:
    assert CompatibleExpressionCompiler().compile(Order, text) is expected


def test_plain_compiler_rejects_legacy_keywords() -> None:
    with pytest.raises(ParseError):
        DynamicExpressionCompiler().compile(Order, "int32(it.price)")


def test_original_error_when_nothing_rewritten() -> None:
    with pytest.raises(ParseError) as exc:
        CompatibleExpressionCompiler().compile(Order, "it.missing")
    assert exc.value.message_key == "UnknownPropertyOrField"
    assert exc.value.details[0] == "missing"


def test_retry_error_propagates() -> None:
    with pytest.raises(ParseError) as exc:
        CompatibleExpressionCompiler().compile(Order, "int32(it.missing)")
    assert exc.value.details[0] == "missing"


class RecordingCompiler:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def compile(self, context_type: Any, text: str) -> Any:
        self.calls.append(text)
        if text.startswith("math"):
            raise ParseError("UnknownPropertyOrField", 0, "math", "Order")
        return Math


def test_retries_once_with_rewritten_text() -> None:
    inner = RecordingCompiler()
    assert CompatibleExpressionCompiler(inner).compile(Order, "math") is Math
    assert inner.calls == ["math", "Math"]


def test_retry_is_logged(debug_logs: pytest.LogCaptureFixture) -> None:
    CompatibleExpressionCompiler().compile(Order, "int32(1)")
    assert any("Retrying" in r.getMessage() for r in debug_logs.records)
