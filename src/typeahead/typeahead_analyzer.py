"""
Caret expression analyzer.

Entry point for editors: given an expression text, a caret offset and the
type bound to `it`, returns the type whose members should be offered at the
caret.

    >>> analyze(Order, "it.address.", 11).type.__name__
    'Address'

A `.` immediately before the caret is ignored, so the fragment analysed for
`it.address.|` is `it.address`. The context type and its base classes are
always addressable by name, so `Order.parse("x").` resolves too.
"""

from typing import Any

from typeahead.typeahead_compiler import ExpressionCompiler
from typeahead.typeahead_config import ParsingConfig, with_custom_types
from typeahead.typeahead_constants import DOT_CHARACTER
from typeahead.typeahead_locator import FragmentLocator, LocateResult
from typeahead.typeahead_members import Member, list_members
from typeahead.typeahead_resolver import Resolution, resolve


class CaretExpressionAnalyzer:
    """
    Locates and resolves the fragment that ends at a caret.

    Attributes:
        text (str): The expression text truncated at the caret.
        config (ParsingConfig): Parsing options.

    Raises:
        ValueError: If `position` lies outside `text`.
    """

    def __init__(
        self, text: str, position: int, config: ParsingConfig | None = None
    ) -> None:
        if position < 0 or position > len(text):
            raise ValueError(
                f"Caret position {position} is outside the text (length {len(text)})"
            )
        if position > 0 and text[position - 1] == DOT_CHARACTER:
            position -= 1

        self.config = config or ParsingConfig()
        self.text = text[:position]

    def locate(self) -> LocateResult:
        return FragmentLocator(self.text, self.config).locate()

    def parse_expression_type(
        self, context_type: Any, compiler: ExpressionCompiler | None = None
    ) -> Resolution:
        """Returns the resolved type of the fragment ending at the caret.

        The default compiler also accepts `context_type` and its base
        classes as type names.
        """
        config = with_custom_types(self.config, context_type)
        return resolve(context_type, self.locate().fragment, compiler, config)


def analyze(
    context_type: Any,
    text: str,
    caret: int,
    config: ParsingConfig | None = None,
    compiler: ExpressionCompiler | None = None,
) -> Resolution:
    """Resolves the type of the fragment of `text` ending at `caret`."""
    analyzer = CaretExpressionAnalyzer(text, caret, config)
    return analyzer.parse_expression_type(context_type, compiler)


def completion_members(context_type: Any, resolution: Resolution) -> list[Member]:
    """Returns the entries completion offers for `resolution`.

    With nothing resolved the list starts with the `it` parameter, followed
    by the instance members of `context_type`.
    """
    if resolution.type is None:
        return [Member("it", "parameter", context_type)] + list_members(context_type)
    return list_members(resolution.type, resolution.is_class_identifier)


__all__ = ["CaretExpressionAnalyzer", "analyze", "completion_members"]
