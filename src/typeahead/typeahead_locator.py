"""
Caret-aware fragment locator.

Walks the full operator-precedence grammar of the expression language over a
text that has been truncated at the editor caret. No tree is built: the only
product of the walk is a stack of primary-expression start offsets. Whenever a
primary finishes while more input remains it is popped, because it was only a
sub-part of a larger expression. Whatever is still on top when parsing stops,
normally or through a ParseError, marks the start of the trailing fragment.

Grammar (outermost to innermost)
--------------------------------
- `out _` discard marker (argument positions only)
- `?:` conditional, `??` null-coalescing, `=>` lambda projection
- `||`, `&&`
- `in` / `not in` / `not_in`
- `&`, `|`
- `=`, `==`, `!=`, `<>`, `<`, `<=`, `>`, `>=`
- `<<`, `>>`
- `+`, `-`
- `*`, `/`, `%`, `mod`
- unary `-`, `!`, `not`
- primary: identifier, `new`, string, integer, real, `( ... )`, followed by
  any chain of `.member`, `(args)` and `[args]`

Entry Points
------------
- `FragmentLocator(text, config).locate()`: returns a `LocateResult`.
- `locate(text, config)`: returns only the fragment text.

Raises
------
UnsupportedConstructError
    When the null-propagating `?.` operator is found. ParseError never escapes.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from typeahead.typeahead_config import ParsingConfig
from typeahead.typeahead_constants import (
    COMPARISON_TOKENS,
    DISCARD_VARIABLE,
    LITERAL_TOKENS,
    OUT_KEYWORDS,
)
from typeahead.typeahead_errors import ParseError, UnsupportedConstructError
from typeahead.typeahead_lexer import TokenStream
from typeahead.typeahead_strings import parse_string

logger = logging.getLogger(__name__)

NULL_PROPAGATION_MESSAGE = (
    "An expression may not contain a null propagating operator. "
    "Use the 'np()' or 'np(...)' (null-propagation) function instead."
)


@dataclass(frozen=True)
class LocateResult:
    """Outcome of a locate pass.

    Attributes:
        fragment: Text of the trailing primary fragment (may be empty).
        offset: Start of the fragment in the located text.
        error: The ParseError that stopped the walk early, if any.
    """

    fragment: str
    offset: int
    error: ParseError | None = None

    @property
    def complete(self) -> bool:
        return self.error is None


class FragmentLocator:
    """
    Recursive-descent walker that tracks where the trailing primary starts.

    Attributes
    ----------
    text : str
        The text to walk, already truncated at the caret.
    config : ParsingConfig
        String dialect and alias options.
    primary_stack : list[int]
        Start offsets of the primaries that are still open.
    """

    def __init__(self, text: str, config: ParsingConfig | None = None) -> None:
        self.text = text
        self.config = config or ParsingConfig()
        self.stream = TokenStream(text, self.config)
        self.primary_stack: list[int] = []
        self.primary_start_handlers: dict[str, Callable[[], None]] = {
            "IDENT": self.parse_identifier,
            "STRING": self.parse_string_literal_as_string_or_type,
            "INTEGER": self.parse_integer_literal,
            "REAL": self.parse_real_literal,
            "LPAREN": self.parse_paren_expression,
        }

    def locate(self) -> LocateResult:
        """Walks the whole text and reports the trailing fragment."""
        self.stream = TokenStream(self.text, self.config)
        self.primary_stack.clear()
        error = None
        try:
            self.parse_conditional_operator()
        except ParseError as e:
            logger.debug("Fragment walk stopped at %d: %s", e.position, e.message)
            error = e

        offset = self.primary_stack[-1] if self.primary_stack else 0
        return LocateResult(self.text[offset:], offset, error)

    # out keyword
    def parse_out_keyword(self) -> None:
        tok = self.stream.current()
        if tok.type == "IDENT" and tok.value in OUT_KEYWORDS:
            self.stream.advance()
            if self.stream.current().value != DISCARD_VARIABLE:
                raise ParseError(
                    "OutKeywordRequiresDiscard", self.stream.current().pos
                )
            self.stream.advance()
            return

        self.parse_conditional_operator()

    # ?: operator
    def parse_conditional_operator(self) -> None:
        self.parse_null_coalescing_operator()
        if self.stream.current().type == "QUESTION":
            self.stream.advance()
            self.parse_conditional_operator()
            self.stream.validate("COLON", "ColonExpected")
            self.stream.advance()
            self.parse_conditional_operator()

    # ?? operator
    def parse_null_coalescing_operator(self) -> None:
        self.parse_lambda_operator()
        if self.stream.current().type == "COALESCE":
            self.stream.advance()
            self.parse_conditional_operator()

    # => operator
    def parse_lambda_operator(self) -> None:
        self.parse_or_operator()
        if self.stream.current().type == "ARROW":
            self.stream.advance()
            if self.stream.current().type in ("IDENT", "LPAREN"):
                self.parse_conditional_operator()
            # Trailing-argument callback form: the '(' is checked, not consumed
            self.stream.validate("LPAREN", "OpenParenExpected")

    def parse_or_operator(self) -> None:
        self.parse_and_operator()
        while self.stream.current().type == "OR":
            self.stream.advance()
            self.parse_and_operator()

    def parse_and_operator(self) -> None:
        self.parse_in()
        while self.stream.current().type == "AND":
            self.stream.advance()
            self.parse_in()

    # in, not in, not_in
    def parse_in(self) -> None:
        self.parse_logical_and_or_operator()
        while True:
            tok = self.stream.try_get(("in", "not_in", "not"), ("NOT",))
            if tok is None:
                break
            if tok.value.lower() == "not" or tok.type == "NOT":
                self.stream.advance()
                if not self.stream.is_identifier("in"):
                    raise ParseError("TokenExpected", tok.pos, "in")

            self.stream.advance()

            if self.stream.current().type == "LPAREN":
                while self.stream.current().type != "RPAREN":
                    self.stream.advance()
                    # unary so that `in (-1, !flag)` is accepted
                    self.parse_unary()
                    if self.stream.current().type == "EOF":
                        raise ParseError("CloseParenOrCommaExpected", tok.pos)
                self.stream.advance()
            elif self.stream.current().type == "IDENT":
                self.parse_primary()
            else:
                raise ParseError("OpenParenOrIdentifierExpected", tok.pos)

    # &, |
    def parse_logical_and_or_operator(self) -> None:
        self.parse_comparison_operator()
        while self.stream.current().type in ("AMP", "BAR"):
            self.stream.advance()
            self.parse_comparison_operator()

    def parse_comparison_operator(self) -> None:
        self.parse_shift_operator()
        while self.stream.current().type in COMPARISON_TOKENS:
            self.stream.advance()
            self.parse_shift_operator()

    def parse_shift_operator(self) -> None:
        self.parse_additive()
        while self.stream.current().type in ("SHL", "SHR"):
            self.stream.advance()
            self.parse_additive()

    def parse_additive(self) -> None:
        self.parse_arithmetic()
        while self.stream.current().type in ("PLUS", "SUB"):
            self.stream.advance()
            self.parse_arithmetic()

    # *, /, %, mod
    def parse_arithmetic(self) -> None:
        self.parse_unary()
        while self.stream.current().type in (
            "MULT",
            "DIV",
            "MOD",
        ) or self.stream.is_identifier("mod"):
            self.stream.advance()
            self.parse_unary()

    # -, !, not
    def parse_unary(self) -> None:
        op = self.stream.current()
        if op.type in ("SUB", "NOT") or self.stream.is_identifier("not"):
            self.stream.advance()
            operand = self.stream.current()
            if op.type == "SUB" and operand.type in LITERAL_TOKENS:
                operand.value = "-" + operand.value
                operand.pos = op.pos
                self.parse_primary()
                return
            self.parse_unary()
            return

        self.parse_primary()

    def parse_primary(self) -> None:
        self.primary_stack.append(self.stream.current().pos)
        self.parse_primary_start()

        while True:
            tok = self.stream.current()
            if tok.type == "DOT":
                self.stream.advance()
                self.parse_member_access()
            elif tok.type == "NULL_PROP":
                raise UnsupportedConstructError(NULL_PROPAGATION_MESSAGE, tok.pos)
            elif tok.type == "LBRACK":
                self.parse_element_access()
            else:
                break

        if self.stream.current().type != "EOF":
            self.primary_stack.pop()

    def parse_primary_start(self) -> None:
        tok = self.stream.current()
        handler = self.primary_start_handlers.get(tok.type)
        if handler is None:
            raise ParseError("ExpressionExpected", tok.pos)
        handler()

    def parse_string_literal_as_string_or_type(self) -> None:
        # "System.DateTime"(x) and "System.DateTime"?(x) are casts, not strings
        lookahead = self.stream.clone()
        lookahead.advance()
        force_string = True
        if lookahead.current().type == "LPAREN":
            force_string = False
        elif lookahead.current().type == "QUESTION":
            lookahead.advance()
            if lookahead.current().type == "LPAREN":
                force_string = False

        self.parse_string_literal(force_string)

    def parse_string_literal(self, force_string: bool) -> None:
        self.stream.validate("STRING")
        tok = self.stream.current()
        text = tok.value
        value = parse_string(text, self.config, tok.pos)

        if text[0] == "'":
            if len(value) != 1:
                raise ParseError("InvalidCharacterLiteral", tok.pos)
            self.stream.advance()
            return

        self.stream.advance()
        # Adjacent literals concatenate
        while self.stream.current().type == "STRING":
            text += self.stream.current().value
            self.stream.advance()

        parse_string(text, self.config, tok.pos)

    def parse_integer_literal(self) -> None:
        self.stream.validate("INTEGER")
        self.stream.advance()

    def parse_real_literal(self) -> None:
        self.stream.validate("REAL")
        self.stream.advance()

    def parse_paren_expression(self) -> None:
        self.stream.validate("LPAREN", "OpenParenExpected")
        self.stream.advance()
        self.parse_conditional_operator()
        self.stream.validate("RPAREN", "CloseParenOrOperatorExpected")
        self.stream.advance()

    def parse_identifier(self) -> None:
        self.stream.validate("IDENT")
        if self.stream.is_identifier("new"):
            self.parse_new()
        else:
            self.parse_member_access()

    # new (...), new Type(...), new[] {...}, new {...}
    def parse_new(self) -> None:
        self.stream.advance()
        if self.stream.current().type not in ("LPAREN", "LBRACE", "LBRACK", "IDENT"):
            raise ParseError(
                "OpenParenOrIdentifierExpected", self.stream.current().pos
            )

        if self.stream.current().type == "IDENT":
            self.stream.advance()
            while self.stream.current().type in ("DOT", "PLUS"):
                self.stream.advance()
                if self.stream.current().type != "IDENT":
                    raise ParseError("IdentifierExpected", self.stream.current().pos)
                self.stream.advance()

            if self.stream.current().type not in ("LPAREN", "LBRACK", "LBRACE"):
                raise ParseError("OpenParenExpected", self.stream.current().pos)

        array_initializer = False
        if self.stream.current().type == "LBRACK":
            self.stream.advance()
            self.stream.validate("RBRACK", "CloseBracketExpected")
            self.stream.advance()
            self.stream.validate("LBRACE", "OpenCurlyParenExpected")
            array_initializer = True

        self.stream.advance()

        while self.stream.current().type not in ("RPAREN", "RBRACE"):
            self.parse_conditional_operator()
            if not array_initializer and self.stream.is_identifier("as"):
                self.stream.advance()
                self.stream.identifier_as()

            if self.stream.current().type != "COMMA":
                break
            self.stream.advance()

        if self.stream.current().type not in ("RPAREN", "RBRACE"):
            raise ParseError("CloseParenOrCommaExpected", self.stream.current().pos)
        self.stream.advance()

    def parse_member_access(self) -> None:
        self.stream.identifier()
        self.stream.advance()

        if self.stream.current().type == "ARROW":
            self.parse_as_lambda()
            return

        # Enum or nested class: A.B.C.MyEnum.Value1
        # Only `.` separates the chain; `+` is a nested-class separator in
        # `new` type names alone, so `a + it.B` is an addition. An identifier
        # after the chain is left to the operator rules (as, in, mod, not).
        if self.stream.current().type == "DOT":
            self.parse_as_enum_or_nested_class()

        if self.stream.current().type == "LPAREN":
            self.parse_argument_list()

    def parse_as_lambda(self) -> None:
        self.stream.advance()
        self.parse_conditional_operator()

    def parse_as_enum_or_nested_class(self) -> None:
        while self.stream.current().type == "DOT":
            self.stream.advance()
            if self.stream.current().type == "IDENT":
                self.stream.advance()

    def parse_argument_list(self) -> None:
        self.stream.validate("LPAREN", "OpenParenExpected")
        self.stream.advance()
        if self.stream.current().type != "RPAREN":
            self.parse_arguments()
        self.stream.validate("RPAREN", "CloseParenOrCommaExpected")
        self.stream.advance()

    def parse_arguments(self) -> None:
        while True:
            self.parse_out_keyword()
            if self.stream.current().type != "COMMA":
                break
            self.stream.advance()

    def parse_element_access(self) -> None:
        self.stream.validate("LBRACK", "OpenParenExpected")
        self.stream.advance()
        self.parse_arguments()
        self.stream.validate("RBRACK", "CloseBracketOrCommaExpected")
        self.stream.advance()


def locate(text: str, config: ParsingConfig | None = None) -> str:
    """Returns the trailing primary fragment of `text`."""
    return FragmentLocator(text, config).locate().fragment


__all__ = ["FragmentLocator", "LocateResult", "locate"]
