"""
Reference expression compiler.

Statically types an expression over Python classes without evaluating it. The
grammar is the one the fragment locator walks (see `typeahead_locator`); every
production here returns the static type of what it parsed instead of tracking
offsets. Identifiers resolve to keywords, lambda parameters, type names or,
failing those, members of the context type bound to `it`.

Classes:
    ExpressionCompiler: Protocol implemented by anything `resolve` can use.
    DynamicExpressionCompiler: Compiler backed by `ExpressionTyper`.
    ExpressionTyper: One-shot typed recursive descent over a text.

Functions:
    binary_result_type(op, left, right, pos): Result of an arithmetic, shift
        or bitwise operator.
    common_type(first, second, pos): Type both branches of `?:`/`??` share.
    dynamic_class(fields): Cached anonymous class for `new (...)`.

Raises:
    ParseError: When the text is not a well-typed expression.
    UnsupportedConstructError: For the null-propagating `?.` operator.
"""

import functools
import keyword
import logging
import typing
from collections.abc import Callable
from dataclasses import make_dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Protocol

from typeahead.typeahead_builtins import PREDEFINED_TYPES
from typeahead.typeahead_config import ParsingConfig
from typeahead.typeahead_constants import (
    COMPARISON_TOKENS,
    DISCARD_VARIABLE,
    LITERAL_TOKENS,
    OUT_KEYWORDS,
)
from typeahead.typeahead_errors import ParseError, UnsupportedConstructError
from typeahead.typeahead_lexer import TokenStream
from typeahead.typeahead_locator import NULL_PROPAGATION_MESSAGE
from typeahead.typeahead_members import (
    find_member,
    indexer_type,
    type_name,
    unwrap_optional,
)
from typeahead.typeahead_strings import parse_string, sanitize_id

logger = logging.getLogger(__name__)

NoneType = type(None)

_NUMERIC_TYPES = {int, float, Decimal}

# (operator, left, right) -> result, checked before numeric promotion
_TEMPORAL_RESULTS: dict[tuple[str, Any, Any], Any] = {
    ("+", datetime, timedelta): datetime,
    ("+", timedelta, datetime): datetime,
    ("-", datetime, timedelta): datetime,
    ("-", datetime, datetime): timedelta,
    ("+", date, timedelta): date,
    ("+", timedelta, date): date,
    ("-", date, timedelta): date,
    ("-", date, date): timedelta,
    ("+", timedelta, timedelta): timedelta,
    ("-", timedelta, timedelta): timedelta,
    ("*", timedelta, int): timedelta,
    ("*", int, timedelta): timedelta,
    ("*", timedelta, float): timedelta,
    ("*", float, timedelta): timedelta,
    ("/", timedelta, int): timedelta,
    ("/", timedelta, float): timedelta,
    ("/", timedelta, timedelta): float,
    ("%", timedelta, timedelta): timedelta,
}

_SYSTEM_PREFIX = "System."


class ExpressionCompiler(Protocol):
    """Anything that can type an expression over a context type."""

    def compile(self, context_type: Any, text: str) -> Any:
        """Returns the static type of `text`, raising ParseError on failure."""
        ...


def _is_class(t: Any) -> bool:
    return typing.get_origin(t) is None and isinstance(t, type)


def _is_object(t: Any) -> bool:
    return t is object or t is Any


def _is_enum(t: Any) -> bool:
    return _is_class(t) and issubclass(t, Enum)


def _related(first: Any, second: Any) -> bool:
    return (
        _is_class(first)
        and _is_class(second)
        and (issubclass(first, second) or issubclass(second, first))
    )


def _incompatible(op: str, left: Any, right: Any, pos: int) -> ParseError:
    return ParseError(
        "IncompatibleOperands", pos, op, type_name(left), type_name(right)
    )


def _promote(op: str, left: Any, right: Any, pos: int) -> Any:
    # Decimal and float have no implicit conversion either way
    if Decimal in (left, right) and float in (left, right):
        raise _incompatible(op, left, right, pos)
    if Decimal in (left, right):
        return Decimal
    if float in (left, right):
        return float
    return int


def binary_result_type(op: str, left: Any, right: Any, pos: int) -> Any:
    """Infers the result type of an arithmetic, shift or bitwise operator.

    Args:
        op: Operator text (`mod` is passed as `%`).
        left, right: Operand types.
        pos: Offset reported if the operands are incompatible.

    Returns:
        The result type; `object` when either operand is untyped.

    Raises:
        ParseError: IncompatibleOperands.
    """
    left = unwrap_optional(left)
    right = unwrap_optional(right)

    # untyped propagates
    if _is_object(left) or _is_object(right):
        return object

    if op == "+" and str in (left, right):
        return str

    temporal = _TEMPORAL_RESULTS.get((op, left, right))
    if temporal is not None:
        return temporal

    if op in ("<<", ">>"):
        if left is int and right is int:
            return int
    elif op in ("&", "|"):
        if left is bool and right is bool:
            return bool
        if left is int and right is int:
            return int
    elif left in _NUMERIC_TYPES and right in _NUMERIC_TYPES:
        return _promote(op, left, right, pos)

    raise _incompatible(op, left, right, pos)


def common_type(first: Any, second: Any, pos: int) -> Any:
    """Returns the type both operands convert to.

    Raises:
        ParseError: NeitherTypeConvertsToOther.
    """
    if first == second:
        return first
    if first is NoneType:
        return second
    if second is NoneType:
        return first

    a = unwrap_optional(first)
    b = unwrap_optional(second)
    if a == b:
        return a
    if _is_object(a) or _is_object(b):
        return object
    if a in _NUMERIC_TYPES and b in _NUMERIC_TYPES and {a, b} != {Decimal, float}:
        return _promote("?", a, b, pos)
    if _related(a, b):
        return b if issubclass(a, b) else a
    raise ParseError("NeitherTypeConvertsToOther", pos, type_name(a), type_name(b))


def check_comparable(op: str, left: Any, right: Any, pos: int) -> None:
    """Raises a ParseError if `left op right` cannot be compared."""
    left = unwrap_optional(left)
    right = unwrap_optional(right)
    if left == right or NoneType in (left, right):
        return
    if _is_object(left) or _is_object(right):
        return
    if left in _NUMERIC_TYPES and right in _NUMERIC_TYPES:
        return
    # enums compare against their names and values
    if _is_enum(left) and right in (str, int):
        return
    if _is_enum(right) and left in (str, int):
        return
    if _related(left, right):
        return
    raise _incompatible(op, left, right, pos)


def _require_bool(op: str, operand: Any, pos: int) -> None:
    operand = unwrap_optional(operand)
    if operand is not bool and not _is_object(operand):
        raise ParseError("IncompatibleOperand", pos, op, type_name(operand))


@functools.lru_cache(maxsize=256)
def dynamic_class(fields: tuple[tuple[str, Any], ...]) -> type:
    """Returns the anonymous class with the given (name, type) fields.

    Equal field lists give the same class, so repeated completions over
    one `new (...)` expression see a single type.
    """
    return make_dataclass("DynamicClass", list(fields), frozen=True)


class ExpressionTyper:
    """
    Typed recursive descent over one expression text.

    Attributes
    ----------
    text : str
        Expression to type.
    context_type : Any
        Type bound to `it` and searched for bare identifiers.
    config : ParsingConfig
        String dialect, alias and member lookup options.
    symbols : dict[str, Any]
        Lambda parameters currently in scope.
    """

    def __init__(
        self, text: str, context_type: Any, config: ParsingConfig | None = None
    ) -> None:
        self.text = text
        self.context_type = context_type
        self.config = config or ParsingConfig()
        self.stream = TokenStream(text, self.config)
        self.symbols: dict[str, Any] = {}
        self.type_names = self.build_type_names()
        # name of the member that ended the last primary, if any
        self.member_name: str | None = None
        self.last_primary: tuple[int, int, str | None] | None = None
        self.primary_start_handlers: dict[str, Callable[[], Any]] = {
            "IDENT": self.parse_identifier,
            "STRING": self.parse_string_literal_as_string_or_type,
            "INTEGER": self.parse_integer_literal,
            "REAL": self.parse_real_literal,
            "LPAREN": self.parse_paren_expression,
        }

    def build_type_names(self) -> dict[str, Any]:
        names: dict[str, Any] = dict(PREDEFINED_TYPES)
        for custom in self.config.custom_types:
            names[custom.__name__] = custom
            names[custom.__qualname__] = custom
            names[f"{custom.__module__}.{custom.__qualname__}"] = custom
        return names

    def lookup_type(self, name: str) -> Any | None:
        found = self.type_names.get(name)
        if found is None and name.startswith(_SYSTEM_PREFIX):
            found = self.type_names.get(name[len(_SYSTEM_PREFIX) :])
        return found

    def parse(self) -> Any:
        """Types the whole text; trailing tokens are a syntax error."""
        result = self.parse_conditional_operator()
        self.stream.validate("EOF", "SyntaxError")
        return result

    # out keyword
    def parse_out_keyword(self) -> Any:
        tok = self.stream.current()
        if tok.type == "IDENT" and tok.value in OUT_KEYWORDS:
            self.stream.advance()
            if self.stream.current().value != DISCARD_VARIABLE:
                raise ParseError(
                    "OutKeywordRequiresDiscard", self.stream.current().pos
                )
            self.stream.advance()
            return object

        return self.parse_conditional_operator()

    # ?: operator
    def parse_conditional_operator(self) -> Any:
        result = self.parse_null_coalescing_operator()
        if self.stream.current().type == "QUESTION":
            tok = self.stream.current()
            _require_bool("?", result, tok.pos)
            self.stream.advance()
            first = self.parse_conditional_operator()
            self.stream.validate("COLON", "ColonExpected")
            self.stream.advance()
            second = self.parse_conditional_operator()
            result = common_type(first, second, tok.pos)
        return result

    # ?? operator
    def parse_null_coalescing_operator(self) -> Any:
        result = self.parse_lambda_operator()
        if self.stream.current().type == "COALESCE":
            tok = self.stream.current()
            self.stream.advance()
            fallback = self.parse_conditional_operator()
            result = common_type(unwrap_optional(result), fallback, tok.pos)
        return result

    # => operator
    def parse_lambda_operator(self) -> Any:
        result = self.parse_or_operator()
        if self.stream.current().type == "ARROW":
            self.stream.advance()
            if self.stream.current().type in ("IDENT", "LPAREN"):
                self.parse_conditional_operator()
            self.stream.validate("LPAREN", "OpenParenExpected")
        return result

    def parse_or_operator(self) -> Any:
        left = self.parse_and_operator()
        while self.stream.current().type == "OR":
            tok = self.stream.current()
            self.stream.advance()
            right = self.parse_and_operator()
            _require_bool(tok.value, left, tok.pos)
            _require_bool(tok.value, right, tok.pos)
            left = bool
        return left

    def parse_and_operator(self) -> Any:
        left = self.parse_in()
        while self.stream.current().type == "AND":
            tok = self.stream.current()
            self.stream.advance()
            right = self.parse_in()
            _require_bool(tok.value, left, tok.pos)
            _require_bool(tok.value, right, tok.pos)
            left = bool
        return left

    # in, not in, not_in
    def parse_in(self) -> Any:
        left = self.parse_logical_and_or_operator()
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
                    element = self.parse_unary()
                    check_comparable("in", left, element, tok.pos)
                    if self.stream.current().type not in ("COMMA", "RPAREN"):
                        raise ParseError("CloseParenOrCommaExpected", tok.pos)
                self.stream.advance()
            elif self.stream.current().type == "IDENT":
                self.parse_primary()
            else:
                raise ParseError("OpenParenOrIdentifierExpected", tok.pos)
            left = bool
        return left

    # &, |
    def parse_logical_and_or_operator(self) -> Any:
        left = self.parse_comparison_operator()
        while self.stream.current().type in ("AMP", "BAR"):
            tok = self.stream.current()
            self.stream.advance()
            right = self.parse_comparison_operator()
            left = binary_result_type(tok.value, left, right, tok.pos)
        return left

    def parse_comparison_operator(self) -> Any:
        left = self.parse_shift_operator()
        while self.stream.current().type in COMPARISON_TOKENS:
            tok = self.stream.current()
            self.stream.advance()
            right = self.parse_shift_operator()
            check_comparable(tok.value, left, right, tok.pos)
            left = bool
        return left

    def parse_shift_operator(self) -> Any:
        left = self.parse_additive()
        while self.stream.current().type in ("SHL", "SHR"):
            tok = self.stream.current()
            self.stream.advance()
            right = self.parse_additive()
            left = binary_result_type(tok.value, left, right, tok.pos)
        return left

    def parse_additive(self) -> Any:
        left = self.parse_arithmetic()
        while self.stream.current().type in ("PLUS", "SUB"):
            tok = self.stream.current()
            self.stream.advance()
            right = self.parse_arithmetic()
            left = binary_result_type(tok.value, left, right, tok.pos)
        return left

    # *, /, %, mod
    def parse_arithmetic(self) -> Any:
        left = self.parse_unary()
        while self.stream.current().type in (
            "MULT",
            "DIV",
            "MOD",
        ) or self.stream.is_identifier("mod"):
            tok = self.stream.current()
            op = "%" if tok.type == "IDENT" else tok.value
            self.stream.advance()
            right = self.parse_unary()
            left = binary_result_type(op, left, right, tok.pos)
        return left

    # -, !, not
    def parse_unary(self) -> Any:
        op = self.stream.current()
        if op.type in ("SUB", "NOT") or self.stream.is_identifier("not"):
            self.stream.advance()
            operand = self.stream.current()
            if op.type == "SUB" and operand.type in LITERAL_TOKENS:
                operand.value = "-" + operand.value
                operand.pos = op.pos
                return self.parse_primary()

            result = self.parse_unary()
            if op.type != "SUB":
                _require_bool(op.value, result, op.pos)
                return bool

            unwrapped = unwrap_optional(result)
            if not (
                unwrapped in _NUMERIC_TYPES
                or unwrapped is timedelta
                or _is_object(unwrapped)
            ):
                raise ParseError("IncompatibleOperand", op.pos, "-", type_name(result))
            return result

        return self.parse_primary()

    def parse_primary(self) -> Any:
        start = self.stream.current().pos
        self.member_name = None
        result = self.parse_primary_start()

        while True:
            tok = self.stream.current()
            if tok.type == "DOT":
                self.stream.advance()
                result = self.parse_member_access(result)
            elif tok.type == "NULL_PROP":
                raise UnsupportedConstructError(NULL_PROPAGATION_MESSAGE, tok.pos)
            elif tok.type == "LBRACK":
                result = self.parse_element_access(result)
            else:
                break

        self.last_primary = (start, self.stream.current().pos, self.member_name)
        return result

    def parse_primary_start(self) -> Any:
        tok = self.stream.current()
        handler = self.primary_start_handlers.get(tok.type)
        if handler is None:
            raise ParseError("ExpressionExpected", tok.pos)
        return handler()

    def parse_string_literal_as_string_or_type(self) -> Any:
        lookahead = self.stream.clone()
        lookahead.advance()
        if lookahead.current().type == "LPAREN":
            return self.parse_cast(nullable=False)
        if lookahead.current().type == "QUESTION":
            lookahead.advance()
            if lookahead.current().type == "LPAREN":
                return self.parse_cast(nullable=True)

        return self.parse_string_literal()

    # "Type"(x), "Type"?(x)
    def parse_cast(self, nullable: bool) -> Any:
        tok = self.stream.current()
        name = parse_string(tok.value, self.config, tok.pos)
        target = self.lookup_type(name)
        if target is None:
            raise ParseError("TypeNotFound", tok.pos, name)

        self.stream.advance()
        if nullable:
            self.stream.advance()
        self.parse_argument_list()
        self.member_name = None
        return target | None if nullable else target

    def parse_string_literal(self) -> Any:
        self.stream.validate("STRING")
        tok = self.stream.current()
        text = tok.value
        value = parse_string(text, self.config, tok.pos)

        if text[0] == "'":
            if len(value) != 1:
                raise ParseError("InvalidCharacterLiteral", tok.pos)
            self.stream.advance()
            return str

        self.stream.advance()
        while self.stream.current().type == "STRING":
            text += self.stream.current().value
            self.stream.advance()

        parse_string(text, self.config, tok.pos)
        return str

    def parse_integer_literal(self) -> Any:
        self.stream.validate("INTEGER")
        self.stream.advance()
        return int

    def parse_real_literal(self) -> Any:
        self.stream.validate("REAL")
        value = self.stream.current().value
        self.stream.advance()
        return Decimal if value[-1] in ("m", "M") else float

    def parse_paren_expression(self) -> Any:
        self.stream.validate("LPAREN", "OpenParenExpected")
        self.stream.advance()
        result = self.parse_conditional_operator()
        self.stream.validate("RPAREN", "CloseParenOrOperatorExpected")
        self.stream.advance()
        self.member_name = None
        return result

    def parse_identifier(self) -> Any:
        self.stream.validate("IDENT")
        tok = self.stream.current()
        name = sanitize_id(tok.value)
        word = name.lower()

        if word == "new":
            return self.parse_new()
        if word == "it":
            self.stream.advance()
            return self.context_type
        if word in ("true", "false"):
            self.stream.advance()
            return bool
        if word == "null":
            self.stream.advance()
            return NoneType
        if word in ("iif", "np"):
            return self.parse_function(word)
        if name in self.symbols:
            self.stream.advance()
            return self.symbols[name]

        target = self.lookup_type(name)
        if target is not None:
            return self.parse_type_access(target)

        return self.parse_member_access(self.context_type)

    # iif(test, a, b), np(x), np(x, fallback)
    def parse_function(self, word: str) -> Any:
        tok = self.stream.current()
        self.stream.advance()
        args = self.parse_argument_list()
        self.member_name = None

        if word == "iif":
            if len(args) != 3:
                raise ParseError("ParamsCountMismatch", tok.pos, "iif", 3)
            _require_bool("iif", args[0], tok.pos)
            return common_type(args[1], args[2], tok.pos)

        if len(args) == 1:
            return args[0]
        if len(args) == 2:
            return common_type(unwrap_optional(args[0]), args[1], tok.pos)
        raise ParseError("ParamsCountMismatch", tok.pos, "np", "1 or 2")

    # T(x) conversion or T.member static access
    def parse_type_access(self, target: Any) -> Any:
        tok = self.stream.current()
        self.stream.advance()

        if self.stream.current().type == "LPAREN":
            self.parse_argument_list()
            self.member_name = None
            return target
        if self.stream.current().type == "DOT":
            self.stream.advance()
            return self.parse_member_access(target, static=True)

        raise ParseError("TypeNameNotExpression", tok.pos, tok.value)

    def parse_member_access(self, owner: Any, static: bool = False) -> Any:
        pos = self.stream.current().pos
        name = self.stream.identifier()
        self.stream.advance()

        if self.stream.current().type == "ARROW":
            return self.parse_as_lambda(name)

        member = find_member(owner, name, static, self.config.is_case_sensitive)
        if member is None:
            if _is_object(unwrap_optional(owner)):
                if self.stream.current().type == "LPAREN":
                    self.parse_argument_list()
                self.member_name = None
                return object
            raise ParseError("UnknownPropertyOrField", pos, name, type_name(owner))

        if member.kind == "method":
            if self.stream.current().type != "LPAREN":
                raise ParseError(
                    "MethodRequiresArguments", pos, member.name, type_name(owner)
                )
            self.parse_argument_list()
            self.member_name = None
            return member.type

        if self.stream.current().type == "LPAREN":
            raise ParseError("NoApplicableMethod", pos, member.name, type_name(owner))
        self.member_name = member.name
        return member.type

    def parse_as_lambda(self, parameter: str) -> Any:
        self.stream.advance()
        shadowed = self.symbols.get(parameter)
        self.symbols[parameter] = object
        try:
            self.parse_conditional_operator()
        finally:
            if shadowed is None:
                del self.symbols[parameter]
            else:
                self.symbols[parameter] = shadowed
        self.member_name = None
        return Callable

    # new (...), new Type(...), new[] {...}, new {...}
    def parse_new(self) -> Any:
        self.stream.advance()
        tok = self.stream.current()
        if tok.type not in ("LPAREN", "LBRACE", "LBRACK", "IDENT"):
            raise ParseError("OpenParenOrIdentifierExpected", tok.pos)

        target = None
        if tok.type == "IDENT":
            parts = [self.stream.current().value]
            self.stream.advance()
            while self.stream.current().type in ("DOT", "PLUS"):
                self.stream.advance()
                if self.stream.current().type != "IDENT":
                    raise ParseError("IdentifierExpected", self.stream.current().pos)
                parts.append(self.stream.current().value)
                self.stream.advance()

            qualified = ".".join(parts)
            target = self.lookup_type(qualified)
            if target is None:
                raise ParseError("TypeNotFound", tok.pos, qualified)
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

        elements: list[Any] = []
        fields: list[tuple[str, Any]] = []
        while self.stream.current().type not in ("RPAREN", "RBRACE"):
            start = self.stream.current()
            value = self.parse_conditional_operator()
            elements.append(value)
            if not array_initializer:
                if self.stream.is_identifier("as"):
                    self.stream.advance()
                    alias = self.stream.identifier_as()
                else:
                    alias = self.implicit_member_name(start.pos)
                if alias is None and target is None:
                    raise ParseError("MissingAsClause", start.pos)
                if alias is not None:
                    fields.append((alias, value))

            if self.stream.current().type != "COMMA":
                break
            self.stream.advance()

        if self.stream.current().type not in ("RPAREN", "RBRACE"):
            raise ParseError("CloseParenOrCommaExpected", self.stream.current().pos)
        end = self.stream.current().pos
        self.stream.advance()
        self.member_name = None

        if array_initializer:
            element = target if target is not None else self.element_type(elements, end)
            return list[element]  # type: ignore[valid-type]
        if target is not None:
            return target
        return self.anonymous_class(fields, tok.pos)

    def implicit_member_name(self, start: int) -> str | None:
        """Name of the member access that spans the whole of the last argument."""
        if self.last_primary is None:
            return None
        primary_start, primary_end, name = self.last_primary
        if primary_start != start or primary_end != self.stream.current().pos:
            return None
        return name

    def element_type(self, elements: list[Any], pos: int) -> Any:
        if not elements:
            return object
        result = elements[0]
        for element in elements[1:]:
            result = common_type(result, element, pos)
        return result

    def anonymous_class(self, fields: list[tuple[str, Any]], pos: int) -> type:
        seen: set[str] = set()
        for name, _ in fields:
            if not name.isidentifier() or keyword.iskeyword(name):
                raise ParseError("InvalidIdentifier", pos, name)
            if name in seen:
                raise ParseError("DuplicateIdentifier", pos, name)
            seen.add(name)
        return dynamic_class(tuple(fields))

    def parse_argument_list(self) -> list[Any]:
        self.stream.validate("LPAREN", "OpenParenExpected")
        self.stream.advance()
        args = []
        if self.stream.current().type != "RPAREN":
            args = self.parse_arguments()
        self.stream.validate("RPAREN", "CloseParenOrCommaExpected")
        self.stream.advance()
        return args

    def parse_arguments(self) -> list[Any]:
        args = []
        while True:
            args.append(self.parse_out_keyword())
            if self.stream.current().type != "COMMA":
                break
            self.stream.advance()
        return args

    def parse_element_access(self, owner: Any) -> Any:
        tok = self.stream.current()
        self.stream.validate("LBRACK", "OpenParenExpected")
        self.stream.advance()
        self.parse_arguments()
        self.stream.validate("RBRACK", "CloseBracketOrCommaExpected")
        self.stream.advance()
        self.member_name = None

        result = indexer_type(owner)
        if result is None:
            if _is_object(unwrap_optional(owner)):
                return object
            raise ParseError("CannotIndexType", tok.pos, type_name(owner))
        return result


class DynamicExpressionCompiler:
    """Types expressions with `ExpressionTyper`.

    Attributes:
        config (ParsingConfig): Options passed to every typer.
    """

    def __init__(self, config: ParsingConfig | None = None) -> None:
        self.config = config or ParsingConfig()

    def compile(self, context_type: Any, text: str) -> Any:
        result = ExpressionTyper(text, context_type, self.config).parse()
        logger.debug("Compiled %r as %s", text, type_name(result))
        return result


__all__ = [
    "DynamicExpressionCompiler",
    "ExpressionCompiler",
    "ExpressionTyper",
    "binary_result_type",
    "check_comparable",
    "common_type",
    "dynamic_class",
]
