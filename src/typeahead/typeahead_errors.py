"""
Error types raised while locating and typing expression fragments.

Classes:
    TypeaheadError: Base class for every error raised by the package.
    ParseError: A grammar or typing failure carrying a message key and the
        offset of the offending token.
    UnsupportedConstructError: Raised for constructs the expression grammar
        deliberately rejects (the null-propagating `?.` operator).
    ConfigError: Raised when a parsing configuration cannot be loaded.

Message keys map to human readable templates in `MESSAGES`. Unknown keys are
rendered verbatim so callers may raise ad-hoc keys without registering them.
"""

from typing import Any

MESSAGES: dict[str, str] = {
    "CannotIndexType": "Cannot apply indexing to an expression of type '{0}'",
    "CloseBracketExpected": "']' expected",
    "CloseBracketOrCommaExpected": "']' or ',' expected",
    "CloseParenOrCommaExpected": "')' or ',' expected",
    "CloseParenOrOperatorExpected": "')' or operator expected",
    "ColonExpected": "':' expected",
    "DuplicateIdentifier": "The identifier '{0}' was defined more than once",
    "ExpressionExpected": "Expression expected",
    "IdentifierExpected": "Identifier expected",
    "IncompatibleOperands": "Operator '{0}' incompatible with operand types '{1}' and '{2}'",
    "IncompatibleOperand": "Operator '{0}' incompatible with operand type '{1}'",
    "InvalidCharacterLiteral": "Character literal must contain exactly one character",
    "InvalidEscapeSequence": "Unrecognized escape sequence \\{0}",
    "InvalidIdentifier": "'{0}' is not a valid member name",
    "InvalidStringLength": "String '{0}' should have at least {1} characters",
    "InvalidStringQuoteCharacter": "An escaped string should start with a double (\") or a single (') quote",
    "MethodRequiresArguments": "Method '{0}' in type '{1}' must be invoked with an argument list",
    "MissingAsClause": "Expression is missing an 'as' clause",
    "NeitherTypeConvertsToOther": "Neither of the types '{0}' and '{1}' converts to the other",
    "NoApplicableMethod": "Member '{0}' in type '{1}' is not a method",
    "OpenCurlyParenExpected": "'{{' expected",
    "OpenParenExpected": "'(' expected",
    "OpenParenOrIdentifierExpected": "'(' or Identifier expected",
    "OutKeywordRequiresDiscard": "When using an out variable, a discard '_' is required",
    "ParamsCountMismatch": "'{0}' expects {1} argument(s)",
    "SyntaxError": "Syntax error",
    "TokenExpected": "'{0}' expected",
    "TypeNameNotExpression": "'{0}' is a type name and cannot be used as an expression",
    "TypeNotFound": "Type '{0}' not found",
    "UnexpectedUnclosedString": "Unexpected end of string with unclosed string at position {0} near '{1}'",
    "UnknownPropertyOrField": "No property or field '{0}' exists in type '{1}'",
    "UnterminatedEscapeSequence": "Illegal \\ at end of string",
    "UnterminatedStringLiteral": "Unterminated string literal",
}


class TypeaheadError(Exception):
    """Base exception for all typeahead errors."""


class ParseError(TypeaheadError):
    """
    Raised when a fragment cannot be parsed or typed.

    Attributes:
        message_key (str): Stable identifier of the failure (e.g. "ExpressionExpected").
        position (int): Offset of the offending token in the parsed text.
        details (tuple[Any, ...]): Values substituted into the message template.

    Example:
        raise ParseError("TokenExpected", 4, "in")
    """

    def __init__(self, message_key: str, position: int, *details: Any):
        self.message_key = message_key
        self.position = position
        self.details = details
        super().__init__(f"{self.message} (at index {position})")

    @property
    def message(self) -> str:
        template = MESSAGES.get(self.message_key)
        if template is None:
            return self.message_key
        return template.format(*self.details)


class UnsupportedConstructError(TypeaheadError):
    """Raised for grammar constructs that are rejected outright.

    Unlike `ParseError` this is never swallowed by the fragment locator.
    """

    def __init__(self, message: str, position: int):
        self.position = position
        super().__init__(message)


class ConfigError(TypeaheadError):
    """Raised when a parsing configuration is invalid.

    Attributes:
        problems (list[str]): Individual problems found in the configuration.
    """

    def __init__(self, message: str, problems: list[str] | None = None):
        super().__init__(message)
        self.problems = problems or []


__all__ = [
    "MESSAGES",
    "ConfigError",
    "ParseError",
    "TypeaheadError",
    "UnsupportedConstructError",
]
