"""
Token and keyword tables shared by the typeahead lexer, locator and compiler.

Token kinds are plain upper-case strings. Symbolic operators are recognised by
longest match against `token_hashmap`; words such as `not`, `in`, `mod` and
`new` are lexed as identifiers and matched case-insensitively by the parsers.

Exports:
    - token_hashmap: operator symbol -> token kind
    - LITERAL_TOKENS, COMPARISON_TOKENS
    - OUT_KEYWORDS, DISCARD_VARIABLE, DOT_CHARACTER
"""

token_hashmap: dict[str, str] = {
    "!": "NOT",
    "!=": "NE",
    "%": "MOD",
    "&": "AMP",
    "&&": "AND",
    "(": "LPAREN",
    ")": "RPAREN",
    "{": "LBRACE",
    "}": "RBRACE",
    "*": "MULT",
    "+": "PLUS",
    ",": "COMMA",
    "-": "SUB",
    ".": "DOT",
    "/": "DIV",
    ":": "COLON",
    "<": "LT",
    "<=": "LE",
    "<>": "LTGT",
    "<<": "SHL",
    "=": "EQUAL",
    "==": "EQ",
    "=>": "ARROW",
    ">": "GT",
    ">=": "GE",
    ">>": "SHR",
    "?": "QUESTION",
    "??": "COALESCE",
    "?.": "NULL_PROP",
    "[": "LBRACK",
    "]": "RBRACK",
    "|": "BAR",
    "||": "OR",
}

# Longest operator in the table
MAX_OPERATOR_LENGTH = max(len(symbol) for symbol in token_hashmap)

LITERAL_TOKENS: frozenset[str] = frozenset({"INTEGER", "REAL"})

COMPARISON_TOKENS: frozenset[str] = frozenset(
    {"EQUAL", "EQ", "NE", "LTGT", "LT", "LE", "GT", "GE"}
)

DECIMAL_DIGITS: frozenset[str] = frozenset("0123456789")
HEX_DIGITS: frozenset[str] = frozenset("0123456789abcdefABCDEF")
INTEGER_SUFFIXES: frozenset[str] = frozenset("uUlL")
REAL_SUFFIXES: frozenset[str] = frozenset("fFdDmM")

# First characters allowed in an identifier besides letters
IDENTIFIER_PREFIXES = "@_$"

OUT_KEYWORDS: tuple[str, ...] = ("out", "$out")
DISCARD_VARIABLE = "_"
DOT_CHARACTER = "."

__all__ = [
    "COMPARISON_TOKENS",
    "DECIMAL_DIGITS",
    "DISCARD_VARIABLE",
    "DOT_CHARACTER",
    "HEX_DIGITS",
    "IDENTIFIER_PREFIXES",
    "INTEGER_SUFFIXES",
    "LITERAL_TOKENS",
    "MAX_OPERATOR_LENGTH",
    "OUT_KEYWORDS",
    "REAL_SUFFIXES",
    "token_hashmap",
]
