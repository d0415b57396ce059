"""
Lexical analyzer for the typeahead expression language.

This module provides the token source used by the fragment locator, the
reference compiler and the legacy keyword rewriter:

Classes:
    CharacterStream: Stream abstraction for reading characters by offset.
    Token: A single positioned token (kind, raw text, start offset).
    Lexer: Converts a CharacterStream into tokens, one at a time.
    TokenStream: Lazy, clonable cursor over the tokens of a text.

Features:
    - Skips whitespace
    - Longest-match recognition of symbolic operators (`??`, `?.`, `=>`, `<>`, ...)
    - Recognizes:
        * Identifiers (letters, digits, `_`; may start with `@`, `_` or `$`)
        * Integer literals (decimal, hex, `u`/`l` suffixes)
        * Real literals (fraction, exponent, `f`/`d`/`m` suffixes)
        * String literals in single or double quotes (raw text, quotes kept)

Raises:
    ParseError: For unterminated string literals. Unknown characters become
    `ERROR` tokens instead.

Example:
    >>> tokens = TokenStream("it.Name")
    >>> tokens.current()
    Token(IDENT, it, 0)
"""

from typing import Any

from typeahead.typeahead_config import ParsingConfig
from typeahead.typeahead_constants import (
    DECIMAL_DIGITS,
    HEX_DIGITS,
    IDENTIFIER_PREFIXES,
    INTEGER_SUFFIXES,
    MAX_OPERATOR_LENGTH,
    REAL_SUFFIXES,
    token_hashmap,
)
from typeahead.typeahead_errors import ParseError
from typeahead.typeahead_strings import sanitize_id


class CharacterStream:
    """
    A utility for reading characters from a string source by offset.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
    """

    def __init__(self, source: str, position: int = 0):
        self.source = source
        self.position = position

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            Exception: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise Exception(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>"
            )
        char = self.source[self.position]
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` from the current position, or "" if out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token.

    Attributes:
        type (str): The token kind (e.g. 'IDENT', 'INTEGER', 'DOT', 'EOF').
        value (str): The raw text of the token; string literals keep their quotes.
        pos (int): The 0-based offset where the token starts.

    `value` and `pos` are rewritten when a unary minus is folded into a
    numeric literal; tokens are otherwise treated as immutable.
    """

    def __init__(self, type_: str, value: str, pos: int = 0):
        self.type = type_
        self.value = value
        self.pos = pos

    def copy(self) -> "Token":
        return Token(self.type, self.value, self.pos)

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value}, {self.pos})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.pos == other.pos
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.pos))


class Lexer:
    """Lexical analyzer for expression text.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def peek(self, offset: int = 0) -> str:
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        while not self.stream.end_of_file() and self.peek().isspace():
            self.advance()

    def match_operator(self) -> Token | None:
        """Attempts to match the longest valid operator from the current position."""
        pos = self.stream.position
        max_token = None
        match_len = 0
        candidate = ""

        for i in range(MAX_OPERATOR_LENGTH):
            ch = self.stream.peek(i)
            if ch == "":
                break
            candidate += ch
            if candidate in token_hashmap:
                max_token = candidate
                match_len = i + 1

        if max_token:
            for _ in range(match_len):
                self.advance()
            return Token(token_hashmap[max_token], max_token, pos)

        return None

    def read_digits(self, digits: frozenset[str] = DECIMAL_DIGITS) -> str:
        text = ""
        while not self.stream.end_of_file() and self.peek() in digits:
            text += self.advance()
        return text

    def read_number(self) -> Token:
        """Reads an integer or real literal starting at the current digit."""
        pos = self.stream.position

        if self.peek() == "0" and self.peek(1) in ("x", "X"):
            text = self.advance() + self.advance()
            text += self.read_digits(HEX_DIGITS)
            text += self.read_digits(INTEGER_SUFFIXES)
            return Token("INTEGER", text, pos)

        text = self.read_digits()
        type_ = "INTEGER"

        if self.peek() in INTEGER_SUFFIXES:
            text += self.read_digits(INTEGER_SUFFIXES)
            return Token(type_, text, pos)

        if self.peek() == "." and self.peek(1) in DECIMAL_DIGITS:
            type_ = "REAL"
            text += self.advance()
            text += self.read_digits()

        if self.peek() in ("e", "E"):
            sign = self.peek(1) if self.peek(1) in ("+", "-") else ""
            if self.peek(1 + len(sign)) in DECIMAL_DIGITS:
                type_ = "REAL"
                text += self.advance()
                if sign:
                    text += self.advance()
                text += self.read_digits()

        if self.peek() in REAL_SUFFIXES:
            type_ = "REAL"
            text += self.advance()

        return Token(type_, text, pos)

    def read_string(self) -> Token:
        """Reads a quoted literal, keeping the quotes and escapes in the token text."""
        pos = self.stream.position
        quote = self.advance()
        text = quote
        while not self.stream.end_of_file():
            ch = self.advance()
            text += ch
            if ch == "\\":
                if not self.stream.end_of_file():
                    text += self.advance()
            elif ch == quote:
                return Token("STRING", text, pos)
        raise ParseError("UnterminatedStringLiteral", pos)

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Raises:
            ParseError: If a string literal is not terminated.
        """
        self.skip_whitespace()

        pos = self.stream.position
        if self.stream.end_of_file():
            return Token("EOF", "", pos)

        ch = self.peek()

        # 1. Identifier
        if ch.isalpha() or ch in IDENTIFIER_PREFIXES:
            ident = self.advance()
            while not self.stream.end_of_file() and (
                self.peek().isalnum() or self.peek() == "_"
            ):
                ident += self.advance()
            return Token("IDENT", ident, pos)

        # 2. Integer or real
        if ch in DECIMAL_DIGITS:
            return self.read_number()

        # 3. String or character
        if ch in ('"', "'"):
            return self.read_string()

        # 4. Compound or symbolic operator
        token = self.match_operator()
        if token:
            return token

        # 5. Unknown character
        return Token("ERROR", self.advance(), pos)


class TokenStream:
    """Forward-only, clonable cursor over the tokens of a text.

    The first token is read lazily, so constructing a stream never raises.

    Attributes:
        text (str): The text being tokenized.
        config (ParsingConfig): Options for identifier aliases.
        lexer (Lexer): The underlying lexer.
        token (Token | None): The current token, once read.
    """

    def __init__(self, text: str, config: ParsingConfig | None = None) -> None:
        self.text = text
        self.config = config or ParsingConfig()
        self.lexer = Lexer(CharacterStream(text))
        self.token: Token | None = None

    def current(self) -> Token:
        if self.token is None:
            self.token = self.lexer.next_token()
        return self.token

    def advance(self) -> Token:
        self.current()
        self.token = self.lexer.next_token()
        return self.token

    def clone(self) -> "TokenStream":
        """Returns an independent cursor positioned on the same token."""
        twin = TokenStream(self.text, self.config)
        twin.lexer.stream.position = self.lexer.stream.position
        twin.token = self.token.copy() if self.token is not None else None
        return twin

    def validate(self, type_: str, message_key: str = "SyntaxError") -> None:
        """Raises a ParseError unless the current token has kind `type_`."""
        tok = self.current()
        if tok.type != type_:
            raise ParseError(message_key, tok.pos)

    def is_identifier(self, name: str) -> bool:
        tok = self.current()
        return tok.type == "IDENT" and tok.value.lower() == name.lower()

    def try_get(
        self, identifiers: tuple[str, ...], types: tuple[str, ...]
    ) -> Token | None:
        """Returns the current token if it is one of the words or token kinds given."""
        tok = self.current()
        if tok.type == "IDENT" and tok.value.lower() in identifiers:
            return tok
        if tok.type in types:
            return tok
        return None

    def identifier(self) -> str:
        """Returns the sanitized text of the current identifier without advancing."""
        self.validate("IDENT", "IdentifierExpected")
        return sanitize_id(self.current().value)

    def identifier_as(self) -> str:
        """Reads the alias after `as` in a `new` member list."""
        self.validate("IDENT", "IdentifierExpected")

        if not self.config.support_dot_in_property_names:
            name = sanitize_id(self.current().value)
            self.advance()
            return name

        parts: list[str] = []
        while self.current().type in ("DOT", "IDENT"):
            parts.append(self.current().value)
            self.advance()
        return sanitize_id("".join(parts))


__all__ = ["CharacterStream", "Lexer", "Token", "TokenStream", "token_hashmap"]
