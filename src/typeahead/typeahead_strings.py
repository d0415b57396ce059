"""
String literal and identifier helpers.

Functions:
    unescape(body, pos): Resolve backslash escapes in a literal body.
    parse_string_and_unescape(text, pos): Strip the quotes of a raw literal and
        unescape it.
    parse_string_and_unescape_two_double_quotes(text, pos): Same, then collapse
        `""` into `"`.
    parse_string(text, config, pos): Dispatch on the configured dialect.
    sanitize_id(name): Drop a leading `@` escape prefix from an identifier.

Escapes follow the usual C-family set: `\\a \\b \\t \\r \\v \\f \\n \\e`, octal
`\\0`-`\\777`, `\\xHH`, `\\uHHHH`, control `\\cX`. A backslash before any other
non-word character yields that character; before any other word character it is
an error.
"""

from typeahead.typeahead_config import ParsingConfig, StringLiteralParsing
from typeahead.typeahead_errors import ParseError

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "t": "\t",
    "r": "\r",
    "v": "\v",
    "f": "\f",
    "n": "\n",
    "e": "\x1b",
}

_HEX_DIGITS = "0123456789abcdefABCDEF"
_OCTAL_DIGITS = "01234567"


def _read_hex(body: str, start: int, count: int, pos: int) -> int:
    digits = body[start : start + count]
    if len(digits) != count or any(c not in _HEX_DIGITS for c in digits):
        raise ParseError("InvalidEscapeSequence", pos, body[start - 1 : start + count])
    return int(digits, 16)


def unescape(body: str, pos: int = 0) -> str:
    """Resolves backslash escapes in `body`.

    Raises:
        ParseError: On an unknown escape or a trailing lone backslash.
    """
    out: list[str] = []
    i = 0
    n = len(body)
    while i < n:
        ch = body[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue
        if i + 1 >= n:
            raise ParseError("UnterminatedEscapeSequence", pos)
        esc = body[i + 1]
        i += 2
        if esc in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[esc])
        elif esc in _OCTAL_DIGITS:
            j = i
            while j < n and j < i + 2 and body[j] in _OCTAL_DIGITS:
                j += 1
            out.append(chr(int(esc + body[i:j], 8)))
            i = j
        elif esc == "x":
            out.append(chr(_read_hex(body, i, 2, pos)))
            i += 2
        elif esc == "u":
            out.append(chr(_read_hex(body, i, 4, pos)))
            i += 4
        elif esc == "c":
            if i >= n or not body[i].isalpha():
                raise ParseError("InvalidEscapeSequence", pos, "c")
            out.append(chr(ord(body[i].upper()) - ord("@")))
            i += 1
        elif esc.isalnum() or esc == "_":
            raise ParseError("InvalidEscapeSequence", pos, esc)
        else:
            out.append(esc)
    return "".join(out)


def parse_string_and_unescape(text: str, pos: int = 0) -> str:
    """Strips the surrounding quotes of a raw literal and unescapes its body.

    Raises:
        ParseError: If the literal is too short, badly quoted or unclosed.
    """
    if len(text) < 2:
        raise ParseError("InvalidStringLength", pos, text, 2)
    quote = text[0]
    if quote not in ('"', "'"):
        raise ParseError("InvalidStringQuoteCharacter", pos)
    if text[-1] != quote:
        raise ParseError("UnexpectedUnclosedString", pos, len(text), text)
    return unescape(text[1:-1], pos)


def parse_string_and_unescape_two_double_quotes(text: str, pos: int = 0) -> str:
    """Like `parse_string_and_unescape`, then collapses `""` into `"`."""
    return parse_string_and_unescape(text, pos).replace('""', '"')


def parse_string(text: str, config: ParsingConfig, pos: int = 0) -> str:
    """Unescapes a raw literal using the dialect selected in `config`."""
    if (
        config.string_literal_parsing
        is StringLiteralParsing.ESCAPE_DOUBLE_QUOTE_BY_TWO_DOUBLE_QUOTES
    ):
        return parse_string_and_unescape_two_double_quotes(text, pos)
    return parse_string_and_unescape(text, pos)


def sanitize_id(name: str) -> str:
    """Removes the `@` prefix used to escape keywords as identifiers."""
    if len(name) > 1 and name[0] == "@":
        return name[1:]
    return name


__all__ = [
    "parse_string",
    "parse_string_and_unescape",
    "parse_string_and_unescape_two_double_quotes",
    "sanitize_id",
    "unescape",
]
