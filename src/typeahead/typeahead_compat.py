"""
Compatibility with expressions written for the legacy keyword set.

Older expressions name types with lower-case aliases (`int32(x)`,
`math.Abs(x)`, `datetime.now()`) that the current grammar no longer accepts.
`replace_legacy_keywords` rewrites those aliases, and
`CompatibleExpressionCompiler` retries a failed compile once on the rewritten
text.
"""

import logging
from typing import Any

from typeahead.typeahead_compiler import DynamicExpressionCompiler, ExpressionCompiler
from typeahead.typeahead_config import ParsingConfig
from typeahead.typeahead_errors import ParseError
from typeahead.typeahead_lexer import Token, TokenStream

logger = logging.getLogger(__name__)

# Matched against the exact identifier text
LEGACY_KEYWORDS: dict[str, str] = {
    "boolean": "bool",
    "datetime": "DateTime",
    "datetimeoffset": "DateTimeOffset",
    "guid": "Guid",
    "int16": "short",
    "int32": "int",
    "int64": "long",
    "single": "float",
    "timespan": "TimeSpan",
    "uint32": "uint",
    "uint64": "ulong",
    "uint16": "ushort",
    "math": "Math",
    "convert": "Convert",
}


def replace_legacy_keywords(
    text: str, config: ParsingConfig | None = None
) -> str | None:
    """
    Rewrites legacy type keywords in `text`.

    Identifiers that follow a `.` are member names and are left alone.

    Returns:
        The rewritten text, or None if nothing was replaced.

    Raises:
        ParseError: If `text` contains an unterminated string literal.
    """
    if not text:
        return None

    replacements: list[tuple[Token, str]] = []
    previous = None
    stream = TokenStream(text, config)
    while stream.current().type != "EOF":
        tok = stream.current()
        if tok.type == "IDENT" and previous != "DOT" and tok.value in LEGACY_KEYWORDS:
            replacements.append((tok, LEGACY_KEYWORDS[tok.value]))
        previous = tok.type
        stream.advance()

    if not replacements:
        return None

    result = text
    for tok, keyword in reversed(replacements):
        result = result[: tok.pos] + keyword + result[tok.pos + len(tok.value) :]
    return result


class CompatibleExpressionCompiler:
    """Compiler that retries once with legacy keywords rewritten.

    Attributes:
        inner (ExpressionCompiler): The compiler doing the actual work.
        config (ParsingConfig): Options used to re-tokenize failed texts.
    """

    def __init__(
        self,
        inner: ExpressionCompiler | None = None,
        config: ParsingConfig | None = None,
    ) -> None:
        self.config = config or ParsingConfig()
        self.inner = inner or DynamicExpressionCompiler(self.config)

    def compile(self, context_type: Any, text: str) -> Any:
        try:
            return self.inner.compile(context_type, text)
        except ParseError:
            rewritten = replace_legacy_keywords(text, self.config)
            if rewritten is None:
                raise
            logger.debug("Retrying %r as %r", text, rewritten)
            return self.inner.compile(context_type, rewritten)


__all__ = [
    "LEGACY_KEYWORDS",
    "CompatibleExpressionCompiler",
    "replace_legacy_keywords",
]
