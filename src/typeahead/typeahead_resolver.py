"""
Two-stage type resolution of a located fragment.

The fragment is first compiled as an expression over the context type. If that
fails it may still be a bare type name, such as `Math` in `Math.` or the
context type's own name, in which case completion should offer static
members. Otherwise the original compile error is raised again.
"""

import logging
from typing import Any, NamedTuple

from typeahead.typeahead_builtins import WELL_KNOWN_TYPES
from typeahead.typeahead_compiler import DynamicExpressionCompiler, ExpressionCompiler
from typeahead.typeahead_config import ParsingConfig
from typeahead.typeahead_errors import ParseError
from typeahead.typeahead_members import type_name

logger = logging.getLogger(__name__)


class Resolution(NamedTuple):
    """Resolved type of a fragment.

    `is_class_identifier` is True when `type` was named rather than computed,
    i.e. completion should list static members. `(None, False)` means there
    was nothing to resolve.
    """

    type: Any
    is_class_identifier: bool


def known_types(context_type: Any) -> tuple[tuple[str, Any], ...]:
    """Type names a fragment may match, in priority order."""
    return WELL_KNOWN_TYPES + ((type_name(context_type), context_type),)


def resolve(
    context_type: Any,
    fragment: str,
    compiler: ExpressionCompiler | None = None,
    config: ParsingConfig | None = None,
) -> Resolution:
    """
    Resolves the static type of `fragment`.

    Args:
        context_type: Type bound to `it`.
        fragment: Text located by the fragment locator.
        compiler: Compiler to try first; defaults to DynamicExpressionCompiler.
        config: Options for the default compiler.

    Returns:
        Resolution(type, False) if the fragment compiles,
        Resolution(type, True) if it names a known type (case-insensitive),
        Resolution(None, False) if the fragment is empty.

    Raises:
        ParseError: The compile error, when the fragment is not a type name either.
    """
    if not fragment:
        return Resolution(None, False)

    compiler = compiler or DynamicExpressionCompiler(config)
    try:
        return Resolution(compiler.compile(context_type, fragment), False)
    except ParseError:
        wanted = fragment.lower()
        for name, candidate in known_types(context_type):
            if name.lower() == wanted:
                logger.debug("Resolved %r as type name %s", fragment, name)
                return Resolution(candidate, True)
        raise


__all__ = ["Resolution", "known_types", "resolve"]
