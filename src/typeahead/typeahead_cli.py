"""
Typeahead CLI Entrypoint.

This module provides the command-line interface for resolving the completion
type of an expression at a caret position.

Features:
    - Read the expression inline or from a file.
    - Bind `it` to any importable class (`module:QualifiedName`).
    - Optionally retry with legacy keywords rewritten.
    - Optionally list the members completion would offer.

Example usage:
    typeahead "it.address." -t tests.sample_types:Order
    typeahead "Math." --members
    typeahead expr.txt -f -c 12 --legacy --verbose

Functions:
    run_typeahead(text: str, context_type: Any = object, caret: int | None = None,
                  members: bool = False, legacy: bool = False,
                  config: ParsingConfig | None = None) -> Resolution:
        Locates and resolves the fragment, printing the result.

    main() -> None:
        Parses CLI arguments and invokes `run_typeahead`.
"""

import argparse
import logging
import sys
from typing import Any

from typeahead.typeahead_analyzer import CaretExpressionAnalyzer, completion_members
from typeahead.typeahead_compat import CompatibleExpressionCompiler
from typeahead.typeahead_compiler import DynamicExpressionCompiler, ExpressionCompiler
from typeahead.typeahead_config import (
    ParsingConfig,
    import_type,
    load_parsing_config,
    with_custom_types,
)
from typeahead.typeahead_errors import TypeaheadError
from typeahead.typeahead_members import type_name
from typeahead.typeahead_resolver import Resolution, resolve


def run_typeahead(
    text: str,
    context_type: Any = object,
    caret: int | None = None,
    members: bool = False,
    legacy: bool = False,
    config: ParsingConfig | None = None,
) -> Resolution:
    """
    Resolve the type at `caret` and print the fragment, type and member list.

    Args:
        text (str): The expression text.
        context_type (Any): Type bound to `it`. Defaults to `object`.
        caret (int | None): Caret offset. Defaults to the end of `text`.
        members (bool): If True, also prints the completion members.
        legacy (bool): If True, retries failed compiles with legacy keywords rewritten.
        config (ParsingConfig | None): Parsing options.

    Returns:
        Resolution: The resolved type and class-identifier flag.

    Raises:
        ValueError: If `caret` lies outside `text`.
        ParseError: If the fragment neither compiles nor names a known type.
    """
    config = with_custom_types(config or ParsingConfig(), context_type)
    analyzer = CaretExpressionAnalyzer(
        text, len(text) if caret is None else caret, config
    )
    located = analyzer.locate()
    print(f"fragment: {located.fragment}")

    compiler: ExpressionCompiler = DynamicExpressionCompiler(config)
    if legacy:
        compiler = CompatibleExpressionCompiler(compiler, config)

    resolution = resolve(context_type, located.fragment, compiler, config)
    print(f"type: {type_name(resolution.type)}")
    print(f"class identifier: {resolution.is_class_identifier}")

    if members:
        for member in completion_members(context_type, resolution):
            print(f"  {member.kind} {member.name}: {type_name(member.type)}")

    return resolution


def main() -> None:
    """
    Entry point for the typeahead CLI.

    Supported flags:
        - `-t`, `--type`: Context type as `module:QualifiedName` (default: object).
        - `-c`, `--caret`: Caret offset (default: end of text).
        - `-m`, `--members`: List the members completion would offer.
        - `-f`, `--file`: Treat TEXT as the path of a file holding the expression.
        - `--legacy`: Retry with legacy keywords rewritten.
        - `--config`: JSON parsing configuration.
        - `--verbose`: Debug logging on stderr.

    Errors are printed as `error: ...` on stderr with exit status 1.
    """
    parser = argparse.ArgumentParser(prog="typeahead")
    parser.add_argument("text", help="Expression text (or a file path with -f)")
    parser.add_argument(
        "-t", "--type", dest="context", metavar="MODULE:TYPE", help="Type bound to it"
    )
    parser.add_argument("-c", "--caret", type=int, help="Caret offset (default: end)")
    parser.add_argument(
        "-m", "--members", action="store_true", help="List completion members"
    )
    parser.add_argument(
        "-f", "--file", action="store_true", help="Read the expression from TEXT"
    )
    parser.add_argument(
        "--legacy", action="store_true", help="Accept legacy type keywords"
    )
    parser.add_argument("--config", metavar="FILE", help="JSON parsing configuration")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_parsing_config(args.config) if args.config else None
        context_type = import_type(args.context) if args.context else object
        text = args.text
        if args.file:
            with open(text, encoding="utf-8") as f:
                text = f.read().rstrip("\n")

        run_typeahead(
            text,
            context_type=context_type,
            caret=args.caret,
            members=args.members,
            legacy=args.legacy,
            config=config,
        )
    except (TypeaheadError, ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
