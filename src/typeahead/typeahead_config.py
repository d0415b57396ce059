"""
Parsing configuration for the typeahead lexer, locator and compiler.

Classes:
    StringLiteralParsing: The two supported string escaping dialects.
    ParsingConfig: Options shared by every stage of an analysis.

Functions:
    create_parsing_config(*additional_types): Config whose custom types cover
        each given type together with its whole class hierarchy.
    load_parsing_config(path): Load a config from a JSON file.
    with_custom_types(config, *types): Copy of a config with more custom types.
    import_type(spec): Resolve a "module:QualifiedName" string to a type.

Example JSON configuration:
    {
        "string_literal_parsing": "double_quotes",
        "support_dot_in_property_names": false,
        "is_case_sensitive": false,
        "custom_types": ["orders.models:Order"]
    }
"""

import importlib
import inspect
import json
import typing
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from typeahead.typeahead_errors import ConfigError


class StringLiteralParsing(Enum):
    """String escaping dialects.

    ESCAPE_DOUBLE_QUOTE_BY_BACKSLASH: regular backslash escapes only.
    ESCAPE_DOUBLE_QUOTE_BY_TWO_DOUBLE_QUOTES: backslash escapes, then `""`
        collapses into a single `"`.
    """

    ESCAPE_DOUBLE_QUOTE_BY_BACKSLASH = "backslash"
    ESCAPE_DOUBLE_QUOTE_BY_TWO_DOUBLE_QUOTES = "double_quotes"


@dataclass(frozen=True)
class ParsingConfig:
    """Options shared by the lexer, the fragment locator and the compiler.

    Attributes:
        string_literal_parsing: Escaping dialect for string literals.
        support_dot_in_property_names: Allow `as a.b` aliases in `new` expressions.
        is_case_sensitive: Require exact case when resolving member names.
        custom_types: Extra types addressable by name (casts, `new`, static access).
    """

    string_literal_parsing: StringLiteralParsing = (
        StringLiteralParsing.ESCAPE_DOUBLE_QUOTE_BY_BACKSLASH
    )
    support_dot_in_property_names: bool = False
    is_case_sensitive: bool = False
    custom_types: tuple[type, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ParsingConfig":
        """Builds a config from a plain dictionary (e.g. parsed JSON).

        Raises:
            ConfigError: If keys are unknown or values have the wrong shape.
        """
        problems: list[str] = []
        known = {
            "string_literal_parsing",
            "support_dot_in_property_names",
            "is_case_sensitive",
            "custom_types",
        }
        for key in data:
            if key not in known:
                problems.append(f"unknown option '{key}'")

        dialect = StringLiteralParsing.ESCAPE_DOUBLE_QUOTE_BY_BACKSLASH
        if "string_literal_parsing" in data:
            try:
                dialect = StringLiteralParsing(data["string_literal_parsing"])
            except ValueError:
                problems.append(
                    f"invalid string_literal_parsing '{data['string_literal_parsing']}'"
                )

        flags: dict[str, bool] = {}
        for key in ("support_dot_in_property_names", "is_case_sensitive"):
            value = data.get(key, False)
            if not isinstance(value, bool):
                problems.append(f"option '{key}' must be a boolean")
            flags[key] = bool(value)

        custom_types: list[type] = []
        for spec in data.get("custom_types", []):
            try:
                custom_types.append(import_type(spec))
            except ConfigError as e:
                problems.append(str(e))

        if problems:
            raise ConfigError("Invalid parsing configuration", problems)

        return cls(
            string_literal_parsing=dialect,
            custom_types=tuple(custom_types),
            **flags,
        )


def import_type(spec: str) -> type:
    """Resolves a `"module:QualifiedName"` string to a type.

    Raises:
        ConfigError: If the module or attribute cannot be found, or is not a type.
    """
    module_name, sep, qualname = spec.partition(":")
    if not sep or not module_name or not qualname:
        raise ConfigError(f"Type reference '{spec}' must look like 'module:Name'")
    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Cannot import module '{module_name}'") from e
    for part in qualname.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise ConfigError(
                f"'{qualname}' not found in module '{module_name}'"
            ) from e
    if not isinstance(target, type):
        raise ConfigError(f"'{spec}' does not name a type")
    return target


def create_parsing_config(*additional_types: type) -> ParsingConfig:
    """Creates a config registering each type and every class in its MRO."""
    return with_custom_types(ParsingConfig(), *additional_types)


def with_custom_types(config: ParsingConfig, *additional_types: Any) -> ParsingConfig:
    """Returns a copy of `config` that also registers each type and its MRO.

    Existing custom types keep their order; arguments that are not classes
    (e.g. `list[str]`) are skipped.
    """
    custom: dict[type, None] = dict.fromkeys(config.custom_types)
    for t in additional_types:
        if typing.get_origin(t) is not None or not isinstance(t, type):
            continue
        for base in inspect.getmro(t):
            custom.setdefault(base, None)
    return replace(config, custom_types=tuple(custom))


def load_parsing_config(path: str) -> ParsingConfig:
    """Loads a `ParsingConfig` from a JSON file.

    Raises:
        ConfigError: If the file does not hold a JSON object or has invalid options.
    """
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {path} must be a JSON object")
    return ParsingConfig.from_dict(data)


__all__ = [
    "ParsingConfig",
    "StringLiteralParsing",
    "create_parsing_config",
    "import_type",
    "load_parsing_config",
    "with_custom_types",
]
