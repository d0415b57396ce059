"""
Built-in types of the expression language.

Exports:
    Math, Convert: Static utility classes addressable by name in expressions.
    PREDEFINED_TYPES: Type keywords and names understood by the compiler
        (conversions such as `int(x)`, static access such as `Math.Abs(x)`).
    WELL_KNOWN_TYPES: Ordered (name, type) table used when a fragment does not
        compile and may instead name a type.
    BUILTIN_MEMBERS: Members of builtin Python types, which carry no annotations.
"""

import math
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, ClassVar
from uuid import UUID


class Math:
    """Static numeric helpers."""

    PI: ClassVar[float] = math.pi
    E: ClassVar[float] = math.e

    @staticmethod
    def Abs(value: float) -> float:
        return abs(value)

    @staticmethod
    def Ceiling(value: float) -> float:
        return float(math.ceil(value))

    @staticmethod
    def Floor(value: float) -> float:
        return float(math.floor(value))

    @staticmethod
    def Round(value: float, digits: int = 0) -> float:
        return round(value, digits)

    @staticmethod
    def Sqrt(value: float) -> float:
        return math.sqrt(value)

    @staticmethod
    def Pow(x: float, y: float) -> float:
        return math.pow(x, y)

    @staticmethod
    def Exp(value: float) -> float:
        return math.exp(value)

    @staticmethod
    def Log(value: float) -> float:
        return math.log(value)

    @staticmethod
    def Sin(value: float) -> float:
        return math.sin(value)

    @staticmethod
    def Cos(value: float) -> float:
        return math.cos(value)

    @staticmethod
    def Atan2(y: float, x: float) -> float:
        return math.atan2(y, x)

    @staticmethod
    def Max(a: float, b: float) -> float:
        return max(a, b)

    @staticmethod
    def Min(a: float, b: float) -> float:
        return min(a, b)

    @staticmethod
    def Sign(value: float) -> int:
        return (value > 0) - (value < 0)


class Convert:
    """Static conversion helpers."""

    @staticmethod
    def ToBoolean(value: Any) -> bool:
        return bool(value)

    @staticmethod
    def ToInt32(value: Any) -> int:
        return int(value)

    @staticmethod
    def ToInt64(value: Any) -> int:
        return int(value)

    @staticmethod
    def ToDouble(value: Any) -> float:
        return float(value)

    @staticmethod
    def ToDecimal(value: Any) -> Decimal:
        return Decimal(str(value))

    @staticmethod
    def ToString(value: Any) -> str:
        return str(value)

    @staticmethod
    def ToDateTime(value: str) -> datetime:
        return datetime.fromisoformat(value)


PREDEFINED_TYPES: dict[str, type] = {
    # keywords
    "object": object,
    "bool": bool,
    "char": str,
    "string": str,
    "sbyte": int,
    "byte": int,
    "short": int,
    "ushort": int,
    "int": int,
    "uint": int,
    "long": int,
    "ulong": int,
    "float": float,
    "double": float,
    "decimal": Decimal,
    # type names
    "Object": object,
    "Boolean": bool,
    "Char": str,
    "String": str,
    "SByte": int,
    "Byte": int,
    "Int16": int,
    "UInt16": int,
    "Int32": int,
    "UInt32": int,
    "Int64": int,
    "UInt64": int,
    "Single": float,
    "Double": float,
    "Decimal": Decimal,
    "DateTime": datetime,
    "DateTimeOffset": datetime,
    "TimeSpan": timedelta,
    "Guid": UUID,
    "Math": Math,
    "Convert": Convert,
}

WELL_KNOWN_TYPES: tuple[tuple[str, type], ...] = (
    ("Object", object),
    ("Boolean", bool),
    ("Char", str),
    ("String", str),
    ("SByte", int),
    ("Byte", int),
    ("Int16", int),
    ("UInt16", int),
    ("Int32", int),
    ("UInt32", int),
    ("Int64", int),
    ("UInt64", int),
    ("Single", float),
    ("Double", float),
    ("Decimal", Decimal),
    ("DateTime", datetime),
    ("DateTimeOffset", datetime),
    ("TimeSpan", timedelta),
    ("Guid", UUID),
    ("Math", Math),
    ("Convert", Convert),
)

# type -> member name -> (kind, type); instance members only unless noted
BUILTIN_MEMBERS: dict[type, dict[str, tuple[str, Any]]] = {
    str: {
        "capitalize": ("method", str),
        "count": ("method", int),
        "endswith": ("method", bool),
        "find": ("method", int),
        "format": ("method", str),
        "index": ("method", int),
        "isalpha": ("method", bool),
        "isdigit": ("method", bool),
        "isspace": ("method", bool),
        "join": ("method", str),
        "lower": ("method", str),
        "lstrip": ("method", str),
        "replace": ("method", str),
        "rstrip": ("method", str),
        "split": ("method", list[str]),
        "startswith": ("method", bool),
        "strip": ("method", str),
        "title": ("method", str),
        "upper": ("method", str),
        "zfill": ("method", str),
    },
    int: {
        "bit_length": ("method", int),
        "denominator": ("property", int),
        "imag": ("property", int),
        "numerator": ("property", int),
        "real": ("property", int),
    },
    float: {
        "as_integer_ratio": ("method", tuple[int, int]),
        "hex": ("method", str),
        "imag": ("property", float),
        "is_integer": ("method", bool),
        "real": ("property", float),
    },
    Decimal: {
        "as_tuple": ("method", tuple),
        "is_nan": ("method", bool),
        "quantize": ("method", Decimal),
        "to_integral_value": ("method", Decimal),
    },
    date: {
        "day": ("property", int),
        "isoformat": ("method", str),
        "month": ("property", int),
        "weekday": ("method", int),
        "year": ("property", int),
    },
    datetime: {
        "date": ("method", date),
        "day": ("property", int),
        "hour": ("property", int),
        "isoformat": ("method", str),
        "microsecond": ("property", int),
        "minute": ("property", int),
        "month": ("property", int),
        "second": ("property", int),
        "timestamp": ("method", float),
        "weekday": ("method", int),
        "year": ("property", int),
    },
    timedelta: {
        "days": ("property", int),
        "microseconds": ("property", int),
        "seconds": ("property", int),
        "total_seconds": ("method", float),
    },
    UUID: {
        "hex": ("property", str),
        "int": ("property", int),
        "version": ("property", int),
    },
}

# Static members of builtin types, e.g. `DateTime.now()`
BUILTIN_STATIC_MEMBERS: dict[type, dict[str, tuple[str, Any]]] = {
    datetime: {
        "fromisoformat": ("method", datetime),
        "now": ("method", datetime),
        "today": ("method", datetime),
        "utcnow": ("method", datetime),
    },
    date: {
        "fromisoformat": ("method", date),
        "today": ("method", date),
    },
    timedelta: {
        "max": ("field", timedelta),
        "min": ("field", timedelta),
    },
    UUID: {},
}

__all__ = [
    "BUILTIN_MEMBERS",
    "BUILTIN_STATIC_MEMBERS",
    "PREDEFINED_TYPES",
    "WELL_KNOWN_TYPES",
    "Convert",
    "Math",
]
