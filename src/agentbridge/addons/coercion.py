"""Wire-string to scalar coercion for action proxy fields.

The Agent sends every field value as a string. Each proxy field declares one
of a fixed set of scalar kinds and the raw string is converted to it here.
Booleans never fail to parse; numbers do.

Integer literals are a bare optional sign and decimal digits, with no
surrounding whitespace. Float literals may carry surrounding whitespace, and a
FLOAT32 value beyond single precision becomes an infinity of the same sign
rather than an error. Python spellings that float() accepts beyond that
(``inf``, ``nan``) are accepted too.
"""

from __future__ import annotations

import enum
import math
import re
from typing import Any

_INT_LITERAL = re.compile(r"[+-]?\d+")

# Largest finite single-precision value
FLOAT32_MAX = 3.4028234663852886e38


class FieldKind(str, enum.Enum):
    BOOLEAN = "boolean"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    STRING = "string"


_INT_BITS = {
    FieldKind.INT8: 8,
    FieldKind.INT16: 16,
    FieldKind.INT32: 32,
    FieldKind.INT64: 64,
}

_PYTHON_TYPE_KINDS: dict[type, FieldKind] = {
    bool: FieldKind.BOOLEAN,
    int: FieldKind.INT32,
    float: FieldKind.FLOAT64,
    str: FieldKind.STRING,
}


class InvalidFormatError(ValueError):
    """Raised when a raw value is not a valid literal for a numeric kind."""

    def __init__(self, value: str | None, kind: FieldKind) -> None:
        self.value = value
        self.kind = kind
        super().__init__(f"Could not parse {value!r} to {kind.value}")


def kind_for(python_type: Any) -> FieldKind | None:
    """Map a plain Python type to its default field kind, or None if unsupported."""
    return _PYTHON_TYPE_KINDS.get(python_type)


def coerce(kind: Any, raw: str | None) -> Any:
    """Convert ``raw`` to the scalar type named by ``kind``.

    Unknown kinds return ``raw`` unchanged so that newer field kinds pass
    through instead of failing the whole bind.
    """
    if not isinstance(kind, FieldKind):
        return raw

    if kind is FieldKind.BOOLEAN:
        return raw is not None and raw.strip().lower() == "true"

    if kind is FieldKind.STRING:
        return raw

    if raw is None:
        raise InvalidFormatError(raw, kind)

    if kind in _INT_BITS:
        return _parse_int(raw, kind)

    return _parse_float(raw, kind)


def _parse_int(raw: str, kind: FieldKind) -> int:
    if not _INT_LITERAL.fullmatch(raw):
        raise InvalidFormatError(raw, kind)
    value = int(raw)
    bits = _INT_BITS[kind]
    if not -(1 << (bits - 1)) <= value < (1 << (bits - 1)):
        raise InvalidFormatError(raw, kind)
    return value


def _parse_float(raw: str, kind: FieldKind) -> float:
    # float() accepts digit separators, literals on the wire never carry them
    if "_" in raw:
        raise InvalidFormatError(raw, kind)
    try:
        value = float(raw)
    except ValueError:
        raise InvalidFormatError(raw, kind) from None
    if kind is FieldKind.FLOAT32 and math.isfinite(value) and abs(value) > FLOAT32_MAX:
        return math.copysign(math.inf, value)
    return value
