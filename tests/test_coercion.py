"""Unit tests for agentbridge.addons.coercion — wire-string to scalar conversion."""

from __future__ import annotations

import math

import pytest

from agentbridge.addons.coercion import FieldKind, InvalidFormatError, coerce, kind_for


# ---------------------------------------------------------------------------
# 1. Well-formed literals
# ---------------------------------------------------------------------------

class TestWellFormedLiterals:
    """coerce() should return the typed value for valid literals of every kind."""

    @pytest.mark.parametrize(
        "kind, raw, expected",
        [
            (FieldKind.INT8, "-128", -128),
            (FieldKind.INT16, "32767", 32767),
            (FieldKind.INT32, "42", 42),
            (FieldKind.INT32, "+7", 7),
            (FieldKind.INT64, "9223372036854775807", 9223372036854775807),
            (FieldKind.FLOAT32, "1.5", 1.5),
            (FieldKind.FLOAT64, "-2.25e3", -2250.0),
            (FieldKind.STRING, "hello", "hello"),
        ],
    )
    def test_valid_literal(self, kind: FieldKind, raw: str, expected):
        value = coerce(kind, raw)
        assert value == expected
        assert type(value) is type(expected)

    def test_float_surrounding_whitespace_is_ignored(self):
        assert coerce(FieldKind.FLOAT64, " 2.5 ") == 2.5

    def test_float32_overflow_becomes_infinity(self):
        assert coerce(FieldKind.FLOAT32, "1e39") == math.inf
        assert coerce(FieldKind.FLOAT32, "-1e39") == -math.inf

    def test_float_special_values(self):
        assert math.isinf(coerce(FieldKind.FLOAT64, "Infinity"))
        assert math.isnan(coerce(FieldKind.FLOAT64, "NaN"))

    def test_string_passes_none_through(self):
        assert coerce(FieldKind.STRING, None) is None


# ---------------------------------------------------------------------------
# 2. Boolean parsing never fails
# ---------------------------------------------------------------------------

class TestBoolean:
    """Booleans are True only for a 'true' token; anything else is False."""

    @pytest.mark.parametrize("raw", ["true", "TRUE", "True", " true "])
    def test_true_tokens(self, raw: str):
        assert coerce(FieldKind.BOOLEAN, raw) is True

    @pytest.mark.parametrize("raw", ["false", "nonsense", "1", "yes", "", None])
    def test_everything_else_is_false(self, raw):
        assert coerce(FieldKind.BOOLEAN, raw) is False


# ---------------------------------------------------------------------------
# 3. Malformed numbers raise InvalidFormatError
# ---------------------------------------------------------------------------

class TestMalformedNumbers:
    """Numeric coercion must fail loudly, never return a default."""

    @pytest.mark.parametrize(
        "kind, raw",
        [
            (FieldKind.INT32, "abc"),
            (FieldKind.INT32, "4.2"),
            (FieldKind.INT32, ""),
            (FieldKind.INT32, "1_000"),
            (FieldKind.INT8, "128"),
            (FieldKind.INT16, "-32769"),
            (FieldKind.INT32, "2147483648"),
            (FieldKind.INT64, "9223372036854775808"),
            (FieldKind.FLOAT64, "one point five"),
            (FieldKind.FLOAT64, "1_0.5"),
            (FieldKind.INT32, " 12 "),
            (FieldKind.INT32, "12\n"),
            (FieldKind.INT64, None),
        ],
    )
    def test_raises_invalid_format(self, kind: FieldKind, raw):
        with pytest.raises(InvalidFormatError):
            coerce(kind, raw)

    def test_error_carries_value_and_kind(self):
        with pytest.raises(InvalidFormatError) as exc_info:
            coerce(FieldKind.INT16, "seven")
        assert exc_info.value.value == "seven"
        assert exc_info.value.kind is FieldKind.INT16
        assert "seven" in str(exc_info.value)

    def test_invalid_format_is_a_value_error(self):
        assert issubclass(InvalidFormatError, ValueError)

    def test_float64_keeps_values_beyond_single_precision(self):
        assert coerce(FieldKind.FLOAT64, "1e39") == 1e39


# ---------------------------------------------------------------------------
# 4. Unknown kinds pass through
# ---------------------------------------------------------------------------

class TestUnknownKind:
    """Kinds outside FieldKind return the raw string unchanged."""

    def test_none_kind_returns_raw(self):
        assert coerce(None, "42") == "42"

    def test_unrecognized_kind_returns_raw(self):
        assert coerce("decimal128", "3.14") == "3.14"


# ---------------------------------------------------------------------------
# 5. kind_for()
# ---------------------------------------------------------------------------

class TestKindFor:
    def test_python_types(self):
        assert kind_for(bool) is FieldKind.BOOLEAN
        assert kind_for(int) is FieldKind.INT32
        assert kind_for(float) is FieldKind.FLOAT64
        assert kind_for(str) is FieldKind.STRING

    def test_unsupported_type(self):
        assert kind_for(list) is None
