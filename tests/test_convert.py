"""
Tests for envconfig string converters

Covers:
- Boolean tokens
- Integer syntax and width checks
- Float parsing and single precision rounding
- Base64 bytes
- Duration literals
- List and record splitting

Usage:
    pytest tests/test_convert.py -v
"""

from datetime import timedelta

import pytest

from envconfig.convert import (
    parse_bool,
    parse_bytes,
    parse_duration,
    parse_float,
    parse_int,
    split_list,
    split_record,
)
from envconfig.types import FloatBits, IntBits


class TestParseBool:
    """Test boolean parsing."""

    @pytest.mark.parametrize("text", ["1", "t", "T", "TRUE", "true", "True"])
    def test_true_tokens(self, text):
        assert parse_bool(text) is True

    @pytest.mark.parametrize("text", ["0", "f", "F", "FALSE", "false", "False"])
    def test_false_tokens(self, text):
        assert parse_bool(text) is False

    @pytest.mark.parametrize("text", ["yes", "tRuE", "", "2"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_bool(text)


class TestParseInt:
    """Test integer parsing."""

    def test_signed_bounds(self):
        """Test int8 accepts its full range."""
        bits = IntBits(8)
        assert parse_int("-128", bits) == -128
        assert parse_int("+127", bits) == 127

    def test_signed_overflow(self):
        with pytest.raises(ValueError, match="out of range for int8"):
            parse_int("128", IntBits(8))

    def test_unsigned_rejects_sign(self):
        with pytest.raises(ValueError, match="invalid syntax"):
            parse_int("+1", IntBits(8, signed=False))

    def test_default_is_int64(self):
        assert parse_int("9223372036854775807") == 9223372036854775807
        with pytest.raises(ValueError):
            parse_int("9223372036854775808")

    @pytest.mark.parametrize("text", ["1_000", " 1", "0x10", "1.0", ""])
    def test_invalid_syntax(self, text):
        with pytest.raises(ValueError, match="invalid syntax"):
            parse_int(text)


class TestParseFloat:
    """Test float parsing."""

    def test_scientific(self):
        assert parse_float("1e3") == 1000.0

    def test_float32_rounding(self):
        """Test 32-bit fields lose double precision."""
        assert parse_float("0.1", FloatBits(32)) != 0.1
        assert parse_float("0.5", FloatBits(32)) == 0.5

    def test_float32_overflow(self):
        with pytest.raises(ValueError, match="out of range for float32"):
            parse_float("1e39", FloatBits(32))

    @pytest.mark.parametrize("text", ["abc", " 1.0", "1_0.0"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_float(text)


class TestParseBytes:
    """Test base64 decoding."""

    def test_decode(self):
        assert parse_bytes("Rk9PQkFS") == b"FOOBAR"

    def test_missing_padding(self):
        with pytest.raises(ValueError):
            parse_bytes("Rk9PQkE")


class TestParseDuration:
    """Test duration literals."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("0", timedelta(0)),
            ("1m", timedelta(minutes=1)),
            ("30s", timedelta(seconds=30)),
            ("1h30m", timedelta(hours=1, minutes=30)),
            ("300ms", timedelta(milliseconds=300)),
            ("1.5h", timedelta(hours=1, minutes=30)),
            (".5s", timedelta(milliseconds=500)),
            ("-2.5s", timedelta(seconds=-2.5)),
            ("+10us", timedelta(microseconds=10)),
            ("10µs", timedelta(microseconds=10)),
            ("1500ns", timedelta(microseconds=1)),
        ],
    )
    def test_valid(self, text, expected):
        assert parse_duration(text) == expected

    @pytest.mark.parametrize("text", ["", "foo", "1", "1d", "-", "1.5.3s", "m"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_duration(text)


class TestSplitting:
    """Test list and record splitting."""

    def test_split_plain(self):
        assert split_list("a, b ,c") == ["a", "b", "c"]

    def test_split_braced(self):
        assert split_list("{a,b},{c,d}", records=True) == ["a,b", "c,d"]

    def test_split_single_braced(self):
        assert split_list("{a,b}", records=True) == ["a,b"]

    def test_split_braces_kept_for_scalars(self):
        """Test braces are plain characters outside record lists."""
        assert split_list("{a,b},{c}") == ["{a", "b}", "{c}"]

    def test_split_record(self):
        assert split_record("foobar, localhost:2929", 2) == ["foobar", "localhost:2929"]

    def test_split_record_mismatch(self):
        with pytest.raises(ValueError, match="3 fields but record has 2"):
            split_record("a,b,c", 2)


# Run tests
if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
