"""
String to value converters.

Each converter takes the raw string and raises ValueError (or a subclass)
with a short reason on bad input. The binder attaches the field path.
"""

import base64
import binascii
import re
import struct
from datetime import timedelta
from enum import Enum
from fractions import Fraction
from typing import List, Type

from .types import FloatBits, IntBits

TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_SIGNED_INT = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_INT = re.compile(r"[0-9]+")

# Durations follow the Go literal syntax: "300ms", "-1.5h", "2h45m"
_NANOSECOND = 1
_MICROSECOND = 1000 * _NANOSECOND
_MILLISECOND = 1000 * _MICROSECOND
_SECOND = 1000 * _MILLISECOND
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE

DURATION_UNITS = {
    "ns": _NANOSECOND,
    "us": _MICROSECOND,
    "µs": _MICROSECOND,
    "μs": _MICROSECOND,
    "ms": _MILLISECOND,
    "s": _SECOND,
    "m": _MINUTE,
    "h": _HOUR,
}

_DURATION_COMPONENT = re.compile(r"([0-9]*(?:\.[0-9]*)?)([^0-9.]*)")


def parse_bool(value: str) -> bool:
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError("invalid boolean")


def parse_int(value: str, bits: IntBits = IntBits()) -> int:
    """Parse a base-10 integer and check it fits the declared width."""
    pattern = _SIGNED_INT if bits.signed else _UNSIGNED_INT
    if not pattern.fullmatch(value):
        raise ValueError("invalid syntax")

    result = int(value)
    if not bits.min_value <= result <= bits.max_value:
        kind = "int" if bits.signed else "uint"
        raise ValueError(f"value out of range for {kind}{bits.bits}")
    return result


def parse_float(value: str, bits: FloatBits = FloatBits()) -> float:
    """Parse a float, rounding to single precision for 32-bit fields."""
    if value != value.strip() or "_" in value:
        raise ValueError("invalid syntax")
    try:
        result = float(value)
    except ValueError:
        raise ValueError("invalid syntax")

    if bits.bits == 32:
        try:
            result = struct.unpack("f", struct.pack("f", result))[0]
        except OverflowError:
            raise ValueError("value out of range for float32")
    return result


def parse_bytes(value: str) -> bytes:
    """Decode standard (padded) base64."""
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error as e:
        raise ValueError(f"invalid base64: {e}")


def parse_duration(value: str) -> timedelta:
    """
    Parse a duration literal such as ``1m``, ``1h30m`` or ``-2.5s``.

    Sub-microsecond precision is truncated since timedelta cannot hold it.
    """
    text = value
    negative = False
    if text[:1] in ("-", "+"):
        negative = text[0] == "-"
        text = text[1:]

    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError("invalid duration")

    total = Fraction(0)
    pos = 0
    while pos < len(text):
        match = _DURATION_COMPONENT.match(text, pos)
        number, unit = match.group(1), match.group(2)
        if not number.strip("."):
            raise ValueError("invalid duration")
        if not unit:
            raise ValueError("missing unit in duration")
        if unit not in DURATION_UNITS:
            raise ValueError(f"unknown unit {unit!r} in duration")
        if number.endswith("."):
            number = number[:-1]
        total += Fraction(number) * DURATION_UNITS[unit]
        pos = match.end()

    microseconds = int(total // _MICROSECOND)
    try:
        result = timedelta(microseconds=microseconds)
    except OverflowError:
        raise ValueError("duration out of range")
    return -result if negative else result


def parse_enum(value: str, enum_type: Type[Enum]) -> Enum:
    """Match an enum member by value first, then by name."""
    for member in enum_type:
        if str(member.value) == value:
            return member
    try:
        return enum_type[value]
    except KeyError:
        choices = ", ".join(str(member.value) for member in enum_type)
        raise ValueError(f"expected one of {choices}")


def split_list(value: str, records: bool = False) -> List[str]:
    """
    Split a list value into element tokens.

    With ``records`` set, ``{a,b},{c,d}`` yields ``["a,b", "c,d"]``. Anything
    else is split on commas, braces included.
    """
    if records and len(value) >= 2 and value.startswith("{") and value.endswith("}"):
        tokens = value[1:-1].split("},{")
    else:
        tokens = value.split(",")
    return [token.strip() for token in tokens]


def split_record(value: str, field_count: int) -> List[str]:
    """Split a list element into one token per record field."""
    tokens = [token.strip() for token in value.split(",")]
    if len(tokens) != field_count:
        raise ValueError(
            f"record value has {len(tokens)} fields but record has {field_count}"
        )
    return tokens
