"""
Type markers for envconfig records.

Python has a single unbounded ``int`` and a double precision ``float``. The
aliases below attach a width to a field through ``typing.Annotated`` so the
binder can range check integers and round single precision floats:

    @dataclass
    class Config:
        port: UInt16
        ratio: Float32
        name: Annotated[str, Tag("optional")]
"""

import dataclasses
from dataclasses import dataclass
from typing import Annotated, Any, Protocol, runtime_checkable

TAG_KEY = "envconfig"


@dataclass(frozen=True)
class IntBits:
    """Bit width and signedness of an integer field."""

    bits: int = 64
    signed: bool = True

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        if self.signed:
            return (1 << (self.bits - 1)) - 1
        return (1 << self.bits) - 1


@dataclass(frozen=True)
class FloatBits:
    """Precision of a float field (32 or 64)."""

    bits: int = 64


@dataclass(frozen=True)
class Tag:
    """Directive string attached to a field via ``Annotated``."""

    value: str


Int8 = Annotated[int, IntBits(8)]
Int16 = Annotated[int, IntBits(16)]
Int32 = Annotated[int, IntBits(32)]
Int64 = Annotated[int, IntBits(64)]
UInt = Annotated[int, IntBits(64, signed=False)]
UInt8 = Annotated[int, IntBits(8, signed=False)]
UInt16 = Annotated[int, IntBits(16, signed=False)]
UInt32 = Annotated[int, IntBits(32, signed=False)]
UInt64 = Annotated[int, IntBits(64, signed=False)]
Float32 = Annotated[float, FloatBits(32)]
Float64 = Annotated[float, FloatBits(64)]


@runtime_checkable
class Unmarshaler(Protocol):
    """
    Capability for types that parse themselves from a raw string.

    Implement ``unmarshal`` as a classmethod returning the parsed instance and
    raise (typically ValueError) on bad input. The binder hands it the raw
    value without splitting, even when the type is a list subclass.
    """

    @classmethod
    def unmarshal(cls, value: str) -> Any:
        ...


def env_field(tag: str, **kwargs: Any) -> Any:
    """
    Declare a dataclass field carrying a directive string.

    Extra keyword arguments are passed through to ``dataclasses.field``.

    Example:
        >>> @dataclass
        ... class Config:
        ...     timeout: timedelta = env_field("default=1m,myTimeout")
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[TAG_KEY] = tag
    return dataclasses.field(metadata=metadata, **kwargs)
