"""
Width-carrying numeric aliases and the raw payload marker.

Python integers are unbounded. Fields that model fixed-width machine
numbers declare one of the ``Annotated`` aliases below; values written
through mapstruct are wrapped to the declared width the same way a
two's-complement store would wrap them, and ``Float32`` values are
rounded to single precision.
"""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from typing import Annotated


@dataclass(frozen=True)
class Width:
    """Bit width marker for ``Annotated`` numeric fields."""

    bits: int
    signed: bool = True

    def wrap(self, value: int) -> int:
        """Truncate *value* to this width."""
        modulus = 1 << self.bits
        value %= modulus
        if self.signed and value >= modulus >> 1:
            value -= modulus
        return value

    def holds(self, value: int) -> bool:
        if self.signed:
            half = 1 << (self.bits - 1)
            return -half <= value < half
        return 0 <= value < (1 << self.bits)


Int8 = Annotated[int, Width(8)]
Int16 = Annotated[int, Width(16)]
Int32 = Annotated[int, Width(32)]
Int64 = Annotated[int, Width(64)]

Uint = Annotated[int, Width(64, signed=False)]
Uint8 = Annotated[int, Width(8, signed=False)]
Uint16 = Annotated[int, Width(16, signed=False)]
Uint32 = Annotated[int, Width(32, signed=False)]
Uint64 = Annotated[int, Width(64, signed=False)]

Float32 = Annotated[float, Width(32)]
Float64 = Annotated[float, Width(64)]

# Parse range for width-carrying integers before they are wrapped.
PARSE_SIGNED = Width(64)
PARSE_UNSIGNED = Width(64, signed=False)


def to_float32(value: float) -> float:
    """Round *value* to the nearest IEEE-754 single precision value."""
    if math.isnan(value) or math.isinf(value):
        return value
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


class RawPayload(bytes):
    """
    Opaque serialized record or array, loaded with the payload codec.

    Wrap text in ``RawPayload`` to have it decoded as JSON into record,
    sequence and scalar fields::

        decode({"book": RawPayload(b'{"id": 2001}')}, dst)

    A ``str`` field receives the raw text unparsed, and a ``bytes`` field
    receives the bytes unchanged.
    """

    def __new__(cls, data: bytes | bytearray | str = b"") -> "RawPayload":
        if isinstance(data, str):
            data = data.encode("utf-8")
        return super().__new__(cls, data)
