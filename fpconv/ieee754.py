"""Bit-level views of IEEE-754 binary32 and binary64 values."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import Enum


class FloatFormat(Enum):
    """Parameters of the supported IEEE-754 binary interchange formats."""

    BINARY32 = (32, 23, 8, 9, -37, 38, "<f", "<I")
    BINARY64 = (64, 52, 11, 17, -307, 308, "<d", "<Q")

    def __init__(
        self,
        carrier_bits: int,
        significand_bits: int,
        exponent_bits: int,
        decimal_digits: int,
        min_exponent10: int,
        max_exponent10: int,
        float_code: str,
        int_code: str,
    ) -> None:
        self.carrier_bits = carrier_bits
        self.significand_bits = significand_bits
        self.exponent_bits = exponent_bits
        self.decimal_digits = decimal_digits
        self.min_exponent10 = min_exponent10
        self.max_exponent10 = max_exponent10
        self.float_code = float_code
        self.int_code = int_code

    @property
    def exponent_bias(self) -> int:
        return (1 << (self.exponent_bits - 1)) - 1

    @property
    def sign_mask(self) -> int:
        """The bit pattern of negative zero."""
        return 1 << (self.carrier_bits - 1)

    @property
    def infinity_bits(self) -> int:
        """The bit pattern of positive infinity."""
        return ((1 << self.exponent_bits) - 1) << self.significand_bits


@dataclass(frozen=True)
class Ieee754Bits:
    """The raw bit pattern ``u`` of a floating-point value in format ``fmt``."""

    u: int
    fmt: FloatFormat = FloatFormat.BINARY64

    def __post_init__(self) -> None:
        if not 0 <= self.u < (1 << self.fmt.carrier_bits):
            raise ValueError(
                f"bit pattern {self.u:#x} does not fit in {self.fmt.carrier_bits} bits"
            )

    @classmethod
    def from_float(cls, value: float, fmt: FloatFormat = FloatFormat.BINARY64) -> Ieee754Bits:
        """Encode ``value`` (rounded to ``fmt`` if needed); raises OverflowError if it does not fit."""
        (u,) = struct.unpack(fmt.int_code, struct.pack(fmt.float_code, value))
        return cls(u, fmt)

    def to_float(self) -> float:
        (value,) = struct.unpack(self.fmt.float_code, struct.pack(self.fmt.int_code, self.u))
        return value

    def is_negative(self) -> bool:
        return bool(self.u & self.fmt.sign_mask)

    def is_finite(self) -> bool:
        return self.extract_exponent_bits() != (1 << self.fmt.exponent_bits) - 1

    def is_nonzero(self) -> bool:
        return (self.u & ~self.fmt.sign_mask) != 0

    def extract_exponent_bits(self) -> int:
        return (self.u >> self.fmt.significand_bits) & ((1 << self.fmt.exponent_bits) - 1)

    def extract_significand_bits(self) -> int:
        return self.u & ((1 << self.fmt.significand_bits) - 1)