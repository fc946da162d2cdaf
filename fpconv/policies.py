"""Conversion policies: sign, trailing zeros, rounding and input validation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .ieee754 import Ieee754Bits
from .policy_holder import (
    BINARY_ROUNDING,
    DECIMAL_ROUNDING,
    INPUT_VALIDATION,
    SIGN,
    TRAILING_ZERO,
    PolicyKind,
)


@dataclass
class DecimalFp:
    """A decimal floating-point value ``significand * 10**exponent``."""

    significand: int
    exponent: int
    is_negative: bool = False
    may_have_trailing_zeros: bool = False
    is_signed: bool = True


def remove_trailing_zeros(significand: int) -> tuple[int, int]:
    """Strip decimal trailing zeros; return the stripped value and how many were removed."""
    if significand < 0:
        raise ValueError("significand must be non-negative")
    if significand == 0:
        return 0, 0
    count = 0
    while significand % 10 == 0:
        significand //= 10
        count += 1
    return significand, count


@dataclass(frozen=True)
class IntervalType:
    """Which endpoints of a rounding interval belong to it."""

    include_left_endpoint: bool
    include_right_endpoint: bool

    @property
    def is_symmetric(self) -> bool:
        return self.include_left_endpoint == self.include_right_endpoint

    @classmethod
    def symmetric(cls, is_closed: bool) -> IntervalType:
        return cls(is_closed, is_closed)

    @classmethod
    def asymmetric(cls, is_left_closed: bool) -> IntervalType:
        return cls(is_left_closed, not is_left_closed)


IntervalType.CLOSED = IntervalType(True, True)
IntervalType.OPEN = IntervalType(False, False)
IntervalType.LEFT_CLOSED_RIGHT_OPEN = IntervalType(True, False)
IntervalType.RIGHT_CLOSED_LEFT_OPEN = IntervalType(False, True)


class BinaryRoundingTag(Enum):
    TO_NEAREST = "to_nearest"
    LEFT_CLOSED_DIRECTED = "left_closed_directed"
    RIGHT_CLOSED_DIRECTED = "right_closed_directed"


class RoundingBehavior(Enum):
    """The concrete rounding behaviour a binary rounding policy resolves to."""

    NEAREST_TO_EVEN = "nearest_to_even"
    NEAREST_TO_ODD = "nearest_to_odd"
    NEAREST_TOWARD_PLUS_INFINITY = "nearest_toward_plus_infinity"
    NEAREST_TOWARD_MINUS_INFINITY = "nearest_toward_minus_infinity"
    NEAREST_TOWARD_ZERO = "nearest_toward_zero"
    NEAREST_AWAY_FROM_ZERO = "nearest_away_from_zero"
    NEAREST_ALWAYS_CLOSED = "nearest_always_closed"
    NEAREST_ALWAYS_OPEN = "nearest_always_open"
    LEFT_CLOSED_DIRECTED = "left_closed_directed"
    RIGHT_CLOSED_DIRECTED = "right_closed_directed"

    @property
    def tag(self) -> BinaryRoundingTag:
        if self is RoundingBehavior.LEFT_CLOSED_DIRECTED:
            return BinaryRoundingTag.LEFT_CLOSED_DIRECTED
        if self is RoundingBehavior.RIGHT_CLOSED_DIRECTED:
            return BinaryRoundingTag.RIGHT_CLOSED_DIRECTED
        return BinaryRoundingTag.TO_NEAREST

    def interval_type_normal(self, bits: Ieee754Bits) -> IntervalType:
        """The interval type for a value whose significand field is not zero."""
        B = RoundingBehavior
        if self is B.NEAREST_TO_EVEN:
            return IntervalType.symmetric(bits.u % 2 == 0)
        if self is B.NEAREST_TO_ODD:
            return IntervalType.symmetric(bits.u % 2 != 0)
        if self is B.NEAREST_TOWARD_PLUS_INFINITY:
            return IntervalType.asymmetric(not bits.is_negative())
        if self is B.NEAREST_TOWARD_MINUS_INFINITY:
            return IntervalType.asymmetric(bits.is_negative())
        if self in (B.NEAREST_TOWARD_ZERO, B.RIGHT_CLOSED_DIRECTED):
            return IntervalType.RIGHT_CLOSED_LEFT_OPEN
        if self in (B.NEAREST_AWAY_FROM_ZERO, B.LEFT_CLOSED_DIRECTED):
            return IntervalType.LEFT_CLOSED_RIGHT_OPEN
        if self is B.NEAREST_ALWAYS_CLOSED:
            return IntervalType.CLOSED
        return IntervalType.OPEN

    def interval_type_shorter(self, bits: Ieee754Bits) -> IntervalType:
        """The interval type for a value at the shorter-interval boundary."""
        B = RoundingBehavior
        if self in (B.LEFT_CLOSED_DIRECTED, B.RIGHT_CLOSED_DIRECTED):
            raise ValueError(f"{self.name} has no shorter-interval type")
        if self in (B.NEAREST_TO_EVEN, B.NEAREST_TO_ODD):
            return IntervalType.CLOSED
        return self.interval_type_normal(bits)


class Sign(Enum):
    IGNORE = "ignore"
    PROPAGATE = "propagate"

    @property
    def policy_kind(self) -> PolicyKind:
        return SIGN

    @property
    def return_has_sign(self) -> bool:
        return self is Sign.PROPAGATE

    def binary_to_decimal(self, bits: Ieee754Bits, fp: DecimalFp) -> None:
        """Copy the sign of ``bits`` into ``fp`` when propagating."""
        if self is Sign.PROPAGATE:
            fp.is_negative = bits.is_negative()

    def decimal_to_binary(self, fp: DecimalFp, bits: Ieee754Bits) -> Ieee754Bits:
        """Return ``bits`` with the sign bit set if propagating a negative signed ``fp``."""
        if self is Sign.PROPAGATE and fp.is_signed and fp.is_negative:
            return Ieee754Bits(bits.u | bits.fmt.sign_mask, bits.fmt)
        return bits


class TrailingZero(Enum):
    ALLOW = "allow"
    REMOVE = "remove"
    REPORT = "report"

    @property
    def policy_kind(self) -> PolicyKind:
        return TRAILING_ZERO

    @property
    def report_trailing_zeros(self) -> bool:
        return self is TrailingZero.REPORT

    def on_trailing_zeros(self, fp: DecimalFp) -> None:
        if self is TrailingZero.REMOVE:
            fp.significand, removed = remove_trailing_zeros(fp.significand)
            fp.exponent += removed
        elif self is TrailingZero.REPORT:
            fp.may_have_trailing_zeros = True

    def no_trailing_zeros(self, fp: DecimalFp) -> None:
        if self is TrailingZero.REPORT:
            fp.may_have_trailing_zeros = False


class BinaryRounding(Enum):
    NEAREST_TO_EVEN = "nearest_to_even"
    NEAREST_TO_ODD = "nearest_to_odd"
    NEAREST_TOWARD_PLUS_INFINITY = "nearest_toward_plus_infinity"
    NEAREST_TOWARD_MINUS_INFINITY = "nearest_toward_minus_infinity"
    NEAREST_TOWARD_ZERO = "nearest_toward_zero"
    NEAREST_AWAY_FROM_ZERO = "nearest_away_from_zero"
    NEAREST_TO_EVEN_STATIC_BOUNDARY = "nearest_to_even_static_boundary"
    NEAREST_TO_ODD_STATIC_BOUNDARY = "nearest_to_odd_static_boundary"
    NEAREST_TOWARD_PLUS_INFINITY_STATIC_BOUNDARY = "nearest_toward_plus_infinity_static_boundary"
    NEAREST_TOWARD_MINUS_INFINITY_STATIC_BOUNDARY = "nearest_toward_minus_infinity_static_boundary"
    TOWARD_PLUS_INFINITY = "toward_plus_infinity"
    TOWARD_MINUS_INFINITY = "toward_minus_infinity"
    TOWARD_ZERO = "toward_zero"
    AWAY_FROM_ZERO = "away_from_zero"

    @property
    def policy_kind(self) -> PolicyKind:
        return BINARY_ROUNDING

    def delegate(self, bits: Ieee754Bits) -> RoundingBehavior:
        """Resolve this policy to the behaviour used for the value ``bits``."""
        R = BinaryRounding
        B = RoundingBehavior
        negative = bits.is_negative()
        even = bits.u % 2 == 0
        if self is R.NEAREST_TO_EVEN_STATIC_BOUNDARY:
            return B.NEAREST_ALWAYS_CLOSED if even else B.NEAREST_ALWAYS_OPEN
        if self is R.NEAREST_TO_ODD_STATIC_BOUNDARY:
            return B.NEAREST_ALWAYS_OPEN if even else B.NEAREST_ALWAYS_CLOSED
        if self is R.NEAREST_TOWARD_PLUS_INFINITY_STATIC_BOUNDARY:
            return B.NEAREST_TOWARD_ZERO if negative else B.NEAREST_AWAY_FROM_ZERO
        if self is R.NEAREST_TOWARD_MINUS_INFINITY_STATIC_BOUNDARY:
            return B.NEAREST_AWAY_FROM_ZERO if negative else B.NEAREST_TOWARD_ZERO
        if self is R.TOWARD_PLUS_INFINITY:
            return B.LEFT_CLOSED_DIRECTED if negative else B.RIGHT_CLOSED_DIRECTED
        if self is R.TOWARD_MINUS_INFINITY:
            return B.RIGHT_CLOSED_DIRECTED if negative else B.LEFT_CLOSED_DIRECTED
        if self is R.TOWARD_ZERO:
            return B.LEFT_CLOSED_DIRECTED
        if self is R.AWAY_FROM_ZERO:
            return B.RIGHT_CLOSED_DIRECTED
        return B(self.value)


class DecimalRoundingTag(Enum):
    DO_NOT_CARE = "do_not_care"
    TO_EVEN = "to_even"
    TO_ODD = "to_odd"
    AWAY_FROM_ZERO = "away_from_zero"
    TOWARD_ZERO = "toward_zero"


class DecimalRounding(Enum):
    DO_NOT_CARE = "do_not_care"
    TO_EVEN = "to_even"
    TO_ODD = "to_odd"
    AWAY_FROM_ZERO = "away_from_zero"
    TOWARD_ZERO = "toward_zero"

    @property
    def policy_kind(self) -> PolicyKind:
        return DECIMAL_ROUNDING

    @property
    def tag(self) -> DecimalRoundingTag:
        return DecimalRoundingTag(self.value)

    def break_rounding_tie(self, fp: DecimalFp) -> None:
        """Adjust a significand that was rounded up from an exact tie."""
        if self is DecimalRounding.TO_EVEN:
            if fp.significand % 2 != 0:
                fp.significand -= 1
        elif self is DecimalRounding.TO_ODD:
            if fp.significand % 2 == 0:
                fp.significand -= 1
        elif self is DecimalRounding.TOWARD_ZERO:
            fp.significand -= 1


class InputValidation(Enum):
    ASSERT_FINITE = "assert_finite"
    DO_NOTHING = "do_nothing"

    @property
    def policy_kind(self) -> PolicyKind:
        return INPUT_VALIDATION

    def validate_input(self, bits: Ieee754Bits) -> None:
        """Raise ValueError for a non-finite input when asserting finiteness."""
        if self is InputValidation.ASSERT_FINITE and not bits.is_finite():
            raise ValueError(f"input {bits.u:#x} is not finite")