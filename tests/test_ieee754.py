import math
import random

import pytest

from fpconv.ieee754 import FloatFormat, Ieee754Bits


def test_one_has_canonical_encoding():
    assert Ieee754Bits.from_float(1.0, FloatFormat.BINARY32).u == 0x3F800000
    assert Ieee754Bits.from_float(1.0, FloatFormat.BINARY64).u == 0x3FF0000000000000


@pytest.mark.parametrize("fmt", list(FloatFormat))
def test_round_trip_of_finite_bit_patterns(fmt):
    rng = random.Random(1234)
    for _ in range(500):
        u = rng.getrandbits(fmt.carrier_bits)
        bits = Ieee754Bits(u, fmt)
        if not bits.is_finite():
            continue
        assert Ieee754Bits.from_float(bits.to_float(), fmt).u == u


@pytest.mark.parametrize("fmt", list(FloatFormat))
def test_sign_and_zero(fmt):
    neg_zero = Ieee754Bits.from_float(-0.0, fmt)
    assert neg_zero.is_negative()
    assert not neg_zero.is_nonzero()
    assert neg_zero.u == fmt.sign_mask
    assert not Ieee754Bits.from_float(0.0, fmt).is_nonzero()
    assert Ieee754Bits.from_float(-2.5, fmt).is_nonzero()


@pytest.mark.parametrize("fmt", list(FloatFormat))
def test_non_finite_values(fmt):
    assert not Ieee754Bits.from_float(math.inf, fmt).is_finite()
    assert not Ieee754Bits.from_float(math.nan, fmt).is_finite()
    assert Ieee754Bits.from_float(-123.0, fmt).is_finite()
    assert Ieee754Bits(fmt.infinity_bits, fmt).to_float() == math.inf


@pytest.mark.parametrize("fmt", list(FloatFormat))
def test_field_extraction(fmt):
    one = Ieee754Bits.from_float(1.0, fmt)
    assert one.extract_exponent_bits() == fmt.exponent_bias
    assert one.extract_significand_bits() == 0
    one_and_half = Ieee754Bits.from_float(1.5, fmt)
    assert one_and_half.extract_significand_bits() == 1 << (fmt.significand_bits - 1)


def test_out_of_range_bit_pattern_rejected():
    with pytest.raises(ValueError):
        Ieee754Bits(1 << 32, FloatFormat.BINARY32)
    with pytest.raises(ValueError):
        Ieee754Bits(-1, FloatFormat.BINARY64)


def test_binary32_overflow_raises():
    with pytest.raises(OverflowError):
        Ieee754Bits.from_float(1e300, FloatFormat.BINARY32)