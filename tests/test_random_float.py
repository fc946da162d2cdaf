import math
import random
import sys

import pytest

from fpconv.ieee754 import FloatFormat, Ieee754Bits
from fpconv.random_float import (
    RepeatingSeedSeq,
    generate_correctly_seeded_rng,
    uniformly_randomly_generate_finite_float,
    uniformly_randomly_generate_general_float,
)


class _UpperRng:
    def randint(self, a, b):
        return b


class _LowerRng:
    def randint(self, a, b):
        return a


class _FixedBitsRng:
    def __init__(self, value):
        self.value = value

    def getrandbits(self, k):
        return self.value & ((1 << k) - 1)


def test_seed_seq_repeats_values():
    seq = RepeatingSeedSeq([1, 2, 3])
    assert seq.generate(7) == [1, 2, 3, 1, 2, 3, 1]
    assert seq.generate(2) == [1, 2]
    assert seq.generate(0) == []
    assert len(seq) == 3


def test_seed_seq_param_is_a_copy_and_truncates():
    seq = RepeatingSeedSeq([(1 << 32) + 5, 7])
    params = seq.param()
    assert params == [5, 7]
    params.append(9)
    assert seq.param() == [5, 7]


def test_seed_seq_rejects_bad_input():
    with pytest.raises(ValueError):
        RepeatingSeedSeq([])
    with pytest.raises(ValueError):
        RepeatingSeedSeq([1]).generate(-1)


@pytest.mark.parametrize("fmt", list(FloatFormat))
def test_finite_generator_is_finite(fmt):
    rng = generate_correctly_seeded_rng()
    for _ in range(300):
        x = uniformly_randomly_generate_finite_float(fmt, rng)
        assert math.isfinite(x)
        assert Ieee754Bits.from_float(x, fmt).to_float() == x


def test_finite_generator_extremes():
    assert uniformly_randomly_generate_finite_float(FloatFormat.BINARY64, _UpperRng()) == -sys.float_info.max
    low = uniformly_randomly_generate_finite_float(FloatFormat.BINARY64, _LowerRng())
    assert low == 0.0 and math.copysign(1.0, low) == 1.0


def test_finite_generator_binary32_extreme_is_largest_finite():
    x = uniformly_randomly_generate_finite_float(FloatFormat.BINARY32, _UpperRng())
    bits = Ieee754Bits.from_float(x, FloatFormat.BINARY32)
    assert bits.is_negative() and bits.is_finite()
    assert Ieee754Bits(bits.u + 1, FloatFormat.BINARY32).to_float() == -math.inf


@pytest.mark.parametrize("fmt", list(FloatFormat))
def test_general_generator_covers_special_values(fmt):
    assert math.isnan(uniformly_randomly_generate_general_float(fmt, _FixedBitsRng(-1)))
    assert uniformly_randomly_generate_general_float(fmt, _FixedBitsRng(fmt.infinity_bits)) == math.inf
    assert uniformly_randomly_generate_general_float(fmt, _FixedBitsRng(0)) == 0.0


def test_general_generator_matches_bits_from_rng():
    rng_a = random.Random(99)
    rng_b = random.Random(99)
    for _ in range(100):
        x = uniformly_randomly_generate_general_float(FloatFormat.BINARY64, rng_a)
        expected = Ieee754Bits(rng_b.getrandbits(64), FloatFormat.BINARY64)
        if expected.is_finite():
            assert Ieee754Bits.from_float(x).u == expected.u
        else:
            assert not math.isfinite(x)